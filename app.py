# app.py
import logging
import pygame
from config import AppConfig
from input.keymap import DEFAULT_KEYMAP, TEMPO_DOWN, TEMPO_UP, command_for_key, resolve
from render.renderer import Renderer, STATUS_H
from session import Session
from transport.commands import Command, CommandKind

log = logging.getLogger(__name__)

AUDIO_LABELS = {"off": "ENABLE AUDIO", "loading": "LOADING...", "on": "AUDIO: ON", "failed": "AUDIO FAILED"}
QUIT = "QUIT"

class App:
    def __init__(self, cfg: AppConfig, session: Session):
        self.cfg = cfg
        self.session = session
        self.renderer = Renderer(cfg.render, session.pitches)

        # UI 訊息（toast）
        self._msg = ""
        self._msg_time = 0.0

    # ---------- UI 訊息 ----------
    def _toast(self, msg: str, secs: float = 3.0):
        self._msg = msg
        self._msg_time = max(self._msg_time, secs)

    def _buttons(self) -> dict:
        audio_label = AUDIO_LABELS[self.session.audio.status]
        return {
            "PLAY": CommandKind.PLAY,
            "PAUSE": CommandKind.PAUSE,
            "REPLAY": CommandKind.REPLAY,
            "NEW PATTERN": CommandKind.REGENERATE,
            audio_label: CommandKind.TOGGLE_AUDIO,
            "TEMPO -": TEMPO_DOWN,
            "TEMPO +": TEMPO_UP,
            QUIT: QUIT,
        }

    # ---------- Commands ----------
    def _run(self, cmd: Command):
        if cmd.kind is CommandKind.TOGGLE_AUDIO and not self.session.audio.is_enabled:
            # loading blocks the loop; show the state first
            self.session.audio.loading = True
            self._draw()
            self.session.audio.loading = False
        try:
            self.session.dispatch(cmd)
        except Exception:
            log.exception("command %s failed", cmd)
            self._toast("Command failed (see logs)", 5.0)
            return
        if cmd.kind is CommandKind.TOGGLE_AUDIO and self.session.audio.failed:
            self._toast("Audio failed; click to retry", 5.0)

    def _action(self, action):
        cmd = resolve(action, self.session.state, self.cfg.transport.tempo_step)
        if cmd is not None:
            self._run(cmd)

    # ---------- Main loop ----------
    def run(self):
        self.session.start()
        running = True
        while running:
            dt = self.renderer.tick(self.cfg.render.fps)
            buttons = self._buttons()
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    running = False

                if e.type == pygame.KEYDOWN:
                    if e.key == pygame.K_ESCAPE:
                        running = False; continue
                    cmd = command_for_key(e.key, self.session.state, self.cfg.transport.tempo_step, DEFAULT_KEYMAP)
                    if cmd is not None:
                        self._run(cmd)

                # 狀態列按鈕
                if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    mx, my = e.pos
                    if my <= STATUS_H:
                        for label, rect in self.renderer.button_rects.items():
                            if rect.collidepoint(mx, my):
                                action = buttons.get(label)
                                if action == QUIT:
                                    running = False
                                elif action is not None:
                                    self._action(action)

            if not running: break

            if self._msg_time > 0:
                self._msg_time -= dt
                if self._msg_time <= 0:
                    self._msg_time = 0
                    self._msg = ""

            try:
                self.session.tick(dt)
            except Exception:
                log.exception("frame tick failed")
                self._toast("Playback error (see logs)", 5.0)
            self._draw()

        self.session.close()
        pygame.quit()

    def _draw(self):
        r, s = self.renderer, self.session
        st = s.state
        r.begin_frame()
        pattern = s.timeline.current_pattern
        r.draw_status_bar(self._buttons().keys(), title=pattern.name if pattern else "")
        fields = [
            f"PLAY: {'ON' if st.is_playing else 'OFF'}",
            f"TEMPO: {st.tempo} bpm",
            f"AUDIO: {s.audio.status.upper()}",
        ]
        if self._msg: fields.append(self._msg)
        r.hud("  |  ".join(fields))
        r.draw_staff(self.cfg.timeline.play_line_x)
        r.draw_notes(s.timeline.notes)
        r.draw_fretboard(s.fretboard.active)
        r.footer("Notes flow from right to left. Watch the fretboard light up as notes cross the red play line.")
        r.end_frame()
