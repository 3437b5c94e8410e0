# render/renderer.py
import math, pygame, logging
from typing import Iterable, List
from config import RenderConfig
from notes.model import Note
from notes.pitch import PitchTable, Pitch

STATUS_H = 36
BTN_PAD_X = 10
BTN_GAP = 8
STAFF_LINES = 5
MARKER_FRETS = (3, 5, 7, 9)

BG = (26, 26, 46)
PLAY_LINE = (255, 100, 100)
ACTIVE = (255, 200, 100)
ACTIVE_STROKE = (255, 255, 100)
PLAYED = (100, 255, 100)
WOOD = (139, 69, 19)

def ledger_lines(note_y: float, staff_top: float, staff_bottom: float, spacing: float) -> List[float]:
    """y of each ledger line a note at note_y needs above or below the staff."""
    if note_y > staff_bottom:
        n = math.floor((note_y - staff_bottom) / spacing)
        return [staff_bottom + i * spacing for i in range(1, n + 1)]
    if note_y < staff_top:
        n = math.floor((staff_top - note_y) / spacing)
        return [staff_top - i * spacing for i in range(1, n + 1)]
    return []

class Renderer:
    def __init__(self, cfg: RenderConfig, pitches: PitchTable):
        pygame.init()
        self.cfg = cfg
        self.pitches = pitches
        self.screen = pygame.display.set_mode((cfg.window_w, cfg.window_h))
        pygame.display.set_caption("Classical Guitar Sight Training")
        self.font = pygame.font.SysFont("consolas", 16)
        self.font_small = pygame.font.SysFont("consolas", 12)
        self.clock = pygame.time.Clock()
        self.button_rects: dict[str, pygame.Rect] = {}

        self.marquee_offset = 0.0
        self.marquee_speed = 60.0
        self.marquee_gap = 48
        self._last_tick_ms = pygame.time.get_ticks()

    @property
    def staff_bottom(self) -> float:
        return self.cfg.staff_top + (STAFF_LINES - 1) * self.cfg.line_spacing

    def tick(self, fps=60) -> float:
        return self.clock.tick(fps) / 1000.0

    def begin_frame(self):
        self.screen.fill(BG)

    def end_frame(self):
        pygame.display.flip()

    # ------- status bar -------
    def draw_status_bar(self, buttons: Iterable[str], title: str = ""):
        now = pygame.time.get_ticks()
        dt = (now - self._last_tick_ms) / 1000.0
        self._last_tick_ms = now
        self.marquee_offset = (self.marquee_offset + self.marquee_speed * dt) % 1_000_000

        w = self.cfg.window_w
        pygame.draw.rect(self.screen, (22, 33, 62), (0, 0, w, STATUS_H))
        pygame.draw.line(self.screen, (60, 60, 90), (0, STATUS_H), (w, STATUS_H), 1)

        x = 10; self.button_rects.clear()
        for label in buttons:
            surf = self.font_small.render(label, True, (220, 220, 230))
            rect = surf.get_rect(); rect.topleft = (x + BTN_PAD_X, (STATUS_H - rect.height)//2)
            box = pygame.Rect(x, 4, rect.width + BTN_PAD_X*2, STATUS_H - 8)
            pygame.draw.rect(self.screen, (40, 40, 66), box, border_radius=6)
            pygame.draw.rect(self.screen, (75, 75, 105), box, 1, border_radius=6)
            self.screen.blit(surf, rect)
            self.button_rects[label] = box
            x += box.width + BTN_GAP

        area_x = x + 6
        area_w = max(0, w - 10 - area_x)
        if area_w > 50 and title:
            area_rect = pygame.Rect(area_x, 4, area_w, STATUS_H - 8)
            pygame.draw.rect(self.screen, (34, 34, 56), area_rect, border_radius=6)
            surf = self.font_small.render(title + "   •   ", True, (220, 220, 230))
            tw = surf.get_width()
            if tw > 0:
                scroll = self.marquee_offset % (tw + self.marquee_gap)
                clip_prev = self.screen.get_clip()
                self.screen.set_clip(area_rect)
                x_draw = area_rect.x - scroll
                while x_draw < area_rect.right:
                    self.screen.blit(surf, (x_draw, (STATUS_H - surf.get_height())//2))
                    x_draw += tw + self.marquee_gap
                self.screen.set_clip(clip_prev)

    def hud(self, text: str):
        surf = self.font.render(text, True, (200, 200, 210))
        self.screen.blit(surf, (20, STATUS_H + 12))

    def footer(self, text: str):
        surf = self.font_small.render(text, True, (200, 200, 200))
        self.screen.blit(surf, (20, self.cfg.window_h - 20))

    # ------- staff -------
    def draw_staff(self, play_line_x: float):
        for i in range(STAFF_LINES):
            y = self.cfg.staff_top + i * self.cfg.line_spacing
            pygame.draw.line(self.screen, (100, 100, 100), (0, y), (self.cfg.window_w, y), 1)
        top, bottom = self.cfg.staff_top - 30, self.staff_bottom + 30
        pygame.draw.line(self.screen, PLAY_LINE, (play_line_x, top), (play_line_x, bottom), 3)

    def draw_notes(self, notes: List[Note]):
        for n in notes:
            if n.x < -20 or n.x > self.cfg.window_w + 20:
                continue
            try:
                self._draw_note(n)
            except Exception:
                logging.error("單一音符繪製失敗，跳過該音符：%r", n, exc_info=True)

    def _draw_note(self, n: Note):
        y = self.pitches.staff_offset(n.pitch)
        is_rest = n.pitch == Pitch.REST.value
        stroke = ACTIVE_STROKE if n.active else (100, 100, 100)
        if not is_rest:
            for ly in ledger_lines(y, self.cfg.staff_top, self.staff_bottom, self.cfg.line_spacing):
                pygame.draw.line(self.screen, stroke, (n.x - 15, ly), (n.x + 15, ly), 1)

        if n.active:   fill, edge = ACTIVE, ACTIVE_STROKE
        elif n.played: fill, edge = PLAYED, PLAYED
        else:          fill, edge = (255, 255, 255), (0, 0, 0)
        head = pygame.Rect(0, 0, 20, 15); head.center = (int(n.x), int(y))
        pygame.draw.ellipse(self.screen, fill, head)
        pygame.draw.ellipse(self.screen, edge, head, 2)

        if not is_rest:
            stem = ACTIVE_STROKE if n.active else (255, 255, 255)
            pygame.draw.line(self.screen, stem, (n.x + 8, y), (n.x + 8, y - 40), 2)
            label = self.font_small.render(n.pitch, True, (255, 255, 255))
            self.screen.blit(label, label.get_rect(center=(int(n.x), int(y - 48))))

    # ------- fretboard -------
    def draw_fretboard(self, highlight: set[tuple[int, int]]):
        c = self.cfg
        ox, oy = c.fret_x, c.fret_y
        w, h = c.fret_w * c.fret_count, c.string_gap * 6
        pygame.draw.rect(self.screen, WOOD, (ox, oy, w, h))
        for i in range(1, c.fret_count + 1):
            x = ox + i * c.fret_w
            pygame.draw.line(self.screen, (200, 200, 200), (x, oy), (x, oy + h), 2)
        for i in range(6):
            y = oy + c.string_gap // 2 + i * c.string_gap
            pygame.draw.line(self.screen, (200, 200, 200), (ox, y), (ox + w, y), 1 + i // 2)
        mid = oy + h // 2
        for fret in MARKER_FRETS:
            pygame.draw.circle(self.screen, (255, 255, 255), (ox + fret * c.fret_w - c.fret_w // 2, mid), 4)
        x12 = ox + 12 * c.fret_w - c.fret_w // 2
        pygame.draw.circle(self.screen, (255, 255, 255), (x12, mid - c.string_gap), 4)
        pygame.draw.circle(self.screen, (255, 255, 255), (x12, mid + c.string_gap), 4)

        for string, fret in highlight:
            x, y = self.fret_center(string, fret)
            pygame.draw.circle(self.screen, ACTIVE, (x, y), 8)

    def fret_center(self, string: int, fret: int) -> tuple[int, int]:
        c = self.cfg
        # open strings sit just left of the nut
        x = c.fret_x + fret * c.fret_w - c.fret_w // 2 if fret > 0 else c.fret_x - 8
        y = c.fret_y + c.string_gap // 2 + (string - 1) * c.string_gap
        return int(x), int(y)
