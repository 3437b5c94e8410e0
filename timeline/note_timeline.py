# timeline/note_timeline.py
import logging
from functools import partial
from typing import List, Optional, Protocol
from context import SessionContext
from events.bus import Topic
from notes.model import Note, Pattern
from notes.pitch import PitchTable
from transport.state import active_duration, note_duration

log = logging.getLogger(__name__)

class NotePlayer(Protocol):
    def play_note(self, key: str, duration: float = 0.5) -> None: ...


class NoteTimeline:
    """Moves notes toward the play-line and fires each one exactly once per load.

    A trigger sets note.active, publishes note-activated, asks the audio side
    to play, and schedules the deferred active->played transition. That
    transition carries the load generation; after a reload it does nothing.
    """
    def __init__(self, ctx: SessionContext, audio: Optional[NotePlayer] = None,
                 pitches: Optional[PitchTable] = None):
        self.ctx = ctx
        self.cfg = ctx.cfg.timeline
        self.audio = audio
        self.pitches = pitches or PitchTable(ctx.cfg.render.staff_top, ctx.cfg.render.line_spacing)

        self.notes: List[Note] = []
        self.current_pattern: Optional[Pattern] = None
        self.generation = 0
        self.play_position = 0.0
        self._started = False

        ctx.bus.subscribe(Topic.PATTERN_SELECTED, self.load_pattern)

    # ---------- Loading ----------
    def initial_x(self, index: int) -> float:
        return self.cfg.play_line_x + self.cfg.lead_distance + index * self.cfg.note_spacing

    def load_pattern(self, pattern: Pattern):
        self.generation += 1
        self.current_pattern = pattern
        self.play_position = 0.0
        self._started = False
        self.notes = [
            Note(pitch=e.pitch, fret=e.fret, string=e.string, x=self.initial_x(i), generation=self.generation)
            for i, e in enumerate(pattern)
        ]
        log.info("Loaded pattern %r (%d notes, generation %d)", pattern.name, len(self.notes), self.generation)

    def reload(self) -> bool:
        if self.current_pattern is None:
            return False
        self.load_pattern(self.current_pattern)
        return True

    # ---------- Per-frame ----------
    def advance(self, speed: float):
        if not self.ctx.state.is_playing:
            return
        self.play_position += speed
        line, tol = self.cfg.play_line_x, self.cfg.trigger_tolerance
        for note in self.notes:
            note.x -= speed
            if abs(note.x - line) < tol and not note.played and not note.active:
                self._trigger(note)

    def finished(self) -> bool:
        return bool(self.notes) and all(n.played for n in self.notes)

    def _trigger(self, note: Note):
        note.active = True
        tempo = self.ctx.state.tempo
        # the settle must be queued whatever the listeners or the audio side do
        delay = active_duration(tempo, self.ctx.cfg.transport)
        self.ctx.scheduler.call_later(delay, partial(self._settle, note, note.generation))

        if not self._started:
            self._started = True
            self._publish(Topic.PLAYBACK_STARTED)
        self._publish(Topic.NOTE_ACTIVATED, {"string": note.string, "fret": note.fret, "pitch": note.pitch})

        if self.audio is not None:
            try:
                self.audio.play_note(self.pitches.sample_key(note.pitch), note_duration(tempo))
            except Exception:
                log.exception("play_note failed for %s; continuing", note.pitch)

    def _publish(self, topic: Topic, payload=None):
        try:
            self.ctx.bus.publish(topic, payload)
        except Exception:
            log.exception("%s listener failed; continuing", topic.value)

    def _settle(self, note: Note, generation: int):
        if generation != self.generation:
            log.debug("stale transition for %s (generation %d, now %d)", note.pitch, generation, self.generation)
            return
        note.active = False
        note.played = True
