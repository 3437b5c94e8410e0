# ui/fret_highlighter.py
from typing import Dict, Tuple
from context import SessionContext
from events.bus import Topic
from notes.pitch import Pitch

class FretHighlighter:
    """Lights (string, fret) for highlight_s after each note-activated."""
    def __init__(self, ctx: SessionContext):
        self.ctx = ctx
        self._tokens: Dict[Tuple[int, int], int] = {}
        self._next = 0
        ctx.bus.subscribe(Topic.NOTE_ACTIVATED, self.on_note_activated)

    @property
    def active(self) -> set[Tuple[int, int]]:
        return set(self._tokens)

    def on_note_activated(self, data: dict):
        if data.get("pitch") == Pitch.REST.value:
            return
        pos = (int(data["string"]), int(data["fret"]))
        self._next += 1
        token = self._tokens[pos] = self._next
        self.ctx.scheduler.call_later(self.ctx.cfg.highlight_s, lambda: self._expire(pos, token))

    def _expire(self, pos: Tuple[int, int], token: int):
        # a newer highlight on the same position owns the removal
        if self._tokens.get(pos) == token:
            del self._tokens[pos]
