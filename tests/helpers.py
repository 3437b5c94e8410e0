import os
from typing import List, Tuple

from hypothesis import settings

from notes.model import Pattern, PatternEntry
from session import Session

TICK = 1 / 60


def configure_hypo() -> None:
    settings.register_profile("fast", max_examples=25)
    if os.environ.get("HYPO_SLOW") != "1":
        settings.load_profile("fast")


class FakeBackend:
    """Records triggers; keys in `broken` raise like a missing sample."""

    def __init__(self, broken=(), fail_open: bool = False) -> None:
        self.broken = set(broken)
        self.fail_open = fail_open
        self.opened = 0
        self.closed = 0
        self.calls: List[Tuple[str, float, float]] = []

    def open(self) -> None:
        self.opened += 1
        if self.fail_open:
            raise RuntimeError("no audio device")

    def close(self) -> None:
        self.closed += 1

    def trigger(self, key: str, duration: float, velocity: float) -> None:
        if key in self.broken:
            raise KeyError(key)
        self.calls.append((key, duration, velocity))


class RecordingPlayer:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, float]] = []

    def play_note(self, key: str, duration: float = 0.5) -> None:
        self.calls.append((key, duration))


def mk_pattern(*triples: Tuple[str, int, int], name: str = "test") -> Pattern:
    return Pattern(name, tuple(PatternEntry(p, f, s) for p, f, s in triples))


SCENARIO = mk_pattern(("C4", 1, 2), ("E4", 0, 1), ("G4", 3, 1), ("C5", 8, 1), name="scenario")


def run_ticks(session: Session, n: int) -> None:
    for _ in range(n):
        session.tick(TICK)
