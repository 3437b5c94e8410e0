# notes/model.py
from dataclasses import dataclass
from typing import Iterator, Tuple

NUM_STRINGS = 6

@dataclass(frozen=True)
class PatternEntry:
    """One playable position.

    pitch is a written pitch name. A `Pitch` member works (it is a str), but any
    name is accepted: lookups on unknown names fall back instead of failing.
    """
    pitch: str      # e.g. "E5", Pitch.E5 or "rest"
    fret: int       # 0 = open string
    string: int     # 1 (high E) .. 6 (low E)

    def __post_init__(self):
        if self.fret < 0:
            raise ValueError(f"fret must be >= 0, got {self.fret}")
        if not 1 <= self.string <= NUM_STRINGS:
            raise ValueError(f"string must be in [1, {NUM_STRINGS}], got {self.string}")


@dataclass(frozen=True)
class Pattern:
    """An ordered phrase; entry order is playback order."""
    name: str
    entries: Tuple[PatternEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PatternEntry]:
        return iter(self.entries)


@dataclass
class Note:
    """Runtime note scrolling toward the play-line. Owned by NoteTimeline."""
    pitch: str
    fret: int
    string: int
    x: float
    generation: int = 0
    active: bool = False
    played: bool = False
