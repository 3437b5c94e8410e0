# notes/patterns.py
import random
from typing import Iterable, Optional, Tuple
from notes.model import Pattern, PatternEntry

def _p(name: str, *triples: Tuple[str, int, int]) -> Pattern:
    return Pattern(name, tuple(PatternEntry(pitch, fret, string) for pitch, fret, string in triples))

DEFAULT_PATTERNS: Tuple[Pattern, ...] = (
    _p("Open strings",
       ("E5", 0, 1), ("B4", 0, 2), ("G4", 0, 3), ("D4", 0, 4), ("A3", 0, 5), ("E3", 0, 6)),
    _p("C chord",
       ("E5", 0, 1), ("C5", 1, 2), ("G4", 0, 3), ("E4", 2, 4), ("C4", 3, 5)),
    _p("G chord",
       ("G5", 3, 1), ("B4", 0, 2), ("G4", 0, 3), ("D4", 0, 4), ("G3", 3, 6)),
    _p("First position scale",
       ("E5", 0, 1), ("F5", 1, 1), ("G5", 3, 1), ("B4", 0, 2), ("C5", 1, 2)),
)


class PatternCatalog:
    """Fixed, non-empty set of phrases. Selection is uniform over an injectable RNG."""
    def __init__(self, patterns: Iterable[Pattern] = DEFAULT_PATTERNS,
                 rng: Optional[random.Random] = None):
        self.patterns: Tuple[Pattern, ...] = tuple(patterns)
        if not self.patterns:
            raise ValueError("PatternCatalog needs at least one pattern")
        self.rng = rng or random.Random()

    def __len__(self) -> int:
        return len(self.patterns)

    def pick_random(self) -> Pattern:
        return self.rng.choice(self.patterns)
