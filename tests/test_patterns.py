import random

import pytest

from notes.model import Pattern, PatternEntry
from notes.patterns import DEFAULT_PATTERNS, PatternCatalog


def test_empty_catalog_rejected() -> None:
    with pytest.raises(ValueError):
        PatternCatalog([])


@pytest.mark.parametrize("fret, string", [(-1, 1), (0, 0), (0, 7)])
def test_entry_validation(fret: int, string: int) -> None:
    with pytest.raises(ValueError):
        PatternEntry("E5", fret, string)


def test_pattern_is_ordered_sequence() -> None:
    p = DEFAULT_PATTERNS[0]
    assert p.name == "Open strings"
    assert len(p) == 6
    assert [e.string for e in p] == [1, 2, 3, 4, 5, 6]


def test_seeded_picks_are_deterministic() -> None:
    a = PatternCatalog(rng=random.Random(3))
    b = PatternCatalog(rng=random.Random(3))
    assert [a.pick_random().name for _ in range(20)] == [b.pick_random().name for _ in range(20)]


def test_pick_does_not_mutate() -> None:
    catalog = PatternCatalog(rng=random.Random(0))
    before = catalog.patterns
    for _ in range(50):
        assert catalog.pick_random() in before
    assert catalog.patterns == before
    assert len(catalog) == 4


def test_pick_is_roughly_uniform() -> None:
    catalog = PatternCatalog(rng=random.Random(11))
    counts = {p.name: 0 for p in DEFAULT_PATTERNS}
    for _ in range(4000):
        counts[catalog.pick_random().name] += 1
    assert all(800 < c < 1200 for c in counts.values()), counts


def test_single_pattern_catalog() -> None:
    only = Pattern("one", (PatternEntry("E5", 0, 1),))
    assert PatternCatalog([only]).pick_random() is only


def test_entries_accept_pitch_members_and_plain_names() -> None:
    from notes.pitch import Pitch, PitchTable

    table = PitchTable()
    member = PatternEntry(Pitch.E5, 0, 1)
    plain = PatternEntry("E5", 0, 1)
    assert member == plain
    assert table.staff_offset(member.pitch) == table.staff_offset(plain.pitch)
    assert table.sample_key(member.pitch) == "E5"
    assert PatternEntry("X7", 0, 1).pitch == "X7"
