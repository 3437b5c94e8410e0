import pytest

from notes.pitch import FALLBACK_SAMPLE_KEY, Pitch, PitchTable, midi_number
from notes.patterns import DEFAULT_PATTERNS

TABLE = PitchTable(staff_top=130.0, line_spacing=10.0)


@pytest.mark.parametrize(
    "pitch, y",
    [
        ("F5", 130.0),
        ("E4", 170.0),
        ("G4", 160.0),
        ("C4", 180.0),
        ("E3", 205.0),
        ("G5", 125.0),
        ("rest", 160.0),
        (Pitch.D4, 175.0),
    ],
)
def test_staff_offset(pitch, y: float) -> None:
    assert TABLE.staff_offset(pitch) == pytest.approx(y)


@pytest.mark.parametrize("unknown", ["Z9", "", "C#4", "c4", "H2"])
def test_unknown_pitch_falls_back(unknown: str) -> None:
    assert TABLE.staff_offset(unknown) == pytest.approx(155.0)
    assert TABLE.sample_key(unknown) == FALLBACK_SAMPLE_KEY
    assert not TABLE.is_supported(unknown)


def test_sample_key_is_identity_on_supported_set() -> None:
    for p in Pitch:
        assert TABLE.sample_key(p) == p.value
        assert TABLE.sample_key(p.value) == p.value


@pytest.mark.parametrize(
    "name, midi",
    [("C4", 60), ("A4", 69), ("E3", 52), ("A#3", 58), ("Bb3", 58), ("C-1", 0), ("rest", None), ("Z9", None)],
)
def test_midi_number(name: str, midi) -> None:
    assert midi_number(name) == midi


@pytest.mark.parametrize(
    "string, fret, written",
    [(1, 0, "E5"), (2, 1, "C5"), (3, 0, "G4"), (4, 2, "E4"), (5, 3, "C4"), (6, 3, "G3"), (1, 5, "A5")],
)
def test_written_pitch(string: int, fret: int, written: str) -> None:
    assert TABLE.written_pitch(string, fret) == written


@pytest.mark.parametrize("string, fret", [(0, 0), (7, 0), (1, 20), (3, -1)])
def test_written_pitch_off_table(string: int, fret: int) -> None:
    assert TABLE.written_pitch(string, fret) is None


def test_catalog_positions_match_written_pitch() -> None:
    """Every default phrase names the pitch its string/fret actually sounds."""
    for pattern in DEFAULT_PATTERNS:
        for e in pattern:
            assert TABLE.is_supported(e.pitch)
            assert TABLE.written_pitch(e.string, e.fret) == e.pitch, (pattern.name, e)
