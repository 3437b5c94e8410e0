# notes/pitch.py
import re
from enum import Enum
from typing import Dict, Optional

class Pitch(str, Enum):
    """Written pitches the trainer can place on the treble staff."""
    E3 = "E3"; F3 = "F3"; G3 = "G3"; A3 = "A3"; B3 = "B3"
    C4 = "C4"; D4 = "D4"; E4 = "E4"; F4 = "F4"; G4 = "G4"; A4 = "A4"; B4 = "B4"
    C5 = "C5"; D5 = "D5"; E5 = "E5"; F5 = "F5"; G5 = "G5"; A5 = "A5"
    REST = "rest"

# half-line steps below the top staff line (F5)
STAFF_STEPS: Dict[str, float] = {
    "A5": -1.0, "G5": -0.5,
    "F5": 0.0, "E5": 0.5, "D5": 1.0, "C5": 1.5, "B4": 2.0,
    "A4": 2.5, "G4": 3.0, "F4": 3.5, "E4": 4.0, "D4": 4.5,
    "C4": 5.0, "B3": 5.5, "A3": 6.0, "G3": 6.5, "F3": 7.0, "E3": 7.5,
    "rest": 3.0,  # rests sit on the middle of the staff
}
FALLBACK_STEPS = 2.5
FALLBACK_SAMPLE_KEY = "C4"

# open strings 1..6 (high E to low E), written an octave above sounding pitch
STANDARD_TUNING_WRITTEN = {1: 76, 2: 71, 3: 67, 4: 62, 5: 57, 6: 52}

_NAME_RE = re.compile(r"^([A-Ga-g])([#b]?)(-?\d)$")
_PC = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


def _name(pitch) -> str:
    return pitch.value if isinstance(pitch, Pitch) else str(pitch)


def midi_number(pitch) -> Optional[int]:
    """Scientific pitch name -> MIDI note number (C4 = 60). None for rests."""
    m = _NAME_RE.match(_name(pitch))
    if not m:
        return None
    letter, acc, octave = m.groups()
    n = (int(octave) + 1) * 12 + _PC[letter.upper()]
    if acc == "#": n += 1
    elif acc == "b": n -= 1
    return n


class PitchTable:
    """Staff position, sample key and fretboard lookups. Unknown names never raise."""
    def __init__(self, staff_top: float = 130.0, line_spacing: float = 10.0):
        self.staff_top = staff_top
        self.line_spacing = line_spacing
        self._by_midi = {midi_number(p): p.value for p in Pitch if p is not Pitch.REST}

    def staff_offset(self, pitch) -> float:
        steps = STAFF_STEPS.get(_name(pitch), FALLBACK_STEPS)
        return self.staff_top + steps * self.line_spacing

    def sample_key(self, pitch) -> str:
        name = _name(pitch)
        return name if name in STAFF_STEPS else FALLBACK_SAMPLE_KEY

    def is_supported(self, pitch) -> bool:
        return _name(pitch) in STAFF_STEPS

    def written_pitch(self, string: int, fret: int) -> Optional[str]:
        """Written pitch sounded at (string, fret) in standard tuning, if it is on the staff."""
        open_midi = STANDARD_TUNING_WRITTEN.get(string)
        if open_midi is None or fret < 0:
            return None
        return self._by_midi.get(open_midi + fret)
