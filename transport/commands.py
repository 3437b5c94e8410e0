# transport/commands.py
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

class CommandKind(Enum):
    PLAY = auto()
    PAUSE = auto()
    REPLAY = auto()
    REGENERATE = auto()
    TOGGLE_AUDIO = auto()
    SET_TEMPO = auto()


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    tempo: Optional[int] = None  # SET_TEMPO only

    def __post_init__(self):
        if self.kind is CommandKind.SET_TEMPO and self.tempo is None:
            raise ValueError("SET_TEMPO needs a tempo")

    @classmethod
    def set_tempo(cls, bpm: int) -> "Command":
        return cls(CommandKind.SET_TEMPO, int(bpm))
