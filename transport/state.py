# transport/state.py
from dataclasses import dataclass
from config import TransportConfig

@dataclass
class TransportState:
    is_playing: bool = False
    tempo: int = 100
    note_speed: float = 100 / 60  # px per tick


def clamp_tempo(bpm: int, cfg: TransportConfig) -> int:
    return max(cfg.min_tempo, min(cfg.max_tempo, int(bpm)))


def note_speed_for(tempo: int, cfg: TransportConfig) -> float:
    """Pixels per tick for a tempo.

    "ratio":  tempo/60 * unit_speed, i.e. unit_speed px/tick at 60 bpm.
    "linear": clamped linear map of [min_tempo, max_tempo] onto [min_speed, max_speed].
    """
    if cfg.speed_mode == "linear":
        span = max(1, cfg.max_tempo - cfg.min_tempo)
        t = (clamp_tempo(tempo, cfg) - cfg.min_tempo) / span
        return cfg.min_speed + t * (cfg.max_speed - cfg.min_speed)
    if cfg.speed_mode != "ratio":
        raise ValueError(f"unknown speed_mode: {cfg.speed_mode!r}")
    return tempo / 60.0 * cfg.unit_speed


def note_duration(tempo: int) -> float:
    """Quarter-note duration in seconds."""
    return 60.0 / tempo


def active_duration(tempo: int, cfg: TransportConfig) -> float:
    """How long a triggered note stays active before it latches to played."""
    if cfg.active_mode == "fixed":
        return cfg.active_fixed_s
    return note_duration(tempo)
