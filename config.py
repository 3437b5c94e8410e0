# ========================= config.py =========================
from dataclasses import dataclass, field
from typing import Optional

@dataclass
class RenderConfig:
    window_w: int = 800
    window_h: int = 400
    fps: int = 60
    staff_top: float = 130.0      # y of the top staff line (F5)
    line_spacing: float = 10.0
    fret_x: int = 50              # fretboard origin
    fret_y: int = 250
    fret_w: int = 25              # px per fret
    fret_count: int = 12
    string_gap: int = 20

@dataclass
class TimelineConfig:
    play_line_x: float = 200.0
    lead_beats: int = 4           # beats of runway before the first note
    note_spacing: float = 60.0    # px between consecutive notes
    trigger_tolerance: float = 2.0

    @property
    def lead_distance(self) -> float:
        return self.lead_beats * self.note_spacing

@dataclass
class TransportConfig:
    tempo: int = 100
    min_tempo: int = 60
    max_tempo: int = 180
    tempo_step: int = 5
    speed_mode: str = "ratio"     # or "linear"
    unit_speed: float = 1.0       # px/tick at 60 bpm ("ratio")
    min_speed: float = 1.0        # px/tick at min_tempo ("linear")
    max_speed: float = 3.0        # px/tick at max_tempo ("linear")
    active_mode: str = "tempo"    # or "fixed"
    active_fixed_s: float = 0.5
    regenerate_autoplay: bool = False

@dataclass
class AudioConfig:
    backend: str = "midi"         # or "samples" (needs samples_dir)
    samples_dir: Optional[str] = None
    fallback_key: str = "C4"
    velocity: float = 0.8
    fallback_velocity: float = 0.6
    release_s: float = 0.3
    midi_program: int = 24        # GM: Acoustic Guitar (nylon)
    sample_rate: int = 44100

@dataclass
class AppConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    audio: AudioConfig = field(default_factory=AudioConfig)
    highlight_s: float = 0.5
    seed: Optional[int] = None
