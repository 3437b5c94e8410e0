# session.py
import asyncio, logging, random
from collections import deque
from typing import Deque, Optional
from audio.gateway import AudioGateway, BackendFactory, make_backend_factory
from config import AppConfig
from context import SessionContext
from notes.patterns import PatternCatalog
from notes.pitch import PitchTable
from timeline.note_timeline import NoteTimeline
from transport.commands import Command, CommandKind
from transport.controller import TransportController
from transport.state import note_speed_for
from ui.fret_highlighter import FretHighlighter

log = logging.getLogger(__name__)

HISTORY_LEN = 10

def check_tolerance(cfg: AppConfig):
    """One tick at the fastest tempo must not jump over the trigger window."""
    fastest = note_speed_for(cfg.transport.max_tempo, cfg.transport)
    window = 2 * cfg.timeline.trigger_tolerance
    if fastest >= window:
        raise ValueError(
            f"note speed {fastest:.3f} px/tick at {cfg.transport.max_tempo} bpm can skip the "
            f"trigger window ({window:.3f} px); raise trigger_tolerance or lower max_tempo")


class Session:
    """Owns every component of one running trainer and dispatches commands."""
    def __init__(self, cfg: Optional[AppConfig] = None,
                 catalog: Optional[PatternCatalog] = None,
                 backend_factory: Optional[BackendFactory] = None):
        cfg = cfg or AppConfig()
        check_tolerance(cfg)
        self.ctx = SessionContext(cfg=cfg)
        self.pitches = PitchTable(cfg.render.staff_top, cfg.render.line_spacing)
        self.catalog = catalog or PatternCatalog(rng=random.Random(cfg.seed))
        self.audio = AudioGateway(cfg.audio, backend_factory or make_backend_factory(self.ctx.scheduler))
        self.timeline = NoteTimeline(self.ctx, self.audio, self.pitches)
        self.transport = TransportController(self.ctx, self.timeline, self.catalog)
        self.fretboard = FretHighlighter(self.ctx)
        self.history: Deque[Command] = deque(maxlen=HISTORY_LEN)

    @property
    def bus(self): return self.ctx.bus

    @property
    def state(self): return self.ctx.state

    def start(self):
        self.transport.regenerate_pattern()

    def tick(self, dt: float):
        """One frame: fire due deferred callbacks, then scroll the notes."""
        self.ctx.scheduler.advance(dt)
        self.timeline.advance(self.ctx.state.note_speed)

    def dispatch(self, cmd: Command):
        log.debug("dispatch %s", cmd)
        match cmd.kind:
            case CommandKind.PLAY:
                self.transport.play()
            case CommandKind.PAUSE:
                self.transport.pause()
            case CommandKind.REPLAY:
                self.transport.replay()
            case CommandKind.REGENERATE:
                self.transport.regenerate_pattern()
            case CommandKind.SET_TEMPO:
                self.transport.set_tempo(cmd.tempo)
            case CommandKind.TOGGLE_AUDIO:
                on = asyncio.run(self.audio.toggle())
                log.info("Audio %s", "enabled" if on else ("failed" if self.audio.failed else "disabled"))
        self.history.append(cmd)

    def close(self):
        self.audio.close()
        self.ctx.scheduler.clear()
        self.ctx.bus.clear()
