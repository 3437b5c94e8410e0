# transport/controller.py
import logging
from context import SessionContext
from events.bus import Topic
from notes.patterns import PatternCatalog
from timeline.note_timeline import NoteTimeline
from transport.state import clamp_tempo, note_speed_for

log = logging.getLogger(__name__)

class TransportController:
    """PAUSED (initial) <-> PLAYING, tempo, and pattern changes."""
    def __init__(self, ctx: SessionContext, timeline: NoteTimeline, catalog: PatternCatalog):
        self.ctx = ctx
        self.cfg = ctx.cfg.transport
        self.timeline = timeline
        self.catalog = catalog

        st = ctx.state
        st.is_playing = False
        st.tempo = clamp_tempo(self.cfg.tempo, self.cfg)
        st.note_speed = note_speed_for(st.tempo, self.cfg)

    @property
    def is_playing(self) -> bool:
        return self.ctx.state.is_playing

    def play(self):
        self.ctx.state.is_playing = True
        self.ctx.bus.publish(Topic.PLAY_STATE_CHANGED, True)

    def pause(self):
        self.ctx.state.is_playing = False
        self.ctx.bus.publish(Topic.PLAY_STATE_CHANGED, False)

    def replay(self):
        """Full reset of the current pattern, then PLAYING whatever the prior state."""
        if not self.timeline.reload():
            log.warning("replay with no pattern loaded")
        self.play()

    def set_tempo(self, bpm: int) -> int:
        st = self.ctx.state
        st.tempo = clamp_tempo(bpm, self.cfg)
        st.note_speed = note_speed_for(st.tempo, self.cfg)
        log.debug("tempo=%d speed=%.3f px/tick", st.tempo, st.note_speed)
        self.ctx.bus.publish(Topic.TEMPO_CHANGED, st.tempo)
        return st.tempo

    def regenerate_pattern(self):
        pattern = self.catalog.pick_random()
        # the timeline loads it through its pattern-selected subscription
        self.ctx.bus.publish(Topic.PATTERN_SELECTED, pattern)
        if self.cfg.regenerate_autoplay:
            self.play()
        return pattern
