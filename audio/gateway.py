# audio/gateway.py
import logging
from typing import Callable, Optional, Protocol
from config import AudioConfig
from notes.pitch import Pitch

log = logging.getLogger(__name__)

class Backend(Protocol):
    def open(self) -> None: ...
    def close(self) -> None: ...
    def trigger(self, key: str, duration: float, velocity: float) -> None: ...

BackendFactory = Callable[[AudioConfig], Backend]


class AudioGateway:
    """Optional audio output. Nothing here raises past play_note().

    The core only calls play_note(); initialize()/enable()/toggle() come from
    the UI. Until initialization succeeds and audio is enabled, play_note()
    is a silent no-op.
    """
    def __init__(self, cfg: AudioConfig, backend_factory: BackendFactory):
        self.cfg = cfg
        self._factory = backend_factory
        self.backend: Optional[Backend] = None
        self.is_initialized = False
        self.is_enabled = False
        self.failed = False
        self.loading = False

    @property
    def status(self) -> str:
        if self.loading: return "loading"
        if self.is_enabled: return "on"
        if self.failed: return "failed"
        return "off"

    async def initialize(self) -> bool:
        if self.is_initialized:
            return True
        self.loading = True
        try:
            backend = self._factory(self.cfg)
            backend.open()
        except Exception as e:
            log.error("Audio initialization failed: %s", e, exc_info=True)
            self.failed = True
            return False
        finally:
            self.loading = False
        self.backend = backend
        self.is_initialized = True
        self.failed = False
        log.info("Audio initialized (%s)", type(backend).__name__)
        return True

    async def enable(self) -> bool:
        if not self.is_initialized and not await self.initialize():
            return False
        self.is_enabled = True
        return True

    def disable(self):
        self.is_enabled = False

    async def toggle(self) -> bool:
        if self.is_enabled:
            self.disable()
            return False
        return await self.enable()

    def play_note(self, key: str, duration: float = 0.5):
        if not (self.is_enabled and self.is_initialized) or self.backend is None or key == Pitch.REST.value:
            return
        try:
            self.backend.trigger(key, duration, self.cfg.velocity)
            return
        except Exception as e:
            log.warning("Error playing %s: %s; falling back to %s", key, e, self.cfg.fallback_key)
        try:
            self.backend.trigger(self.cfg.fallback_key, duration, self.cfg.fallback_velocity)
        except Exception as e:
            log.error("Fallback %s also failed: %s", self.cfg.fallback_key, e)

    def close(self):
        if self.backend is not None:
            try:
                self.backend.close()
            except Exception:
                log.debug("audio backend close failed", exc_info=True)
        self.backend = None
        self.is_initialized = self.is_enabled = False


def make_backend_factory(scheduler) -> BackendFactory:
    """Back end chosen by AudioConfig.backend ("samples" or "midi")."""
    def factory(cfg: AudioConfig) -> Backend:
        if cfg.backend == "midi":
            from audio.synth import MidiSynth
            return MidiSynth(cfg, scheduler)
        from audio.sampler import Sampler
        return Sampler(cfg)
    return factory
