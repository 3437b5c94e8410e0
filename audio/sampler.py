# audio/sampler.py
import os, logging
import pygame
from typing import Dict
from config import AudioConfig
from utils.path import resource_path

log = logging.getLogger(__name__)

class Sampler:
    """WAV sample back end: one `<key>.wav` per pitch under samples_dir (e.g. "A#3.wav")."""
    def __init__(self, cfg: AudioConfig):
        self.cfg = cfg
        self.samples_dir = cfg.samples_dir or resource_path("samples")
        self.sounds: Dict[str, pygame.mixer.Sound] = {}

    def open(self):
        if not os.path.isdir(self.samples_dir):
            raise FileNotFoundError(f"samples directory not found: {self.samples_dir}")
        started_mixer = not pygame.mixer.get_init()
        if started_mixer:
            pygame.mixer.init(frequency=self.cfg.sample_rate)
        try:
            for fname in sorted(os.listdir(self.samples_dir)):
                key, ext = os.path.splitext(fname)
                if ext.lower() != ".wav":
                    continue
                self.sounds[key] = pygame.mixer.Sound(os.path.join(self.samples_dir, fname))
            if not self.sounds:
                raise FileNotFoundError(f"no .wav samples in {self.samples_dir}")
        except Exception:
            self.sounds.clear()
            if started_mixer:
                pygame.mixer.quit()
            raise
        log.info("Loaded %d samples from %s", len(self.sounds), self.samples_dir)

    def close(self):
        self.sounds.clear()
        if pygame.mixer.get_init():
            pygame.mixer.quit()

    def trigger(self, key: str, duration: float, velocity: float):
        sound = self.sounds[key]
        sound.set_volume(max(0.0, min(1.0, velocity)))
        fade_ms = int(self.cfg.release_s * 1000)
        ch = sound.play(maxtime=int(duration * 1000) + fade_ms)
        if ch is None:
            raise RuntimeError(f"no free mixer channel for {key}")
