# audio/synth.py
import logging
import pygame.midi
from config import AudioConfig
from notes.pitch import midi_number
from timeline.scheduler import Scheduler

log = logging.getLogger(__name__)

DRUM_CH = 9  # GM: ch10(索引9)為打擊，避免使用

class MidiSynth:
    """
    系統 MIDI 音源後端：
    - open() 找預設輸出裝置，設定吉他音色
    - trigger(key, duration, velocity) 立即 note_on，note_off 交給 Scheduler
    """
    def __init__(self, cfg: AudioConfig, scheduler: Scheduler):
        self.cfg = cfg
        self.scheduler = scheduler
        self.midi_out = None
        self.channels = [ch for ch in range(16) if ch != DRUM_CH]
        self._rr_index = 0

    def open(self):
        pygame.midi.init()
        try:
            dev = pygame.midi.get_default_output_id()
            if dev == -1:
                raise RuntimeError("No MIDI output device found")
            self.midi_out = pygame.midi.Output(dev)
            for ch in self.channels:
                self.midi_out.set_instrument(self.cfg.midi_program, ch)
        except Exception:
            if self.midi_out is not None:
                self.midi_out.close()
                self.midi_out = None
            pygame.midi.quit()
            raise
        log.info("Using system MIDI out (device %d, program %d)", dev, self.cfg.midi_program)

    def close(self):
        try:
            if self.midi_out:
                self.all_notes_off()
                self.midi_out.close()
        except Exception:
            log.debug("MIDI close failed", exc_info=True)
        pygame.midi.quit()
        self.midi_out = None

    def _alloc_channel(self) -> int:
        ch = self.channels[self._rr_index % len(self.channels)]
        self._rr_index += 1
        return ch

    def trigger(self, key: str, duration: float, velocity: float):
        pitch = midi_number(key)
        if pitch is None:
            raise KeyError(key)
        if self.midi_out is None:
            raise RuntimeError("MIDI output not open")
        ch = self._alloc_channel()
        v = max(1, min(int(velocity * 127), 127))
        self.midi_out.note_on(pitch, v, ch)
        self.scheduler.call_later(duration + self.cfg.release_s, lambda: self._note_off(pitch, ch))

    def _note_off(self, pitch: int, ch: int):
        if self.midi_out is None: return
        try: self.midi_out.note_off(pitch, 0, ch)
        except Exception: log.debug("note_off failed", exc_info=True)

    def all_notes_off(self):
        if self.midi_out is None: return
        for ch in self.channels:
            for p in range(40, 90):
                try: self.midi_out.note_off(p, 0, ch)
                except Exception: pass
