# audio.py
from __future__ import annotations
from typing import Dict, Optional
import logging

import numpy as np  # type: ignore
import pygame       # type: ignore

from .engine import GameListener

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050

# -----------------------------------------------------------------------------
# Tone synthesis (pure numpy, float32 in [-1, 1])
# -----------------------------------------------------------------------------
def _oscillator(kind: str, phase: np.ndarray) -> np.ndarray:
    if kind == "sine":
        return np.sin(2 * np.pi * phase)
    if kind == "square":
        return np.where(np.sin(2 * np.pi * phase) >= 0, 1.0, -1.0)
    if kind == "sawtooth":
        return 2.0 * (phase - np.floor(phase + 0.5))
    raise ValueError(f"Unknown waveform: {kind}")

def synth_tone(
    f_start: float,
    f_end: float,
    duration: float,
    kind: str = "sine",
    gain: float = 0.3,
    ramp: str = "exp",
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """
    A single swept tone. Frequency and amplitude both glide over
    ``duration`` seconds, exponentially or linearly; amplitude ends at 0.01.
    """
    n = max(int(duration * sample_rate), 1)
    t = np.linspace(0.0, 1.0, n, endpoint=False)
    if ramp == "exp":
        freq = f_start * (f_end / f_start) ** t
        env = gain * (0.01 / gain) ** t
    else:
        freq = f_start + (f_end - f_start) * t
        env = gain + (0.01 - gain) * t
    phase = np.cumsum(freq) / sample_rate
    return (_oscillator(kind, phase) * env).astype(np.float32)

def start_jingle(sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Ascending A-major arpeggio, one note every 0.1 s, each ringing 0.2 s."""
    notes = (440.0, 554.0, 659.0)
    out = np.zeros(int(0.4 * sample_rate), dtype=np.float32)
    for i, f in enumerate(notes):
        tone = synth_tone(f, f, 0.2, kind="square", gain=0.1, sample_rate=sample_rate)
        start = int(i * 0.1 * sample_rate)
        out[start:start + len(tone)] += tone
    return out

def eat_chirp(gain: float = 0.3, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    return synth_tone(600.0, 1000.0, 0.1, kind="sine", gain=gain, sample_rate=sample_rate)

def game_over_drone(gain: float = 0.3, sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    return synth_tone(200.0, 50.0, 0.5, kind="sawtooth", gain=gain, ramp="linear",
                      sample_rate=sample_rate)

def to_pcm16(wave: np.ndarray, channels: int = 1) -> np.ndarray:
    pcm = (np.clip(wave, -1.0, 1.0) * (2**15 - 1)).astype(np.int16)
    if channels > 1:
        pcm = np.repeat(pcm[:, None], channels, axis=1)
    return np.ascontiguousarray(pcm)

# -----------------------------------------------------------------------------
# Playback
# -----------------------------------------------------------------------------
class AudioService(GameListener):
    """
    Plays the three game cues through pygame.mixer. Without a usable audio
    device every call is a no-op; sound problems never reach the engine.
    """

    def __init__(self, enabled: bool = True, volume: float = 0.3):
        self.enabled = enabled
        self.volume = volume
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        self._ready = False
        if enabled:
            self._init_mixer()

    def _init_mixer(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            freq, _size, channels = pygame.mixer.get_init()
            waves = {
                "start": start_jingle(freq),
                "eat": eat_chirp(self.volume, freq),
                "game_over": game_over_drone(self.volume, freq),
            }
            self._sounds = {
                name: pygame.sndarray.make_sound(to_pcm16(w, channels))
                for name, w in waves.items()
            }
            self._ready = True
        except (pygame.error, ValueError) as e:
            logger.warning("Audio unavailable, continuing without sound: %s", e)
            self._ready = False

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        if enabled and not self._ready:
            self._init_mixer()

    def toggle(self) -> bool:
        self.set_enabled(not self.enabled)
        return self.enabled

    def play(self, name: str) -> Optional["pygame.mixer.Channel"]:
        if not self.enabled or not self._ready:
            return None
        sound = self._sounds.get(name)
        if sound is None:
            return None
        try:
            return sound.play()
        except pygame.error as e:
            logger.warning("Could not play %s: %s", name, e)
            return None

    # GameListener
    def on_game_started(self) -> None:
        self.play("start")

    def on_item_consumed(self) -> None:
        self.play("eat")

    def on_game_over(self, score: int, high_score: int) -> None:
        self.play("game_over")
