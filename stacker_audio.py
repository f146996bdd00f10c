"""Synthesised sound effects played through pygame.mixer"""
import logging
import math
from array import array
from typing import Dict, List, Sequence, Tuple

import pygame

from stacker_config import CONFIG

logger = logging.getLogger(__name__)

# (start_s, frequency_hz) steps, sweep target, duration, peak gain
SOUNDS: Dict[str, Tuple[Sequence[Tuple[float, float]], float, float, float]] = {
    "drop": (((0.0, 150.0),), 80.0, 0.1, 0.3),
    "perfect": (((0.0, 523.0), (0.1, 659.0), (0.2, 784.0)), 0.0, 0.3, 0.2),
    "game_over": (((0.0, 200.0),), 50.0, 0.5, 0.3),
}


def tone_samples(steps: Sequence[Tuple[float, float]], sweep_to: float, duration: float,
                 gain: float, rate: int = 22050) -> List[int]:
    """
    Mono 16-bit samples for one effect.

    Frequency either steps through `steps` or, with a single step and a
    non-zero `sweep_to`, glides exponentially to `sweep_to`. Gain decays
    exponentially to 1% over the duration.
    """
    n = max(1, int(rate * duration))
    out = []
    phase = 0.0
    f0 = steps[0][1]
    for i in range(n):
        t = i / rate
        frac = i / n
        if len(steps) == 1 and sweep_to:
            freq = f0 * (sweep_to / f0) ** frac
        else:
            freq = f0
            for start, f in steps:
                if t >= start:
                    freq = f
        phase += 2 * math.pi * freq / rate
        amp = gain * (0.01 / gain) ** frac if gain > 0.01 else gain
        out.append(int(32767 * amp * math.sin(phase)))
    return out


class SoundBoard:
    """Feedback collaborator; silently inert when the mixer is unavailable."""
    def __init__(self):
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=22050, size=-16, channels=1)
            rate, _, channels = pygame.mixer.get_init()
        except pygame.error as e:
            logger.warning("Audio disabled: %s", e)
            return
        for name, (steps, sweep_to, duration, gain) in SOUNDS.items():
            mono = tone_samples(steps, sweep_to, duration, gain, rate)
            buf = array("h", (s for s in mono for _ in range(channels)))
            self.sounds[name] = pygame.mixer.Sound(buffer=buf.tobytes())

    def play(self, name: str):
        if not CONFIG["SOUND"]:
            return
        snd = self.sounds.get(name)
        if snd is not None:
            snd.play()

    def on_drop(self): self.play("drop")
    def on_perfect(self): self.play("perfect")
    def on_game_over(self): self.play("game_over")
