"""Oscillation, speed ramp and falling fragments"""
from typing import List

from stacker_block import FallingFragment
from stacker_config import CONFIG, Difficulty


def speed_for(profile: Difficulty, placed: int) -> float:
    """Oscillation speed once `placed` blocks sit on top of the base."""
    return min(profile.speed + placed * profile.increment, profile.max_speed)


class Oscillator:
    """
    Slides the active block back and forth across the field.

    • x moves by speed*direction each tick and bounces off both walls.
    • Direction survives placements; spawn_x() puts the next block on the
      wall it will move away from.
    """
    def __init__(self, speed: float = 0.0):
        self.x = 0.0
        self.direction = 1           # -1 left, +1 right
        self.speed = speed

    def reset(self, speed: float):
        self.x = 0.0
        self.direction = 1
        self.speed = speed

    def spawn_x(self, width: float) -> float:
        return 0.0 if self.direction == 1 else CONFIG["FIELD_WIDTH"] - width

    def rearm(self, width: float, speed: float) -> float:
        self.speed = speed
        self.x = self.spawn_x(width)
        return self.x

    def step(self, width: float) -> float:
        field = CONFIG["FIELD_WIDTH"]
        x = self.x + self.speed * self.direction
        if x <= 0:
            x = 0.0
            self.direction = 1
        elif x + width >= field:
            x = field - width
            self.direction = -1
        self.x = x
        return x


class FallingPieces:
    """Detached fragments; purely decorative once spawned."""
    def __init__(self):
        self.pieces: List[FallingFragment] = []

    def __len__(self):
        return len(self.pieces)

    def clear(self):
        self.pieces = []

    def spawn(self, fragments: List[FallingFragment]):
        self.pieces.extend(fragments)

    def step(self) -> int:
        """Advance one fall tick; returns how many fragments were retired."""
        rate = CONFIG["FALL_RATE"]
        floor = CONFIG["FIELD_HEIGHT"] + CONFIG["RETIRE_MARGIN"]
        for p in self.pieces:
            p.y += rate
            p.rotation += p.rotation_speed
        live = [p for p in self.pieces if p.y < floor]
        retired = len(self.pieces) - len(live)
        self.pieces = live
        return retired
