"""Tunable gameplay numbers, difficulty profiles and live CONFIG"""
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Difficulty:
    speed: float
    increment: float
    max_speed: float


DIFFICULTIES: Dict[str, Difficulty] = {
    "easy": Difficulty(speed=2.0, increment=0.15, max_speed=6.0),
    "medium": Difficulty(speed=3.0, increment=0.25, max_speed=10.0),
    "hard": Difficulty(speed=4.0, increment=0.35, max_speed=14.0),
}

CONFIG = {
    # Field geometry (field units; the renderer multiplies by SCALE)
    "FIELD_WIDTH": 300,
    "FIELD_HEIGHT": 480,
    "BLOCK_HEIGHT": 18,
    "INITIAL_BLOCK_WIDTH": 100,

    # Placement rules
    "PERFECT_EPS": 5,
    "MIN_PLAYABLE_WIDTH": 10,

    # Scoring
    "FLAT_POINTS": 10,
    "PERFECT_BASE": 20,
    "PERFECT_STEP": 10,

    # Falling fragments
    "FALL_RATE": 8,
    "FALL_TICK_MS": 16,
    "RETIRE_MARGIN": 100,
    "BREAK_SPIN": 7.5,
    "MISS_SPIN": 10.0,

    # Camera
    "VISIBLE_ROWS": 20,

    # Transient flags
    "PERFECT_FLASH_MS": 600,
    "CONFETTI_MS": 3000,

    # Session
    "DIFFICULTY": "medium",
    "THEME": "patty",
    "SOUND": True,
    "SEED": None,
    "SCALE": 1.5,
    "BEST_SCORE_PATH": "~/.stacker/best_score.json",
}


def difficulty(name: str) -> Difficulty:
    return DIFFICULTIES[name]
