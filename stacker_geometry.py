"""Placement helpers: resolve overlap, break off overhang"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional

from stacker_block import Block, FallingFragment, to_fragment
from stacker_config import CONFIG
from stacker_rng import StackRandom


class Outcome(Enum):
    MISS = "miss"
    PERFECT = "perfect"
    PARTIAL = "partial"


@dataclass(frozen=True)
class Resolution:
    outcome: Outcome
    overlap_left: float
    overlap_width: float        # may be <= 0, only ever for MISS
    placed: Optional[Block]     # None on MISS


def overlap(a: Block, b: Block):
    left = max(a.x, b.x)
    return left, min(a.right, b.right) - left


def resolve_overlap(active: Block, top: Block) -> Resolution:
    left, width = overlap(active, top)
    if width <= 0:
        return Resolution(Outcome.MISS, left, width, None)
    eps = CONFIG["PERFECT_EPS"]
    if abs(active.x - top.x) < eps and abs(active.width - top.width) < eps:
        return Resolution(Outcome.PERFECT, left, width, replace(active, x=top.x, width=top.width))
    return Resolution(Outcome.PARTIAL, left, width, replace(active, x=left, width=width))


def break_off(active: Block, top: Block, res: Resolution, rng: StackRandom) -> List[FallingFragment]:
    if res.outcome is Outcome.MISS:
        return [to_fragment(active, rng.spin(CONFIG["MISS_SPIN"]))]
    if res.outcome is Outcome.PERFECT:
        return []
    spread = CONFIG["BREAK_SPIN"]
    out = []
    if active.x < top.x:
        out.append(to_fragment(active, rng.spin(spread), x=active.x, width=top.x - active.x))
    if active.right > top.right:
        out.append(to_fragment(active, rng.spin(spread), x=top.right, width=active.right - top.right))
    return out
