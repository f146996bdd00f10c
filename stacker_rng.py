"""Seedable random source: fragment spin and topping draws"""
import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


class StackRandom:
    """The only source of randomness the game uses.

    Nothing that affects score or geometry is drawn from here, only cosmetic
    spin and which topping comes next.
    """
    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def spin(self, spread: float) -> float:
        """Uniform rotation speed in [-spread, +spread] degrees per tick."""
        return self._rng.uniform(-spread, spread)

    def choice(self, items: Sequence[T]) -> T:
        return self._rng.choice(items)
