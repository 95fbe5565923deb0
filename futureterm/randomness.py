"""
Seedable randomness shared by every widget.

Widgets never call the `random` module directly; they receive a
RandomSource from the controller so tests can pin or script every draw.
"""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


class RandomSource:
    """Thin wrapper over random.Random exposing the draws widgets need."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def randrange(self, start: int, stop: int) -> int:
        """Uniform integer in [start, stop). Returns start for an empty range."""
        if stop <= start:
            return start
        return self._rng.randrange(start, stop)

    def uniform(self, low: float, high: float) -> float:
        """Uniform float in [low, high)."""
        return low + (high - low) * self._rng.random()

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        if probability <= 0.0:
            return False
        if probability >= 1.0:
            return True
        return self._rng.random() < probability

    def choice(self, items: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        return items[self.randrange(0, len(items))]

    def byte(self) -> int:
        """Uniform integer in [0, 256)."""
        return self._rng.randrange(0, 256)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r})"
