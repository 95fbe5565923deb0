"""Falling-character rain."""

import math
from dataclasses import dataclass, field
from typing import List

from ..constants import Limits
from ..randomness import RandomSource
from .fake_data import RAIN_CHARS

SPEED_RANGE = (0.3, 1.2)
LENGTH_RANGE = (5, 15)      # Trail length, upper bound exclusive
RESPAWN_LIFT = 10           # Respawned drops start up to this many rows above
MUTATION_CHANCE = 0.1


@dataclass
class Drop:
    """A single falling trail. Column is fixed for the life of the slot."""
    x: int
    y: float
    speed: float
    chars: List[str] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.chars)

    @property
    def head_row(self) -> int:
        return math.floor(self.y)


class MatrixRain:
    """
    Digital rain with a constant drop population.

    One drop slot exists per two terminal columns. Drops that fall past
    the bottom are respawned above the top with fresh speed, length and
    characters rather than being removed, so the population only changes
    on resize().
    """

    def __init__(self, rng: RandomSource, width: int = 0, height: int = 0,
                 charset: str = RAIN_CHARS):
        self.rng = rng
        self.charset = charset
        self.width = 0
        self.height = 0
        self.drops: List[Drop] = []
        self._tick_counter = 0
        if width > 0:
            self.resize(width, height)

    def resize(self, width: int, height: int):
        """Discard all drops and build a fresh population for the new size."""
        self.width = max(0, width)
        self.height = max(0, height)
        drop_count = self.width // Limits.RAIN_COLUMN_SPACING
        self.drops = [
            self._new_drop(i * Limits.RAIN_COLUMN_SPACING, start_above=max(1, self.height))
            for i in range(drop_count)
        ]

    def tick(self):
        """Advance every drop one step and mutate characters."""
        self._tick_counter += 1
        for drop in self.drops:
            drop.y += drop.speed

            if drop.y > self.height + drop.length:
                self._respawn(drop)

            if self.rng.chance(MUTATION_CHANCE):
                idx = self.rng.randrange(0, drop.length)
                drop.chars[idx] = self.rng.choice(self.charset)

    def _new_drop(self, x: int, start_above: int) -> Drop:
        return Drop(
            x=x,
            y=-float(self.rng.randrange(0, start_above)),
            speed=self.rng.uniform(*SPEED_RANGE),
            chars=self._random_trail(),
        )

    def _respawn(self, drop: Drop):
        drop.y = -float(self.rng.randrange(0, RESPAWN_LIFT))
        drop.speed = self.rng.uniform(*SPEED_RANGE)
        drop.chars = self._random_trail()

    def _random_trail(self) -> List[str]:
        length = self.rng.randrange(*LENGTH_RANGE)
        return [self.rng.choice(self.charset) for _ in range(length)]
