"""Fake long-running operations shown as progress bars."""

from dataclasses import dataclass
from typing import List

from ..constants import Timing
from ..randomness import RandomSource
from .fake_data import random_operation

SPEED_RANGE = (0.002, 0.015)
START_RANGE = (0.0, 0.5)

DEFAULT_BARS = [
    ("DECRYPTING", "cyan"),
    ("UPLOADING", "magenta"),
    ("COMPILING", "green"),
    ("ANALYZING", "orange"),
]


@dataclass
class ProgressBar:
    label: str
    progress: float
    speed: float
    color: str
    complete_flash: int = 0

    @property
    def completed(self) -> bool:
        return self.complete_flash > 0


class ProgressBars:
    """
    Each bar climbs by its own speed until it reaches 1.0, holds there for
    PROGRESS_COMPLETE_HOLD ticks, then restarts from zero with a new speed
    and a new operation label.
    """

    def __init__(self, rng: RandomSource):
        self.rng = rng
        self.bars: List[ProgressBar] = [
            ProgressBar(
                label=label,
                progress=rng.uniform(*START_RANGE),
                speed=rng.uniform(*SPEED_RANGE),
                color=color,
            )
            for label, color in DEFAULT_BARS
        ]

    def tick(self):
        for bar in self.bars:
            self._tick_bar(bar)

    def _tick_bar(self, bar: ProgressBar):
        if bar.complete_flash > 0:
            bar.complete_flash -= 1
            if bar.complete_flash == 0:
                bar.progress = 0.0
                bar.speed = self.rng.uniform(*SPEED_RANGE)
                bar.label = random_operation(self.rng)
            return

        bar.progress += bar.speed
        if bar.progress >= 1.0:
            bar.progress = 1.0
            bar.complete_flash = Timing.PROGRESS_COMPLETE_HOLD
