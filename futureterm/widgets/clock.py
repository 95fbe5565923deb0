"""Wall clock with millisecond display."""

from datetime import datetime
from typing import Callable

from ..constants import Timing


class Clock:
    def __init__(self, now: Callable[[], datetime] = datetime.now):
        self.now = now
        self.time_str = ""
        self.date_str = ""
        self.millis = ""
        self._tick_counter = 0
        self._update_time()

    def tick(self):
        self._tick_counter += 1
        self._update_time()

    @property
    def blink(self) -> bool:
        return (self._tick_counter // Timing.CLOCK_BLINK_PERIOD) % 2 == 0

    def _update_time(self):
        current = self.now()
        self.time_str = current.strftime('%H:%M:%S')
        self.date_str = current.strftime('%Y-%m-%d')
        self.millis = f".{current.microsecond // 1000:03d}"
