"""Countdown timer paced by ticks."""

from enum import Enum

from ..constants import Timing, DEFAULT_COUNTDOWN_SECONDS

WARNING_SECONDS = 60
CRITICAL_SECONDS = 10


class CountdownStatus(Enum):
    """Derived classification used to pick colours."""
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    EXPIRED = "expired"


class Countdown:
    """
    Decrements once per TICKS_PER_SECOND ticks and floors at zero.

    The flash flag toggles every COUNTDOWN_FLASH_PERIOD ticks regardless of
    the remaining time.
    """

    def __init__(self, seconds: int = DEFAULT_COUNTDOWN_SECONDS):
        self.initial_seconds = max(0, int(seconds))
        self.remaining_seconds = self.initial_seconds
        self.flash = False
        self._tick_counter = 0

    def tick(self):
        self._tick_counter += 1

        if self._tick_counter % Timing.COUNTDOWN_FLASH_PERIOD == 0:
            self.flash = not self.flash

        if self._tick_counter % Timing.TICKS_PER_SECOND == 0 and self.remaining_seconds > 0:
            self.remaining_seconds -= 1

    def reset(self):
        self.remaining_seconds = self.initial_seconds
        self._tick_counter = 0

    @property
    def status(self) -> CountdownStatus:
        if self.remaining_seconds == 0:
            return CountdownStatus.EXPIRED
        if self.remaining_seconds <= CRITICAL_SECONDS:
            return CountdownStatus.CRITICAL
        if self.remaining_seconds <= WARNING_SECONDS:
            return CountdownStatus.WARNING
        return CountdownStatus.NORMAL

    def format_time(self) -> str:
        """MM:SS, or HH:MM:SS once there is at least an hour left."""
        hours, rest = divmod(self.remaining_seconds, 3600)
        minutes, seconds = divmod(rest, 60)
        if hours > 0:
            return f"{hours:02}:{minutes:02}:{seconds:02}"
        return f"{minutes:02}:{seconds:02}"
