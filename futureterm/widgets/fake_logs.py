"""Scrolling synthetic log feed."""

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Deque, List

from ..constants import Limits, Timing
from ..randomness import RandomSource
from . import fake_data

ALERT_CHANCE = 0.05


class LogLevel(Enum):
    """Severity of a synthetic log entry; value is the on-screen label."""
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERR!"
    SUCCESS = "OK"
    DEBUG = "DBG"
    ALERT = "ALERT"


@dataclass
class LogEntry:
    """One line in the log feed."""
    timestamp: str
    level: LogLevel
    message: str


def _connection(rng):
    return LogLevel.INFO, f"Connection established from {fake_data.random_ip(rng)}"


def _process_spawn(rng):
    return (LogLevel.INFO,
            f"Process {fake_data.random_process(rng)} spawned on port {fake_data.random_port(rng)}")


def _auth_attempt(rng):
    return LogLevel.WARN, f"Authentication attempt for user '{fake_data.random_username(rng)}'"


def _file_access(rng):
    return LogLevel.ERROR, f"Failed to access {fake_data.random_path(rng)}"


def _tunnel(rng):
    return LogLevel.SUCCESS, f"Encrypted tunnel to {fake_data.random_ip(rng)} active"


def _port_scan(rng):
    return (LogLevel.DEBUG,
            f"Scanning port range {fake_data.random_port(rng)}-{fake_data.random_port(rng)}")


def _packet(rng):
    return LogLevel.INFO, f"Data packet received: {rng.randrange(64, 65536)} bytes"


def _firewall(rng):
    return LogLevel.WARN, f"Firewall rule triggered from {fake_data.random_ip(rng)}"


def _decrypt(rng):
    return LogLevel.INFO, f"Decrypting sector 0x{rng.randrange(0, 2 ** 32):08X}..."


def _allocation(rng):
    return LogLevel.DEBUG, f"Memory allocation: {rng.randrange(1, 1024)} KB"


MESSAGE_TEMPLATES = [
    _connection,
    _process_spawn,
    _auth_attempt,
    _file_access,
    _tunnel,
    _port_scan,
    _packet,
    _firewall,
    _decrypt,
    _allocation,
]


class FakeLogs:
    """
    Capped FIFO of synthetic log entries emitted on a randomized schedule.

    A few seed entries are written at construction and the first emission
    is due on the first tick. After each emission the next one is scheduled
    LOG_DELAY_MIN..LOG_DELAY_MAX ticks later.
    """

    def __init__(self, rng: RandomSource, now: Callable[[], datetime] = datetime.now,
                 capacity: int = Limits.MAX_LOG_ENTRIES):
        self.rng = rng
        self.now = now
        self.entries: Deque[LogEntry] = deque(maxlen=capacity)
        self.emitted = 0
        self._tick_counter = 0
        self._next_log_at = 0

        for _ in range(Limits.SEED_LOG_ENTRIES):
            self._emit()

    @property
    def capacity(self) -> int:
        return self.entries.maxlen

    @property
    def next_log_at(self) -> int:
        return self._next_log_at

    def tick(self):
        self._tick_counter += 1
        if self._tick_counter >= self._next_log_at:
            self._emit()
            self._next_log_at = self._tick_counter + self.rng.randrange(
                Timing.LOG_DELAY_MIN, Timing.LOG_DELAY_MAX
            )

    def recent(self, count: int) -> List[LogEntry]:
        """The newest `count` entries, oldest first."""
        if count <= 0:
            return []
        return list(self.entries)[-count:]

    def _emit(self):
        if self.rng.chance(ALERT_CHANCE):
            level, message = LogLevel.ALERT, fake_data.dramatic_message(self.rng)
        else:
            level, message = self.rng.choice(MESSAGE_TEMPLATES)(self.rng)

        self.entries.append(LogEntry(
            timestamp=self.now().strftime('%H:%M:%S.%f')[:-3],
            level=level,
            message=message,
        ))
        self.emitted += 1
