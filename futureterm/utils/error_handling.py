"""
Error Handling Utilities for Future Terminal

Only a few places can fail at runtime:
1. Terminal setup and teardown (curses)
2. Input polling inside the event producer thread
3. System stats sampling (psutil)

Widget tick logic never raises; everything there clamps or saturates.
Failures are logged once with their traceback and kept in a small
in-memory aggregator so repeats inside a window are counted instead of
flooding the log file.

USAGE:
    from futureterm.utils.error_handling import (
        handle_error,
        ErrorCategory,
        safe_execute,
    )

    with safe_execute("sampling cpu", ErrorCategory.STATS) as outcome:
        outcome.value = psutil.cpu_percent(interval=None)

    try:
        event = source.poll(timeout)
    except OSError as e:
        handle_error(e, "input poll", ErrorCategory.INPUT)
"""

import logging
import threading
import time
from collections import Counter, deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Deque, Dict, List, Optional

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """Where a failure happened."""
    TERMINAL = "terminal"       # curses initialisation / teardown
    INPUT = "input"             # event producer poll
    STATS = "stats"             # psutil sampling
    RENDER = "render"           # drawing
    CONFIG = "configuration"    # environment / CLI values
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """How bad it is for the running dashboard."""
    INFO = "info"
    WARNING = "warning"     # a gauge goes stale
    ERROR = "error"         # an operation failed, the loop keeps going
    FATAL = "fatal"         # the dashboard has to stop


_LOG_LEVELS = {
    ErrorSeverity.INFO: logging.INFO,
    ErrorSeverity.WARNING: logging.WARNING,
    ErrorSeverity.ERROR: logging.ERROR,
    ErrorSeverity.FATAL: logging.CRITICAL,
}


@dataclass
class ErrorContext:
    """One recorded failure."""
    error: BaseException
    category: ErrorCategory
    severity: ErrorSeverity
    operation: str
    details: Dict[str, Any] = field(default_factory=dict)
    thread_name: str = field(default_factory=lambda: threading.current_thread().name)
    occurred_at: datetime = field(default_factory=datetime.now)

    @property
    def key(self) -> str:
        """Repeats share a key: same category, operation and exception type."""
        return f"{self.category.value}:{self.operation}:{type(self.error).__name__}"

    def describe(self) -> str:
        lines = [
            f"{self.operation} failed [{self.category.value}/{self.severity.value}] "
            f"{type(self.error).__name__}: {self.error}",
            f"  thread: {self.thread_name}",
        ]
        lines.extend(f"  {name}: {value}" for name, value in self.details.items())
        return "\n".join(lines)

    def as_dict(self) -> Dict[str, Any]:
        return {
            'operation': self.operation,
            'category': self.category.value,
            'severity': self.severity.value,
            'error': f"{type(self.error).__name__}: {self.error}",
            'thread': self.thread_name,
            'time': self.occurred_at.isoformat(timespec='milliseconds'),
            'details': dict(self.details),
        }


class ErrorAggregator:
    """
    Keeps the newest failures and counts repeats.

    A failure whose key was already seen within `repeat_window` seconds is
    only counted. Shared between the producer thread and the main thread,
    hence the lock.
    """

    def __init__(self, capacity: int = 100, repeat_window: float = 60.0):
        self.repeat_window = repeat_window
        self._errors: Deque[ErrorContext] = deque(maxlen=capacity)
        self._repeats: Counter = Counter()
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def record(self, context: ErrorContext) -> bool:
        """Store a failure. Returns False when it only counted as a repeat."""
        now = time.monotonic()
        with self._lock:
            self._repeats[context.key] += 1
            last = self._last_seen.get(context.key)
            if last is not None and now - last < self.repeat_window:
                return False
            self._last_seen[context.key] = now
            self._errors.append(context)
            return True

    def get_error_summary(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'total_errors': len(self._errors),
                'by_category': dict(Counter(e.category.value for e in self._errors)),
                'by_severity': dict(Counter(e.severity.value for e in self._errors)),
                'repeats': dict(self._repeats),
            }

    def recent(self, count: int = 10) -> List[Dict[str, Any]]:
        with self._lock:
            return [e.as_dict() for e in list(self._errors)[-count:]]

    def clear(self):
        with self._lock:
            self._errors.clear()
            self._repeats.clear()
            self._last_seen.clear()


_aggregator = ErrorAggregator()


def get_error_aggregator() -> ErrorAggregator:
    return _aggregator


def determine_severity(error: BaseException, category: ErrorCategory) -> ErrorSeverity:
    """Severity from the category, unless the error is an interrupt."""
    if isinstance(error, (SystemExit, KeyboardInterrupt)):
        return ErrorSeverity.FATAL
    # No terminal or no input stream means nothing left to show
    if category in (ErrorCategory.TERMINAL, ErrorCategory.INPUT):
        return ErrorSeverity.FATAL
    if category == ErrorCategory.STATS:
        return ErrorSeverity.WARNING
    return ErrorSeverity.ERROR


def handle_error(
    error: BaseException,
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    severity: Optional[ErrorSeverity] = None,
    details: Optional[Dict[str, Any]] = None,
    reraise: bool = False,
) -> ErrorContext:
    """
    Log and record a failure.

    The first occurrence is logged with its traceback; repeats inside the
    aggregator's window get a one-line message.

    Args:
        error: The exception that occurred
        operation: What was being done, e.g. "sampling cpu"
        category: Where it happened
        severity: Overrides determine_severity()
        details: Extra key/value pairs for the log message
        reraise: Re-raise the exception after recording it

    Returns:
        The recorded ErrorContext
    """
    context = ErrorContext(
        error=error,
        category=category,
        severity=severity or determine_severity(error, category),
        operation=operation,
        details=details or {},
    )
    level = _LOG_LEVELS[context.severity]

    if _aggregator.record(context):
        logger.log(level, context.describe(),
                   exc_info=(type(error), error, error.__traceback__))
    else:
        logger.log(level, f"{operation} failed again: {type(error).__name__}: {error}")

    if reraise:
        raise error
    return context


class Outcome:
    """What safe_execute yields: set `value` inside the block."""

    def __init__(self, default: Any = None):
        self.value = default
        self.error: Optional[ErrorContext] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@contextmanager
def safe_execute(
    operation: str,
    category: ErrorCategory = ErrorCategory.UNKNOWN,
    default: Any = None,
    reraise: bool = False,
    details: Optional[Dict[str, Any]] = None,
):
    """
    Run a block, turning any exception into a recorded failure.

    On failure `outcome.value` is reset to `default` and `outcome.error`
    holds the ErrorContext.
    """
    outcome = Outcome(default)
    try:
        yield outcome
    except Exception as e:
        outcome.value = default
        outcome.error = handle_error(e, operation, category, details=details, reraise=reraise)


__all__ = [
    'ErrorCategory',
    'ErrorSeverity',
    'ErrorContext',
    'ErrorAggregator',
    'Outcome',
    'get_error_aggregator',
    'determine_severity',
    'handle_error',
    'safe_execute',
]
