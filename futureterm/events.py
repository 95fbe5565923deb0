"""
Tick Clock / Input Multiplexer.

A producer thread merges a fixed-interval tick with keyboard, mouse and
resize input into one FIFO queue consumed by the main loop:

    last_tick = now
    loop:
        timeout = max(0, interval - (now - last_tick))
        event = source.poll(timeout)          # bounded wait
        if event: enqueue(event)
        if now - last_tick >= interval:
            enqueue(Tick); last_tick = now

Because the tick check runs after every poll, however many input events
arrive, a Tick is still enqueued once per interval.

The producer stops silently once the consumer calls close(). If the input
source raises, the failure is logged, an end-of-stream marker is queued
and the consumer's next() raises EventStreamClosed.
"""

import logging
import queue
import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .constants import TICK_INTERVAL_MS
from .logging_config import log_verbose
from .utils.error_handling import ErrorCategory, handle_error

logger = logging.getLogger(__name__)


# =============================================================================
# EVENT TYPES
# =============================================================================

@dataclass(frozen=True)
class Tick:
    """One animation step."""


@dataclass(frozen=True)
class KeyPress:
    """
    A key, already translated from the terminal's key code.

    `key` is the literal character for printable keys and a lower-case
    name ("escape", "enter", "up", ...) otherwise. Control chords carry
    the letter with ctrl=True.
    """
    key: str
    ctrl: bool = False


@dataclass(frozen=True)
class Mouse:
    """Mouse report; captured but ignored by the controller."""
    x: int
    y: int
    button: int = 0


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


Event = Union[Tick, KeyPress, Mouse, Resize]


class EventStreamClosed(Exception):
    """The producer is gone; the main loop should stop."""


class InputSource(ABC):
    """Where the producer reads terminal input from."""

    @abstractmethod
    def poll(self, timeout: float) -> Optional[Event]:
        """
        Wait up to `timeout` seconds for one input event.

        Returns None when nothing arrived. Any exception is treated as a
        fatal input failure.
        """


_END_OF_STREAM = object()


# =============================================================================
# EVENT HANDLER
# =============================================================================

class EventHandler:
    """
    Runs the producer loop on a daemon thread and hands events to the
    single consumer in arrival order.

    Args:
        source: Input source polled by the producer
        tick_interval: Seconds between Tick events
        clock: Monotonic time function (seconds)
    """

    def __init__(
        self,
        source: InputSource,
        tick_interval: float = TICK_INTERVAL_MS / 1000.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {tick_interval}")
        self.source = source
        self.tick_interval = tick_interval
        self.clock = clock
        self.failure: Optional[BaseException] = None
        self.ticks_sent = 0

        self._queue: "queue.Queue" = queue.Queue()
        self._closed = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_tick = clock()

    # ------------------------------------------------------------------
    # Producer side
    # ------------------------------------------------------------------

    def start(self) -> "EventHandler":
        if self._thread is not None:
            return self
        self._last_tick = self.clock()
        self._thread = threading.Thread(
            target=self._run, name="futureterm-events", daemon=True
        )
        self._thread.start()
        log_verbose(logger, "Event producer started", tick_interval=self.tick_interval)
        return self

    def _run(self):
        while self.pump_once():
            pass
        log_verbose(logger, "Event producer stopped", ticks=self.ticks_sent)

    def pump_once(self) -> bool:
        """
        Run one iteration of the producer loop.

        Returns False when the producer should stop, either because the
        consumer closed the stream or because the input source failed.
        """
        if self._closed.is_set():
            return False

        elapsed = self.clock() - self._last_tick
        timeout = max(0.0, self.tick_interval - elapsed)

        try:
            event = self.source.poll(timeout)
        except Exception as e:
            self.failure = e
            handle_error(e, "input poll", ErrorCategory.INPUT)
            self._queue.put(_END_OF_STREAM)
            return False

        if event is not None and not self._send(event):
            return False

        now = self.clock()
        if now - self._last_tick >= self.tick_interval:
            if not self._send(Tick()):
                return False
            self.ticks_sent += 1
            self._last_tick = now

        return True

    def _send(self, event: Event) -> bool:
        if self._closed.is_set():
            return False
        self._queue.put(event)
        return True

    # ------------------------------------------------------------------
    # Consumer side
    # ------------------------------------------------------------------

    def next(self, timeout: Optional[float] = None) -> Event:
        """
        Block until the next event.

        Raises:
            EventStreamClosed: the producer has terminated
            queue.Empty: `timeout` elapsed with nothing queued
        """
        item = self._queue.get(timeout=timeout)
        if item is _END_OF_STREAM:
            self._queue.put(_END_OF_STREAM)
            raise EventStreamClosed(f"input stream closed: {self.failure}")
        return item

    def pending(self) -> int:
        return self._queue.qsize()

    def close(self, join_timeout: float = 1.0):
        """Signal the producer to stop and wait briefly for it."""
        self._closed.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join(join_timeout)

    @property
    def alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> "EventHandler":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
