"""
Tests for the tick clock / input multiplexer.

Most tests drive the producer loop one step at a time with a fake
monotonic clock; a couple start the real producer thread.
"""

import os
import queue
import sys
import time

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from futureterm.events import (
    EventHandler,
    EventStreamClosed,
    InputSource,
    KeyPress,
    Resize,
    Tick,
)
from futureterm.utils.error_handling import get_error_aggregator

# Binary-exact values keep the fake clock free of rounding drift
INTERVAL = 0.25
STEP = 0.0625


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


class ScriptedSource(InputSource):
    """
    Returns scripted events. Each poll advances the fake clock by
    `elapsed`, or by the full timeout when `elapsed` is None.
    """

    def __init__(self, clock, script=None, elapsed=None):
        self.clock = clock
        self.script = list(script or [])
        self.elapsed = elapsed
        self.timeouts = []

    def poll(self, timeout):
        self.timeouts.append(timeout)
        self.clock.now += timeout if self.elapsed is None else self.elapsed
        if not self.script:
            return None
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def drain(handler):
    events = []
    while True:
        try:
            events.append(handler.next(timeout=0))
        except queue.Empty:
            return events


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def clear_errors():
    get_error_aggregator().clear()
    yield
    get_error_aggregator().clear()


# ===========================================================================
# Single-step producer
# ===========================================================================

class TestTickGeneration:

    def test_rejects_non_positive_interval(self, clock):
        with pytest.raises(ValueError):
            EventHandler(ScriptedSource(clock), tick_interval=0, clock=clock)

    def test_idle_poll_yields_tick(self, clock):
        source = ScriptedSource(clock)
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        assert handler.pump_once() is True
        assert drain(handler) == [Tick()]
        assert source.timeouts == [INTERVAL]

    def test_poll_timeout_shrinks_with_elapsed_time(self, clock):
        source = ScriptedSource(clock, elapsed=STEP)
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        for _ in range(4):
            handler.pump_once()
        assert source.timeouts == [0.25, 0.1875, 0.125, 0.0625]

    def test_timeout_never_negative(self, clock):
        source = ScriptedSource(clock, elapsed=0.0)
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        clock.now = 10.0
        handler.pump_once()
        assert source.timeouts == [0.0]
        assert drain(handler) == [Tick()]

    def test_input_does_not_starve_ticks(self, clock):
        """A steady key stream still gets one Tick per interval."""
        keys = [KeyPress('x') for _ in range(100)]
        source = ScriptedSource(clock, script=keys, elapsed=STEP)
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        for _ in range(100):
            handler.pump_once()

        events = drain(handler)
        assert events.count(Tick()) == 25
        assert events.count(KeyPress('x')) == 100
        assert events[:5] == [KeyPress('x')] * 4 + [Tick()]
        assert handler.ticks_sent == 25

    def test_events_delivered_in_arrival_order(self, clock):
        script = [KeyPress('a'), Resize(100, 40), KeyPress('b')]
        source = ScriptedSource(clock, script=script, elapsed=0.0)
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        for _ in range(3):
            handler.pump_once()
        clock.now = INTERVAL
        handler.pump_once()
        assert drain(handler) == script + [Tick()]


class TestShutdown:

    def test_close_stops_producer_silently(self, clock):
        source = ScriptedSource(clock, script=[KeyPress('a')])
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        handler.close()
        assert handler.pump_once() is False
        assert drain(handler) == []
        assert source.timeouts == []

    def test_poll_failure_ends_stream(self, clock):
        source = ScriptedSource(clock, script=[KeyPress('a'), OSError("tty gone")], elapsed=0.0)
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        assert handler.pump_once() is True
        assert handler.pump_once() is False

        assert handler.next(timeout=0) == KeyPress('a')
        with pytest.raises(EventStreamClosed):
            handler.next(timeout=0)
        # Stays closed for any further reads
        with pytest.raises(EventStreamClosed):
            handler.next(timeout=0)
        assert isinstance(handler.failure, OSError)

    def test_poll_failure_is_logged(self, clock):
        source = ScriptedSource(clock, script=[RuntimeError("boom")])
        handler = EventHandler(source, tick_interval=INTERVAL, clock=clock)
        handler.pump_once()
        summary = get_error_aggregator().get_error_summary()
        assert summary['by_category'].get('input') == 1
        assert summary['by_severity'].get('fatal') == 1


# ===========================================================================
# Threaded producer
# ===========================================================================

class SleepySource(InputSource):
    def poll(self, timeout):
        time.sleep(timeout)
        return None


class BrokenSource(InputSource):
    def poll(self, timeout):
        raise OSError("read failed")


class TestProducerThread:

    def test_ticks_arrive_from_thread(self):
        with EventHandler(SleepySource(), tick_interval=0.005) as handler:
            assert handler.alive
            assert handler.next(timeout=2.0) == Tick()
            assert handler.next(timeout=2.0) == Tick()
        assert not handler.alive

    def test_start_is_idempotent(self):
        handler = EventHandler(SleepySource(), tick_interval=0.005)
        try:
            handler.start()
            thread = handler._thread
            handler.start()
            assert handler._thread is thread
        finally:
            handler.close()

    def test_failure_reaches_consumer(self):
        handler = EventHandler(BrokenSource(), tick_interval=0.005).start()
        try:
            with pytest.raises(EventStreamClosed):
                handler.next(timeout=2.0)
        finally:
            handler.close()
