"""
Tests for the progress bars, the source scroller and the stats-fed gauges.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from futureterm.constants import Limits, Timing
from futureterm.widgets import CpuGauge, MemoryGauge, NetworkMonitor, ProgressBars, SourceCode
from futureterm.widgets.fake_data import CODE_SNIPPETS, OPERATIONS
from futureterm.widgets.progress_bars import DEFAULT_BARS, SPEED_RANGE


def run(widget, ticks: int):
    for _ in range(ticks):
        widget.tick()


# ===========================================================================
# Progress bars
# ===========================================================================

class TestProgressBars:

    def test_initial_bars(self, rng):
        bars = ProgressBars(rng)
        assert [(b.label, b.color) for b in bars.bars] == DEFAULT_BARS
        for bar in bars.bars:
            assert 0.0 <= bar.progress < 0.5
            assert SPEED_RANGE[0] <= bar.speed < SPEED_RANGE[1]
            assert not bar.completed

    def test_progress_advances_by_speed(self, rng):
        bars = ProgressBars(rng)
        before = [b.progress + b.speed for b in bars.bars]
        bars.tick()
        assert [b.progress for b in bars.bars] == before

    def test_completion_hold_and_restart(self, rng):
        bars = ProgressBars(rng)
        bar = bars.bars[0]
        bar.progress = 0.995
        bar.speed = 0.01

        bars.tick()
        assert bar.progress == 1.0
        assert bar.completed

        run(bars, Timing.PROGRESS_COMPLETE_HOLD - 1)
        assert bar.progress == 1.0
        assert bar.completed

        bars.tick()
        assert bar.progress == 0.0
        assert not bar.completed
        assert bar.label in OPERATIONS
        assert SPEED_RANGE[0] <= bar.speed < SPEED_RANGE[1]

    def test_progress_stays_in_range(self, rng):
        bars = ProgressBars(rng)
        for _ in range(5000):
            bars.tick()
            for bar in bars.bars:
                assert 0.0 <= bar.progress <= 1.0


# ===========================================================================
# Source scroller
# ===========================================================================

class TestSourceCode:

    def test_defaults_to_builtin_snippets(self):
        source = SourceCode()
        assert len(source.snippets) == len(CODE_SNIPPETS)
        assert source.lines == CODE_SNIPPETS[0].splitlines()

    def test_scrolls_every_period(self):
        source = SourceCode(["a\nb\nc", "x\ny"])
        run(source, Timing.SOURCE_SCROLL_PERIOD - 1)
        assert source.scroll_offset == 0
        source.tick()
        assert source.scroll_offset == 1

    def test_wraps_to_next_snippet(self):
        source = SourceCode(["a\nb\nc", "x\ny"])
        # Wraps once the offset passes line count + 5
        run(source, Timing.SOURCE_SCROLL_PERIOD * 8)
        assert source.scroll_offset == 8
        assert source.current_snippet == 0
        run(source, Timing.SOURCE_SCROLL_PERIOD)
        assert source.scroll_offset == 0
        assert source.current_snippet == 1

    def test_last_snippet_wraps_to_first(self):
        source = SourceCode(["a\nb\nc", "x\ny"])
        run(source, Timing.SOURCE_SCROLL_PERIOD * 9)
        run(source, Timing.SOURCE_SCROLL_PERIOD * 8)
        assert source.current_snippet == 0
        assert source.scroll_offset == 0

    def test_visible_lines_are_numbered(self):
        source = SourceCode(["a\nb\nc"])
        assert source.visible(2) == [(1, "a"), (2, "b")]
        run(source, Timing.SOURCE_SCROLL_PERIOD * 2)
        assert source.visible(5) == [(3, "c")]
        run(source, Timing.SOURCE_SCROLL_PERIOD * 2)
        assert source.visible(5) == []


# ===========================================================================
# Gauges
# ===========================================================================

class TestGauges:

    def test_histories_prefilled(self):
        assert CpuGauge().history.values() == [0] * Limits.CPU_HISTORY
        assert MemoryGauge().history.values() == [0] * Limits.MEMORY_HISTORY
        network = NetworkMonitor()
        assert network.rx_history.values() == [0] * Limits.NETWORK_HISTORY
        assert network.tx_history.values() == [0] * Limits.NETWORK_HISTORY

    def test_cpu_update(self, fake_stats):
        cpu = CpuGauge()
        cpu.update(fake_stats)
        assert cpu.current == 12.5
        assert cpu.history.latest() == 12
        assert len(cpu.history) == Limits.CPU_HISTORY

    def test_memory_update(self, fake_stats):
        memory = MemoryGauge()
        memory.update(fake_stats)
        assert memory.used == fake_stats.memory_used
        assert memory.total == fake_stats.memory_total
        assert memory.percentage == 25.0
        assert memory.history.latest() == 25

    def test_network_update(self, fake_stats):
        network = NetworkMonitor()
        for _ in range(Limits.NETWORK_HISTORY + 5):
            network.update(fake_stats)
        assert network.rx_rate == 2048
        assert network.tx_rate == 512
        assert network.rx_history.values() == [2048] * Limits.NETWORK_HISTORY
        assert len(network.tx_history) == Limits.NETWORK_HISTORY
