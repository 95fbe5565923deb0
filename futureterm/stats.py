"""
Real system statistics sampled with psutil.

The controller calls refresh() at most once per second of unpaused
animation time. Network figures are byte deltas since the previous
refresh, so the very first sample reports zero traffic.
"""

import logging

import psutil

from .utils.error_handling import ErrorCategory, safe_execute

logger = logging.getLogger(__name__)


class SystemStats:
    """Snapshot of CPU, memory and network counters."""

    def __init__(self):
        self.cpu_usage = 0.0
        self.memory_used = 0
        self.memory_total = 0
        self.network_rx = 0
        self.network_tx = 0
        self.samples = 0
        self._last_rx = None
        self._last_tx = None

        # Primes psutil's CPU baseline; the first non-blocking call reads 0.0
        with safe_execute("priming cpu counter", ErrorCategory.STATS):
            psutil.cpu_percent(interval=None)
        self.refresh()

    def refresh(self):
        """Re-sample every counter. A failing counter keeps its last value."""
        with safe_execute("sampling cpu", ErrorCategory.STATS, default=self.cpu_usage) as cpu:
            cpu.value = float(psutil.cpu_percent(interval=None))
        self.cpu_usage = cpu.value

        memory_now = (self.memory_total, self.memory_used)
        with safe_execute("sampling memory", ErrorCategory.STATS, default=memory_now) as memory:
            sample = psutil.virtual_memory()
            memory.value = (int(sample.total), max(0, int(sample.total) - int(sample.available)))
        self.memory_total, self.memory_used = memory.value

        with safe_execute("sampling network", ErrorCategory.STATS):
            counters = psutil.net_io_counters()
            if counters is not None:
                total_rx = int(counters.bytes_recv)
                total_tx = int(counters.bytes_sent)
                if self._last_rx is None:
                    self.network_rx = self.network_tx = 0
                else:
                    # Counters can wrap or reset when interfaces go away
                    self.network_rx = max(0, total_rx - self._last_rx)
                    self.network_tx = max(0, total_tx - self._last_tx)
                self._last_rx = total_rx
                self._last_tx = total_tx

        self.samples += 1

    def memory_percentage(self) -> float:
        if self.memory_total == 0:
            return 0.0
        return self.memory_used / self.memory_total * 100.0


def format_bytes(n: int) -> str:
    """Format bytes as human-readable string."""
    kb = 1024
    mb = kb * 1024
    gb = mb * 1024
    if n >= gb:
        return f"{n / gb:.1f} GB"
    if n >= mb:
        return f"{n / mb:.1f} MB"
    if n >= kb:
        return f"{n / kb:.1f} KB"
    return f"{n} B"


def format_bytes_per_sec(n: int) -> str:
    return f"{format_bytes(n)}/s"
