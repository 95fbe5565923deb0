"""CPU, memory and network widgets fed by the once-per-second stats sample."""

from ..constants import Limits
from ..history import BoundedHistory


class CpuGauge:
    def __init__(self, capacity: int = Limits.CPU_HISTORY):
        self.current = 0.0
        self.history: BoundedHistory[int] = BoundedHistory(capacity, [0] * capacity)

    def update(self, stats):
        self.current = float(stats.cpu_usage)
        self.history.push(int(self.current))


class MemoryGauge:
    def __init__(self, capacity: int = Limits.MEMORY_HISTORY):
        self.used = 0
        self.total = 0
        self.percentage = 0.0
        self.history: BoundedHistory[int] = BoundedHistory(capacity, [0] * capacity)

    def update(self, stats):
        self.used = stats.memory_used
        self.total = stats.memory_total
        self.percentage = stats.memory_percentage()
        self.history.push(int(self.percentage))


class NetworkMonitor:
    def __init__(self, capacity: int = Limits.NETWORK_HISTORY):
        self.rx_rate = 0
        self.tx_rate = 0
        self.rx_history: BoundedHistory[int] = BoundedHistory(capacity, [0] * capacity)
        self.tx_history: BoundedHistory[int] = BoundedHistory(capacity, [0] * capacity)

    def update(self, stats):
        self.rx_rate = stats.network_rx
        self.tx_rate = stats.network_tx
        self.rx_history.push(self.rx_rate)
        self.tx_history.push(self.tx_rate)
