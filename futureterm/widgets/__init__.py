"""
Widget state machines.

Each widget owns its animation state and a private tick counter, and is
advanced by exactly one tick() call per frame. No widget reads another
widget's state. Drawing lives in futureterm.tui.renderer.
"""

from .matrix_rain import MatrixRain, Drop
from .fake_logs import FakeLogs, LogEntry, LogLevel
from .source_code import SourceCode
from .hex_dump import HexDump, HexLine
from .world_map import WorldMap, MapNode, Connection
from .countdown import Countdown, CountdownStatus
from .clock import Clock
from .progress_bars import ProgressBars, ProgressBar
from .gauges import CpuGauge, MemoryGauge, NetworkMonitor

__all__ = [
    'MatrixRain', 'Drop',
    'FakeLogs', 'LogEntry', 'LogLevel',
    'SourceCode',
    'HexDump', 'HexLine',
    'WorldMap', 'MapNode', 'Connection',
    'Countdown', 'CountdownStatus',
    'Clock',
    'ProgressBars', 'ProgressBar',
    'CpuGauge', 'MemoryGauge', 'NetworkMonitor',
]
