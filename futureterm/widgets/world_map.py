"""World map: fixed city nodes joined by animated connections."""

from dataclasses import dataclass
from typing import List

from ..constants import Limits
from ..randomness import RandomSource

BLINK_STEP = 0.05
NODE_TOGGLE_CHANCE = 0.002
PROGRESS_STEP = 0.02
RESET_CHANCE = 0.01             # Completed link restarts
STAY_ACTIVE_CHANCE = 0.7        # ... and stays active after restarting
REACTIVATE_CHANCE = 0.005
NEW_CONNECTION_CHANCE = 0.002


@dataclass
class MapNode:
    name: str
    lat: float
    lon: float
    active: bool
    blink_phase: float = 0.0

    @property
    def blink_on(self) -> bool:
        """First half of the blink cycle is the bright half."""
        return self.blink_phase < 0.5


@dataclass
class Connection:
    source: int
    target: int
    progress: float = 0.0
    active: bool = True

    @property
    def complete(self) -> bool:
        return self.progress >= 1.0


def default_nodes() -> List[MapNode]:
    return [
        MapNode("NYC", 40.7128, -74.0060, True, 0.0),
        MapNode("LON", 51.5074, -0.1278, True, 0.3),
        MapNode("TYO", 35.6762, 139.6503, True, 0.6),
        MapNode("SFO", 37.7749, -122.4194, False, 0.1),
        MapNode("SYD", -33.8688, 151.2093, True, 0.4),
        MapNode("MOW", 55.7558, 37.6173, False, 0.7),
        MapNode("SHA", 31.2304, 121.4737, True, 0.2),
        MapNode("BER", 52.5200, 13.4050, True, 0.5),
        MapNode("DXB", 25.2048, 55.2708, False, 0.8),
        MapNode("SIN", 1.3521, 103.8198, True, 0.9),
    ]


def default_connections() -> List[Connection]:
    return [
        Connection(0, 1, 1.0, True),    # NYC -> LON
        Connection(1, 7, 1.0, True),    # LON -> BER
        Connection(7, 5, 0.0, False),   # BER -> MOW
        Connection(2, 6, 1.0, True),    # TYO -> SHA
        Connection(6, 9, 0.5, True),    # SHA -> SIN
        Connection(9, 8, 0.0, False),   # SIN -> DXB
        Connection(3, 0, 1.0, True),    # SFO -> NYC
        Connection(4, 9, 0.7, True),    # SYD -> SIN
    ]


class WorldMap:
    """
    Self-bounding graph of nodes and directed connections.

    New links are only added below MAP_CONNECTION_SOFT_CAP and finished
    inactive links are pruned once the count exceeds
    MAP_CONNECTION_PRUNE_CAP, so the graph fluctuates but never grows
    without bound. Self loops are never created.
    """

    def __init__(self, rng: RandomSource):
        self.rng = rng
        self.nodes = default_nodes()
        self.connections = default_connections()
        self._tick_counter = 0

    def tick(self):
        self._tick_counter += 1
        rng = self.rng

        for node in self.nodes:
            node.blink_phase = (node.blink_phase + BLINK_STEP) % 1.0
            if rng.chance(NODE_TOGGLE_CHANCE):
                node.active = not node.active

        for conn in self.connections:
            if conn.active:
                conn.progress = min(1.0, conn.progress + PROGRESS_STEP)
                if conn.complete and rng.chance(RESET_CHANCE):
                    conn.progress = 0.0
                    conn.active = rng.chance(STAY_ACTIVE_CHANCE)
            elif rng.chance(REACTIVATE_CHANCE):
                conn.active = True
                conn.progress = 0.0

        if (rng.chance(NEW_CONNECTION_CHANCE)
                and len(self.connections) < Limits.MAP_CONNECTION_SOFT_CAP):
            self._add_random_connection()

        if len(self.connections) > Limits.MAP_CONNECTION_PRUNE_CAP:
            self.connections = [c for c in self.connections if c.active or not c.complete]

    def _add_random_connection(self):
        source = self.rng.randrange(0, len(self.nodes))
        target = self.rng.randrange(0, len(self.nodes))
        if source != target:
            self.connections.append(Connection(source, target, 0.0, True))
