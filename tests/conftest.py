"""
Pytest configuration and shared fixtures for Future Terminal tests.

This module provides deterministic collaborators for the controller:
a seeded randomness source, a scripted stats sampler, a frozen wall
clock and an in-memory curses screen.
"""

import os
import sys
from datetime import datetime
from typing import List, Optional

import pytest

# Add the parent directory to the path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from futureterm.app import App
from futureterm.randomness import RandomSource


FIXED_TIME = datetime(2026, 3, 14, 15, 9, 26, 535000)


# ===========================================================================
# Collaborator doubles
# ===========================================================================

class FakeStats:
    """Stats sampler that counts refreshes and serves scripted values."""

    def __init__(self, cpu: float = 12.5, used: int = 4 * 1024 ** 3,
                 total: int = 16 * 1024 ** 3, rx: int = 2048, tx: int = 512):
        self.cpu_usage = cpu
        self.memory_used = used
        self.memory_total = total
        self.network_rx = rx
        self.network_tx = tx
        self.samples = 0

    def refresh(self):
        self.samples += 1

    def memory_percentage(self) -> float:
        if self.memory_total == 0:
            return 0.0
        return self.memory_used / self.memory_total * 100.0


class ForcedRandom(RandomSource):
    """
    RandomSource whose chance() answer is fixed, so that rare branches
    can be driven on demand. Everything else is seeded randomness.
    """

    def __init__(self, chance_result: bool, seed: int = 7):
        super().__init__(seed)
        self.chance_result = chance_result

    def chance(self, probability: float) -> bool:
        return self.chance_result


class FakeScreen:
    """In-memory stand-in for a curses window."""

    def __init__(self, width: int = 120, height: int = 40):
        self.width = width
        self.height = height
        self.attr = 0
        self.writes = 0
        self.erase()

    def getmaxyx(self):
        return self.height, self.width

    def erase(self):
        self.cells: List[List[str]] = [[" "] * self.width for _ in range(self.height)]

    clear = erase

    def attron(self, attr: int):
        self.attr = attr

    def attroff(self, attr: int):
        self.attr = 0

    def addstr(self, y: int, x: int, text: str, attr: Optional[int] = None):
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise AssertionError(f"write outside screen at ({y}, {x})")
        if x + len(text) > self.width:
            raise AssertionError(f"write overflows row {y}: {text!r}")
        for i, char in enumerate(text):
            self.cells[y][x + i] = char
        self.writes += 1

    def refresh(self):
        pass

    def row(self, y: int) -> str:
        return "".join(self.cells[y])

    def text(self) -> str:
        return "\n".join(self.row(y) for y in range(self.height))


# ===========================================================================
# Fixtures
# ===========================================================================

@pytest.fixture
def rng() -> RandomSource:
    """Seeded randomness source."""
    return RandomSource(1234)


@pytest.fixture
def fake_stats() -> FakeStats:
    return FakeStats()


@pytest.fixture
def fixed_now():
    """Wall clock frozen at FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def app(rng, fake_stats, fixed_now) -> App:
    """Controller wired to deterministic collaborators at 80x24."""
    return App(stats=fake_stats, rng=rng, now=fixed_now, countdown_seconds=300,
               terminal_size=(80, 24))


@pytest.fixture
def forced_random():
    """Factory for RandomSource instances with a fixed chance() result."""
    return ForcedRandom


@pytest.fixture
def fake_screen():
    """Factory for in-memory screens: fake_screen(width, height)."""
    return FakeScreen


# ===========================================================================
# Pytest Configuration
# ===========================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests (>1s)")
