"""
Application Controller.

Owns the application state and every widget, advances the widgets on each
Tick and applies keyboard commands. Nothing here touches the terminal; the
renderer reads the controller's state once per frame.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from .constants import COUNTDOWN_SECONDS, Layout, Speed, Timing
from .events import Event, KeyPress, Mouse, Resize, Tick
from .keymap import Command, command_for_key
from .randomness import RandomSource
from .widgets import (
    Clock,
    Countdown,
    CpuGauge,
    FakeLogs,
    HexDump,
    MatrixRain,
    MemoryGauge,
    NetworkMonitor,
    ProgressBars,
    SourceCode,
    WorldMap,
)

logger = logging.getLogger(__name__)


@dataclass
class ApplicationState:
    """Top-level flags. Only the controller mutates these."""
    running: bool = True
    paused: bool = False
    tick_count: int = 0
    terminal_size: Tuple[int, int] = (Layout.DEFAULT_WIDTH, Layout.DEFAULT_HEIGHT)
    animation_speed: float = Speed.DEFAULT
    show_help: bool = False


class App:
    """
    Dashboard controller.

    Args:
        stats: Stats sampler with refresh(), memory_percentage() and the
            cpu_usage / memory_used / memory_total / network_rx / network_tx
            fields. Defaults to a psutil-backed SystemStats.
        rng: Randomness source shared by all widgets
        now: Wall clock used by the log feed and the clock widget
        countdown_seconds: Starting value of the countdown
        terminal_size: Initial (width, height)
    """

    def __init__(
        self,
        stats=None,
        rng: Optional[RandomSource] = None,
        now: Callable[[], datetime] = datetime.now,
        countdown_seconds: int = COUNTDOWN_SECONDS,
        terminal_size: Tuple[int, int] = (Layout.DEFAULT_WIDTH, Layout.DEFAULT_HEIGHT),
    ):
        if stats is None:
            from .stats import SystemStats
            stats = SystemStats()

        self.state = ApplicationState(terminal_size=tuple(terminal_size))
        self.rng = rng if rng is not None else RandomSource()
        self.stats = stats

        width, height = self.state.terminal_size

        # Fed by the once-per-second stats sample
        self.cpu = CpuGauge()
        self.memory = MemoryGauge()
        self.network = NetworkMonitor()

        # Advanced every tick
        self.rain = MatrixRain(self.rng, width, height)
        self.logs = FakeLogs(self.rng, now=now)
        self.source = SourceCode()
        self.world_map = WorldMap(self.rng)
        self.countdown = Countdown(countdown_seconds)
        self.clock = Clock(now=now)
        self.hex_dump = HexDump(self.rng)
        self.progress = ProgressBars(self.rng)

    @property
    def animated_widgets(self) -> List:
        """Widgets advanced on every tick, in update order."""
        return [
            self.rain,
            self.logs,
            self.source,
            self.world_map,
            self.countdown,
            self.clock,
            self.hex_dump,
            self.progress,
        ]

    @property
    def running(self) -> bool:
        return self.state.running

    # =========================================================================
    # Event handling
    # =========================================================================

    def handle_event(self, event: Event):
        if isinstance(event, Tick):
            self.tick()
        elif isinstance(event, KeyPress):
            self.handle_key(event)
        elif isinstance(event, Resize):
            self.handle_resize(event.width, event.height)
        elif isinstance(event, Mouse):
            pass

    def tick(self):
        """Advance the animation by one step. Does nothing while paused."""
        if self.state.paused:
            return

        self.state.tick_count += 1

        if self.state.tick_count % Timing.TICKS_PER_SECOND == 0:
            self.stats.refresh()
            self._push_stats()

        for widget in self.animated_widgets:
            widget.tick()

    def handle_key(self, key: KeyPress):
        # An open help overlay swallows the next key
        if self.state.show_help:
            self.state.show_help = False
            return

        command = command_for_key(key)
        if command is not None:
            self.handle_command(command)

    def handle_command(self, command: Command):
        state = self.state

        if command is Command.QUIT:
            logger.info(f"Quit requested after {state.tick_count} ticks")
            state.running = False
        elif command is Command.TOGGLE_PAUSE:
            state.paused = not state.paused
            logger.debug(f"Animation {'paused' if state.paused else 'resumed'}")
        elif command is Command.INCREASE_SPEED:
            state.animation_speed = min(Speed.MAX, state.animation_speed + Speed.STEP)
        elif command is Command.DECREASE_SPEED:
            state.animation_speed = max(Speed.MIN, state.animation_speed - Speed.STEP)
        elif command is Command.RESET_COUNTDOWN:
            self.countdown.reset()
        elif command is Command.TOGGLE_HELP:
            state.show_help = not state.show_help

    def handle_resize(self, width: int, height: int):
        """Record the new size and rebuild the rain for the new width."""
        width, height = max(0, width), max(0, height)
        self.state.terminal_size = (width, height)
        self.rain.resize(width, height)
        logger.debug(f"Terminal resized to {width}x{height}")

    def _push_stats(self):
        self.cpu.update(self.stats)
        self.memory.update(self.stats)
        self.network.update(self.stats)
