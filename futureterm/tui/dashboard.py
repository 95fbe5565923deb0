"""
Terminal Dashboard - Future Terminal

Full-screen animated dashboard: digital rain, a scrolling source listing,
a world map of blinking nodes, live CPU/memory/network gauges, a fake
system log, a hex dump, progress bars, a clock and a countdown.

Usage:
    future-terminal
    future-terminal --countdown 600 --seed 42
    python -m futureterm --log-file /tmp/futureterm.log --verbose

Keyboard Shortcuts:
    [q] / [Esc] / [Ctrl+C]  Quit
    [Space]                 Pause / resume
    [+] / [=]  [-]          Speed up / slow down
    [r]                     Reset countdown
    [?] / [h]               Help
"""

import argparse
import locale
import logging
import os
import sys
import threading
from typing import Optional

# Handle curses import for Windows compatibility
try:
    import curses
    CURSES_AVAILABLE = True
except ImportError:
    curses = None
    CURSES_AVAILABLE = False

from .. import __version__
from ..app import App
from ..constants import COUNTDOWN_SECONDS, TICK_INTERVAL_MS
from ..events import EventHandler, EventStreamClosed, Resize
from ..logging_config import configure_from_environment, get_logging_state
from ..randomness import RandomSource
from ..utils.error_handling import ErrorCategory, handle_error

logger = logging.getLogger(__name__)


class Dashboard:
    """
    Owns the terminal session and runs the main loop:

        draw -> wait for next event -> apply it to the controller

    until the controller stops running or the event stream ends.
    """

    def __init__(self, tick_ms: int = TICK_INTERVAL_MS,
                 countdown_seconds: int = COUNTDOWN_SECONDS,
                 seed: Optional[int] = None):
        self.tick_ms = tick_ms
        self.countdown_seconds = countdown_seconds
        self.seed = seed
        self.screen = None
        self.app: Optional[App] = None
        self.renderer = None
        self.events: Optional[EventHandler] = None
        self.frames = 0
        # Held around every curses call made from either thread
        self.curses_lock = threading.Lock()

    def run(self) -> int:
        """Run the dashboard. Returns the process exit code."""
        if not CURSES_AVAILABLE:
            if sys.platform == 'win32':
                print("Error: curses library not available. Try: pip install windows-curses",
                      file=sys.stderr)
            else:
                print("Error: curses library not available.", file=sys.stderr)
            return 1

        # Escape should quit promptly instead of waiting for a sequence
        os.environ.setdefault('ESCDELAY', '25')

        try:
            locale.setlocale(locale.LC_ALL, '')
        except locale.Error as e:
            handle_error(e, "locale setup", ErrorCategory.CONFIG)
            self._report_failure(f"unsupported locale settings: {e}")
            return 1

        try:
            curses.wrapper(self._main_loop)
        except curses.error as e:
            handle_error(e, "terminal session", ErrorCategory.TERMINAL)
            self._report_failure(f"terminal setup failed: {e}")
            return 1

        logger.info(f"Dashboard exited after {self.frames} frames")
        return 0

    @staticmethod
    def _report_failure(message: str):
        log_file = get_logging_state()['log_file']
        if log_file:
            message = f"{message} (see {log_file})"
        print(f"Error: {message}", file=sys.stderr)

    def _main_loop(self, screen):
        """Main curses loop."""
        from .renderer import Renderer
        from .terminal_input import CursesInput
        from .theme import Theme

        self.screen = screen
        self._setup_terminal()

        height, width = screen.getmaxyx()
        self.app = App(
            rng=RandomSource(self.seed),
            countdown_seconds=self.countdown_seconds,
            terminal_size=(width, height),
        )
        self.renderer = Renderer(screen, Theme.from_terminal())
        self.events = EventHandler(CursesInput(lock=self.curses_lock),
                                   tick_interval=self.tick_ms / 1000.0)

        logger.info(f"Dashboard started at {width}x{height}, tick {self.tick_ms}ms")
        self.events.start()
        try:
            self._draw()
            while self.app.running:
                try:
                    event = self.events.next()
                except EventStreamClosed as e:
                    logger.warning(f"Stopping: {e}")
                    break

                self.app.handle_event(event)
                if isinstance(event, Resize):
                    self._handle_resize()

                # Skip frames while a backlog of events is waiting
                if self.events.pending() == 0:
                    self._draw()
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            self.events.close()

    def _setup_terminal(self):
        # Ctrl+C arrives as a key instead of SIGINT
        curses.raw()
        curses.noecho()
        try:
            curses.curs_set(0)  # Hide cursor
        except curses.error:
            pass
        curses.mousemask(curses.ALL_MOUSE_EVENTS | curses.REPORT_MOUSE_POSITION)

    def _handle_resize(self):
        """Handle terminal resize. The input source already updated LINES/COLS."""
        with self.curses_lock:
            self.screen.clear()

    def _draw(self):
        """Draw the dashboard."""
        with self.curses_lock:
            self.screen.erase()
            self.renderer.draw(self.app)
            self.screen.refresh()
        self.frames += 1


def run_dashboard(tick_ms: int = TICK_INTERVAL_MS,
                  countdown_seconds: int = COUNTDOWN_SECONDS,
                  seed: Optional[int] = None) -> int:
    """
    Run the dashboard.

    Args:
        tick_ms: Animation tick interval in milliseconds
        countdown_seconds: Starting value of the countdown timer
        seed: Seed for the randomness source (None for a random seed)
    """
    dashboard = Dashboard(tick_ms=tick_ms, countdown_seconds=countdown_seconds, seed=seed)
    return dashboard.run()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="future-terminal",
        description="Animated sci-fi terminal dashboard",
    )
    parser.add_argument("--tick-ms", type=int, default=TICK_INTERVAL_MS,
                        help="Animation tick interval in milliseconds (default: %(default)s)")
    parser.add_argument("--countdown", "-c", type=int, default=COUNTDOWN_SECONDS,
                        help="Countdown start in seconds (default: %(default)s)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for reproducible animation")
    parser.add_argument("--log-file", type=str, default=None,
                        help="Write logs to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.tick_ms < 1:
        parser.error("--tick-ms must be at least 1")
    if args.countdown < 0:
        parser.error("--countdown must not be negative")

    # The screen belongs to curses; logs only go to the file
    configure_from_environment(console=False, verbose=args.verbose, log_file=args.log_file)

    return run_dashboard(tick_ms=args.tick_ms, countdown_seconds=args.countdown, seed=args.seed)


if __name__ == "__main__":
    sys.exit(main())
