"""Curses-backed input source for the event producer thread."""

import curses
import threading
import time
from typing import Callable, Dict, Optional

from ..constants import Timing
from ..events import Event, InputSource, Mouse, Resize
from ..keymap import translate_key


def special_key_names() -> Dict[int, str]:
    """Names for the curses KEY_* codes the dashboard may see."""
    names = {
        'KEY_UP': 'up',
        'KEY_DOWN': 'down',
        'KEY_LEFT': 'left',
        'KEY_RIGHT': 'right',
        'KEY_HOME': 'home',
        'KEY_END': 'end',
        'KEY_NPAGE': 'pagedown',
        'KEY_PPAGE': 'pageup',
        'KEY_BACKSPACE': 'backspace',
        'KEY_DC': 'delete',
        'KEY_IC': 'insert',
        'KEY_ENTER': 'enter',
    }
    codes = {getattr(curses, attr): name for attr, name in names.items() if hasattr(curses, attr)}
    for n in range(1, 13):
        codes[curses.KEY_F0 + n] = f"f{n}"
    return codes


class CursesInput(InputSource):
    """
    Reads keys from a dedicated 1x1 window.

    ncurses is not thread-safe: getch() may run resizeterm() or a refresh
    on its own. Every curses call made here happens under `lock`, which the
    painting thread holds while it draws. getch() is only ever called
    non-blocking so the lock is never held while waiting for a key.
    """

    def __init__(self, window=None, lock: Optional[threading.Lock] = None,
                 clock: Callable[[], float] = time.monotonic,
                 sleep: Callable[[float], None] = time.sleep):
        self.lock = lock if lock is not None else threading.Lock()
        self.clock = clock
        self.sleep = sleep
        self.slice = Timing.INPUT_POLL_SLICE_MS / 1000.0
        with self.lock:
            if window is None:
                window = curses.newwin(1, 1, 0, 0)
                window.keypad(True)
                # Clear the "touched" flag so getch() does not repaint the cell
                window.noutrefresh()
            window.timeout(0)
        self.window = window
        self.special_names = special_key_names()

    def poll(self, timeout: float) -> Optional[Event]:
        deadline = self.clock() + max(0.0, timeout)
        while True:
            with self.lock:
                event = self._read()
            if event is not None:
                return event
            remaining = deadline - self.clock()
            if remaining <= 0:
                return None
            self.sleep(min(self.slice, remaining))

    def _read(self) -> Optional[Event]:
        """One non-blocking read. Caller holds the lock."""
        code = self.window.getch()

        if code == -1:
            return None
        if code == curses.KEY_RESIZE:
            curses.update_lines_cols()
            return Resize(curses.COLS, curses.LINES)
        if code == curses.KEY_MOUSE:
            try:
                _, x, y, _, button = curses.getmouse()
            except curses.error:
                return None
            return Mouse(x, y, button)
        return translate_key(code, self.special_names)
