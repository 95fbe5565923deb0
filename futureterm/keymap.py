"""
Keyboard bindings.

Raw curses key codes are translated into KeyPress events by the input
thread; the controller then maps KeyPress events to Commands here.

Bindings (case-sensitive):
    q / Escape / Ctrl+C   Quit
    Space                 Pause / resume
    + / =                 Speed up
    -                     Slow down
    r                     Reset countdown
    ? / h                 Help overlay
"""

from enum import Enum
from typing import Dict, Optional

from .events import KeyPress


class Command(Enum):
    """Actions the controller knows how to perform."""
    QUIT = "quit"
    TOGGLE_PAUSE = "toggle_pause"
    INCREASE_SPEED = "increase_speed"
    DECREASE_SPEED = "decrease_speed"
    RESET_COUNTDOWN = "reset_countdown"
    TOGGLE_HELP = "toggle_help"


KEY_BINDINGS: Dict[str, Command] = {
    'q': Command.QUIT,
    'escape': Command.QUIT,
    ' ': Command.TOGGLE_PAUSE,
    '+': Command.INCREASE_SPEED,
    '=': Command.INCREASE_SPEED,
    '-': Command.DECREASE_SPEED,
    'r': Command.RESET_COUNTDOWN,
    '?': Command.TOGGLE_HELP,
    'h': Command.TOGGLE_HELP,
}

CTRL_BINDINGS: Dict[str, Command] = {
    'c': Command.QUIT,
}

# Help overlay rows: (keys, description)
HELP_LINES = [
    ("q / Esc", "Quit"),
    ("Space", "Pause / resume animation"),
    ("+ / =", "Increase animation speed"),
    ("-", "Decrease animation speed"),
    ("r", "Reset countdown timer"),
    ("? / h", "Show this help"),
]


def command_for_key(key: KeyPress) -> Optional[Command]:
    """Look up the command bound to a key; None for unbound keys."""
    if key.ctrl:
        return CTRL_BINDINGS.get(key.key)
    return KEY_BINDINGS.get(key.key)


# Terminal codes that are not printable characters
_CONTROL_NAMES = {
    9: 'tab',
    10: 'enter',
    13: 'enter',
    27: 'escape',
    127: 'backspace',
}


def translate_key(code: int, special_names: Optional[Dict[int, str]] = None) -> Optional[KeyPress]:
    """
    Convert a curses getch() code into a KeyPress.

    Args:
        code: Value returned by getch()
        special_names: Mapping of curses KEY_* codes to names

    Returns:
        KeyPress, or None for codes with no sensible key (e.g. -1)
    """
    if code < 0:
        return None
    if code in _CONTROL_NAMES:
        return KeyPress(_CONTROL_NAMES[code])
    if 1 <= code <= 26:
        # Ctrl+A .. Ctrl+Z arrive as 1..26 in raw mode
        return KeyPress(chr(ord('a') + code - 1), ctrl=True)
    if 32 <= code < 256 and code != 127:
        return KeyPress(chr(code))
    if special_names and code in special_names:
        return KeyPress(special_names[code])
    return KeyPress(f"key_{code}")
