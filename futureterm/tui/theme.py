"""Colour pairs and text attributes for the curses renderer."""

import curses


class Colors:
    """Color pairs for curses."""
    NORMAL = 0
    CYAN = 1
    MAGENTA = 2
    GREEN = 3
    ORANGE = 4
    RED = 5
    YELLOW = 6
    DIM = 7
    MATRIX_HEAD = 8
    MATRIX_BODY = 9
    MATRIX_TRAIL = 10
    BADGE = 11          # Black on orange, used by the pause badge
    HIGHLIGHT = 12      # Inverted byte in the hex dump

    # Progress bar colour names
    BY_NAME = {
        'cyan': CYAN,
        'magenta': MAGENTA,
        'green': GREEN,
        'orange': ORANGE,
        'red': RED,
        'yellow': YELLOW,
    }

    @staticmethod
    def init_colors():
        """Initialize curses color pairs."""
        curses.start_color()
        curses.use_default_colors()

        # 256-colour terminals get a real orange and grey
        rich = getattr(curses, 'COLORS', 8) >= 256
        orange = 208 if rich else curses.COLOR_YELLOW
        grey = 244 if rich else curses.COLOR_WHITE

        curses.init_pair(Colors.CYAN, curses.COLOR_CYAN, -1)
        curses.init_pair(Colors.MAGENTA, curses.COLOR_MAGENTA, -1)
        curses.init_pair(Colors.GREEN, curses.COLOR_GREEN, -1)
        curses.init_pair(Colors.ORANGE, orange, -1)
        curses.init_pair(Colors.RED, curses.COLOR_RED, -1)
        curses.init_pair(Colors.YELLOW, curses.COLOR_YELLOW, -1)
        curses.init_pair(Colors.DIM, grey, -1)
        curses.init_pair(Colors.MATRIX_HEAD, curses.COLOR_WHITE, -1)
        curses.init_pair(Colors.MATRIX_BODY, curses.COLOR_GREEN, -1)
        curses.init_pair(Colors.MATRIX_TRAIL, 22 if rich else curses.COLOR_GREEN, -1)
        curses.init_pair(Colors.BADGE, curses.COLOR_BLACK, orange)
        curses.init_pair(Colors.HIGHLIGHT, curses.COLOR_BLACK, curses.COLOR_CYAN)


class Theme:
    """
    Turns colour pair numbers into attribute masks.

    With colours disabled every pair collapses to the terminal default,
    which also lets the renderer run against a fake screen without an
    initialised curses session.
    """

    def __init__(self, colors_enabled: bool = False):
        self.colors_enabled = colors_enabled

    @classmethod
    def from_terminal(cls) -> "Theme":
        if curses.has_colors():
            Colors.init_colors()
            return cls(colors_enabled=True)
        return cls(colors_enabled=False)

    def attr(self, color: int = Colors.NORMAL, bold: bool = False,
             dim: bool = False, reverse: bool = False) -> int:
        value = curses.color_pair(color) if self.colors_enabled and color else 0
        if bold:
            value |= curses.A_BOLD
        if dim:
            value |= curses.A_DIM
        if reverse:
            value |= curses.A_REVERSE
        return value

    @staticmethod
    def gauge_color(percentage: float) -> int:
        """Green below 50 %, orange below 80 %, red above."""
        if percentage < 50.0:
            return Colors.GREEN
        if percentage < 80.0:
            return Colors.ORANGE
        return Colors.RED
