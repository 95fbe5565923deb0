"""
Render Dispatcher - draws the controller's state onto a curses window.

Layout (minimum 80x24):

    +-----------+-----------------------+-----------+
    |   CLOCK   |  FUTURE TERMINAL      | COUNTDOWN |   header, 5 rows
    +-----------+-----------------+-----+-----------+
    | MATRIX    |                 | CPU             |
    |-----------|   GLOBAL        | MEMORY          |   body
    | SOURCE    |   NETWORK       | NETWORK         |
    |           |                 | LOGS            |
    +-----------+-------+---------+-----------------+
    | HEX DUMP                  | OPERATIONS        |   footer, 10 rows
    +---------------------------+-------------------+

The renderer only reads state. Every write goes through _addstr, which
clips to the window and swallows curses.error (raised when the bottom
right cell is written).
"""

import curses
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..constants import Layout
from ..keymap import HELP_LINES
from ..stats import format_bytes, format_bytes_per_sec
from ..widgets import CountdownStatus, LogLevel
from .syntax import tokenize
from .theme import Colors, Theme

logger = logging.getLogger(__name__)

ROUNDED = ('╭', '╮', '╰', '╯', '─', '│')
DOUBLE = ('╔', '╗', '╚', '╝', '═', '║')

SPARK_CHARS = " ▁▂▃▄▅▆▇█"
BAR_FILL = '█'
BAR_EMPTY = '░'

LOG_COLORS = {
    LogLevel.INFO: Colors.CYAN,
    LogLevel.WARN: Colors.YELLOW,
    LogLevel.ERROR: Colors.RED,
    LogLevel.SUCCESS: Colors.GREEN,
    LogLevel.DEBUG: Colors.DIM,
    LogLevel.ALERT: Colors.RED,
}

SYNTAX_COLORS = {
    'keyword': Colors.MAGENTA,
    'string': Colors.ORANGE,
    'comment': Colors.DIM,
    'function': Colors.CYAN,
    'number': Colors.YELLOW,
    'type': Colors.GREEN,
    'plain': Colors.NORMAL,
}


@dataclass
class Rect:
    x: int
    y: int
    width: int
    height: int

    def inner(self) -> "Rect":
        return Rect(self.x + 1, self.y + 1, max(0, self.width - 2), max(0, self.height - 2))


def split_columns(area: Rect, percentages: Sequence[int]) -> List[Rect]:
    """Split horizontally by percentage; the last column takes the remainder."""
    rects = []
    x = area.x
    for i, pct in enumerate(percentages):
        if i == len(percentages) - 1:
            width = area.x + area.width - x
        else:
            width = area.width * pct // 100
        rects.append(Rect(x, area.y, max(0, width), area.height))
        x += width
    return rects


def stack_rows(area: Rect, heights: Sequence[Optional[int]]) -> List[Rect]:
    """
    Split vertically into fixed heights, clipped to what is left.
    A height of None takes whatever remains.
    """
    rects = []
    y = area.y
    bottom = area.y + area.height
    for height in heights:
        remaining = max(0, bottom - y)
        size = remaining if height is None else min(height, remaining)
        rects.append(Rect(area.x, y, area.width, size))
        y += size
    return rects


def sparkline(values: Sequence[int], width: int, ceiling: Optional[float] = None) -> str:
    """Block-character sparkline of the newest `width` values."""
    if width <= 0:
        return ""
    data = list(values)[-width:]
    top = ceiling if ceiling is not None else max(data, default=0)
    if top <= 0:
        return SPARK_CHARS[0] * len(data)
    levels = len(SPARK_CHARS) - 1
    return "".join(
        SPARK_CHARS[max(0, min(levels, round(v / top * levels)))] for v in data
    )


def bar(ratio: float, width: int) -> str:
    if width <= 0:
        return ""
    ratio = max(0.0, min(1.0, ratio))
    filled = int(round(ratio * width))
    return BAR_FILL * filled + BAR_EMPTY * (width - filled)


class Renderer:
    """Draws one frame of the dashboard per draw() call."""

    def __init__(self, screen, theme: Optional[Theme] = None):
        self.screen = screen
        self.theme = theme or Theme()
        self.height = 0
        self.width = 0

    def draw(self, app):
        self.height, self.width = self.screen.getmaxyx()

        if self.width < Layout.MIN_WIDTH or self.height < Layout.MIN_HEIGHT:
            self._draw_size_warning()
            return

        header = Rect(0, 0, self.width, Layout.HEADER_HEIGHT)
        footer = Rect(0, self.height - Layout.FOOTER_HEIGHT, self.width, Layout.FOOTER_HEIGHT)
        body = Rect(0, header.height, self.width,
                    self.height - Layout.HEADER_HEIGHT - Layout.FOOTER_HEIGHT)

        self._draw_header(app, header)
        self._draw_body(app, body)
        self._draw_footer(app, footer)

        if app.state.show_help:
            self._draw_help()

        if app.state.paused:
            self._draw_pause_badge()

    # =========================================================================
    # Regions
    # =========================================================================

    def _draw_header(self, app, area: Rect):
        clock_area, title_area, countdown_area = split_columns(area, (25, 50, 25))
        self._draw_clock(app.clock, clock_area)
        self._draw_title(app, title_area)
        self._draw_countdown(app.countdown, countdown_area)

    def _draw_body(self, app, area: Rect):
        left, centre, right = split_columns(area, (25, 45, 30))

        rain_area, source_area = stack_rows(left, (left.height // 2, None))
        self._draw_rain(app.rain, rain_area)
        self._draw_source(app.source, source_area)

        self._draw_map(app.world_map, centre)

        cpu_area, mem_area, net_area, log_area = stack_rows(right, (4, 4, 6, None))
        self._draw_cpu(app.cpu, cpu_area)
        self._draw_memory(app.memory, mem_area)
        self._draw_network(app.network, net_area)
        self._draw_logs(app.logs, log_area)

    def _draw_footer(self, app, area: Rect):
        hex_area, progress_area = split_columns(area, (60, 40))
        self._draw_hex(app.hex_dump, hex_area)
        self._draw_progress(app.progress, progress_area)

    # =========================================================================
    # Header widgets
    # =========================================================================

    def _draw_clock(self, clock, area: Rect):
        inner = self._draw_box(area, "SYSTEM TIME", Colors.CYAN)
        if inner is None or inner.height < 2:
            return

        blink = clock.blink
        text = clock.time_str + clock.millis
        x = inner.x + max(0, (inner.width - len(text)) // 2)
        self._addstr(inner.y, x, clock.time_str, self.theme.attr(bold=True), inner)
        self._addstr(inner.y, x + len(clock.time_str), clock.millis,
                     self.theme.attr(Colors.CYAN if blink else Colors.DIM), inner)

        date_line = f"{clock.date_str}  ● SYNC"
        x = inner.x + max(0, (inner.width - len(date_line)) // 2)
        self._addstr(inner.y + 1, x, clock.date_str, self.theme.attr(Colors.DIM), inner)
        self._addstr(inner.y + 1, x + len(clock.date_str) + 2, "●",
                     self.theme.attr(Colors.GREEN if blink else Colors.DIM), inner)
        self._addstr(inner.y + 1, x + len(clock.date_str) + 3, " SYNC",
                     self.theme.attr(Colors.DIM), inner)

    def _draw_title(self, app, area: Rect):
        inner = self._draw_box(area, "", Colors.CYAN, border_color=Colors.CYAN, chars=DOUBLE)
        if inner is None:
            return

        self._addstr_centered(inner.y, inner, "F U T U R E   T E R M I N A L",
                              self.theme.attr(Colors.MAGENTA, bold=True))
        if inner.height > 1:
            self._addstr_centered(inner.y + 1, inner, "SYSTEM ACTIVE • MONITORING",
                                  self.theme.attr(Colors.GREEN))
        if inner.height > 2:
            status = f"SPEED x{app.state.animation_speed:.2f}   TICKS {app.state.tick_count}"
            self._addstr_centered(inner.y + 2, inner, status, self.theme.attr(Colors.DIM))

    def _draw_countdown(self, countdown, area: Rect):
        status = countdown.status
        if status is CountdownStatus.EXPIRED:
            color, dim = (Colors.RED, False) if countdown.flash else (Colors.DIM, True)
            label = "█ EXPIRED █"
        elif status is CountdownStatus.CRITICAL:
            color, dim = (Colors.RED if countdown.flash else Colors.ORANGE), False
            label = "⚠ CRITICAL"
        elif status is CountdownStatus.WARNING:
            color, dim = Colors.ORANGE, False
            label = "◆ WARNING"
        else:
            color, dim = Colors.CYAN, False
            label = "◇ ACTIVE"

        inner = self._draw_box(area, "COUNTDOWN", color)
        if inner is None or inner.height < 2:
            return

        self._addstr_centered(inner.y, inner, countdown.format_time(),
                              self.theme.attr(color, bold=True, dim=dim))
        label_color = Colors.GREEN if status is CountdownStatus.NORMAL else color
        self._addstr_centered(inner.y + 1, inner, label, self.theme.attr(label_color, dim=dim))

    # =========================================================================
    # Body widgets
    # =========================================================================

    def _draw_rain(self, rain, area: Rect):
        inner = self._draw_box(area, "MATRIX", Colors.GREEN)
        if inner is None:
            return

        for drop in rain.drops:
            if drop.x >= inner.width:
                continue
            head = drop.head_row
            for i, char in enumerate(drop.chars):
                row = head - i
                if not 0 <= row < inner.height:
                    continue
                if i == 0:
                    attr = self.theme.attr(Colors.MATRIX_HEAD, bold=True)
                elif i < 3:
                    attr = self.theme.attr(Colors.MATRIX_BODY, bold=True)
                elif i < 6:
                    attr = self.theme.attr(Colors.MATRIX_BODY)
                elif i < 9:
                    attr = self.theme.attr(Colors.MATRIX_TRAIL)
                else:
                    attr = self.theme.attr(Colors.MATRIX_TRAIL, dim=True)
                self._addstr(inner.y + row, inner.x + drop.x, char, attr, inner)

    def _draw_source(self, source, area: Rect):
        inner = self._draw_box(area, "SOURCE", Colors.MAGENTA)
        if inner is None:
            return

        for row, (number, text) in enumerate(source.visible(inner.height)):
            y = inner.y + row
            x = inner.x
            gutter = f"{number:3} "
            self._addstr(y, x, gutter, self.theme.attr(Colors.DIM), inner)
            x += len(gutter)
            for token, kind in tokenize(text):
                if x >= inner.x + inner.width:
                    break
                self._addstr(y, x, token, self.theme.attr(SYNTAX_COLORS[kind]), inner)
                x += len(token)

    def _draw_map(self, world_map, area: Rect):
        inner = self._draw_box(area, "GLOBAL NETWORK", Colors.CYAN)
        if inner is None or inner.width < 2 or inner.height < 2:
            return

        def project(lat: float, lon: float):
            col = inner.x + round((lon + 180.0) / 360.0 * (inner.width - 1))
            row = inner.y + round((90.0 - lat) / 180.0 * (inner.height - 1))
            return col, row

        # Graticule every 30 degrees
        grid_attr = self.theme.attr(Colors.DIM, dim=True)
        for lat in range(-60, 61, 30):
            for lon in range(-180, 181, 30):
                col, row = project(lat, lon)
                self._addstr(row, col, "·", grid_attr, inner)

        for conn in world_map.connections:
            if not conn.active and conn.progress == 0.0:
                continue
            src = world_map.nodes[conn.source]
            dst = world_map.nodes[conn.target]
            x1, y1 = project(src.lat, src.lon)
            x2, y2 = project(dst.lat, dst.lon)
            steps = max(abs(x2 - x1), abs(y2 - y1), 1)
            attr = self.theme.attr(Colors.CYAN if conn.active else Colors.DIM)
            for step in range(steps + 1):
                t = step / steps
                if t > conn.progress:
                    break
                col = round(x1 + (x2 - x1) * t)
                row = round(y1 + (y2 - y1) * t)
                self._addstr(row, col, "·", attr, inner)
            if conn.active and not conn.complete:
                col = round(x1 + (x2 - x1) * conn.progress)
                row = round(y1 + (y2 - y1) * conn.progress)
                self._addstr(row, col, "•", self.theme.attr(Colors.CYAN, bold=True), inner)

        for node in world_map.nodes:
            col, row = project(node.lat, node.lon)
            if node.active:
                attr = self.theme.attr(Colors.CYAN, bold=node.blink_on, dim=not node.blink_on)
                marker = "◉"
            else:
                attr = self.theme.attr(Colors.DIM)
                marker = "○"
            self._addstr(row, col, marker, attr, inner)
            self._addstr(row, col + 2, node.name, attr, inner)

    def _draw_cpu(self, cpu, area: Rect):
        inner = self._draw_box(area, "CPU", Colors.CYAN)
        if inner is None or inner.height < 2:
            return

        color = Theme.gauge_color(cpu.current)
        label = f" {cpu.current:5.1f}%"
        self._addstr(inner.y, inner.x, bar(cpu.current / 100.0, inner.width - len(label)),
                     self.theme.attr(color), inner)
        self._addstr(inner.y, inner.x + inner.width - len(label), label,
                     self.theme.attr(bold=True), inner)
        self._addstr(inner.y + 1, inner.x, sparkline(cpu.history.values(), inner.width, 100.0),
                     self.theme.attr(color), inner)

    def _draw_memory(self, memory, area: Rect):
        inner = self._draw_box(area, "MEMORY", Colors.MAGENTA)
        if inner is None or inner.height < 2:
            return

        color = Theme.gauge_color(memory.percentage)
        label = f" {memory.percentage:5.1f}%"
        self._addstr(inner.y, inner.x, bar(memory.percentage / 100.0, inner.width - len(label)),
                     self.theme.attr(color), inner)
        self._addstr(inner.y, inner.x + inner.width - len(label), label,
                     self.theme.attr(bold=True), inner)

        free = max(0, memory.total - memory.used)
        used_text = f"Used: {format_bytes(memory.used)}"
        self._addstr(inner.y + 1, inner.x, used_text, self.theme.attr(Colors.MAGENTA), inner)
        self._addstr(inner.y + 1, inner.x + len(used_text), f"  Free: {format_bytes(free)}",
                     self.theme.attr(Colors.GREEN), inner)

    def _draw_network(self, network, area: Rect):
        inner = self._draw_box(area, "NETWORK", Colors.ORANGE)
        if inner is None or inner.height < 4:
            return

        self._addstr(inner.y, inner.x, f"▲ TX: {format_bytes_per_sec(network.tx_rate)}",
                     self.theme.attr(Colors.ORANGE), inner)
        self._addstr(inner.y + 1, inner.x, sparkline(network.tx_history.values(), inner.width),
                     self.theme.attr(Colors.ORANGE), inner)
        self._addstr(inner.y + 2, inner.x, f"▼ RX: {format_bytes_per_sec(network.rx_rate)}",
                     self.theme.attr(Colors.CYAN), inner)
        self._addstr(inner.y + 3, inner.x, sparkline(network.rx_history.values(), inner.width),
                     self.theme.attr(Colors.CYAN), inner)

    def _draw_logs(self, logs, area: Rect):
        inner = self._draw_box(area, "SYSTEM LOG", Colors.GREEN)
        if inner is None:
            return

        for row, entry in enumerate(logs.recent(inner.height)):
            y = inner.y + row
            stamp = f"{entry.timestamp} "
            level = f"{entry.level.value:<5} "
            color = LOG_COLORS[entry.level]
            alert = entry.level is LogLevel.ALERT
            self._addstr(y, inner.x, stamp, self.theme.attr(Colors.DIM), inner)
            self._addstr(y, inner.x + len(stamp), level, self.theme.attr(color, bold=True), inner)
            self._addstr(y, inner.x + len(stamp) + len(level), entry.message,
                         self.theme.attr(color if alert else Colors.NORMAL, bold=alert), inner)

    # =========================================================================
    # Footer widgets
    # =========================================================================

    def _draw_hex(self, hex_dump, area: Rect):
        inner = self._draw_box(area, "MEMORY DUMP", Colors.GREEN)
        if inner is None:
            return

        highlight_attr = self.theme.attr(Colors.HIGHLIGHT, bold=True,
                                         reverse=not self.theme.colors_enabled)
        for row, line in enumerate(hex_dump.visible(inner.height)):
            y = inner.y + row
            x = inner.x
            offset = f"0x{line.offset:08X}  "
            self._addstr(y, x, offset, self.theme.attr(Colors.CYAN), inner)
            x += len(offset)

            for i, byte in enumerate(line.data):
                attr = highlight_attr if line.highlight == i else self.theme.attr()
                self._addstr(y, x, f"{byte:02X}", attr, inner)
                x += 3
                if i == 7:
                    x += 1

            self._addstr(y, x, "│ ", self.theme.attr(Colors.DIM), inner)
            self._addstr(y, x + 2, line.ascii(), self.theme.attr(Colors.GREEN, dim=True), inner)

    def _draw_progress(self, progress, area: Rect):
        inner = self._draw_box(area, "OPERATIONS", Colors.MAGENTA)
        if inner is None:
            return

        rows_per_bar = 2 if inner.height >= 2 * len(progress.bars) else 1
        for i, item in enumerate(progress.bars):
            y = inner.y + i * rows_per_bar
            if y >= inner.y + inner.height:
                break
            color = Colors.BY_NAME.get(item.color, Colors.NORMAL)
            pct = f"{int(item.progress * 100):3d}%"

            if rows_per_bar == 2:
                label = "COMPLETE" if item.completed and (item.complete_flash // 5) % 2 else item.label
                self._addstr(y, inner.x, label, self.theme.attr(color, bold=True), inner)
                self._addstr(y, inner.x + inner.width - len(pct), pct, self.theme.attr(), inner)
                self._addstr(y + 1, inner.x, bar(item.progress, inner.width),
                             self.theme.attr(color), inner)
            else:
                label = f"{item.label[:10]:<11}"
                width = inner.width - len(label) - len(pct) - 1
                self._addstr(y, inner.x, label, self.theme.attr(color, bold=True), inner)
                self._addstr(y, inner.x + len(label), bar(item.progress, width),
                             self.theme.attr(color), inner)
                self._addstr(y, inner.x + inner.width - len(pct), pct, self.theme.attr(), inner)

    # =========================================================================
    # Overlays
    # =========================================================================

    def _draw_size_warning(self):
        area = Rect(0, 0, self.width, self.height)
        inner = self._draw_box(area, "", Colors.ORANGE, border_color=Colors.ORANGE, chars=DOUBLE)
        target = inner if inner is not None and inner.height >= 3 else area

        lines = [
            ("⚠ TERMINAL TOO SMALL", self.theme.attr(Colors.ORANGE, bold=True)),
            (f"Minimum size: {Layout.MIN_WIDTH}x{Layout.MIN_HEIGHT}", self.theme.attr(Colors.DIM)),
            (f"Current: {self.width}x{self.height}", self.theme.attr(Colors.DIM)),
        ]
        top = target.y + max(0, (target.height - len(lines)) // 2)
        for i, (text, attr) in enumerate(lines):
            self._addstr_centered(top + i, target, text, attr)

    def _draw_help(self):
        lines = ["═══ CONTROLS ═══", ""]
        lines += [f"  {keys:<9} {description}" for keys, description in HELP_LINES]
        lines += ["", "Press any key to close"]

        box_width = min(self.width, max(len(line) for line in lines) + 6)
        box_height = min(self.height, len(lines) + 2)
        area = Rect((self.width - box_width) // 2, (self.height - box_height) // 2,
                    box_width, box_height)

        # Blank the overlay region first
        for row in range(area.height):
            self._addstr(area.y + row, area.x, " " * area.width, self.theme.attr(), area)

        inner = self._draw_box(area, "HELP", Colors.MAGENTA, border_color=Colors.CYAN, chars=DOUBLE)
        if inner is None:
            return

        for i, line in enumerate(lines[:inner.height]):
            if i == 0:
                self._addstr_centered(inner.y, inner, line, self.theme.attr(Colors.CYAN, bold=True))
            elif line.startswith("Press"):
                self._addstr_centered(inner.y + i, inner, line, self.theme.attr(Colors.DIM))
            elif line:
                keys, description = line[:12], line[12:]
                self._addstr(inner.y + i, inner.x + 1, keys, self.theme.attr(Colors.MAGENTA), inner)
                self._addstr(inner.y + i, inner.x + 1 + len(keys), description, self.theme.attr(), inner)

    def _draw_pause_badge(self):
        badge = " || PAUSED "
        self._addstr(0, max(0, self.width - len(badge) - 1), badge,
                     self.theme.attr(Colors.BADGE, bold=True, reverse=not self.theme.colors_enabled))

    # =========================================================================
    # Primitives
    # =========================================================================

    def _draw_box(self, area: Rect, title: str, title_color: int = Colors.CYAN,
                  border_color: int = Colors.DIM, chars=ROUNDED) -> Optional[Rect]:
        """Draw a bordered box with title. Returns the inner area, or None if too small."""
        if area.width < 3 or area.height < 3:
            return None

        top_left, top_right, bottom_left, bottom_right, horizontal, vertical = chars
        border = self.theme.attr(border_color)
        middle = horizontal * (area.width - 2)

        self._addstr(area.y, area.x, top_left + middle + top_right, border, area)
        for row in range(1, area.height - 1):
            self._addstr(area.y + row, area.x, vertical, border, area)
            self._addstr(area.y + row, area.x + area.width - 1, vertical, border, area)
        self._addstr(area.y + area.height - 1, area.x, bottom_left + middle + bottom_right,
                     border, area)

        if title:
            self._addstr(area.y, area.x + 2, f" {title} "[:area.width - 4],
                         self.theme.attr(title_color, bold=True), area)

        return area.inner()

    def _addstr_centered(self, y: int, area: Rect, text: str, attr: int = 0):
        x = area.x + max(0, (area.width - len(text)) // 2)
        self._addstr(y, x, text, attr, area)

    def _addstr(self, y: int, x: int, text: str, attr: int = 0, clip: Optional[Rect] = None):
        """Add string with attributes, clipped to `clip` and the window."""
        if y < 0 or y >= self.height or x < 0 or x >= self.width:
            return

        max_len = self.width - x
        if clip is not None:
            if not clip.y <= y < clip.y + clip.height or not clip.x <= x < clip.x + clip.width:
                return
            max_len = min(max_len, clip.x + clip.width - x)
        if max_len <= 0:
            return

        text = text[:max_len]
        try:
            self.screen.attron(attr)
            self.screen.addstr(y, x, text)
            self.screen.attroff(attr)
        except curses.error:
            self.screen.attroff(attr)
