"""
Tests for the curses renderer.

The renderer runs against FakeScreen with colours disabled, so no curses
session is needed. FakeScreen raises on any out-of-bounds write, so every
frame drawn here also checks the clipping.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from futureterm.constants import Timing
from futureterm.tui.renderer import Rect, Renderer, bar, sparkline, split_columns, stack_rows
from futureterm.tui.syntax import tokenize
from futureterm.tui.theme import Colors, Theme

PANEL_TITLES = [
    "SYSTEM TIME",
    "COUNTDOWN",
    "MATRIX",
    "SOURCE",
    "GLOBAL NETWORK",
    "CPU",
    "MEMORY",
    "NETWORK",
    "SYSTEM LOG",
    "MEMORY DUMP",
    "OPERATIONS",
]


def render(app, screen):
    Renderer(screen, Theme()).draw(app)
    return screen.text()


# ===========================================================================
# Layout helpers
# ===========================================================================

class TestLayoutHelpers:

    def test_rect_inner(self):
        assert Rect(2, 3, 10, 5).inner() == Rect(3, 4, 8, 3)
        assert Rect(0, 0, 1, 1).inner() == Rect(1, 1, 0, 0)

    def test_split_columns(self):
        widths = [r.width for r in split_columns(Rect(0, 0, 100, 10), (25, 45, 30))]
        assert widths == [25, 45, 30]

    def test_last_column_takes_remainder(self):
        rects = split_columns(Rect(0, 0, 81, 10), (25, 45, 30))
        assert [r.width for r in rects] == [20, 36, 25]
        assert [r.x for r in rects] == [0, 20, 56]

    def test_stack_rows_clips_to_area(self):
        rects = stack_rows(Rect(0, 5, 10, 9), (4, 4, 6, None))
        assert [r.height for r in rects] == [4, 4, 1, 0]
        assert [r.y for r in rects] == [5, 9, 13, 14]

    def test_stack_rows_remainder(self):
        rects = stack_rows(Rect(0, 0, 10, 20), (4, None))
        assert [r.height for r in rects] == [4, 16]


class TestGlyphHelpers:

    def test_sparkline_scales_to_ceiling(self):
        assert sparkline([0, 50, 100], 3, 100.0) == " ▄█"

    def test_sparkline_uses_newest_values(self):
        assert sparkline([1, 2, 3, 4], 2) == "▆█"

    def test_sparkline_all_zero(self):
        assert sparkline([0, 0, 0], 3) == "   "
        assert sparkline([], 5) == ""
        assert sparkline([1, 2], 0) == ""

    def test_bar(self):
        assert bar(0.5, 10) == "█████░░░░░"
        assert bar(0.0, 3) == "░░░"
        assert bar(2.0, 4) == "████"
        assert bar(0.3, 0) == ""


class TestTheme:

    def test_gauge_colors(self):
        assert Theme.gauge_color(10.0) == Colors.GREEN
        assert Theme.gauge_color(49.9) == Colors.GREEN
        assert Theme.gauge_color(50.0) == Colors.ORANGE
        assert Theme.gauge_color(80.0) == Colors.RED

    def test_plain_theme_has_no_colour(self):
        theme = Theme()
        assert theme.attr(Colors.CYAN) == 0
        assert theme.attr(Colors.CYAN, bold=True) != 0


# ===========================================================================
# Frames
# ===========================================================================

class TestFullFrame:

    @pytest.mark.parametrize("width,height", [(120, 40), (80, 24), (200, 60), (81, 25)])
    def test_frame_fits_screen(self, app, fake_screen, width, height):
        app.handle_resize(width, height)
        screen = fake_screen(width, height)
        text = render(app, screen)
        assert "F U T U R E   T E R M I N A L" in text
        assert "TERMINAL TOO SMALL" not in text

    def test_all_panels_present(self, app, fake_screen):
        text = render(app, fake_screen(120, 40))
        for title in PANEL_TITLES:
            assert title in text, title

    def test_header_values(self, app, fake_screen):
        text = render(app, fake_screen(120, 40))
        assert "15:09:26.535" in text
        assert "2026-03-14" in text
        assert "05:00" in text
        assert "SPEED x1.00   TICKS 0" in text

    def test_stats_panels_after_sample(self, app, fake_screen):
        for _ in range(Timing.TICKS_PER_SECOND):
            app.tick()
        text = render(app, fake_screen(120, 40))
        assert "12.5%" in text
        assert "Used: 4.0 GB" in text
        assert "RX: 2.0 KB/s" in text
        assert "TX: 512 B/s" in text

    def test_hex_and_logs_drawn(self, app, fake_screen):
        text = render(app, fake_screen(120, 40))
        assert "0x7F3A0000" in text
        # Once in the clock, once per visible log entry
        assert text.count("15:09:26.535") >= 2

    def test_node_names_drawn(self, app, fake_screen):
        text = render(app, fake_screen(160, 50))
        assert "SYD" in text
        assert "◉" in text

    def test_no_overlay_by_default(self, app, fake_screen):
        text = render(app, fake_screen(120, 40))
        assert "CONTROLS" not in text
        assert "PAUSED" not in text


class TestOverlays:

    def test_help_overlay(self, app, fake_screen):
        app.state.show_help = True
        text = render(app, fake_screen(120, 40))
        assert "═══ CONTROLS ═══" in text
        assert "Reset countdown timer" in text
        assert "Press any key to close" in text

    def test_pause_badge_on_top_row(self, app, fake_screen):
        app.state.paused = True
        screen = fake_screen(120, 40)
        render(app, screen)
        assert "|| PAUSED" in screen.row(0)

    def test_pause_badge_over_help(self, app, fake_screen):
        app.state.paused = True
        app.state.show_help = True
        screen = fake_screen(80, 24)
        text = render(app, screen)
        assert "|| PAUSED" in screen.row(0)
        assert "CONTROLS" in text


class TestSizeWarning:

    @pytest.mark.parametrize("width,height", [(79, 24), (80, 23), (40, 10)])
    def test_warning_below_minimum(self, app, fake_screen, width, height):
        text = render(app, fake_screen(width, height))
        assert "TERMINAL TOO SMALL" in text
        assert "Minimum size: 80x24" in text
        assert f"Current: {width}x{height}" in text
        assert "MATRIX" not in text

    @pytest.mark.parametrize("width,height", [(10, 3), (1, 1), (0, 0)])
    def test_tiny_screens_do_not_fail(self, app, fake_screen, width, height):
        render(app, fake_screen(width, height))


# ===========================================================================
# Syntax highlighting
# ===========================================================================

class TestTokenize:

    def test_round_trips_text(self):
        line = 'let socket = TcpStream::connect(target).await?;'
        assert "".join(text for text, _ in tokenize(line)) == line

    def test_keywords_types_and_calls(self):
        kinds = dict(tokenize("fn decrypt(data: Vec) -> Result"))
        assert kinds["fn"] == "keyword"
        assert kinds["decrypt"] == "function"
        assert kinds["Vec"] == "type"
        assert kinds["Result"] == "type"
        assert kinds["data"] == "plain"

    def test_comments_swallow_rest_of_line(self):
        tokens = tokenize("x = 1  # set x")
        assert tokens[-1] == ("# set x", "comment")
        assert tokenize("// note") == [("// note", "comment")]

    def test_strings_and_numbers(self):
        kinds = dict(tokenize('send("payload", 0x1F, 42)'))
        assert kinds['"payload"'] == "string"
        assert kinds["0x1F"] == "number"
        assert kinds["42"] == "number"

    def test_unterminated_string(self):
        assert tokenize("'open") == [("'open", "string")]

    def test_empty_line(self):
        assert tokenize("") == []
