"""Auto-scrolling source listing."""

from typing import List, Optional, Sequence, Tuple

from ..constants import Timing
from .fake_data import CODE_SNIPPETS

TRAILING_BLANK_LINES = 5


class SourceCode:
    """Scrolls one line every SOURCE_SCROLL_PERIOD ticks, then moves to the next snippet."""

    def __init__(self, snippets: Optional[Sequence[str]] = None):
        self.snippets: List[List[str]] = [s.splitlines() for s in (snippets or CODE_SNIPPETS)]
        self.current_snippet = 0
        self.scroll_offset = 0
        self._tick_counter = 0

    @property
    def lines(self) -> List[str]:
        return self.snippets[self.current_snippet]

    def tick(self):
        self._tick_counter += 1
        if self._tick_counter % Timing.SOURCE_SCROLL_PERIOD != 0:
            return

        self.scroll_offset += 1
        if self.scroll_offset > len(self.lines) + TRAILING_BLANK_LINES:
            self.scroll_offset = 0
            self.current_snippet = (self.current_snippet + 1) % len(self.snippets)

    def visible(self, rows: int) -> List[Tuple[int, str]]:
        """(line number, text) pairs starting at the scroll position."""
        window = self.lines[self.scroll_offset:self.scroll_offset + max(0, rows)]
        return [(self.scroll_offset + i + 1, text) for i, text in enumerate(window)]
