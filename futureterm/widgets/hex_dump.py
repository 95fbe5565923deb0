"""Streaming hex dump."""

from dataclasses import dataclass
from typing import List, Optional

from ..constants import Limits, Timing
from ..randomness import RandomSource

HIGHLIGHT_CHANCE = 0.1


@dataclass
class HexLine:
    offset: int
    data: bytes
    highlight: Optional[int] = None

    def ascii(self) -> str:
        """Printable rendering of the payload, '.' for anything else."""
        return "".join(chr(b) if 0x20 <= b < 0x7F else "." for b in self.data)


class HexDump:
    """
    Capped list of 16-byte lines at increasing synthetic offsets.

    A line is appended every HEX_APPEND_PERIOD ticks. Every
    HEX_HIGHLIGHT_PERIOD ticks each line independently re-rolls whether it
    carries a highlighted byte.
    """

    def __init__(self, rng: RandomSource, capacity: int = Limits.MAX_HEX_LINES,
                 base_offset: int = Limits.HEX_BASE_OFFSET):
        self.rng = rng
        self.capacity = capacity
        self.lines: List[HexLine] = []
        self.current_offset = base_offset
        self.scroll_offset = 0
        self._tick_counter = 0

        for _ in range(Limits.SEED_HEX_LINES):
            self._add_line()

    def tick(self):
        self._tick_counter += 1

        if self._tick_counter % Timing.HEX_APPEND_PERIOD == 0:
            self._add_line()
            self.scroll_offset = max(0, len(self.lines) - Limits.HEX_VISIBLE_LINES)

        if self._tick_counter % Timing.HEX_HIGHLIGHT_PERIOD == 0:
            for line in self.lines:
                if self.rng.chance(HIGHLIGHT_CHANCE):
                    line.highlight = self.rng.randrange(0, len(line.data))
                else:
                    line.highlight = None

    def visible(self, rows: int) -> List[HexLine]:
        return self.lines[self.scroll_offset:self.scroll_offset + max(0, rows)]

    def _add_line(self):
        data = bytes(self.rng.byte() for _ in range(Limits.HEX_BYTES_PER_LINE))
        if len(self.lines) >= self.capacity:
            self.lines.pop(0)
        self.lines.append(HexLine(offset=self.current_offset, data=data))
        self.current_offset += Limits.HEX_BYTES_PER_LINE
