"""Value types shared by span traversal, counting, and proportion lookup.

Line numbers are 1-based buffer positions. ``LAST`` stands in for the last
line of a buffer and is resolved against the current line count before use.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

LAST = "$"


@dataclass(frozen=True)
class FoldRange:
    """Inclusive buffer-line bounds of one closed fold."""

    start: int
    end: int


@dataclass(frozen=True)
class VirtualSpan:
    """Maximal run of lines that is either one closed fold or fold-free.

    ``at_end`` marks the span that reached the last buffer line; the walker
    that produced it has wrapped back to line 1.
    """

    start: int
    end: int
    folded: bool
    at_end: bool = False

    @property
    def buffer_lines(self) -> int:
        """Return how many buffer lines the span covers."""
        return self.end - self.start + 1

    @property
    def visual_lines(self) -> int:
        """Return visual height: 1 for a closed fold, else one row per line."""
        return 1 if self.folded else self.buffer_lines


def round_half_up(value: float) -> int:
    """Round to nearest integer, sending .5 toward +inf on the number line.

    Ties never round away from zero for negatives:
    ``round_half_up(3.5) == 4`` but ``round_half_up(-3.5) == -3``.
    """
    return math.floor(value + 0.5)


def resolve_end(end: int | str, total_lines: int) -> int:
    """Resolve ``LAST`` to ``total_lines``; pass other values through."""
    if isinstance(end, str):
        if end != LAST:
            raise ValueError(f"invalid end line: {end!r}")
        return total_lines
    return end
