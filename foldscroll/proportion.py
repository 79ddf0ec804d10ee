"""Map a fractional scroll position to a buffer line.

The visual extent of a buffer runs from its first visual line (proportion
0.0) to its last (1.0). Lookup walks spans from line 1 accumulating visual
height, then interpolates inside the span where the target is crossed, so
dragging through a long fold-free region moves smoothly while a closed fold
collapses to a single point.
"""

from __future__ import annotations

from typing import Any

from .host import FoldHost
from .spans import SpanWalker
from .types import round_half_up


def _clamp_proportion(proportion: float) -> float:
    return max(0.0, min(1.0, proportion))


def locate_proportion_line(
    host: FoldHost,
    view: Any,
    proportion: float,
    total_visual: int,
) -> int:
    """Return the buffer line at ``proportion`` of the visual extent.

    ``total_visual`` is the visual-line count of the whole buffer. The answer
    is clamped to the buffer and, when it falls in a closed fold, moved to the
    fold's first line.
    """
    total = host.total_lines(view)
    proportion = _clamp_proportion(proportion)
    line = 0

    if total_visual > 1:
        denominator = total_visual - 1
        virtual_line = 0
        prop = 0.0
        walker = SpanWalker(host, view, 1)
        while True:
            span = walker.advance()
            line_delta = span.buffer_lines
            virtual_delta = span.visual_lines
            prop_delta = virtual_delta / denominator
            if prop + prop_delta >= proportion:
                ratio = (proportion - prop) / prop_delta if prop_delta > 0 else 0.0
                ratio = max(0.0, min(1.0, ratio))
                line += round_half_up(ratio * line_delta) + 1
                break
            line += line_delta
            virtual_line += virtual_delta
            prop = virtual_line / denominator
            if span.at_end:
                line = total
                break

    line = max(1, min(total, line))
    fold = host.closed_fold_at(view, line)
    if fold is not None:
        line = fold.start
    return line
