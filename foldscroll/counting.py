"""Visual-line counting across closed folds."""

from __future__ import annotations

from typing import Any

from .host import FoldHost
from .spans import SpanWalker
from .types import resolve_end


def count_virtual_lines(host: FoldHost, view: Any, start: int, end: int | str) -> int:
    """Count visual lines in ``[start, end]`` (inclusive) of ``view``.

    A closed fold counts as one line. ``end`` may be ``LAST``. Bounds are
    clamped to the buffer and an empty range counts as 0.
    """
    total = host.total_lines(view)
    end = min(total, resolve_end(end, total))
    start = max(1, start)
    if end < start:
        return 0

    count = 0
    walker = SpanWalker(host, view, start)
    while True:
        span = walker.advance()
        span_end = min(span.end, end)
        if span.folded:
            count += 1
        else:
            count += span_end - span.start + 1
        if span_end == end or span.at_end:
            break
    return count
