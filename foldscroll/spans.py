"""Virtual-span traversal over a fold-aware buffer view.

A virtual span is a maximal run of lines that is either one closed fold or
free of closed folds. ``SpanWalker`` steps through spans from an arbitrary
line and wraps to line 1 after the span that reaches the last line.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from .host import FoldHost
from .types import VirtualSpan


class SpanWalker:
    """Cursor-style span iterator bound to one scratch view."""

    def __init__(self, host: FoldHost, view: Any, line: int = 1) -> None:
        self.host = host
        self.view = view
        self.line = max(1, line)

    def advance(self) -> VirtualSpan:
        """Return the span at the cursor and move the cursor past it.

        The returned span has ``at_end`` set when it reached the last line;
        the cursor is then back on line 1.
        """
        total = self.host.total_lines(self.view)
        start = self.line

        fold = self.host.closed_fold_at(self.view, start)
        if fold is not None:
            if fold.end >= total:
                self.line = 1
                return VirtualSpan(fold.start, fold.end, folded=True, at_end=True)
            self.line = fold.end + 1
            return VirtualSpan(fold.start, fold.end, folded=True)

        lnum = start
        while True:
            candidate = self.host.next_fold_start(self.view, lnum)
            if candidate is None or candidate <= lnum or candidate > total:
                # No closed fold after the cursor: this is the last span.
                self.line = 1
                return VirtualSpan(start, total, folded=False, at_end=True)
            lnum = candidate
            fold = self.host.closed_fold_at(self.view, lnum)
            if fold is not None:
                # Open folds are skipped; a closed one ends the span.
                self.line = fold.start
                return VirtualSpan(start, fold.start - 1, folded=False)


def iter_spans(host: FoldHost, view: Any, start: int = 1) -> Iterator[VirtualSpan]:
    """Yield spans from ``start`` through the first span tagged ``at_end``."""
    walker = SpanWalker(host, view, start)
    while True:
        span = walker.advance()
        yield span
        if span.at_end:
            return
