"""Public scroll-mapping operations for one embedding.

``VirtualLines`` binds a ``FoldHost`` to its own ``MemoCache`` so separate
embeddings (and test cases) never share cached results.
"""

from __future__ import annotations

import contextlib
from collections.abc import Hashable, Iterator

from .counting import count_virtual_lines
from .host import FoldHost, scratch_view
from .memo import MemoCache
from .proportion import locate_proportion_line
from .spans import iter_spans
from .types import LAST, VirtualSpan


class VirtualLines:
    """Fold-aware line counting and proportion lookup for display surfaces."""

    def __init__(self, host: FoldHost, cache: MemoCache | None = None) -> None:
        self.host = host
        self.cache = cache if cache is not None else MemoCache()

    def virtual_line_count(self, surface: Hashable, start: int, end: int | str = LAST) -> int:
        """Return visual lines between ``start`` and ``end`` inclusive."""
        key = ("virtual_line_count", surface, start, end)
        cached = self.cache.lookup(key)
        if cached is not None:
            return cached
        with scratch_view(self.host, surface) as view:
            count = count_virtual_lines(self.host, view, start, end)
        self.cache.store(key, count)
        return count

    def virtual_proportion_line(self, surface: Hashable, proportion: float) -> int:
        """Return the buffer line at ``proportion`` of the surface's visual extent."""
        key = ("virtual_proportion_line", surface, proportion)
        cached = self.cache.lookup(key)
        if cached is not None:
            return cached
        total_visual = self.virtual_line_count(surface, 1, LAST)
        with scratch_view(self.host, surface) as view:
            line = locate_proportion_line(self.host, view, proportion, total_visual)
        self.cache.store(key, line)
        return line

    def spans(self, surface: Hashable) -> list[VirtualSpan]:
        """Return the spans partitioning the surface's buffer, in order."""
        with scratch_view(self.host, surface) as view:
            return list(iter_spans(self.host, view))

    def start_memoize(self) -> None:
        self.cache.enable()

    def stop_memoize(self) -> None:
        self.cache.disable()

    def reset_memoize(self) -> None:
        self.cache.reset()

    @contextlib.contextmanager
    def memoizing(self) -> Iterator[VirtualLines]:
        """Enable memoization for the duration of one query batch."""
        try:
            self.start_memoize()
            yield self
        finally:
            self.stop_memoize()
