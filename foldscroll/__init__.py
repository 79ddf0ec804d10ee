"""Public package surface for foldscroll.

Fold-aware scroll mapping: count visual lines where each closed fold takes a
single row, and map a scrollbar proportion back to a buffer line.
"""

from __future__ import annotations

from .host import FoldHost, InvalidSurface
from .layout import FoldLayout, FoldRegion, LayoutRegistry
from .memo import MemoCache
from .types import LAST, FoldRange, VirtualSpan
from .virtual_lines import VirtualLines


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "LAST",
    "FoldHost",
    "FoldLayout",
    "FoldRange",
    "FoldRegion",
    "InvalidSurface",
    "LayoutRegistry",
    "MemoCache",
    "VirtualLines",
    "VirtualSpan",
    "main",
]
