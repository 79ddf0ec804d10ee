"""Fold-collapsed text listing of a source file.

Each closed fold is printed as one row holding its fold text, so the output
has exactly one row per visual line.
"""

from __future__ import annotations

from pathlib import Path

from .config import DEFAULT_STYLE
from .layout import FoldLayout, LayoutRegistry
from .syntax import buffer_lines, highlight_lines, sanitize_terminal_text
from .types import VirtualSpan
from .virtual_lines import VirtualLines

_FOLD_STYLE = "\033[2;38;5;245m"
_RESET = "\033[0m"


def fold_text(first_line: str, span: VirtualSpan) -> str:
    """Return the one-row label shown for a closed fold."""
    return f"+--{span.buffer_lines:>3} lines: {first_line.strip()}"


def preview_rows(
    plain_lines: list[str],
    display_lines: list[str],
    spans: list[VirtualSpan],
    colorize_folds: bool = False,
) -> list[str]:
    """Build numbered rows, one per visual line, from buffer spans."""
    number_width = len(str(max(1, len(plain_lines))))
    rows: list[str] = []
    for span in spans:
        if span.folded:
            label = fold_text(plain_lines[span.start - 1], span)
            if colorize_folds:
                label = f"{_FOLD_STYLE}{label}{_RESET}"
            rows.append(f"{span.start:>{number_width}} {label}")
            continue
        for lnum in range(span.start, span.end + 1):
            rows.append(f"{lnum:>{number_width}} {display_lines[lnum - 1]}")
    return rows


def render_folded_preview(
    source: str,
    path: Path,
    layout: FoldLayout,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> str:
    """Render ``source`` with the closed folds of ``layout`` collapsed."""
    source = sanitize_terminal_text(source)
    plain_lines = buffer_lines(source)
    if layout.total_lines != len(plain_lines):
        raise ValueError(
            f"layout describes {layout.total_lines} lines but source has {len(plain_lines)}"
        )
    display_lines = plain_lines if no_color else highlight_lines(source, path, style)

    registry = LayoutRegistry()
    registry.set_layout(path, layout)
    spans = VirtualLines(registry.as_host()).spans(path)

    rows = preview_rows(plain_lines, display_lines, spans, colorize_folds=not no_color)
    return "".join(f"{row}{_RESET}\n" if "\033" in row else f"{row}\n" for row in rows)
