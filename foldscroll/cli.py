"""Command-line front door for foldscroll.

Builds a fold layout from a file (or a bare line count) plus ``--fold``
options, then answers one scroll query or prints the fold-collapsed preview.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .layout import FoldLayout, FoldRegion, LayoutRegistry, parse_fold_spec
from .preview import render_folded_preview
from .syntax import buffer_lines, read_text
from .types import LAST
from .virtual_lines import VirtualLines

SURFACE = "cli"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _line_arg(value: str) -> int | str:
    """argparse type for a line number or ``$``."""
    if value == LAST:
        return LAST
    try:
        return int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid line: {value!r} (expected integer or '$')") from exc


def _proportion(value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid proportion: {value!r}") from exc


def _fold_region(value: str) -> FoldRegion:
    try:
        return parse_fold_spec(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _configure_logging(level_name: str | None) -> None:
    level = getattr(logging, level_name.upper()) if level_name else config.load_log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_query(
    layout: FoldLayout,
    count: list[int | str] | None = None,
    locate: float | None = None,
    spans: bool = False,
) -> str:
    """Answer one query against ``layout`` and return printable output."""
    registry = LayoutRegistry()
    registry.set_layout(SURFACE, layout)
    virtual_lines = VirtualLines(registry.as_host())
    if config.load_memoize():
        virtual_lines.start_memoize()

    if count is not None:
        start, end = count
        if not isinstance(start, int):
            start = layout.total_lines
        return f"{virtual_lines.virtual_line_count(SURFACE, start, end)}\n"
    if locate is not None:
        return f"{virtual_lines.virtual_proportion_line(SURFACE, locate)}\n"
    if spans:
        out: list[str] = []
        for span in virtual_lines.spans(SURFACE):
            kind = "folded" if span.folded else "text"
            out.append(f"{span.start}-{span.end} {kind} {span.visual_lines}\n")
        return "".join(out)
    return ""


def main() -> None:
    """Parse CLI arguments, build the layout, and print the requested view.

    With no query option the fold-collapsed preview of PATH is printed.
    """
    parser = argparse.ArgumentParser(
        description="Map scroll positions to buffer lines when closed folds collapse to one row."
    )
    parser.add_argument("path", nargs="?", default=None, help="Source file to measure or preview.")
    parser.add_argument(
        "--lines",
        type=_positive_int,
        default=None,
        help="Describe a buffer of N lines instead of reading PATH.",
    )
    parser.add_argument(
        "--fold",
        action="append",
        default=[],
        type=_fold_region,
        metavar="A-B[:open]",
        help="Fold region over lines A..B; closed unless suffixed with ':open'. Repeatable.",
    )
    query = parser.add_mutually_exclusive_group()
    query.add_argument(
        "--count",
        nargs=2,
        type=_line_arg,
        metavar=("START", "END"),
        help="Print visual lines between START and END inclusive ('$' = last line).",
    )
    query.add_argument("--locate", type=_proportion, metavar="P", help="Print the line at proportion P (0.0-1.0).")
    query.add_argument("--spans", action="store_true", help="Print the virtual spans of the buffer.")
    parser.add_argument("--style", default=None, help="Pygments style name for the preview.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default=None,
        help="Logging verbosity (default: from config, else warning).",
    )
    args = parser.parse_args()
    _configure_logging(args.log_level)

    if args.path is not None and args.lines is not None:
        raise SystemExit("Cannot combine positional path with --lines.")
    if args.path is None and args.lines is None:
        raise SystemExit("Either PATH or --lines is required.")

    source: str | None = None
    if args.path is not None:
        path = Path(args.path)
        if not path.is_file():
            raise SystemExit(f"Path not found: {path}")
        source = read_text(path)
        total_lines = len(buffer_lines(source))
    else:
        path = None
        total_lines = args.lines

    try:
        layout = FoldLayout(total_lines, args.fold)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    if args.count is not None or args.locate is not None or args.spans:
        sys.stdout.write(run_query(layout, count=args.count, locate=args.locate, spans=args.spans))
        return

    if source is None or path is None:
        raise SystemExit("Preview needs a PATH; use --count, --locate, or --spans with --lines.")
    style = args.style or config.load_style()
    sys.stdout.write(render_folded_preview(source, path, layout, style=style, no_color=args.no_color))


if __name__ == "__main__":
    main()
