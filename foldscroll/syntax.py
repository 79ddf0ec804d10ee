"""Source loading, sanitization, and Pygments highlighting for previews."""

from __future__ import annotations

import re
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .config import DEFAULT_STYLE

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

_FORMATTERS: dict[str, TerminalFormatter] = {}


def read_text(path: Path) -> str:
    """Read text as UTF-8 (dropping a BOM), else as latin-1.

    latin-1 maps every byte, so decoding never fails.
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError:
        return path.read_text(encoding="latin-1")


def buffer_lines(source: str) -> list[str]:
    """Split ``source`` into buffer lines the way an editor does.

    Only ``\\n``, ``\\r\\n`` and ``\\r`` end a line; form feeds and other
    separators ``str.splitlines`` honours stay inside their line. A final
    terminator does not start an extra line, and empty text is one empty line.
    """
    text = source.replace("\r\n", "\n").replace("\r", "\n")
    if text.endswith("\n"):
        text = text[:-1]
    return text.split("\n")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


def _formatter_for_style(style: str) -> TerminalFormatter:
    """Return cached terminal formatter for style name."""
    formatter = _FORMATTERS.get(style)
    if formatter is None:
        formatter = TerminalFormatter(style=style)
        _FORMATTERS[style] = formatter
    return formatter


def highlight_lines(source: str, path: Path, style: str = DEFAULT_STYLE) -> list[str]:
    """Highlight ``source`` as a whole and split it back into buffer lines.

    Highlighting runs on the full text so multi-line tokens keep their colors;
    the result has exactly one entry per source line.
    """
    plain_lines = buffer_lines(source)
    try:
        lexer = get_lexer_for_filename(path.name, source, stripnl=False)
    except ClassNotFound:
        lexer = TextLexer(stripnl=False)
    formatter = _formatter_for_style(_normalize_style(style))
    rendered = buffer_lines(highlight(source, lexer, formatter))
    if len(rendered) < len(plain_lines):
        rendered.extend(plain_lines[len(rendered):])
    return rendered[: len(plain_lines)]
