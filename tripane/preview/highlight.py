"""Text loading, sanitization, and Pygments highlighting for previews.

Control bytes are escaped before display so a previewed file can never move
the cursor, ring the bell, or otherwise drive the terminal.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def read_text(path: Path) -> str:
    """Read text trying UTF-8, UTF-8 with BOM, then latin-1."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def sanitize_terminal_text(source: str) -> str:
    """Escape C0/C1 control characters except newline, CR, and tab."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


@lru_cache(maxsize=16)
def _normalize_style(style: str) -> str:
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=_normalize_style(style))


def colorize_source(source: str, path: Path, style: str = DEFAULT_STYLE) -> str:
    """Return ``source`` with ANSI colors for ``path``'s language.

    Unknown file types fall back to plain text; the input is returned unchanged
    when Pygments cannot process it.
    """
    try:
        lexer = get_lexer_for_filename(path.name, source)
    except ClassNotFound:
        lexer = TextLexer()
    try:
        return highlight(source, lexer, _formatter_for_style(style))
    except Exception:
        return source


__all__ = [
    "DEFAULT_STYLE",
    "read_text",
    "sanitize_terminal_text",
    "colorize_source",
]
