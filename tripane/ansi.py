"""ANSI-aware width measurement and cell fitting for pane text.

Escape sequences never count toward width; tabs expand to 8-column stops and
East Asian wide characters take two cells.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int) -> int:
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    Escape sequences are kept verbatim; tabs become spaces so the clip point
    matches what the terminal would show.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1
    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip or pad ``text`` to exactly ``width`` cells, closing open styles."""
    if width <= 0:
        return ""
    clipped = clip_ansi_line(text.rstrip("\r\n"), width)
    padding = " " * max(0, width - display_width(clipped))
    if "\x1b" in clipped:
        return clipped + RESET + padding
    return clipped + padding


def selected_with_ansi(text: str, reverse: str = "\033[7m") -> str:
    """Apply cursor styling without discarding colors already in ``text``."""
    if not text or not reverse:
        return text
    return reverse + text.replace(RESET, RESET + reverse) + RESET


__all__ = [
    "ANSI_ESCAPE_RE",
    "RESET",
    "TAB_STOP",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "fit_ansi_line",
    "selected_with_ansi",
    "strip_ansi",
]
