"""Frame composition: pane renderings placed on the terminal grid.

Pure with respect to session state; the loop writes the returned rows.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..ansi import display_width, fit_ansi_line
from ..layout.terminal_host import DIVIDER_WIDTH, TerminalLayoutHost
from ..panes import PANE_KINDS, PANE_TOP, PaneContext, render_pane
from .keymap import help_lines

if TYPE_CHECKING:
    from ..session import Session

DIVIDER_GLYPH = "│"


def _join_row(segments: list[tuple[int, str]], columns: int, divider: str, reset: str) -> str:
    parts: list[str] = []
    pos = 0
    for col, text in sorted(segments, key=lambda item: item[0]):
        gap = col - pos
        if gap == DIVIDER_WIDTH and pos > 0:
            parts.append(f"{divider}{DIVIDER_GLYPH}{reset}" if divider else DIVIDER_GLYPH)
        elif gap > 0:
            parts.append(" " * gap)
        parts.append(text)
        pos = col + display_width(text)
    if pos < columns:
        parts.append(" " * (columns - pos))
    return "".join(parts)


def compose_frame(
    session: Session,
    host: TerminalLayoutHost,
    *,
    prompt: str | None = None,
) -> list[str]:
    """Return one string per terminal row for the current session."""
    columns, rows = host.columns, host.rows
    theme = session.theme
    segments: list[list[tuple[int, str]]] = [[] for _ in range(rows)]
    if session.handles is None:
        return [" " * columns for _ in range(rows)]

    for kind in PANE_KINDS:
        rect = host.rect(session.handles.for_kind(kind))
        if rect is None:
            continue
        lines = render_pane(kind, PaneContext(session, rect.width, rect.height))
        if kind == PANE_TOP and prompt is not None and lines:
            lines[-1] = fit_ansi_line(prompt, rect.width)
        for offset, line in enumerate(lines):
            row = rect.row + offset
            if row < rows:
                segments[row].append((rect.col, line))

    frame = [_join_row(row_segments, columns, theme.divider, theme.reset) for row_segments in segments]

    if session.help_handle is not None:
        rect = host.rect(session.help_handle)
        if rect is not None:
            overlay = help_lines(theme)
            for offset in range(min(rect.height, rows - rect.row)):
                text = overlay[offset] if offset < len(overlay) else ""
                frame[rect.row + offset] = fit_ansi_line(text, columns)
    return frame


def render_text(session: Session, host: TerminalLayoutHost) -> str:
    """Render the current frame as text with trailing blanks removed."""
    rows = [row.rstrip() for row in compose_frame(session, host)]
    return "\n".join(rows).rstrip("\n") + "\n"


__all__ = ["DIVIDER_GLYPH", "compose_frame", "render_text"]
