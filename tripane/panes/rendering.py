"""Render functions for the four browser panes.

Each pane kind has exactly one renderer, chosen through ``PANE_RENDERERS``.
Renderers read the session and return exactly ``height`` lines, each fitted
to ``width`` cells; they never mutate navigation state.
"""

from __future__ import annotations

import os
import stat
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..ansi import display_width, fit_ansi_line, selected_with_ansi
from ..fs.classify import format_size
from ..fs.types import Entry
from ..preview.resources import STATE_CONTENT, STATE_REASON
from .kinds import PANE_CHILD, PANE_PARENT, PANE_PREVIEW, PANE_TOP

if TYPE_CHECKING:
    from ..session import Session

PLAIN_CURSOR = "> "


@dataclass(frozen=True)
class PaneContext:
    session: Session
    width: int
    height: int

    @property
    def theme(self):
        return self.session.theme


def _styled(color: str, text: str, reset: str) -> str:
    return f"{color}{text}{reset}" if color else text


def _fill(lines: list[str], ctx: PaneContext) -> list[str]:
    fitted = [fit_ansi_line(line, ctx.width) for line in lines[: ctx.height]]
    fitted.extend(" " * ctx.width for _ in range(ctx.height - len(fitted)))
    return fitted


def _window_start(cursor: int | None, preferred: int, rows: int, total: int) -> int:
    """Return the first visible row so ``cursor`` stays on screen."""
    start = max(0, min(preferred, max(0, total - rows)))
    if cursor is None:
        return start
    if cursor < start:
        return cursor
    if cursor >= start + rows:
        return cursor - rows + 1
    return start


def _entry_row(entry: Entry, theme, width: int, *, show_size: bool) -> str:
    label = theme.entry_label(entry)
    if not show_size or entry.is_dir or entry.symlink_target is not None:
        return label
    size_text = format_size(entry.size)
    gap = max(1, width - display_width(label) - len(size_text))
    return f"{label}{' ' * gap}{_styled(theme.entry_size, size_text, theme.reset)}"


def _entry_lines(
    entries: tuple[Entry, ...],
    selected_path,
    preferred_start: int,
    ctx: PaneContext,
    *,
    show_size: bool,
) -> list[str]:
    """Render a window of ``entries`` with the selected one highlighted.

    Without a reverse-video style (plain theme) a two-column ``> `` gutter
    marks the selection instead.
    """
    theme = ctx.theme
    gutter = 0 if theme.reverse else len(PLAIN_CURSOR)
    width = max(0, ctx.width - gutter)
    cursor = next((idx for idx, entry in enumerate(entries) if entry.path == selected_path), None)
    start = _window_start(cursor, preferred_start, ctx.height, len(entries))
    lines: list[str] = []
    for idx in range(start, min(len(entries), start + ctx.height)):
        row = fit_ansi_line(_entry_row(entries[idx], theme, width, show_size=show_size), width)
        if theme.reverse:
            if idx == cursor:
                row = selected_with_ansi(row, theme.reverse)
        else:
            row = (PLAIN_CURSOR if idx == cursor else " " * gutter) + row
        lines.append(row)
    return lines


def describe_entry(path) -> str:
    """Return ``ls -l`` style details for ``path`` (mode, size, mtime)."""
    try:
        info = os.lstat(path)
    except OSError as exc:
        return f"({exc.strerror or 'unavailable'})"
    mode = stat.filemode(info.st_mode)
    mtime = time.strftime("%Y-%m-%d %H:%M", time.localtime(info.st_mtime))
    parts = [mode, format_size(info.st_size), mtime]
    if stat.S_ISLNK(info.st_mode):
        try:
            parts.append(f"-> {os.readlink(path)}")
        except OSError:
            pass
    return "  ".join(parts)


def render_top(ctx: PaneContext) -> list[str]:
    session = ctx.session
    theme = ctx.theme
    child = session.state.current_child
    listing = session.child_listing()
    position = next((idx for idx, entry in enumerate(listing.visible) if entry.path == child), None)

    first = _styled(theme.top_path, str(child), theme.reset)
    if session.message:
        second = _styled(theme.message_error, session.message, theme.reset)
    else:
        details = [describe_entry(child)]
        if position is not None:
            details.append(f"{position + 1}/{len(listing.visible)}")
        if session.filters.active:
            details.append(f"[{session.filters.describe()}]")
        second = _styled(theme.top_detail, "  ".join(details), theme.reset)
    return _fill([first, second], ctx)


def render_parent(ctx: PaneContext) -> list[str]:
    session = ctx.session
    theme = ctx.theme
    parent = session.state.parent
    listing = session.parent_listing()
    if listing is None:
        label = _styled(theme.entry_directory, str(parent), theme.reset)
        if theme.reverse:
            return _fill([selected_with_ansi(fit_ansi_line(label, ctx.width), theme.reverse)], ctx)
        return _fill([PLAIN_CURSOR + label], ctx)
    if listing.error is not None:
        return _fill([_styled(theme.message_error, f"({listing.error.message})", theme.reset)], ctx)
    entries = listing.visible
    if all(entry.path != parent for entry in entries):
        entries = listing.entries
    return _fill(_entry_lines(entries, parent, 0, ctx, show_size=False), ctx)


def render_child(ctx: PaneContext) -> list[str]:
    session = ctx.session
    theme = ctx.theme
    listing = session.child_listing()
    if listing.error is not None:
        return _fill([_styled(theme.message_error, f"({listing.error.message})", theme.reset)], ctx)
    if not listing.visible:
        if listing.entries:
            hidden = len(listing.entries)
            text = f"(all {hidden} entries hidden by filters)"
        else:
            text = "(empty)"
        return _fill([_styled(theme.help_dim, text, theme.reset)], ctx)
    state = session.state
    return _fill(
        _entry_lines(listing.visible, state.current_child, state.child_start, ctx, show_size=True),
        ctx,
    )


def render_preview(ctx: PaneContext) -> list[str]:
    session = ctx.session
    theme = ctx.theme
    preview = session.previews.state
    if preview.status == STATE_REASON:
        return _fill([_styled(theme.preview_reason, preview.reason, theme.reset)], ctx)
    if preview.status != STATE_CONTENT or preview.resource is None:
        return _fill([_styled(theme.help_dim, "(no entry)", theme.reset)], ctx)

    resource = preview.resource
    title = _styled(theme.preview_title, resource.title, theme.reset)
    start = session.state.preview_start
    body = resource.lines[start : start + max(0, ctx.height - 1)]
    if not resource.lines and resource.is_directory:
        body = [_styled(theme.help_dim, "(empty)", theme.reset)]
    return _fill([title, *body], ctx)


PANE_RENDERERS: dict[str, Callable[[PaneContext], list[str]]] = {
    PANE_TOP: render_top,
    PANE_PARENT: render_parent,
    PANE_CHILD: render_child,
    PANE_PREVIEW: render_preview,
}


def render_pane(kind: str, ctx: PaneContext) -> list[str]:
    """Render one pane by kind; unknown kinds raise ``KeyError``."""
    renderer = PANE_RENDERERS[kind]
    if ctx.width <= 0 or ctx.height <= 0:
        return []
    return renderer(ctx)


__all__ = [
    "PANE_RENDERERS",
    "PaneContext",
    "describe_entry",
    "render_child",
    "render_pane",
    "render_parent",
    "render_preview",
    "render_top",
]
