"""Command surface that mutates a browser session.

Every command either completes its transition or raises a ``BrowserError``
before touching navigation state; ``run`` turns those errors into the
session's transient message. After a successful transition the preview is
refreshed so it always describes the selected child.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from ..errors import (
    BrokenSymlink,
    BrowserError,
    DirectoryEmpty,
    FilteredEmpty,
    IOErrorOnOpen,
    IsRootPath,
    NotFound,
    PermissionDenied,
)
from ..fs.classify import child_error, is_filesystem_root
from ..fs.types import Entry
from ..panes.kinds import PANE_CHILD, PANE_PREVIEW
from ..preview.identity import true_path
from .state import normalize_path

if TYPE_CHECKING:
    from ..session import Session

LOGGER = logging.getLogger(__name__)

COMMAND_NAMES = frozenset(
    {
        "move_cursor",
        "move_to_first",
        "move_to_last",
        "page",
        "ascend",
        "descend",
        "jump_to",
        "go_home",
        "toggle_filter",
        "search",
        "scroll_preview",
        "scroll_preview_page",
        "refresh",
        "adjust_parent_width",
        "toggle_help",
        "quit",
    }
)

# Cursor motions driven by incremental search; the layout is re-validated after each.
SEARCH_MOTIONS = frozenset({"search"})


def _index_of(entries: tuple[Entry, ...] | list[Entry], path: Path) -> int | None:
    for idx, entry in enumerate(entries):
        if entry.path == path:
            return idx
    return None


class Controller:
    def __init__(self, session: Session) -> None:
        self.session = session

    @property
    def state(self):
        return self.session.state

    def run(self, command: str, *args) -> bool:
        """Run one command to completion; return whether anything changed."""
        if command not in COMMAND_NAMES:
            raise ValueError(f"unknown command: {command!r}")
        session = self.session
        if not session.active:
            return False
        session.message = ""
        try:
            changed = bool(getattr(self, command)(*args))
        except BrowserError as exc:
            LOGGER.info("%s rejected: %s", command, exc.message)
            session.message = exc.message
            changed = False
        if session.active and command in SEARCH_MOTIONS:
            session.monitor.check(command)
        return changed

    # -- helpers ---------------------------------------------------------

    def _select(self, path: Path) -> None:
        self.state.select(path)
        self._sync_child_scroll()
        self.session.refresh_preview()

    def _sync_child_scroll(self) -> None:
        listing = self.session.child_listing()
        idx = _index_of(listing.visible, self.state.current_child)
        if idx is None:
            return
        rows = self.session.pane_rows(PANE_CHILD)
        start = self.state.child_start
        if idx < start:
            start = idx
        elif idx >= start + rows:
            start = idx - rows + 1
        self.state.child_start = max(0, start)

    def _nearest_visible(self, child: Path, direction: int) -> Path | None:
        """Return the visible neighbour of a child missing from the filtered listing."""
        listing = self.session.child_listing()
        if not listing.visible:
            return None
        visible = {entry.path for entry in listing.visible}
        position = _index_of(listing.entries, child)
        if position is None:
            return listing.visible[0].path if direction >= 0 else listing.visible[-1].path
        before = [entry.path for entry in listing.entries[:position] if entry.path in visible]
        after = [entry.path for entry in listing.entries[position + 1 :] if entry.path in visible]
        if direction >= 0:
            return after[0] if after else (before[-1] if before else None)
        return before[-1] if before else (after[0] if after else None)

    def descend_target(self, directory: Path) -> Path:
        """Return the child to select when entering ``directory``.

        Prefers the remembered child if it is still visible, then the first
        visible entry; a remembered child that was deleted is forgotten.
        Raises when nothing can be selected.
        """
        session = self.session
        if session.classifier.is_inaccessible_directory(directory):
            raise PermissionDenied.for_path(directory)
        visible = session.lister.list_filtered(directory)
        remembered = session.visited.lookup(directory)
        if remembered is not None:
            if _index_of(visible, remembered) is not None:
                return remembered
            if not os.path.lexists(remembered):
                session.visited.forget(directory)
        if visible:
            return visible[0].path
        if session.lister.list(directory):
            raise FilteredEmpty.for_path(directory)
        raise DirectoryEmpty.for_path(directory)

    # -- cursor ----------------------------------------------------------

    def move_cursor(self, delta: int) -> bool:
        """Move the cursor ``delta`` lines within the cached child listing."""
        if delta == 0:
            return False
        listing = self.session.child_listing()
        if not listing.visible:
            return False
        idx = _index_of(listing.visible, self.state.current_child)
        if idx is None:
            target = self._nearest_visible(self.state.current_child, delta)
            if target is None:
                return False
            self._select(target)
            return True
        new_idx = max(0, min(len(listing.visible) - 1, idx + delta))
        if new_idx == idx:
            return False
        self._select(listing.visible[new_idx].path)
        return True

    def move_to_first(self) -> bool:
        listing = self.session.child_listing()
        if not listing.visible or listing.visible[0].path == self.state.current_child:
            return False
        self._select(listing.visible[0].path)
        return True

    def move_to_last(self) -> bool:
        listing = self.session.child_listing()
        if not listing.visible or listing.visible[-1].path == self.state.current_child:
            return False
        self._select(listing.visible[-1].path)
        return True

    def page(self, direction: int) -> bool:
        rows = self.session.pane_rows(PANE_CHILD)
        return self.move_cursor(direction * max(1, rows - 1))

    # -- tree motion -----------------------------------------------------

    def ascend(self) -> bool:
        session = self.session
        child = self.state.current_child
        parent = self.state.parent
        if is_filesystem_root(parent):
            raise IsRootPath(f"Already at the filesystem root: {parent}", parent)
        if not session.classifier.is_unreadable(child):
            session.visited.record(child)
        self.state.child_start = 0
        self._select(parent)
        return True

    def descend(self) -> bool:
        session = self.session
        child = self.state.current_child
        if session.classifier.is_broken_symlink(child):
            raise BrokenSymlink.for_path(child)
        if not child.exists():
            raise NotFound.for_path(child)
        if child.is_dir():
            target = self.descend_target(child)
            self.state.child_start = 0
            self._select(target)
            return True

        resolved = true_path(child)
        try:
            with resolved.open("rb"):
                pass
        except OSError as exc:
            raise IOErrorOnOpen.from_os_error(child, exc) from exc
        session.hand_off(resolved)
        return True

    def jump_to(self, path: Path | str) -> bool:
        target = normalize_path(Path(path))
        error = child_error(target)
        if error is not None:
            raise error
        if target.is_dir():
            target = self.descend_target(target)
        self.state.child_start = 0
        self._select(target)
        return True

    def go_home(self) -> bool:
        return self.jump_to(Path.home())

    # -- filters and search ----------------------------------------------

    def toggle_filter(self, name: str) -> bool:
        session = self.session
        try:
            now_active = session.filters.toggle(name)
        except ValueError as exc:
            raise BrowserError(str(exc)) from exc
        session.relist()
        listing = session.child_listing()
        child = self.state.current_child
        if _index_of(listing.visible, child) is None:
            replacement = self._nearest_visible(child, 1)
            if replacement is not None:
                self.state.select(replacement)
        self._sync_child_scroll()
        session.refresh_preview()
        state_word = "on" if now_active else "off"
        session.message = f"Filter {name}: {state_word}"
        return True

    def search(self, query: str) -> bool:
        """Move to the next visible entry whose name contains ``query``.

        Matching is case-insensitive and starts at the cursor, wrapping around,
        so extending a query keeps the current match when it still fits.
        """
        if not query:
            return False
        listing = self.session.child_listing()
        entries = listing.visible
        if not entries:
            return False
        start = _index_of(entries, self.state.current_child) or 0
        folded = query.casefold()
        for offset in range(len(entries)):
            entry = entries[(start + offset) % len(entries)]
            if folded in entry.name.casefold():
                if entry.path == self.state.current_child:
                    return False
                self._select(entry.path)
                return True
        raise BrowserError(f"No entry matches {query!r}")

    # -- preview ---------------------------------------------------------

    def scroll_preview(self, delta: int) -> bool:
        resource = self.session.previews.active_resource
        if resource is None:
            return False
        rows = self.session.pane_rows(PANE_PREVIEW)
        max_start = max(0, len(resource.lines) - rows)
        new_start = max(0, min(max_start, self.state.preview_start + delta))
        if new_start == self.state.preview_start:
            return False
        self.state.preview_start = new_start
        return True

    def scroll_preview_page(self, direction: int) -> bool:
        rows = self.session.pane_rows(PANE_PREVIEW)
        return self.scroll_preview(direction * max(1, rows // 2))

    def refresh(self) -> bool:
        """Re-list and rebuild the preview, keeping the cursor if possible."""
        session = self.session
        child = self.state.current_child
        old_idx = _index_of(session.child_listing().visible, child)
        session.relist()
        session.previews.invalidate()
        listing = session.child_listing()
        if _index_of(listing.entries, child) is None and listing.visible:
            fallback = min(old_idx or 0, len(listing.visible) - 1)
            self.state.select(listing.visible[fallback].path)
        self._sync_child_scroll()
        session.refresh_preview()
        return True

    # -- layout ----------------------------------------------------------

    def adjust_parent_width(self, delta_percent: float) -> bool:
        return self.session.adjust_parent_width(delta_percent)

    def toggle_help(self) -> bool:
        self.session.toggle_help()
        return True

    def quit(self) -> bool:
        self.session.quit()
        return True


__all__ = [
    "COMMAND_NAMES",
    "SEARCH_MOTIONS",
    "Controller",
]
