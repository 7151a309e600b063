"""Cursor model and per-directory visit history.

This module has no UI concerns. Paths are kept absolute but unresolved so a
symlinked directory is browsed under the name the user reached it by.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..errors import IsRootPath
from ..fs.classify import is_filesystem_root

MAX_VISITED_ENTRIES = 256


def normalize_path(path: Path) -> Path:
    """Return an absolute, lexically normalized path without resolving links."""
    return Path(os.path.abspath(os.path.expanduser(str(path))))


@dataclass
class NavigationState:
    """Currently selected child plus per-pane scroll offsets.

    ``current_child`` is never a filesystem root; roots can only appear as a
    parent.
    """

    current_child: Path
    child_start: int = 0
    preview_start: int = 0

    def __post_init__(self) -> None:
        self.current_child = self._checked(self.current_child)

    @staticmethod
    def _checked(path: Path) -> Path:
        normalized = normalize_path(path)
        if is_filesystem_root(normalized):
            raise IsRootPath.for_path(normalized)
        return normalized

    @property
    def parent(self) -> Path:
        return self.current_child.parent

    def select(self, path: Path) -> None:
        """Move the cursor to ``path``; the preview scroll restarts at the top."""
        self.current_child = self._checked(path)
        self.preview_start = 0


class VisitedBackward:
    """Remembered last child per ascended-from directory.

    Holds at most one entry per parent directory; recording a child evicts any
    older entry for the same parent. Order is oldest first.
    """

    def __init__(self, max_entries: int = MAX_VISITED_ENTRIES) -> None:
        self.max_entries = max(1, max_entries)
        self._entries: list[Path] = []

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[Path, ...]:
        return tuple(self._entries)

    def record(self, child: Path) -> None:
        child = normalize_path(child)
        parent = child.parent
        self._entries = [entry for entry in self._entries if entry.parent != parent]
        self._entries.append(child)
        overflow = len(self._entries) - self.max_entries
        if overflow > 0:
            del self._entries[:overflow]

    def lookup(self, directory: Path) -> Path | None:
        """Return the remembered child of ``directory``, if any."""
        directory = normalize_path(directory)
        for entry in reversed(self._entries):
            if entry.parent == directory:
                return entry
        return None

    def forget(self, directory: Path) -> None:
        directory = normalize_path(directory)
        self._entries = [entry for entry in self._entries if entry.parent != directory]

    def clear(self) -> None:
        self._entries.clear()


__all__ = [
    "MAX_VISITED_ENTRIES",
    "NavigationState",
    "VisitedBackward",
    "normalize_path",
]
