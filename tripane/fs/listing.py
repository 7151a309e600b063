"""Directory listing capability plus ordering and filtering.

``scan_directory`` is the default listing primitive. ``DirectoryLister``
wraps any capability with the same shape, orders the result (directories
first, then case-folded name) and applies the active ``FilterChain``.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

from ..errors import error_for_os_error
from .filters import FilterChain
from .types import KIND_DIRECTORY, KIND_FILE, KIND_SYMLINK, Entry

ListDirectory = Callable[[Path], Iterable[Entry]]

_DOT_NAMES = frozenset({".", ".."})


def _entry_from_dir_entry(child: os.DirEntry[str]) -> Entry:
    """Build an ``Entry`` from one ``os.scandir`` result."""
    child_path = Path(child.path)
    try:
        is_link = child.is_symlink()
    except OSError:
        is_link = False

    if is_link:
        try:
            target = Path(os.readlink(child_path))
        except OSError:
            target = None
        try:
            target_stat = child.stat(follow_symlinks=True)
        except OSError:
            return Entry(
                name=child.name,
                path=child_path,
                kind=KIND_SYMLINK,
                size=0,
                readable=False,
                symlink_target=target,
                broken=True,
            )
        target_is_dir = child.is_dir(follow_symlinks=True)
        return Entry(
            name=child.name,
            path=child_path,
            kind=KIND_SYMLINK,
            size=0 if target_is_dir else int(target_stat.st_size),
            readable=os.access(child_path, os.R_OK),
            symlink_target=target,
            target_is_dir=target_is_dir,
        )

    try:
        is_dir = child.is_dir(follow_symlinks=False)
    except OSError:
        is_dir = False
    size = 0
    if not is_dir:
        try:
            size = int(child.stat(follow_symlinks=False).st_size)
        except OSError:
            size = 0
    mode = os.R_OK | os.X_OK if is_dir else os.R_OK
    return Entry(
        name=child.name,
        path=child_path,
        kind=KIND_DIRECTORY if is_dir else KIND_FILE,
        size=size,
        readable=os.access(child_path, mode),
    )


def scan_directory(directory: Path) -> list[Entry]:
    """List ``directory`` with ``os.scandir``; raises ``OSError`` on failure."""
    with os.scandir(directory) as entries:
        return [_entry_from_dir_entry(child) for child in entries if child.name not in _DOT_NAMES]


def entry_sort_key(entry: Entry) -> tuple[bool, str, str]:
    return (not entry.is_dir, entry.name.casefold(), entry.name)


class DirectoryLister:
    """Ordered, filterable view over a listing capability."""

    def __init__(self, filters: FilterChain | None = None, list_directory: ListDirectory = scan_directory) -> None:
        self.filters = filters if filters is not None else FilterChain()
        self._list_directory = list_directory

    def list(self, directory: Path) -> list[Entry]:
        """Return every entry of ``directory`` in display order.

        Raises ``NotFound``/``PermissionDenied``/``IOErrorOnOpen`` when the
        directory cannot be listed. An empty directory yields ``[]``.
        """
        try:
            raw = list(self._list_directory(directory))
        except OSError as exc:
            raise error_for_os_error(directory, exc) from exc
        entries = [entry for entry in raw if entry.name not in _DOT_NAMES]
        entries.sort(key=entry_sort_key)
        return entries

    def list_filtered(self, directory: Path) -> list[Entry]:
        """Return ``list(directory)`` with the active filters applied."""
        return self.filters.apply(self.list(directory))


__all__ = [
    "ListDirectory",
    "scan_directory",
    "entry_sort_key",
    "DirectoryLister",
]
