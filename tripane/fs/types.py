"""Domain datatypes for directory listing entries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

KIND_DIRECTORY = "directory"
KIND_FILE = "file"
KIND_SYMLINK = "symlink"

STYLE_DIRECTORY = "directory"
STYLE_FILE = "file"
STYLE_SYMLINK = "symlink"
STYLE_BROKEN_SYMLINK = "broken-symlink"


@dataclass(frozen=True)
class Entry:
    """One listed child of a directory, observed at listing time."""

    name: str
    path: Path
    kind: str
    size: int = 0
    readable: bool = True
    symlink_target: Path | None = None
    broken: bool = False
    target_is_dir: bool = False

    @property
    def is_dir(self) -> bool:
        """Return whether the entry sorts and navigates as a directory."""
        if self.kind == KIND_DIRECTORY:
            return True
        return self.kind == KIND_SYMLINK and not self.broken and self.target_is_dir

    @property
    def style_class(self) -> str:
        if self.kind == KIND_SYMLINK:
            return STYLE_BROKEN_SYMLINK if self.broken else STYLE_SYMLINK
        if self.kind == KIND_DIRECTORY:
            return STYLE_DIRECTORY
        return STYLE_FILE


__all__ = [
    "KIND_DIRECTORY",
    "KIND_FILE",
    "KIND_SYMLINK",
    "STYLE_DIRECTORY",
    "STYLE_FILE",
    "STYLE_SYMLINK",
    "STYLE_BROKEN_SYMLINK",
    "Entry",
]
