"""Path classification for preview eligibility, styling, and navigability.

Classification is pure with respect to browser state: it only inspects the
filesystem, so it is re-run on every preview attempt instead of cached.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..errors import BrokenSymlink, BrowserError, IgnoredByPolicy, IsRootPath, NotFound, PermissionDenied
from .types import STYLE_BROKEN_SYMLINK, STYLE_DIRECTORY, STYLE_FILE, STYLE_SYMLINK

ELIGIBLE = "eligible"
IGNORED_BY_EXTENSION = "ignored-by-extension"
TOO_LARGE = "too-large"
BROKEN_SYMLINK = "broken-symlink"
PERMISSION_DENIED = "permission-denied"
NOT_FOUND = "not-found"

DEFAULT_MAX_PREVIEW_BYTES = 10 * 1024 * 1024
DEFAULT_IGNORED_EXTENSIONS: tuple[str, ...] = (
    "iso",
    "dmg",
    "img",
    "vmdk",
    "qcow2",
    "mkv",
    "mp4",
    "avi",
    "mov",
    "mp3",
    "flac",
    "zip",
    "tar",
    "gz",
    "xz",
    "bz2",
    "7z",
    "rar",
)


def format_size(size: int) -> str:
    """Format a byte count with one decimal and a binary unit suffix."""
    value = float(size)
    for unit in ("B", "K", "M", "G", "T"):
        if value < 1024.0 or unit == "T":
            if unit == "B":
                return f"{int(value)}{unit}"
            return f"{value:.1f}{unit}"
        value /= 1024.0
    return f"{size}B"


def is_filesystem_root(path: Path) -> bool:
    return path.parent == path


@dataclass(frozen=True)
class PreviewEligibility:
    """Outcome of ``classify_for_preview`` for one path."""

    status: str
    extension: str | None = None
    size: int | None = None

    @property
    def eligible(self) -> bool:
        return self.status == ELIGIBLE

    @property
    def reason(self) -> str:
        if self.status == IGNORED_BY_EXTENSION:
            return f"ignored by policy: .{self.extension} files are not previewed"
        if self.status == TOO_LARGE:
            return f"ignored by policy: file too large ({format_size(self.size or 0)})"
        if self.status == BROKEN_SYMLINK:
            return "broken symbolic link"
        if self.status == PERMISSION_DENIED:
            return "permission denied"
        if self.status == NOT_FOUND:
            return "no such file or directory"
        return ""

    def error_for(self, path: Path) -> BrowserError | None:
        """Return the error matching this outcome, or ``None`` when eligible."""
        if self.status == IGNORED_BY_EXTENSION:
            return IgnoredByPolicy.for_path(path, f".{self.extension} files are ignored")
        if self.status == TOO_LARGE:
            return IgnoredByPolicy.for_path(path, f"{format_size(self.size or 0)} is over the size limit")
        if self.status == BROKEN_SYMLINK:
            return BrokenSymlink.for_path(path)
        if self.status == PERMISSION_DENIED:
            return PermissionDenied.for_path(path)
        if self.status == NOT_FOUND:
            return NotFound.for_path(path)
        return None


class PathClassifier:
    """Decide whether a path may be previewed and how it is styled."""

    def __init__(
        self,
        ignored_extensions: Iterable[str] = DEFAULT_IGNORED_EXTENSIONS,
        max_preview_bytes: int = DEFAULT_MAX_PREVIEW_BYTES,
    ) -> None:
        self.ignored_extensions = frozenset(ext.lower().lstrip(".") for ext in ignored_extensions)
        self.max_preview_bytes = max(0, int(max_preview_bytes))

    def classify_for_preview(self, path: Path) -> PreviewEligibility:
        if not os.path.lexists(path):
            return PreviewEligibility(NOT_FOUND)
        if os.path.islink(path) and not os.path.exists(path):
            return PreviewEligibility(BROKEN_SYMLINK)

        try:
            target = path.resolve()
        except (OSError, RuntimeError):
            return PreviewEligibility(BROKEN_SYMLINK)

        if target.is_dir():
            if not os.access(target, os.R_OK | os.X_OK):
                return PreviewEligibility(PERMISSION_DENIED)
            return PreviewEligibility(ELIGIBLE)

        extension = target.suffix.lower().lstrip(".")
        if extension and extension in self.ignored_extensions:
            return PreviewEligibility(IGNORED_BY_EXTENSION, extension=extension)
        try:
            size = int(target.stat().st_size)
        except PermissionError:
            return PreviewEligibility(PERMISSION_DENIED)
        except OSError:
            return PreviewEligibility(NOT_FOUND)
        if size > self.max_preview_bytes:
            return PreviewEligibility(TOO_LARGE, size=size)
        if not os.access(target, os.R_OK):
            return PreviewEligibility(PERMISSION_DENIED)
        return PreviewEligibility(ELIGIBLE)

    @staticmethod
    def entry_kind(path: Path) -> str:
        """Return the styling class of ``path``."""
        if os.path.islink(path):
            return STYLE_SYMLINK if os.path.exists(path) else STYLE_BROKEN_SYMLINK
        if path.is_dir():
            return STYLE_DIRECTORY
        return STYLE_FILE

    @staticmethod
    def is_broken_symlink(path: Path) -> bool:
        return os.path.islink(path) and not os.path.exists(path)

    @staticmethod
    def is_inaccessible_directory(path: Path) -> bool:
        return path.is_dir() and not os.access(path, os.R_OK | os.X_OK)

    def is_unreadable(self, path: Path) -> bool:
        """Return whether ``path`` cannot be read (missing, broken, or denied)."""
        if self.is_broken_symlink(path) or not os.path.lexists(path):
            return True
        mode = os.R_OK | os.X_OK if path.is_dir() else os.R_OK
        return not os.access(path, mode)


def child_error(path: Path) -> BrowserError | None:
    """Return why ``path`` cannot be the selected child, or ``None``.

    Readability and preview policy are separate concerns and never make a
    path unnavigable; only missing paths and filesystem roots do.
    """
    if is_filesystem_root(path):
        return IsRootPath.for_path(path)
    if not os.path.lexists(path):
        return NotFound.for_path(path)
    return None


def is_valid_child(path: Path) -> bool:
    return child_error(path) is None


__all__ = [
    "ELIGIBLE",
    "IGNORED_BY_EXTENSION",
    "TOO_LARGE",
    "BROKEN_SYMLINK",
    "PERMISSION_DENIED",
    "NOT_FOUND",
    "DEFAULT_MAX_PREVIEW_BYTES",
    "DEFAULT_IGNORED_EXTENSIONS",
    "PreviewEligibility",
    "PathClassifier",
    "child_error",
    "format_size",
    "is_filesystem_root",
    "is_valid_child",
]
