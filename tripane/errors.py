"""Error taxonomy for browser commands.

Every ``BrowserError`` is non-fatal: command handlers catch it and surface
``message`` as a transient status line while navigation state stays put.
"""

from __future__ import annotations

from pathlib import Path


class BrowserError(Exception):
    """Base class for recoverable navigation/preview failures."""

    kind = "error"

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = path


class NotFound(BrowserError):
    kind = "not-found"

    @classmethod
    def for_path(cls, path: Path) -> NotFound:
        return cls(f"No such file or directory: {path}", path)


class PermissionDenied(BrowserError):
    kind = "permission-denied"

    @classmethod
    def for_path(cls, path: Path) -> PermissionDenied:
        return cls(f"Permission denied: {path}", path)


class IsRootPath(BrowserError):
    kind = "is-root"

    @classmethod
    def for_path(cls, path: Path) -> IsRootPath:
        return cls(f"Cannot select the filesystem root: {path}", path)


class FilteredEmpty(BrowserError):
    kind = "filtered-empty"

    @classmethod
    def for_path(cls, path: Path) -> FilteredEmpty:
        return cls(f"Filters are in effect: every entry of {path} is hidden", path)


class DirectoryEmpty(BrowserError):
    kind = "directory-empty"

    @classmethod
    def for_path(cls, path: Path) -> DirectoryEmpty:
        return cls(f"Directory is empty: {path}", path)


class IgnoredByPolicy(BrowserError):
    kind = "ignored-by-policy"

    @classmethod
    def for_path(cls, path: Path, detail: str) -> IgnoredByPolicy:
        return cls(f"Not previewed ({detail}): {path}", path)


class BrokenSymlink(BrowserError):
    kind = "broken-symlink"

    @classmethod
    def for_path(cls, path: Path) -> BrokenSymlink:
        return cls(f"Broken symbolic link: {path}", path)


class IOErrorOnOpen(BrowserError):
    kind = "io-error"

    @classmethod
    def from_os_error(cls, path: Path, exc: OSError) -> IOErrorOnOpen:
        reason = exc.strerror or str(exc)
        return cls(f"Cannot open {path}: {reason}", path)


def error_for_os_error(path: Path, exc: OSError) -> BrowserError:
    """Map an ``OSError`` raised while touching ``path`` onto the taxonomy."""
    if isinstance(exc, FileNotFoundError):
        return NotFound.for_path(path)
    if isinstance(exc, PermissionError):
        return PermissionDenied.for_path(path)
    return IOErrorOnOpen.from_os_error(path, exc)


class SessionActiveError(RuntimeError):
    """Raised when constructing a session while another one is active."""


__all__ = [
    "BrowserError",
    "NotFound",
    "PermissionDenied",
    "IsRootPath",
    "FilteredEmpty",
    "DirectoryEmpty",
    "IgnoredByPolicy",
    "BrokenSymlink",
    "IOErrorOnOpen",
    "SessionActiveError",
    "error_for_os_error",
]
