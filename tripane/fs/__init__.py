"""Filesystem-facing primitives: entries, listing, filters, classification.

Nothing in this package knows about panes or sessions.
"""

from __future__ import annotations

from .classify import (
    PathClassifier,
    PreviewEligibility,
    child_error,
    format_size,
    is_filesystem_root,
    is_valid_child,
)
from .filters import FILTER_BACKUPS, FILTER_COMPILED, FILTER_DOTFILES, FilterChain
from .listing import DirectoryLister, ListDirectory, scan_directory
from .types import Entry

__all__ = [
    "Entry",
    "FilterChain",
    "FILTER_DOTFILES",
    "FILTER_BACKUPS",
    "FILTER_COMPILED",
    "DirectoryLister",
    "ListDirectory",
    "scan_directory",
    "PathClassifier",
    "PreviewEligibility",
    "child_error",
    "format_size",
    "is_filesystem_root",
    "is_valid_child",
]
