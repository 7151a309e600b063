"""Preview identity: what the preview pane is showing, independent of how.

``expected_preview_identity`` is the pure function of the selected child,
the filter chain and the classifier that the visible preview must agree
with. The layout monitor compares the two after every layout change.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ..fs.classify import PathClassifier
from ..fs.filters import FilterChain

IDENTITY_NONE = "none"
IDENTITY_REASON = "reason"
IDENTITY_FILE = "file"
IDENTITY_DIRECTORY = "directory"


@dataclass(frozen=True)
class PreviewIdentity:
    kind: str
    subject: Path | None = None
    filters: tuple[str, ...] = ()

    @classmethod
    def no_entry(cls) -> PreviewIdentity:
        return cls(IDENTITY_NONE)

    @classmethod
    def reason(cls, child: Path) -> PreviewIdentity:
        return cls(IDENTITY_REASON, child)

    @classmethod
    def file(cls, true_path: Path) -> PreviewIdentity:
        return cls(IDENTITY_FILE, true_path)

    @classmethod
    def directory(cls, true_path: Path, filters: tuple[str, ...] = ()) -> PreviewIdentity:
        return cls(IDENTITY_DIRECTORY, true_path, filters)

    def describes_same_target(self, other: PreviewIdentity) -> bool:
        """Return whether both identities are about the same entry.

        A failed acquisition degrades a file identity into a reason for the
        same child, which still counts as matching. Directory previews also
        have to agree on the filters their listing was built with.
        """
        if self.kind == IDENTITY_NONE or other.kind == IDENTITY_NONE:
            return self.kind == other.kind
        if self.kind == IDENTITY_DIRECTORY and other.kind == IDENTITY_DIRECTORY:
            return self.subject == other.subject and self.filters == other.filters
        return _same_path(self.subject, other.subject)


def _same_path(left: Path | None, right: Path | None) -> bool:
    if left is None or right is None:
        return left is right
    if left == right:
        return True
    try:
        return left.resolve() == right.resolve()
    except (OSError, RuntimeError):
        return False


def true_path(child: Path) -> Path:
    """Return the canonical path a preview of ``child`` is built from."""
    try:
        return child.resolve(strict=True)
    except (OSError, RuntimeError):
        return child


def display_target(child: Path) -> Path:
    """Follow at most one symlink hop, for titles like ``link -> target``."""
    if not os.path.islink(child):
        return child
    try:
        target = Path(os.readlink(child))
    except OSError:
        return child
    if not target.is_absolute():
        target = child.parent / target
    return Path(os.path.normpath(target))


def expected_preview_identity(
    child: Path | None,
    filters: FilterChain,
    classifier: PathClassifier,
) -> PreviewIdentity:
    if child is None:
        return PreviewIdentity.no_entry()
    eligibility = classifier.classify_for_preview(child)
    if not eligibility.eligible:
        return PreviewIdentity.reason(child)
    target = true_path(child)
    if target.is_dir():
        return PreviewIdentity.directory(target, filters.signature())
    return PreviewIdentity.file(target)


__all__ = [
    "IDENTITY_NONE",
    "IDENTITY_REASON",
    "IDENTITY_FILE",
    "IDENTITY_DIRECTORY",
    "PreviewIdentity",
    "display_target",
    "expected_preview_identity",
    "true_path",
]
