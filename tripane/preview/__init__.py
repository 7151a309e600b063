"""Preview pane model: identity, content viewer, and resource lifecycle."""

from __future__ import annotations

from .identity import PreviewIdentity, expected_preview_identity, true_path
from .resources import (
    RELEASE_DEFERRED,
    RELEASE_EAGER,
    STATE_CONTENT,
    STATE_NO_ENTRY,
    STATE_REASON,
    PreviewResourceManager,
    PreviewState,
    ResourcePool,
)
from .viewer import ContentViewer, PreviewResource

__all__ = [
    "ContentViewer",
    "PreviewIdentity",
    "PreviewResource",
    "PreviewResourceManager",
    "PreviewState",
    "ResourcePool",
    "RELEASE_EAGER",
    "RELEASE_DEFERRED",
    "STATE_NO_ENTRY",
    "STATE_REASON",
    "STATE_CONTENT",
    "expected_preview_identity",
    "true_path",
]
