"""Pane kind tags shared by renderers and layout hosts."""

from __future__ import annotations

PANE_TOP = "top"
PANE_PARENT = "parent"
PANE_CHILD = "child"
PANE_PREVIEW = "preview"

PANE_KINDS: tuple[str, ...] = (PANE_TOP, PANE_PARENT, PANE_CHILD, PANE_PREVIEW)

__all__ = [
    "PANE_TOP",
    "PANE_PARENT",
    "PANE_CHILD",
    "PANE_PREVIEW",
    "PANE_KINDS",
]
