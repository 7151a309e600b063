"""Pane kinds and their renderers."""

from __future__ import annotations

from .kinds import PANE_CHILD, PANE_KINDS, PANE_PARENT, PANE_PREVIEW, PANE_TOP
from .rendering import PANE_RENDERERS, PaneContext, render_pane

__all__ = [
    "PANE_CHILD",
    "PANE_KINDS",
    "PANE_PARENT",
    "PANE_PREVIEW",
    "PANE_RENDERERS",
    "PANE_TOP",
    "PaneContext",
    "render_pane",
]
