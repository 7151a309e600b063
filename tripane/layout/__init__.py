"""Pane placement contract, terminal host, and consistency monitor."""

from __future__ import annotations

from .host import (
    DIRECTION_ABOVE,
    DIRECTION_BELOW,
    DIRECTION_LEFT,
    DIRECTION_RIGHT,
    AdjacencyRule,
    LayoutContract,
    LayoutHandles,
    LayoutHost,
    WindowInfo,
)
from .monitor import LayoutMonitor
from .terminal_host import Rect, TerminalLayoutHost, compute_pane_rects

__all__ = [
    "DIRECTION_ABOVE",
    "DIRECTION_BELOW",
    "DIRECTION_LEFT",
    "DIRECTION_RIGHT",
    "AdjacencyRule",
    "LayoutContract",
    "LayoutHandles",
    "LayoutHost",
    "LayoutMonitor",
    "Rect",
    "TerminalLayoutHost",
    "WindowInfo",
    "compute_pane_rects",
]
