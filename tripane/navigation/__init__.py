"""Navigation state machine: cursor model, visit history, and commands."""

from __future__ import annotations

from .controller import COMMAND_NAMES, SEARCH_MOTIONS, Controller
from .state import NavigationState, VisitedBackward, normalize_path

__all__ = [
    "COMMAND_NAMES",
    "SEARCH_MOTIONS",
    "Controller",
    "NavigationState",
    "VisitedBackward",
    "normalize_path",
]
