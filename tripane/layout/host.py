"""Host UI capability interface and the four-pane layout contract.

A host places panes and answers two geometric questions: is a pane still
live, and which pane sits next to it in a direction. The contract is the
adjacency pattern the browser expects; any toolkit that can answer those
questions can host it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..panes.kinds import PANE_CHILD, PANE_KINDS, PANE_PARENT, PANE_PREVIEW, PANE_TOP

DIRECTION_LEFT = "left"
DIRECTION_RIGHT = "right"
DIRECTION_ABOVE = "above"
DIRECTION_BELOW = "below"

TOP_BAND_ROWS = 2
DEFAULT_PARENT_PERCENT = 20.0
MIN_PANE_WIDTH = 8


@dataclass(frozen=True)
class AdjacencyRule:
    """``neighbor`` must be the pane found from ``pane`` towards ``direction``."""

    pane: str
    direction: str
    neighbor: str


DEFAULT_ADJACENCY: tuple[AdjacencyRule, ...] = (
    AdjacencyRule(PANE_CHILD, DIRECTION_LEFT, PANE_PARENT),
    AdjacencyRule(PANE_PARENT, DIRECTION_LEFT, PANE_PREVIEW),
    AdjacencyRule(PANE_CHILD, DIRECTION_ABOVE, PANE_TOP),
)


@dataclass(frozen=True)
class LayoutContract:
    """Declarative placement request plus the adjacency rules to verify.

    Top is a fixed band, parent a fixed-percentage column, child the main
    working area, and preview takes the remaining width.
    """

    rules: tuple[AdjacencyRule, ...] = DEFAULT_ADJACENCY
    top_rows: int = TOP_BAND_ROWS
    parent_percent: float = DEFAULT_PARENT_PERCENT
    min_pane_width: int = MIN_PANE_WIDTH


@dataclass(frozen=True)
class LayoutHandles:
    """Opaque references to the four live panes."""

    top: object
    parent: object
    child: object
    preview: object

    def for_kind(self, kind: str) -> object:
        if kind not in PANE_KINDS:
            raise KeyError(kind)
        return getattr(self, kind)

    def all(self) -> tuple[object, ...]:
        return (self.top, self.parent, self.child, self.preview)


@dataclass(frozen=True)
class WindowInfo:
    handle: object
    transient: bool = False


class LayoutHost:
    """Capability interface implemented by host UIs.

    ``snapshot``/``restore`` capture and reinstate whatever arrangement
    existed before a session; ``restore`` must bring it back exactly.
    """

    def snapshot(self) -> object:
        raise NotImplementedError

    def restore(self, snapshot: object) -> None:
        raise NotImplementedError

    def create_panes(self, contract: LayoutContract) -> LayoutHandles:
        raise NotImplementedError

    def apply_contract(self, contract: LayoutContract) -> None:
        """Re-place existing panes under an updated contract."""
        raise NotImplementedError

    def pane_size(self, handle: object) -> tuple[int, int] | None:
        """Return ``(width, height)`` of a live pane."""
        raise NotImplementedError

    def open_transient(self, label: str) -> object:
        raise NotImplementedError

    def close_transient(self, handle: object) -> None:
        raise NotImplementedError

    def destroy(self, handle: object) -> None:
        raise NotImplementedError

    def is_live(self, handle: object) -> bool:
        raise NotImplementedError

    def neighbor(self, handle: object, direction: str) -> object | None:
        raise NotImplementedError

    def visible_windows(self) -> list[WindowInfo]:
        raise NotImplementedError


__all__ = [
    "DIRECTION_LEFT",
    "DIRECTION_RIGHT",
    "DIRECTION_ABOVE",
    "DIRECTION_BELOW",
    "TOP_BAND_ROWS",
    "DEFAULT_PARENT_PERCENT",
    "MIN_PANE_WIDTH",
    "AdjacencyRule",
    "DEFAULT_ADJACENCY",
    "LayoutContract",
    "LayoutHandles",
    "LayoutHost",
    "WindowInfo",
]
