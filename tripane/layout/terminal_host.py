"""Terminal implementation of the layout host capability.

Panes are rectangles on a character grid: a top band across the full width,
then preview, parent and child columns from left to right separated by a
one-column divider. A pane that cannot get its minimum width after a resize
is not placed at all, which the layout monitor sees as a dead pane.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .host import (
    DIRECTION_ABOVE,
    DIRECTION_BELOW,
    DIRECTION_LEFT,
    DIRECTION_RIGHT,
    LayoutContract,
    LayoutHandles,
    LayoutHost,
    WindowInfo,
)

DIVIDER_WIDTH = 1
CHILD_SHARE = 0.45


@dataclass(frozen=True)
class Rect:
    """Zero-based cell rectangle."""

    col: int
    row: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.col + self.width

    @property
    def bottom(self) -> int:
        return self.row + self.height


def _overlaps(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    return start_a < end_b and start_b < end_a


def compute_pane_rects(columns: int, rows: int, contract: LayoutContract) -> dict[str, Rect]:
    """Return placements keyed by pane kind; panes that do not fit are omitted."""
    rects: dict[str, Rect] = {}
    if columns <= 0 or rows < contract.top_rows:
        return rects
    rects["top"] = Rect(0, 0, columns, contract.top_rows)

    body_row = contract.top_rows
    body_height = rows - contract.top_rows
    if body_height <= 0:
        return rects

    available = columns - 2 * DIVIDER_WIDTH
    parent_width = max(contract.min_pane_width, int(columns * contract.parent_percent / 100.0))
    rest = available - parent_width
    child_width = max(contract.min_pane_width, int(rest * CHILD_SHARE))
    preview_width = rest - child_width

    col = 0
    for kind, width in (("preview", preview_width), ("parent", parent_width), ("child", child_width)):
        if width >= contract.min_pane_width:
            rects[kind] = Rect(col, body_row, width, body_height)
        col += max(0, width) + DIVIDER_WIDTH
    return rects


class TerminalLayoutHost(LayoutHost):
    """Grid-backed host: the runtime draws whatever rectangles this reports."""

    def __init__(
        self,
        columns: int,
        rows: int,
        *,
        on_restore: Callable[[object], None] | None = None,
    ) -> None:
        self.columns = max(0, columns)
        self.rows = max(0, rows)
        self.contract = LayoutContract()
        self._on_restore = on_restore
        self._windows: dict[object, Rect] = {}
        self._transient: dict[object, Rect] = {}
        self._handles: LayoutHandles | None = None
        self._next_id = 1

    def _new_handle(self, label: str) -> str:
        handle = f"{label}#{self._next_id}"
        self._next_id += 1
        return handle

    def snapshot(self) -> object:
        return {
            "windows": dict(self._windows),
            "transient": dict(self._transient),
            "handles": self._handles,
        }

    def restore(self, snapshot: object) -> None:
        assert isinstance(snapshot, dict)
        self._windows = dict(snapshot["windows"])
        self._transient = dict(snapshot["transient"])
        self._handles = snapshot["handles"]
        if self._on_restore is not None:
            self._on_restore(snapshot)

    def create_panes(self, contract: LayoutContract) -> LayoutHandles:
        self.contract = contract
        self._handles = LayoutHandles(
            top=self._new_handle("top"),
            parent=self._new_handle("parent"),
            child=self._new_handle("child"),
            preview=self._new_handle("preview"),
        )
        self._place()
        return self._handles

    def _place(self) -> None:
        if self._handles is None:
            return
        rects = compute_pane_rects(self.columns, self.rows, self.contract)
        for kind in ("top", "parent", "child", "preview"):
            handle = self._handles.for_kind(kind)
            rect = rects.get(kind)
            if rect is None:
                self._windows.pop(handle, None)
            else:
                self._windows[handle] = rect

    def resize(self, columns: int, rows: int) -> None:
        """Re-place panes for a new terminal size (an external layout change)."""
        self.columns = max(0, columns)
        self.rows = max(0, rows)
        self._place()

    def apply_contract(self, contract: LayoutContract) -> None:
        self.contract = contract
        self._place()

    def pane_size(self, handle: object) -> tuple[int, int] | None:
        rect = self._windows.get(handle)
        if rect is None:
            return None
        return rect.width, rect.height

    def destroy(self, handle: object) -> None:
        self._windows.pop(handle, None)
        self._transient.pop(handle, None)

    def is_live(self, handle: object) -> bool:
        return handle in self._windows

    def rect(self, handle: object) -> Rect | None:
        return self._windows.get(handle) or self._transient.get(handle)

    def neighbor(self, handle: object, direction: str) -> object | None:
        rect = self._windows.get(handle)
        if rect is None:
            return None
        for other_handle, other in self._windows.items():
            if other_handle == handle:
                continue
            if direction == DIRECTION_LEFT:
                touches = other.right + DIVIDER_WIDTH == rect.col and _overlaps(
                    other.row, other.bottom, rect.row, rect.bottom
                )
            elif direction == DIRECTION_RIGHT:
                touches = rect.right + DIVIDER_WIDTH == other.col and _overlaps(
                    other.row, other.bottom, rect.row, rect.bottom
                )
            elif direction == DIRECTION_ABOVE:
                touches = other.bottom == rect.row and _overlaps(other.col, other.right, rect.col, rect.right)
            elif direction == DIRECTION_BELOW:
                touches = rect.bottom == other.row and _overlaps(other.col, other.right, rect.col, rect.right)
            else:
                raise ValueError(f"unknown direction: {direction!r}")
            if touches:
                return other_handle
        return None

    def open_transient(self, label: str, rect: Rect | None = None) -> object:
        """Show an overlay window (help, prompt) that does not count as a pane."""
        handle = self._new_handle(label)
        self._transient[handle] = rect or Rect(0, 0, self.columns, self.rows)
        return handle

    def close_transient(self, handle: object) -> None:
        self._transient.pop(handle, None)

    def visible_windows(self) -> list[WindowInfo]:
        windows = [WindowInfo(handle) for handle in self._windows]
        windows.extend(WindowInfo(handle, transient=True) for handle in self._transient)
        return windows


__all__ = [
    "CHILD_SHARE",
    "DIVIDER_WIDTH",
    "Rect",
    "TerminalLayoutHost",
    "compute_pane_rects",
]
