"""Browser session: the single active run from ``begin`` to ``quit``.

A session owns the navigation state, the visit history, the filter chain,
preview resources and the panes it asked the host to create. Only one
session may be active per process; ``toggle_session`` starts one or, when
one is already running, ends it.
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from pathlib import Path

from . import config as config_module
from .config import BrowserConfig
from .errors import BrowserError, IsRootPath, NotFound, SessionActiveError
from .fs.classify import PathClassifier, is_filesystem_root
from .fs.filters import FilterChain
from .fs.listing import DirectoryLister, ListDirectory, scan_directory
from .fs.types import Entry
from .layout.host import LayoutContract, LayoutHandles, LayoutHost
from .layout.monitor import LayoutMonitor
from .navigation.controller import Controller
from .navigation.state import NavigationState, VisitedBackward, normalize_path
from .panes.kinds import PANE_KINDS
from .preview.identity import PreviewIdentity, expected_preview_identity
from .preview.resources import PreviewResourceManager, PreviewState, ResourcePool
from .preview.viewer import ContentViewer
from .ui_theme import PLAIN_THEME, UITheme

LOGGER = logging.getLogger(__name__)

MIN_PARENT_PERCENT = 5.0
MAX_PARENT_PERCENT = 60.0


@dataclass(frozen=True)
class SessionContext:
    """Caller context used to pick a starting child when no path is given."""

    current_file: Path | None = None
    selected_entry: Path | None = None
    cwd: Path | None = None


@dataclass(frozen=True)
class DirectoryListing:
    """One listing of a directory under a given filter membership."""

    directory: Path
    filters: tuple[str, ...]
    entries: tuple[Entry, ...]
    visible: tuple[Entry, ...]
    error: BrowserError | None = None


class Session:
    _active: Session | None = None

    def __init__(
        self,
        host: LayoutHost,
        *,
        config: BrowserConfig | None = None,
        pool: ResourcePool | None = None,
        list_directory: ListDirectory = scan_directory,
        theme: UITheme = PLAIN_THEME,
        colorize: bool = False,
    ) -> None:
        if Session._active is not None:
            raise SessionActiveError("a browser session is already active")
        self.config = config or BrowserConfig()
        self.host = host
        self.filters = FilterChain(self.config.filters)
        self.lister = DirectoryLister(self.filters, list_directory)
        self.classifier = PathClassifier(self.config.ignored_extensions, self.config.max_preview_bytes)
        self.viewer = ContentViewer(self.lister, theme=theme, style=self.config.style, colorize=colorize)
        self.previews = PreviewResourceManager(self.viewer, self.classifier, pool, self.config.release_policy)
        self.visited = VisitedBackward()
        self.controller = Controller(self)
        self.theme = theme
        self.contract = LayoutContract(parent_percent=self.config.parent_pane_percent)
        self.state: NavigationState | None = None
        self.handles: LayoutHandles | None = None
        self.monitor: LayoutMonitor | None = None
        self.active = False
        self.message = ""
        self.teardown_reason: str | None = None
        self.handoff: Path | None = None
        self.help_handle: object | None = None
        self._snapshot: object | None = None
        self._listings: dict[str, DirectoryListing] = {}

    @classmethod
    def active_session(cls) -> Session | None:
        return cls._active

    # -- lifecycle -------------------------------------------------------

    def resolve_start_child(self, path: Path | None = None, context: SessionContext | None = None) -> Path:
        """Pick the initial child for ``begin``.

        With no path, an already-open file or selected entry from ``context``
        wins, then the current working directory. A directory with at least
        one visible entry starts descended into that entry; otherwise the
        path itself is the child.
        """
        if path is None:
            context = context or SessionContext()
            for candidate in (context.current_file, context.selected_entry):
                if candidate is None:
                    continue
                candidate = normalize_path(candidate)
                if candidate.exists() and not is_filesystem_root(candidate):
                    return candidate
            path = context.cwd or Path.cwd()

        path = normalize_path(path)
        if not path.exists() and not self.classifier.is_broken_symlink(path):
            raise NotFound.for_path(path)
        if path.is_dir():
            try:
                visible = self.lister.list_filtered(path)
            except BrowserError:
                visible = []
            if visible:
                return visible[0].path
        if is_filesystem_root(path):
            raise IsRootPath.for_path(path)
        return path

    def begin(self, path: Path | None = None, context: SessionContext | None = None) -> None:
        if Session._active is not None:
            raise SessionActiveError("a browser session is already active")
        child = self.resolve_start_child(path, context)
        self.state = NavigationState(child)
        self._snapshot = self.host.snapshot()
        self.handles = self.host.create_panes(self.contract)
        self.monitor = LayoutMonitor(
            self.host,
            self.contract,
            self.handles,
            expected_identity=self.expected_identity,
            displayed_identity=self.displayed_identity,
            teardown=self.teardown,
            exempt_commands=self.config.exempt_commands,
        )
        Session._active = self
        self.active = True
        LOGGER.info("session started at %s", child)
        self.relist()
        self.refresh_preview()

    def quit(self) -> None:
        """Release resources, destroy panes and restore the saved arrangement.

        Every step runs even when an earlier one raises, so a failing host
        call never leaves the saved arrangement unrestored.
        """
        if not self.active:
            return
        self.active = False
        help_handle, self.help_handle = self.help_handle, None
        handles = self.handles.all() if self.handles is not None else ()
        # Callbacks run in reverse order of registration.
        with contextlib.ExitStack() as stack:
            stack.callback(self._clear_active)
            if self._snapshot is not None:
                stack.callback(self.host.restore, self._snapshot)
            for handle in reversed(handles):
                stack.callback(self.host.destroy, handle)
            if help_handle is not None:
                stack.callback(self.host.close_transient, help_handle)
            stack.callback(self.previews.release_all)
        LOGGER.info("session ended")

    def _clear_active(self) -> None:
        if Session._active is self:
            Session._active = None
        self._listings.clear()

    def teardown(self, reason: str) -> None:
        self.teardown_reason = reason
        self.message = f"Browser closed: {reason}"
        self.quit()

    def hand_off(self, path: Path) -> None:
        """End the session so the external opener can take ``path``."""
        self.handoff = path
        self.quit()

    # -- listings and preview --------------------------------------------

    def _list(self, directory: Path) -> DirectoryListing:
        signature = self.filters.signature()
        try:
            entries = tuple(self.lister.list(directory))
            error = None
        except BrowserError as exc:
            entries = ()
            error = exc
        return DirectoryListing(directory, signature, entries, tuple(self.filters.apply(entries)), error)

    def _cached(self, slot: str, directory: Path) -> DirectoryListing:
        listing = self._listings.get(slot)
        if listing is None or listing.directory != directory or listing.filters != self.filters.signature():
            listing = self._list(directory)
            self._listings[slot] = listing
        return listing

    def relist(self) -> None:
        self._listings.clear()

    def child_listing(self) -> DirectoryListing:
        """Listing shown in the child pane (the selected child's directory)."""
        assert self.state is not None
        return self._cached("child", self.state.parent)

    def parent_listing(self) -> DirectoryListing | None:
        """Listing shown in the parent pane, or ``None`` when the parent is a root."""
        assert self.state is not None
        directory = self.state.parent
        if is_filesystem_root(directory):
            return None
        return self._cached("parent", directory.parent)

    def refresh_preview(self) -> PreviewState:
        assert self.state is not None
        return self.previews.preview(self.state.current_child)

    def expected_identity(self) -> PreviewIdentity:
        child = self.state.current_child if self.state is not None and self.active else None
        return expected_preview_identity(child, self.filters, self.classifier)

    def displayed_identity(self) -> PreviewIdentity:
        return self.previews.state.identity

    # -- layout ----------------------------------------------------------

    def pane_rows(self, kind: str) -> int:
        if self.handles is None or kind not in PANE_KINDS:
            return 1
        size = self.host.pane_size(self.handles.for_kind(kind))
        if size is None:
            return 1
        return max(1, size[1])

    def on_layout_change(self, command: str | None = None) -> bool:
        """Validate the layout after an external change; may end the session."""
        if not self.active or self.monitor is None:
            return False
        return self.monitor.check(command)

    def adjust_parent_width(self, delta_percent: float) -> bool:
        current = self.contract.parent_percent
        percent = max(MIN_PARENT_PERCENT, min(MAX_PARENT_PERCENT, current + delta_percent))
        if percent == current:
            return False
        self.contract = LayoutContract(
            rules=self.contract.rules,
            top_rows=self.contract.top_rows,
            parent_percent=percent,
            min_pane_width=self.contract.min_pane_width,
        )
        if self.monitor is not None:
            self.monitor.contract = self.contract
        self.host.apply_contract(self.contract)
        config_module.save_parent_pane_percent(percent)
        self.on_layout_change("adjust_parent_width")
        return True

    def toggle_help(self) -> None:
        if self.help_handle is None:
            self.help_handle = self.host.open_transient("help")
        else:
            self.host.close_transient(self.help_handle)
            self.help_handle = None
        self.on_layout_change("toggle_help")


def start_session(
    host: LayoutHost,
    path: Path | None = None,
    *,
    context: SessionContext | None = None,
    **options,
) -> Session:
    """Create and begin a session; raises ``SessionActiveError`` if one runs."""
    session = Session(host, **options)
    session.begin(path, context)
    return session


def toggle_session(
    host: LayoutHost,
    path: Path | None = None,
    *,
    context: SessionContext | None = None,
    **options,
) -> Session | None:
    """Start a session, or end the active one and return ``None``."""
    active = Session.active_session()
    if active is not None:
        active.quit()
        return None
    return start_session(host, path, context=context, **options)


__all__ = [
    "DirectoryListing",
    "Session",
    "SessionContext",
    "start_session",
    "toggle_session",
]
