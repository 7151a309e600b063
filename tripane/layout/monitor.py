"""Layout consistency monitor.

Run after every external layout-change signal and after search-style cursor
motion. A broken layout is not a user error: the only recovery is a full
teardown of the session, unless the triggering command is exempt because it
is expected to look inconsistent while it runs.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ..preview.identity import PreviewIdentity
from .host import LayoutContract, LayoutHandles, LayoutHost

LOGGER = logging.getLogger(__name__)

EXPECTED_PANE_COUNT = 4


class LayoutMonitor:
    def __init__(
        self,
        host: LayoutHost,
        contract: LayoutContract,
        handles: LayoutHandles,
        *,
        expected_identity: Callable[[], PreviewIdentity],
        displayed_identity: Callable[[], PreviewIdentity],
        teardown: Callable[[str], None],
        exempt_commands: Iterable[str] = (),
    ) -> None:
        self.host = host
        self.contract = contract
        self.handles = handles
        self._expected_identity = expected_identity
        self._displayed_identity = displayed_identity
        self._teardown = teardown
        self.exempt_commands = frozenset(exempt_commands)

    def all_panes_live(self) -> bool:
        return all(self.host.is_live(handle) for handle in self.handles.all())

    def pane_count_matches(self) -> bool:
        visible = [window for window in self.host.visible_windows() if not window.transient]
        return len(visible) == EXPECTED_PANE_COUNT

    def geometry_matches(self) -> bool:
        for rule in self.contract.rules:
            found = self.host.neighbor(self.handles.for_kind(rule.pane), rule.direction)
            if found != self.handles.for_kind(rule.neighbor):
                return False
        return True

    def preview_matches_child(self) -> bool:
        return self._displayed_identity().describes_same_target(self._expected_identity())

    def violations(self) -> list[str]:
        """Return a description of every broken invariant (empty when valid)."""
        problems: list[str] = []
        if not self.all_panes_live():
            problems.append("a browser pane is no longer live")
        if not self.pane_count_matches():
            problems.append("unexpected number of visible windows")
        if self.all_panes_live() and not self.geometry_matches():
            problems.append("pane arrangement changed")
        if not self.preview_matches_child():
            problems.append("preview does not match the selected entry")
        return problems

    def check(self, command: str | None = None) -> bool:
        """Validate the layout; tear the session down unless ``command`` is exempt."""
        problems = self.violations()
        if not problems:
            return True
        reason = "; ".join(problems)
        if command is not None and command in self.exempt_commands:
            LOGGER.debug("ignoring layout problem during %s: %s", command, reason)
            return False
        LOGGER.warning("layout invalid after %s: %s", command or "external change", reason)
        self._teardown(reason)
        return False


__all__ = [
    "EXPECTED_PANE_COUNT",
    "LayoutMonitor",
]
