"""LayoutMonitor predicates and teardown behavior."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from tripane.layout.host import DIRECTION_ABOVE, DIRECTION_LEFT, LayoutContract, LayoutHandles, LayoutHost, WindowInfo
from tripane.layout.monitor import LayoutMonitor
from tripane.layout.terminal_host import TerminalLayoutHost
from tripane.preview.identity import PreviewIdentity
from tripane.session import Session, start_session


class FakeHost(LayoutHost):
    """Host whose adjacency answers are set directly by the test."""

    def __init__(self) -> None:
        self.live = {"top", "parent", "child", "preview"}
        self.extra_windows: list[WindowInfo] = []
        self.adjacency = {
            ("child", DIRECTION_LEFT): "parent",
            ("parent", DIRECTION_LEFT): "preview",
            ("child", DIRECTION_ABOVE): "top",
        }

    def is_live(self, handle: object) -> bool:
        return handle in self.live

    def neighbor(self, handle: object, direction: str) -> object | None:
        return self.adjacency.get((handle, direction))

    def visible_windows(self) -> list[WindowInfo]:
        return [WindowInfo(handle) for handle in sorted(self.live)] + self.extra_windows


class LayoutMonitorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.host = FakeHost()
        self.handles = LayoutHandles(top="top", parent="parent", child="child", preview="preview")
        self.expected = PreviewIdentity.file(Path("/tmp/a.txt"))
        self.displayed = PreviewIdentity.file(Path("/tmp/a.txt"))
        self.teardowns: list[str] = []
        self.monitor = LayoutMonitor(
            self.host,
            LayoutContract(),
            self.handles,
            expected_identity=lambda: self.expected,
            displayed_identity=lambda: self.displayed,
            teardown=self.teardowns.append,
            exempt_commands=("prompt_jump",),
        )

    def test_valid_layout_passes(self) -> None:
        self.assertTrue(self.monitor.check("resize"))
        self.assertEqual(self.teardowns, [])

    def test_dead_pane_tears_down(self) -> None:
        self.host.live.discard("parent")
        self.assertFalse(self.monitor.check("resize"))
        self.assertEqual(len(self.teardowns), 1)
        self.assertIn("no longer live", self.teardowns[0])

    def test_extra_non_transient_window_tears_down(self) -> None:
        self.host.extra_windows.append(WindowInfo("stranger"))
        self.assertFalse(self.monitor.pane_count_matches())
        self.assertFalse(self.monitor.check())

    def test_transient_window_is_ignored(self) -> None:
        self.host.extra_windows.append(WindowInfo("help", transient=True))
        self.assertTrue(self.monitor.check())

    def test_swapped_columns_break_geometry(self) -> None:
        self.host.adjacency[("child", DIRECTION_LEFT)] = "preview"
        self.assertFalse(self.monitor.geometry_matches())
        self.assertFalse(self.monitor.check())
        self.assertIn("arrangement", self.teardowns[0])

    def test_stale_preview_tears_down(self) -> None:
        self.displayed = PreviewIdentity.file(Path("/tmp/other.txt"))
        self.assertFalse(self.monitor.preview_matches_child())
        self.assertFalse(self.monitor.check("search"))
        self.assertEqual(len(self.teardowns), 1)

    def test_exempt_command_reports_without_teardown(self) -> None:
        self.host.live.discard("preview")
        self.assertFalse(self.monitor.check("prompt_jump"))
        self.assertEqual(self.teardowns, [])

    def test_violations_lists_every_problem(self) -> None:
        self.host.extra_windows.append(WindowInfo("stranger"))
        self.displayed = PreviewIdentity.no_entry()
        self.assertEqual(len(self.monitor.violations()), 2)


class SessionTeardownTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        (self.root / "a.txt").write_text("a\n", encoding="utf-8")
        (self.root / "b.txt").write_text("b\n", encoding="utf-8")
        self.restored: list[object] = []
        self.host = TerminalLayoutHost(120, 40, on_restore=self.restored.append)
        self.session = start_session(self.host, self.root)
        self.addCleanup(self._end_session)

    def _end_session(self) -> None:
        self.session.quit()
        Session._active = None

    def test_resize_that_kills_a_pane_ends_the_session(self) -> None:
        self.host.resize(20, 10)
        self.assertFalse(self.session.on_layout_change("resize"))
        self.assertFalse(self.session.active)
        self.assertIsNotNone(self.session.teardown_reason)
        self.assertIsNone(Session.active_session())
        self.assertEqual(len(self.restored), 1)
        self.assertEqual(self.host.visible_windows(), [])

    def test_harmless_resize_keeps_the_session(self) -> None:
        self.host.resize(100, 30)
        self.assertTrue(self.session.on_layout_change("resize"))
        self.assertTrue(self.session.active)

    def test_teardown_releases_session_resources(self) -> None:
        self.session.controller.run("move_cursor", 1)
        self.assertEqual(len(self.session.previews.pool), 2)
        self.host.destroy(self.session.handles.parent)
        self.session.on_layout_change()
        self.assertEqual(len(self.session.previews.pool), 0)

    def test_after_teardown_a_new_session_can_start(self) -> None:
        self.host.resize(20, 10)
        self.session.on_layout_change("resize")
        self.host.resize(120, 40)
        replacement = start_session(self.host, self.root)
        self.addCleanup(replacement.quit)
        self.assertIs(Session.active_session(), replacement)


if __name__ == "__main__":
    unittest.main()
