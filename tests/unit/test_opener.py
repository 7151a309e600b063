"""Tests for handing a selected file to the external opener."""

from __future__ import annotations

import os
import unittest
from pathlib import Path
from unittest import mock

from tripane import opener


class OpenerCommandTests(unittest.TestCase):
    def test_visual_wins_over_editor_and_pager(self) -> None:
        env = {"VISUAL": "code --wait", "EDITOR": "vim", "PAGER": "less"}
        self.assertEqual(opener.opener_command(env), ["code", "--wait"])

    def test_blank_values_are_skipped(self) -> None:
        env = {"VISUAL": "  ", "EDITOR": "", "PAGER": "less -R"}
        self.assertEqual(opener.opener_command(env), ["less", "-R"])

    def test_none_set_returns_none(self) -> None:
        self.assertIsNone(opener.opener_command({}))


class LaunchExternalTests(unittest.TestCase):
    def test_missing_opener_reports_message_without_touching_terminal(self) -> None:
        disable = mock.Mock()
        enable = mock.Mock()
        with mock.patch.dict(os.environ, {}, clear=True):
            error = opener.launch_external(Path("/tmp/notes.txt"), disable, enable)
        self.assertEqual(error, "Cannot open: none of $VISUAL, $EDITOR or $PAGER is set.")
        disable.assert_not_called()
        enable.assert_not_called()

    def test_runs_opener_between_mode_switches(self) -> None:
        calls: list[str] = []
        with (
            mock.patch.dict(os.environ, {"EDITOR": "vim -n"}, clear=True),
            mock.patch("tripane.opener.subprocess.run", side_effect=lambda *a, **k: calls.append("run")) as run,
        ):
            error = opener.launch_external(
                Path("/tmp/notes.txt"),
                lambda: calls.append("disable"),
                lambda: calls.append("enable"),
            )
        self.assertIsNone(error)
        self.assertEqual(calls, ["disable", "run", "enable"])
        run.assert_called_once_with(["vim", "-n", "/tmp/notes.txt"], check=False)

    def test_launch_failure_restores_tui_and_reports(self) -> None:
        enable = mock.Mock()
        with (
            mock.patch.dict(os.environ, {"PAGER": "nosuchpager"}, clear=True),
            mock.patch("tripane.opener.subprocess.run", side_effect=FileNotFoundError(2, "No such file")),
        ):
            error = opener.launch_external(Path("/tmp/notes.txt"), mock.Mock(), enable)
        self.assertIsNotNone(error)
        self.assertTrue(error.startswith("Failed to launch nosuchpager:"))
        enable.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
