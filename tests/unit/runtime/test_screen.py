"""Frame composition from host rectangles."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from tripane.layout.terminal_host import TerminalLayoutHost
from tripane.runtime.screen import DIVIDER_GLYPH, compose_frame, render_text
from tripane.session import Session, start_session


class ComposeFrameTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        (self.root / "notes.txt").write_text("hello preview\n", encoding="utf-8")
        (self.root / "other.txt").write_text("second\n", encoding="utf-8")
        self.host = TerminalLayoutHost(120, 40)
        self.session = start_session(self.host, self.root)
        self.addCleanup(self._end_session)

    def _end_session(self) -> None:
        self.session.quit()
        Session._active = None

    def test_frame_fills_the_terminal(self) -> None:
        frame = compose_frame(self.session, self.host)
        self.assertEqual(len(frame), 40)
        self.assertTrue(all(len(row) == 120 for row in frame))

    def test_dividers_separate_body_columns(self) -> None:
        frame = compose_frame(self.session, self.host)
        body_row = frame[2]
        self.assertEqual(body_row[52], DIVIDER_GLYPH)
        self.assertEqual(body_row[77], DIVIDER_GLYPH)
        self.assertTrue(frame[3].startswith("hello preview"))
        self.assertEqual(frame[2][78:].rstrip(), "> notes.txt" + " " * 28 + "14B")

    def test_help_overlay_replaces_rows(self) -> None:
        self.session.controller.run("toggle_help")
        frame = compose_frame(self.session, self.host)
        self.assertEqual(frame[0].rstrip(), "KEYS")

    def test_prompt_replaces_second_top_row(self) -> None:
        frame = compose_frame(self.session, self.host, prompt="/not")
        self.assertEqual(frame[1].rstrip(), "/not")

    def test_render_text_trims_trailing_blanks(self) -> None:
        text = render_text(self.session, self.host)
        self.assertTrue(text.endswith("\n"))
        self.assertTrue(all(line == line.rstrip() for line in text.splitlines()))
        self.assertIn("hello preview", text)


if __name__ == "__main__":
    unittest.main()
