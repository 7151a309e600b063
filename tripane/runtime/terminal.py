"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle and alternate-screen switching, and writes whole
frames to the output descriptor.
"""

from __future__ import annotations

import contextlib
import os
import shutil
import termios
import tty

ENTER_TUI = b"\x1b[?1049h\x1b[?25l"
LEAVE_TUI = b"\x1b[?25h\x1b[?1049l"


def terminal_size(fallback: tuple[int, int] = (80, 24)) -> tuple[int, int]:
    size = shutil.get_terminal_size(fallback)
    return size.columns, size.lines


class TerminalController:
    """Manage terminal mode transitions for the browser."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(stdin_fd)
        self.tui_active = False

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Enter alternate screen and hide cursor.
        os.write(self.stdout_fd, ENTER_TUI)
        self.tui_active = True

    def disable_tui_mode(self) -> None:
        # Show cursor and restore the main screen buffer.
        os.write(self.stdout_fd, LEAVE_TUI)
        self.tui_active = False
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def write_frame(self, rows: list[str]) -> None:
        """Redraw the whole screen from ``rows`` (already fitted to width)."""
        payload = "\x1b[H" + "\r\n".join(rows) + "\x1b[0m"
        os.write(self.stdout_fd, payload.encode("utf-8", errors="replace"))

    @contextlib.contextmanager
    def raw_mode(self):
        try:
            self.enable_tui_mode()
            yield
        finally:
            if self.tui_active:
                self.disable_tui_mode()
