"""Runtime composition layer for tripane.

Builds the terminal host and session, runs the loop inside raw mode, and
hands a selected file to the external opener before the terminal is
restored.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from ..config import BrowserConfig
from ..layout.terminal_host import TerminalLayoutHost
from ..opener import launch_external
from ..session import Session
from ..ui_theme import UITheme
from .loop import run_main_loop
from .screen import render_text
from .terminal import TerminalController, terminal_size

LOGGER = logging.getLogger(__name__)


def run_browser(
    path: Path | None,
    *,
    config: BrowserConfig,
    theme: UITheme,
    colorize: bool,
) -> int:
    """Run an interactive session; return a process exit status.

    Raises ``BrowserError`` when the start path is unusable, before the
    terminal is touched.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    columns, rows = terminal_size()
    host = TerminalLayoutHost(columns, rows)
    terminal = TerminalController(stdin_fd, stdout_fd)
    session = Session(host, config=config, theme=theme, colorize=colorize)
    session.begin(path)

    opener_error: str | None = None
    try:
        with terminal.raw_mode():
            run_main_loop(session, host, terminal, stdin_fd)
            if session.handoff is not None:
                opener_error = launch_external(
                    session.handoff,
                    terminal.disable_tui_mode,
                    terminal.enable_tui_mode,
                )
    finally:
        session.quit()

    if session.teardown_reason is not None:
        sys.stderr.write(f"{session.message}\n")
    if opener_error is not None:
        sys.stderr.write(f"{opener_error}\n")
        return 1
    return 0


def render_once(
    path: Path | None,
    *,
    config: BrowserConfig,
    theme: UITheme,
    colorize: bool,
    columns: int,
    rows: int,
) -> str:
    """Start a session on an off-screen host, render one frame and quit."""
    host = TerminalLayoutHost(columns, rows)
    session = Session(host, config=config, theme=theme, colorize=colorize)
    try:
        session.begin(path)
        return render_text(session, host)
    finally:
        session.quit()


__all__ = ["render_once", "run_browser"]
