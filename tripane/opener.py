"""External opener for files selected with ``descend``.

Runs ``$VISUAL``, then ``$EDITOR``, then ``$PAGER`` on the chosen file while
temporarily leaving raw/alternate-screen TUI mode. Returns an error message
string instead of raising for UI-friendly handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from pathlib import Path
from typing import Callable

LOGGER = logging.getLogger(__name__)

OPENER_ENV_VARS = ("VISUAL", "EDITOR", "PAGER")


def opener_command(environ=None) -> list[str] | None:
    """Return the first non-empty opener command from the environment."""
    environ = os.environ if environ is None else environ
    for name in OPENER_ENV_VARS:
        value = environ.get(name, "").strip()
        if not value:
            continue
        cmd = shlex.split(value)
        if cmd:
            return cmd
    return None


def launch_external(
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> str | None:
    cmd = opener_command()
    if cmd is None:
        return "Cannot open: none of $VISUAL, $EDITOR or $PAGER is set."

    LOGGER.info("handing %s to %s", target, cmd[0])
    disable_tui_mode()
    try:
        subprocess.run([*cmd, str(target)], check=False)
    except OSError as exc:
        LOGGER.warning("opener %s failed: %s", cmd[0], exc)
        return f"Failed to launch {cmd[0]}: {exc}"
    finally:
        enable_tui_mode()
    return None


__all__ = ["OPENER_ENV_VARS", "launch_external", "opener_command"]
