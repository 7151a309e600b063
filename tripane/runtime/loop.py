"""Main interactive event loop for the terminal UI.

Handles one key or one resize at a time, to completion: resize bookkeeping,
rendering, prompt editing, and command dispatch through the controller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..layout.terminal_host import TerminalLayoutHost
from .keymap import PROMPT_KEYS, resolve_key
from .keys import read_key
from .screen import compose_frame
from .terminal import terminal_size

if TYPE_CHECKING:
    from ..session import Session
    from .terminal import TerminalController

KEY_POLL_MS = 100
JUMP_PROMPT_COMMAND = "prompt_jump"


@dataclass
class PromptState:
    """Line editor opened by a prompt key; ``command`` consumes the text."""

    command: str
    label: str
    text: str = ""

    def render(self) -> str:
        return f"{self.label}{self.text}"


def handle_prompt_key(session: Session, prompt: PromptState, key: str) -> PromptState | None:
    """Apply one key to an open prompt; return ``None`` once it closes.

    Search runs on every edit so the cursor follows the query; a jump runs
    only on Enter.
    """
    controller = session.controller
    if key in {"ESC", "CTRL_C"}:
        return None
    if key == "ENTER":
        if prompt.command == "jump_to" and prompt.text:
            controller.run("jump_to", prompt.text)
        return None
    if key == "BACKSPACE":
        prompt.text = prompt.text[:-1]
    elif key == "CTRL_U":
        prompt.text = ""
    elif len(key) == 1 and key.isprintable():
        prompt.text += key
    else:
        return prompt
    if prompt.command == "search" and prompt.text:
        controller.run("search", prompt.text)
    return prompt


def run_main_loop(
    session: Session,
    host: TerminalLayoutHost,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    size_provider: Callable[[], tuple[int, int]] = terminal_size,
    key_reader: Callable[..., str] = read_key,
) -> None:
    """Run until the session ends (quit, hand-off or teardown)."""
    prompt: PromptState | None = None
    dirty = True
    while session.active:
        columns, rows = size_provider()
        if (columns, rows) != (host.columns, host.rows):
            host.resize(columns, rows)
            command = JUMP_PROMPT_COMMAND if prompt is not None and prompt.command == "jump_to" else "resize"
            session.on_layout_change(command)
            if not session.active:
                break
            dirty = True

        if dirty:
            terminal.write_frame(compose_frame(session, host, prompt=prompt.render() if prompt else None))
            dirty = False

        key = key_reader(stdin_fd, timeout_ms=KEY_POLL_MS)
        if not key:
            continue
        dirty = True

        if prompt is not None:
            was_jump = prompt.command == "jump_to"
            prompt = handle_prompt_key(session, prompt, key)
            if prompt is None and was_jump:
                session.on_layout_change("jump_to")
            continue

        if key in PROMPT_KEYS:
            command, label = PROMPT_KEYS[key]
            prompt = PromptState(command, label)
            continue

        binding = resolve_key(key)
        if binding is None:
            continue
        command, args = binding
        session.controller.run(command, *args)


__all__ = [
    "JUMP_PROMPT_COMMAND",
    "KEY_POLL_MS",
    "PromptState",
    "handle_prompt_key",
    "run_main_loop",
]
