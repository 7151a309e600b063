"""Key bindings: normalized key tokens to controller commands.

Prompt keys open a line editor instead of running a command directly; the
help overlay text is generated from the same table so it never drifts.
"""

from __future__ import annotations

from ..fs.filters import FILTER_BACKUPS, FILTER_COMPILED, FILTER_DOTFILES
from ..ui_theme import UITheme

PARENT_WIDTH_STEP = 5.0

KEY_BINDINGS: dict[str, tuple[str, tuple]] = {
    "j": ("move_cursor", (1,)),
    "DOWN": ("move_cursor", (1,)),
    "k": ("move_cursor", (-1,)),
    "UP": ("move_cursor", (-1,)),
    "h": ("ascend", ()),
    "LEFT": ("ascend", ()),
    "l": ("descend", ()),
    "RIGHT": ("descend", ()),
    "ENTER": ("descend", ()),
    "g": ("move_to_first", ()),
    "HOME": ("move_to_first", ()),
    "G": ("move_to_last", ()),
    "END": ("move_to_last", ()),
    "PAGE_DOWN": ("page", (1,)),
    "CTRL_F": ("page", (1,)),
    " ": ("page", (1,)),
    "PAGE_UP": ("page", (-1,)),
    "CTRL_B": ("page", (-1,)),
    "J": ("scroll_preview", (1,)),
    "K": ("scroll_preview", (-1,)),
    "CTRL_D": ("scroll_preview_page", (1,)),
    "CTRL_U": ("scroll_preview_page", (-1,)),
    ".": ("toggle_filter", (FILTER_DOTFILES,)),
    "~": ("toggle_filter", (FILTER_BACKUPS,)),
    "*": ("toggle_filter", (FILTER_COMPILED,)),
    "r": ("refresh", ()),
    "CTRL_L": ("refresh", ()),
    "H": ("go_home", ()),
    "<": ("adjust_parent_width", (-PARENT_WIDTH_STEP,)),
    ">": ("adjust_parent_width", (PARENT_WIDTH_STEP,)),
    "?": ("toggle_help", ()),
    "q": ("quit", ()),
    "CTRL_C": ("quit", ()),
}

# Keys that open a prompt; the value is the command the prompt text feeds.
PROMPT_KEYS: dict[str, tuple[str, str]] = {
    "/": ("search", "/"),
    ":": ("jump_to", "jump: "),
}

HELP_ENTRIES: tuple[tuple[str, str], ...] = (
    ("j/k Up/Down", "move cursor"),
    ("h/Left", "go to parent"),
    ("l/Right/Enter", "enter directory or open file"),
    ("g/G Home/End", "first / last entry"),
    ("Space PgUp/PgDn", "page"),
    ("J/K Ctrl+D/U", "scroll preview"),
    (". ~ *", "toggle dotfiles, backups, compiled filters"),
    ("/", "incremental search"),
    (":", "jump to path"),
    ("H", "home directory"),
    ("< >", "narrow / widen parent column"),
    ("r Ctrl+L", "refresh"),
    ("?", "toggle help"),
    ("q", "quit"),
)


def resolve_key(key: str) -> tuple[str, tuple] | None:
    return KEY_BINDINGS.get(key)


def help_lines(theme: UITheme) -> list[str]:
    width = max(len(keys) for keys, _ in HELP_ENTRIES)
    lines = [f"{theme.top_path}KEYS{theme.reset}", ""]
    for keys, description in HELP_ENTRIES:
        key_text = f"{theme.help_key}{keys.ljust(width)}{theme.reset}" if theme.help_key else keys.ljust(width)
        lines.append(f"  {key_text}  {description}")
    lines.extend(["", f"{theme.help_dim}press ? to close{theme.reset}"])
    return lines


__all__ = [
    "HELP_ENTRIES",
    "KEY_BINDINGS",
    "PARENT_WIDTH_STEP",
    "PROMPT_KEYS",
    "help_lines",
    "resolve_key",
]
