"""Persistent JSON config helpers.

Stores the preview policy, initial filters, and the parent-pane width.
Malformed or missing config falls back to defaults.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .fs.classify import DEFAULT_IGNORED_EXTENSIONS, DEFAULT_MAX_PREVIEW_BYTES
from .fs.filters import FILTER_DOTFILES, FILTER_PREDICATES
from .layout.host import DEFAULT_PARENT_PERCENT
from .preview.highlight import DEFAULT_STYLE
from .preview.resources import RELEASE_DEFERRED, RELEASE_EAGER

LOGGER = logging.getLogger(__name__)

APP_NAME = "tripane"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

# Commands that may leave the layout inconsistent while a prompt is open.
DEFAULT_EXEMPT_COMMANDS: tuple[str, ...] = ("prompt_jump",)


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        LOGGER.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem/serialization errors are logged and otherwise ignored so a
    read-only config directory never breaks the browser.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except (OSError, TypeError, ValueError) as exc:
        LOGGER.warning("cannot write config %s: %s", CONFIG_PATH, exc)


def _load_bool(data: dict[str, object], key: str, default: bool) -> bool:
    value = data.get(key)
    return value if isinstance(value, bool) else default


def _load_str_list(data: dict[str, object], key: str) -> tuple[str, ...] | None:
    value = data.get(key)
    if not isinstance(value, list):
        return None
    return tuple(item for item in value if isinstance(item, str) and item)


def load_parent_pane_percent() -> float | None:
    """Read the parent-pane width constrained to the open interval (0, 100)."""
    value = load_config().get("parent_pane_percent")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value <= 0 or value >= 100:
        return None
    return float(value)


def save_parent_pane_percent(percent: float) -> None:
    """Store the parent-pane width percentage clamped to ``[1, 99]``."""
    percent = max(1.0, min(99.0, float(percent)))
    config = load_config()
    config["parent_pane_percent"] = round(percent, 2)
    save_config(config)


@dataclass(frozen=True)
class BrowserConfig:
    """Settings read once when a session starts."""

    filters: tuple[str, ...] = (FILTER_DOTFILES,)
    release_policy: str = RELEASE_DEFERRED
    ignored_extensions: tuple[str, ...] = DEFAULT_IGNORED_EXTENSIONS
    max_preview_bytes: int = DEFAULT_MAX_PREVIEW_BYTES
    parent_pane_percent: float = DEFAULT_PARENT_PERCENT
    exempt_commands: tuple[str, ...] = DEFAULT_EXEMPT_COMMANDS
    style: str = DEFAULT_STYLE
    theme: str | None = None
    colorize: bool = True

    @classmethod
    def load(cls) -> BrowserConfig:
        """Build a config from the JSON file, ignoring malformed values."""
        data = load_config()
        defaults = cls()

        filters = _load_str_list(data, "filters")
        if filters is None:
            filters = defaults.filters
        filters = tuple(name for name in filters if name in FILTER_PREDICATES)
        show_hidden = data.get("show_hidden")
        if isinstance(show_hidden, bool):
            without_dotfiles = tuple(name for name in filters if name != FILTER_DOTFILES)
            filters = without_dotfiles if show_hidden else (FILTER_DOTFILES, *without_dotfiles)

        policy = RELEASE_EAGER if _load_bool(data, "kill_eagerly", False) else RELEASE_DEFERRED

        max_bytes = data.get("max_preview_bytes")
        if isinstance(max_bytes, bool) or not isinstance(max_bytes, int) or max_bytes <= 0:
            max_bytes = defaults.max_preview_bytes

        style = data.get("style")
        theme = data.get("theme")
        return cls(
            filters=filters,
            release_policy=policy,
            ignored_extensions=_load_str_list(data, "ignored_extensions") or defaults.ignored_extensions,
            max_preview_bytes=max_bytes,
            parent_pane_percent=load_parent_pane_percent() or defaults.parent_pane_percent,
            exempt_commands=_load_str_list(data, "exempt_commands") or defaults.exempt_commands,
            style=style if isinstance(style, str) and style else defaults.style,
            theme=theme if isinstance(theme, str) and theme else None,
        )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_EXEMPT_COMMANDS",
    "BrowserConfig",
    "load_config",
    "save_config",
    "load_parent_pane_percent",
    "save_parent_pane_percent",
]
