"""UI theme definitions and selection helpers.

Themes are ANSI palettes for pane chrome and entry classes (directory, file,
symlink, broken symlink). Syntax highlighting of previews is a separate
Pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass

from .fs.types import STYLE_BROKEN_SYMLINK, STYLE_DIRECTORY, STYLE_FILE, STYLE_SYMLINK, Entry


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by pane renderers."""

    name: str
    divider: str
    reverse: str
    reset: str
    entry_directory: str
    entry_file: str
    entry_symlink: str
    entry_broken_symlink: str
    entry_unreadable: str
    entry_size: str
    top_path: str
    top_detail: str
    message_error: str
    preview_reason: str
    preview_title: str
    help_key: str
    help_dim: str

    def entry_color(self, style_class: str, readable: bool = True) -> str:
        if style_class == STYLE_BROKEN_SYMLINK:
            return self.entry_broken_symlink
        if not readable:
            return self.entry_unreadable
        if style_class == STYLE_DIRECTORY:
            return self.entry_directory
        if style_class == STYLE_SYMLINK:
            return self.entry_symlink
        if style_class == STYLE_FILE:
            return self.entry_file
        return ""

    def entry_label(self, entry: Entry) -> str:
        """Return the colored display label for one listing entry.

        Directories get a trailing ``/`` and symlinks show their target so the
        four entry classes stay distinguishable without color.
        """
        label = entry.name
        if entry.is_dir:
            label += "/"
        if entry.symlink_target is not None:
            label += f" -> {entry.symlink_target}"
        color = self.entry_color(entry.style_class, entry.readable)
        if not color:
            return label
        return f"{color}{label}{self.reset}"


DEFAULT_THEME = UITheme(
    name="default",
    divider="\033[2m",
    reverse="\033[7m",
    reset="\033[0m",
    entry_directory="\033[1;34m",
    entry_file="\033[38;5;252m",
    entry_symlink="\033[36m",
    entry_broken_symlink="\033[31m",
    entry_unreadable="\033[2;38;5;245m",
    entry_size="\033[38;5;109m",
    top_path="\033[1;38;5;81m",
    top_detail="\033[2;38;5;250m",
    message_error="\033[1;31m",
    preview_reason="\033[38;5;214m",
    preview_title="\033[2;38;5;250m",
    help_key="\033[38;5;229m",
    help_dim="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    divider="\033[2;38;5;31m",
    reverse="\033[7m",
    reset="\033[0m",
    entry_directory="\033[1;38;5;45m",
    entry_file="\033[38;5;252m",
    entry_symlink="\033[38;5;117m",
    entry_broken_symlink="\033[38;5;203m",
    entry_unreadable="\033[2;38;5;110m",
    entry_size="\033[38;5;73m",
    top_path="\033[1;38;5;45m",
    top_detail="\033[2;38;5;110m",
    message_error="\033[1;38;5;203m",
    preview_reason="\033[38;5;215m",
    preview_title="\033[2;38;5;110m",
    help_key="\033[38;5;153m",
    help_dim="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    divider="",
    reverse="",
    reset="",
    entry_directory="",
    entry_file="",
    entry_symlink="",
    entry_broken_symlink="",
    entry_unreadable="",
    entry_size="",
    top_path="",
    top_detail="",
    message_error="",
    preview_reason="",
    preview_title="",
    help_key="",
    help_dim="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    candidate = str(name or "").strip().lower()
    return _THEMES.get(candidate, DEFAULT_THEME)


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "resolve_theme",
]
