"""Content viewer: turn a resolved path into a preview resource.

Resolution order for files:
1. NUL-byte probe -> binary placeholder
2. sanitized text, Pygments-colored when enabled and small enough

Directories render their filtered listing, one entry per line.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..fs.classify import format_size
from ..fs.listing import DirectoryLister
from ..ui_theme import PLAIN_THEME, UITheme
from .highlight import DEFAULT_STYLE, colorize_source, read_text, sanitize_terminal_text
from .identity import PreviewIdentity, display_target, true_path

BINARY_PROBE_BYTES = 4_096
COLORIZE_MAX_FILE_BYTES = 256_000


@dataclass
class PreviewResource:
    """An opened preview: rendered lines plus the identity they belong to."""

    path: Path
    title: str
    lines: list[str]
    identity: PreviewIdentity
    is_directory: bool = False
    closed: bool = field(default=False, compare=False)

    def close(self) -> None:
        self.lines = []
        self.closed = True


class ContentViewer:
    """Open files and directories into ``PreviewResource`` objects.

    ``open`` raises ``OSError`` (or a ``BrowserError`` from the lister) when
    the target cannot be read; callers turn that into a reason.
    """

    def __init__(
        self,
        lister: DirectoryLister,
        *,
        theme: UITheme = PLAIN_THEME,
        style: str = DEFAULT_STYLE,
        colorize: bool = False,
    ) -> None:
        self.lister = lister
        self.theme = theme
        self.style = style
        self.colorize = colorize
        self.open_count = 0

    def open(self, child: Path) -> PreviewResource:
        self.open_count += 1
        target = true_path(child)
        title = self._title_for(child)
        if target.is_dir():
            return self._open_directory(target, title)
        return self._open_file(target, title)

    @staticmethod
    def _title_for(child: Path) -> str:
        hop = display_target(child)
        if hop != child:
            return f"{child.name} -> {hop}"
        return str(child)

    def _open_directory(self, target: Path, title: str) -> PreviewResource:
        entries = self.lister.list_filtered(target)
        lines = [self.theme.entry_label(entry) for entry in entries]
        return PreviewResource(
            path=target,
            title=title,
            lines=lines,
            identity=PreviewIdentity.directory(target, self.lister.filters.signature()),
            is_directory=True,
        )

    def _open_file(self, target: Path, title: str) -> PreviewResource:
        with target.open("rb") as handle:
            sample = handle.read(BINARY_PROBE_BYTES)
        file_size = target.stat().st_size
        identity = PreviewIdentity.file(target)
        if b"\x00" in sample:
            placeholder = f"<binary file: {format_size(file_size)}>"
            return PreviewResource(path=target, title=title, lines=[placeholder], identity=identity)

        source = sanitize_terminal_text(read_text(target))
        if self.colorize and file_size <= COLORIZE_MAX_FILE_BYTES:
            source = colorize_source(source, target, self.style)
        return PreviewResource(path=target, title=title, lines=source.splitlines(), identity=identity)


__all__ = [
    "BINARY_PROBE_BYTES",
    "COLORIZE_MAX_FILE_BYTES",
    "ContentViewer",
    "PreviewResource",
]
