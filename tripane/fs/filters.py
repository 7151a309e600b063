"""Named, user-toggleable listing filters.

A ``FilterChain`` is an ordered set of filter names. Each name maps to a pure
predicate over an entry; applying the chain keeps entries that every active
predicate accepts, so filtering only ever removes elements.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

from .types import Entry

FILTER_DOTFILES = "dotfiles"
FILTER_BACKUPS = "backups"
FILTER_COMPILED = "compiled"

_BACKUP_SUFFIXES = (".bak", ".swp", ".swo")
_COMPILED_SUFFIXES = (".pyc", ".pyo", ".o", ".class", ".elc")
_COMPILED_DIRECTORIES = frozenset({"__pycache__"})


def _keeps_non_dotfile(entry: Entry) -> bool:
    return not entry.name.startswith(".")


def _keeps_non_backup(entry: Entry) -> bool:
    name = entry.name
    if name.endswith("~"):
        return False
    if len(name) > 2 and name.startswith("#") and name.endswith("#"):
        return False
    return not name.lower().endswith(_BACKUP_SUFFIXES)


def _keeps_non_compiled(entry: Entry) -> bool:
    if entry.is_dir:
        return entry.name not in _COMPILED_DIRECTORIES
    return not entry.name.lower().endswith(_COMPILED_SUFFIXES)


FILTER_PREDICATES: dict[str, Callable[[Entry], bool]] = {
    FILTER_DOTFILES: _keeps_non_dotfile,
    FILTER_BACKUPS: _keeps_non_backup,
    FILTER_COMPILED: _keeps_non_compiled,
}

FILTER_LABELS: dict[str, str] = {
    FILTER_DOTFILES: "hide dotfiles",
    FILTER_BACKUPS: "hide backup files",
    FILTER_COMPILED: "hide compiled files",
}


def _check_name(name: str) -> str:
    if name not in FILTER_PREDICATES:
        known = ", ".join(sorted(FILTER_PREDICATES))
        raise ValueError(f"unknown filter {name!r} (known: {known})")
    return name


class FilterChain:
    """Ordered set of active filter names with a pure ``apply`` fold."""

    def __init__(self, active: Iterable[str] = ()) -> None:
        self._active: list[str] = []
        for name in active:
            _check_name(name)
            if name not in self._active:
                self._active.append(name)

    @property
    def active(self) -> tuple[str, ...]:
        return tuple(self._active)

    def __contains__(self, name: object) -> bool:
        return name in self._active

    def __len__(self) -> int:
        return len(self._active)

    def signature(self) -> tuple[str, ...]:
        """Return a hashable, order-insensitive membership key."""
        return tuple(sorted(self._active))

    def toggle(self, name: str) -> bool:
        """Flip membership of ``name``; return whether it is now active."""
        _check_name(name)
        if name in self._active:
            self._active.remove(name)
            return False
        self._active.append(name)
        return True

    def apply(self, entries: Iterable[Entry]) -> list[Entry]:
        """Return entries accepted by every active filter, order preserved."""
        kept = list(entries)
        for name in self._active:
            predicate = FILTER_PREDICATES[name]
            kept = [entry for entry in kept if predicate(entry)]
        return kept

    def describe(self) -> str:
        if not self._active:
            return ""
        return ", ".join(FILTER_LABELS[name] for name in self._active)


__all__ = [
    "FILTER_DOTFILES",
    "FILTER_BACKUPS",
    "FILTER_COMPILED",
    "FILTER_PREDICATES",
    "FILTER_LABELS",
    "FilterChain",
]
