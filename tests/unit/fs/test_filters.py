"""FilterChain membership and predicate behavior."""

from __future__ import annotations

import unittest
from pathlib import Path

from tripane.fs.filters import FILTER_BACKUPS, FILTER_COMPILED, FILTER_DOTFILES, FilterChain
from tripane.fs.types import KIND_DIRECTORY, KIND_FILE, Entry


def _file(name: str) -> Entry:
    return Entry(name=name, path=Path("/x") / name, kind=KIND_FILE, size=1)


def _dir(name: str) -> Entry:
    return Entry(name=name, path=Path("/x") / name, kind=KIND_DIRECTORY)


SAMPLE = [
    _dir("__pycache__"),
    _dir(".git"),
    _dir("src"),
    _file(".env"),
    _file("notes.txt"),
    _file("notes.txt~"),
    _file("#draft#"),
    _file("mod.pyc"),
    _file("main.o"),
    _file("edit.swp"),
]


class FilterChainTests(unittest.TestCase):
    def test_empty_chain_keeps_everything_in_order(self) -> None:
        self.assertEqual(FilterChain().apply(SAMPLE), SAMPLE)

    def test_dotfiles_filter_hides_dot_entries(self) -> None:
        kept = FilterChain([FILTER_DOTFILES]).apply(SAMPLE)
        self.assertNotIn(".git", [entry.name for entry in kept])
        self.assertNotIn(".env", [entry.name for entry in kept])
        self.assertIn("notes.txt", [entry.name for entry in kept])

    def test_backups_filter_hides_editor_leftovers(self) -> None:
        names = [entry.name for entry in FilterChain([FILTER_BACKUPS]).apply(SAMPLE)]
        self.assertNotIn("notes.txt~", names)
        self.assertNotIn("#draft#", names)
        self.assertNotIn("edit.swp", names)
        self.assertIn("notes.txt", names)

    def test_compiled_filter_hides_objects_and_pycache(self) -> None:
        names = [entry.name for entry in FilterChain([FILTER_COMPILED]).apply(SAMPLE)]
        self.assertNotIn("mod.pyc", names)
        self.assertNotIn("main.o", names)
        self.assertNotIn("__pycache__", names)
        self.assertIn("src", names)

    def test_filters_only_ever_remove_entries(self) -> None:
        for active in ([], [FILTER_DOTFILES], [FILTER_DOTFILES, FILTER_BACKUPS], list(FilterChain().active)):
            kept = FilterChain(active).apply(SAMPLE)
            self.assertTrue(set(kept) <= set(SAMPLE))
            self.assertEqual(kept, [entry for entry in SAMPLE if entry in kept])

    def test_adding_a_filter_never_grows_the_result(self) -> None:
        chain = FilterChain([FILTER_DOTFILES])
        before = chain.apply(SAMPLE)
        chain.toggle(FILTER_COMPILED)
        after = chain.apply(SAMPLE)
        self.assertTrue(set(after) <= set(before))

    def test_double_toggle_restores_membership(self) -> None:
        chain = FilterChain([FILTER_DOTFILES])
        original = chain.signature()
        original_listing = chain.apply(SAMPLE)

        self.assertTrue(chain.toggle(FILTER_BACKUPS))
        self.assertFalse(chain.toggle(FILTER_BACKUPS))

        self.assertEqual(chain.signature(), original)
        self.assertEqual(chain.apply(SAMPLE), original_listing)

    def test_signature_ignores_activation_order(self) -> None:
        left = FilterChain([FILTER_BACKUPS, FILTER_DOTFILES])
        right = FilterChain([FILTER_DOTFILES, FILTER_BACKUPS])
        self.assertEqual(left.signature(), right.signature())

    def test_duplicate_names_collapse(self) -> None:
        chain = FilterChain([FILTER_DOTFILES, FILTER_DOTFILES])
        self.assertEqual(len(chain), 1)
        self.assertIn(FILTER_DOTFILES, chain)

    def test_unknown_filter_name_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            FilterChain(["nope"])
        with self.assertRaises(ValueError):
            FilterChain().toggle("nope")

    def test_describe_lists_active_labels(self) -> None:
        self.assertEqual(FilterChain().describe(), "")
        self.assertEqual(FilterChain([FILTER_DOTFILES]).describe(), "hide dotfiles")


if __name__ == "__main__":
    unittest.main()
