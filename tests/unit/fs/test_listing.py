"""Directory listing order, filtering and error mapping."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from tripane.errors import NotFound, PermissionDenied
from tripane.fs.filters import FILTER_DOTFILES, FilterChain
from tripane.fs.listing import DirectoryLister, scan_directory
from tripane.fs.types import KIND_DIRECTORY, KIND_FILE, KIND_SYMLINK, STYLE_BROKEN_SYMLINK, Entry


class ScanDirectoryTests(unittest.TestCase):
    def test_scan_reports_kinds_sizes_and_symlinks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "sub").mkdir()
            (root / "file.txt").write_text("hello", encoding="utf-8")
            os.symlink(root / "sub", root / "to_sub")
            os.symlink(root / "missing", root / "dangling")

            entries = {entry.name: entry for entry in scan_directory(root)}

        self.assertEqual(set(entries), {"sub", "file.txt", "to_sub", "dangling"})
        self.assertEqual(entries["sub"].kind, KIND_DIRECTORY)
        self.assertEqual(entries["file.txt"].kind, KIND_FILE)
        self.assertEqual(entries["file.txt"].size, 5)
        self.assertEqual(entries["to_sub"].kind, KIND_SYMLINK)
        self.assertTrue(entries["to_sub"].is_dir)
        self.assertTrue(entries["dangling"].broken)
        self.assertFalse(entries["dangling"].is_dir)
        self.assertEqual(entries["dangling"].style_class, STYLE_BROKEN_SYMLINK)

    def test_scan_missing_directory_raises_os_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(OSError):
                scan_directory(Path(tmp) / "nope")


class DirectoryListerTests(unittest.TestCase):
    def test_directories_sort_first_then_case_folded_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "b.txt").write_text("b", encoding="utf-8")
            (root / "A.txt").write_text("a", encoding="utf-8")
            (root / "zeta").mkdir()
            (root / "Alpha").mkdir()

            names = [entry.name for entry in DirectoryLister().list(root)]

        self.assertEqual(names, ["Alpha", "zeta", "A.txt", "b.txt"])

    def test_empty_directory_lists_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(DirectoryLister().list(Path(tmp)), [])

    def test_missing_directory_maps_to_not_found(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "gone"
            with self.assertRaises(NotFound) as ctx:
                DirectoryLister().list(missing)
        self.assertEqual(ctx.exception.path, missing)

    def test_list_filtered_applies_active_chain(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / ".hidden").write_text("", encoding="utf-8")
            (root / "shown").write_text("", encoding="utf-8")
            lister = DirectoryLister(FilterChain([FILTER_DOTFILES]))

            self.assertEqual([entry.name for entry in lister.list(root)], [".hidden", "shown"])
            self.assertEqual([entry.name for entry in lister.list_filtered(root)], ["shown"])

    def test_injected_capability_is_ordered_and_dot_names_dropped(self) -> None:
        base = Path("/virtual")

        def fake_listing(directory: Path) -> list[Entry]:
            self.assertEqual(directory, base)
            return [
                Entry(".", base, KIND_DIRECTORY),
                Entry("z.txt", base / "z.txt", KIND_FILE),
                Entry("docs", base / "docs", KIND_DIRECTORY),
            ]

        names = [entry.name for entry in DirectoryLister(list_directory=fake_listing).list(base)]
        self.assertEqual(names, ["docs", "z.txt"])

    def test_capability_errors_are_mapped(self) -> None:
        def denied(_directory: Path) -> list[Entry]:
            raise PermissionError(13, "Permission denied")

        with self.assertRaises(PermissionDenied) as ctx:
            DirectoryLister(list_directory=denied).list(Path("/virtual"))
        self.assertEqual(ctx.exception.kind, "permission-denied")


if __name__ == "__main__":
    unittest.main()
