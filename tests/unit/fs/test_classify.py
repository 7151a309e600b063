"""Preview eligibility and child validity classification."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from tripane.errors import BrokenSymlink, IgnoredByPolicy, IsRootPath, NotFound
from tripane.fs.classify import (
    BROKEN_SYMLINK,
    ELIGIBLE,
    IGNORED_BY_EXTENSION,
    NOT_FOUND,
    TOO_LARGE,
    PathClassifier,
    child_error,
    format_size,
    is_valid_child,
)
from tripane.fs.types import STYLE_BROKEN_SYMLINK, STYLE_DIRECTORY, STYLE_FILE, STYLE_SYMLINK


class ClassifyForPreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()

    def test_plain_text_file_is_eligible(self) -> None:
        path = self.root / "c.txt"
        path.write_text("0123456789", encoding="utf-8")
        result = PathClassifier().classify_for_preview(path)
        self.assertEqual(result.status, ELIGIBLE)
        self.assertTrue(result.eligible)
        self.assertEqual(result.reason, "")

    def test_directory_is_eligible_regardless_of_name(self) -> None:
        path = self.root / "disk.iso"
        path.mkdir()
        self.assertEqual(PathClassifier().classify_for_preview(path).status, ELIGIBLE)

    def test_ignored_extension_reports_policy_reason(self) -> None:
        path = self.root / "big.iso"
        path.write_bytes(b"")
        result = PathClassifier(ignored_extensions=("iso",)).classify_for_preview(path)
        self.assertEqual(result.status, IGNORED_BY_EXTENSION)
        self.assertEqual(result.extension, "iso")
        self.assertEqual(result.reason, "ignored by policy: .iso files are not previewed")

    def test_policy_outcomes_map_to_typed_errors(self) -> None:
        iso = self.root / "big.iso"
        iso.write_bytes(b"")
        large = self.root / "large.log"
        large.write_bytes(b"x" * 2048)
        link = self.root / "bad"
        os.symlink(self.root / "missing", link)
        classifier = PathClassifier(ignored_extensions=("iso",), max_preview_bytes=1024)

        ignored = classifier.classify_for_preview(iso).error_for(iso)
        self.assertIsInstance(ignored, IgnoredByPolicy)
        self.assertEqual(ignored.message, f"Not previewed (.iso files are ignored): {iso}")
        too_large = classifier.classify_for_preview(large).error_for(large)
        self.assertIsInstance(too_large, IgnoredByPolicy)
        self.assertEqual(too_large.message, f"Not previewed (2.0K is over the size limit): {large}")
        self.assertIsInstance(classifier.classify_for_preview(link).error_for(link), BrokenSymlink)
        self.assertIsNone(classifier.classify_for_preview(self.root).error_for(self.root))

    def test_extension_match_is_case_insensitive_and_dot_tolerant(self) -> None:
        path = self.root / "DISK.ISO"
        path.write_bytes(b"")
        result = PathClassifier(ignored_extensions=(".iso",)).classify_for_preview(path)
        self.assertEqual(result.status, IGNORED_BY_EXTENSION)

    def test_oversized_file_reports_size(self) -> None:
        path = self.root / "large.log"
        path.write_bytes(b"x" * 2048)
        result = PathClassifier(max_preview_bytes=1024).classify_for_preview(path)
        self.assertEqual(result.status, TOO_LARGE)
        self.assertEqual(result.size, 2048)
        self.assertEqual(result.reason, "ignored by policy: file too large (2.0K)")

    def test_extension_checked_on_symlink_target(self) -> None:
        target = self.root / "real.iso"
        target.write_bytes(b"")
        link = self.root / "alias"
        os.symlink(target, link)
        result = PathClassifier(ignored_extensions=("iso",)).classify_for_preview(link)
        self.assertEqual(result.status, IGNORED_BY_EXTENSION)

    def test_broken_symlink(self) -> None:
        link = self.root / "link"
        os.symlink(self.root / "missing", link)
        result = PathClassifier().classify_for_preview(link)
        self.assertEqual(result.status, BROKEN_SYMLINK)
        self.assertEqual(result.reason, "broken symbolic link")

    def test_missing_path(self) -> None:
        self.assertEqual(PathClassifier().classify_for_preview(self.root / "nope").status, NOT_FOUND)

    def test_entry_kind_styles(self) -> None:
        (self.root / "d").mkdir()
        (self.root / "f").write_text("", encoding="utf-8")
        os.symlink(self.root / "f", self.root / "good")
        os.symlink(self.root / "gone", self.root / "bad")
        classifier = PathClassifier()
        self.assertEqual(classifier.entry_kind(self.root / "d"), STYLE_DIRECTORY)
        self.assertEqual(classifier.entry_kind(self.root / "f"), STYLE_FILE)
        self.assertEqual(classifier.entry_kind(self.root / "good"), STYLE_SYMLINK)
        self.assertEqual(classifier.entry_kind(self.root / "bad"), STYLE_BROKEN_SYMLINK)

    def test_unreadable_covers_missing_and_broken(self) -> None:
        classifier = PathClassifier()
        os.symlink(self.root / "gone", self.root / "bad")
        self.assertTrue(classifier.is_unreadable(self.root / "bad"))
        self.assertTrue(classifier.is_unreadable(self.root / "nope"))
        self.assertFalse(classifier.is_unreadable(self.root))


class ChildValidityTests(unittest.TestCase):
    def test_root_is_never_a_valid_child(self) -> None:
        self.assertIsInstance(child_error(Path("/")), IsRootPath)
        self.assertFalse(is_valid_child(Path("/")))

    def test_nonexistent_path_is_not_a_valid_child(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing"
            self.assertIsInstance(child_error(missing), NotFound)
            self.assertTrue(is_valid_child(Path(tmp)))

    def test_broken_symlink_is_still_navigable(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            link = Path(tmp) / "link"
            os.symlink(Path(tmp) / "missing", link)
            self.assertTrue(is_valid_child(link))


class FormatSizeTests(unittest.TestCase):
    def test_units(self) -> None:
        self.assertEqual(format_size(10), "10B")
        self.assertEqual(format_size(1536), "1.5K")
        self.assertEqual(format_size(50 * 1024**3), "50.0G")


if __name__ == "__main__":
    unittest.main()
