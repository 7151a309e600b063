from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tripane import config
from tripane.fs.filters import FILTER_BACKUPS, FILTER_DOTFILES
from tripane.preview.resources import RELEASE_DEFERRED, RELEASE_EAGER


class ConfigBehaviorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch("tripane.config.CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def _write(self, payload: str) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(payload, encoding="utf-8")

    def test_missing_file_loads_empty(self) -> None:
        self.assertEqual(config.load_config(), {})

    def test_malformed_json_loads_empty(self) -> None:
        self._write("{not json")
        self.assertEqual(config.load_config(), {})

    def test_non_object_json_loads_empty(self) -> None:
        self._write("[1, 2, 3]")
        self.assertEqual(config.load_config(), {})

    def test_save_creates_parent_directory(self) -> None:
        config.save_config({"kill_eagerly": True})
        self.assertEqual(json.loads(self.config_path.read_text(encoding="utf-8")), {"kill_eagerly": True})

    def test_parent_pane_percent_round_trip_keeps_other_keys(self) -> None:
        config.save_config({"style": "native"})
        config.save_parent_pane_percent(33.333)
        saved = config.load_config()
        self.assertEqual(saved["style"], "native")
        self.assertEqual(saved["parent_pane_percent"], 33.33)
        self.assertEqual(config.load_parent_pane_percent(), 33.33)

    def test_parent_pane_percent_rejects_out_of_range(self) -> None:
        for value in (0, 100, -5, True, "20"):
            with self.subTest(value=value):
                config.save_config({"parent_pane_percent": value})
                self.assertIsNone(config.load_parent_pane_percent())

    def test_saved_percent_is_clamped(self) -> None:
        config.save_parent_pane_percent(150)
        self.assertEqual(config.load_config()["parent_pane_percent"], 99.0)


class BrowserConfigLoadTests(ConfigBehaviorTests):
    def test_defaults_without_file(self) -> None:
        loaded = config.BrowserConfig.load()
        self.assertEqual(loaded.filters, (FILTER_DOTFILES,))
        self.assertEqual(loaded.release_policy, RELEASE_DEFERRED)
        self.assertEqual(loaded.exempt_commands, ("prompt_jump",))
        self.assertIsNone(loaded.theme)

    def test_kill_eagerly_selects_eager_policy(self) -> None:
        self._write(json.dumps({"kill_eagerly": True}))
        self.assertEqual(config.BrowserConfig.load().release_policy, RELEASE_EAGER)

    def test_show_hidden_drops_dotfile_filter(self) -> None:
        self._write(json.dumps({"filters": ["dotfiles", "backups"], "show_hidden": True}))
        self.assertEqual(config.BrowserConfig.load().filters, (FILTER_BACKUPS,))

    def test_unknown_filters_and_bad_values_are_ignored(self) -> None:
        self._write(
            json.dumps(
                {
                    "filters": ["bogus", "backups", 3],
                    "max_preview_bytes": -1,
                    "style": "",
                    "parent_pane_percent": 40,
                }
            )
        )
        loaded = config.BrowserConfig.load()
        defaults = config.BrowserConfig()
        self.assertEqual(loaded.filters, (FILTER_BACKUPS,))
        self.assertEqual(loaded.max_preview_bytes, defaults.max_preview_bytes)
        self.assertEqual(loaded.style, defaults.style)
        self.assertEqual(loaded.parent_pane_percent, 40.0)


if __name__ == "__main__":
    unittest.main()
