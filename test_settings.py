"""Tests for settings persistence and picker options."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from settings import COMMIT_CONFIRM, COMMIT_LIVE, PickerOptions, load_settings, save_settings


class SettingsTests(unittest.TestCase):
    def test_missing_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            settings = load_settings(str(Path(tmp) / "missing.json"))
        self.assertEqual(settings["commit_mode"], COMMIT_LIVE)
        self.assertTrue(settings["calendar_week"])
        self.assertEqual(settings["years_before"], 5)

    def test_roundtrip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "settings.json")
            settings = load_settings(path)
            settings["arrows"] = False
            settings["commit_mode"] = COMMIT_CONFIRM
            settings["years_after"] = 3
            save_settings(settings, path)
            self.assertEqual(load_settings(path), settings)

    def test_wrong_types_fall_back(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            path.write_text(json.dumps({
                "arrows": "no",
                "commit_mode": "later",
                "years_before": -2,
                "years_after": True,
                "date_format": 5,
            }), encoding="utf-8")
            settings = load_settings(str(path))
        self.assertTrue(settings["arrows"])
        self.assertEqual(settings["commit_mode"], COMMIT_LIVE)
        self.assertEqual(settings["years_before"], 5)
        self.assertEqual(settings["years_after"], 10)
        self.assertEqual(settings["date_format"], "%Y-%m-%d")

    def test_corrupt_file_gives_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "settings.json"
            path.write_text("{", encoding="utf-8")
            self.assertEqual(load_settings(str(path))["commit_mode"], COMMIT_LIVE)

    def test_options_from_settings(self) -> None:
        opts = PickerOptions.from_settings({"commit_mode": COMMIT_CONFIRM, "calendar": False,
                                            "unknown": 1})
        self.assertFalse(opts.live_commit)
        self.assertFalse(opts.calendar)
        self.assertTrue(opts.arrows)
        self.assertTrue(PickerOptions().live_commit)


if __name__ == "__main__":
    unittest.main()
