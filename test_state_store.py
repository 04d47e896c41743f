"""Tests for the keyed picker-state stores."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest.mock import patch

from selection import WorkingSelection
from state_store import JsonFileStore, MemoryStore


def _sel(year: int, month: int, day: int) -> WorkingSelection:
    sel = WorkingSelection()
    sel.initialize_from(date(year, month, day))
    return sel


class MemoryStoreTests(unittest.TestCase):
    def test_missing_key(self) -> None:
        self.assertIsNone(MemoryStore().load("nope"))

    def test_store_keeps_a_copy(self) -> None:
        store = MemoryStore()
        sel = _sel(2024, 5, 1)
        store.store("a", sel)
        sel.step_day(1)
        loaded = store.load("a")
        self.assertEqual(loaded.as_tuple(), (2024, 5, 1))
        loaded.step_day(1)
        self.assertEqual(store.load("a").as_tuple(), (2024, 5, 1))

    def test_keys_are_independent(self) -> None:
        store = MemoryStore()
        store.store("a", _sel(2024, 5, 1))
        store.store("b", _sel(2020, 1, 1))
        self.assertEqual(store.load("a").as_tuple(), (2024, 5, 1))
        self.assertEqual(store.load("b").as_tuple(), (2020, 1, 1))


class JsonFileStoreTests(unittest.TestCase):
    def test_lifecycle(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = str(Path(tmp) / "state.json")
            store = JsonFileStore(path)
            self.assertIsNone(store.load("a"))

            store.store("a", _sel(2024, 2, 29))
            store.store("b", _sel(2023, 7, 4))

            reopened = JsonFileStore(path)
            self.assertEqual(reopened.load("a"), _sel(2024, 2, 29))
            self.assertEqual(reopened.load("b").as_tuple(), (2023, 7, 4))

    def test_corrupt_file_reads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "state.json"
            path.write_text("{not json", encoding="utf-8")
            store = JsonFileStore(str(path))
            with self.assertLogs("state_store", level="WARNING"):
                self.assertIsNone(store.load("a"))
            store.store("a", _sel(2024, 1, 1))
            self.assertEqual(store.load("a").as_tuple(), (2024, 1, 1))

    def test_malformed_entry_is_discarded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "state.json"
            path.write_text(json.dumps({
                "a": {"year": 2024, "month": 14, "day": 1, "initialized": True},
                "b": {"year": 2024, "month": 1, "day": 3, "initialized": True},
            }), encoding="utf-8")
            store = JsonFileStore(str(path))
            with self.assertLogs("state_store", level="WARNING"):
                self.assertIsNone(store.load("a"))
            self.assertEqual(store.load("b").as_tuple(), (2024, 1, 3))

    def test_store_replaces_file_without_leftovers(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "state.json"
            store = JsonFileStore(str(path))
            store.store("a", _sel(2024, 1, 1))
            store.store("a", _sel(2024, 1, 2))
            self.assertEqual(sorted(p.name for p in Path(tmp).iterdir()), ["state.json"])

    def test_interrupted_write_keeps_previous_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "state.json"
            store = JsonFileStore(str(path))
            store.store("a", _sel(2024, 1, 1))
            store.store("b", _sel(2020, 6, 1))
            with patch("state_store.json.dump", side_effect=OSError("disk full")):
                with self.assertRaises(OSError):
                    store.store("a", _sel(2030, 1, 1))
            self.assertEqual(store.load("a").as_tuple(), (2024, 1, 1))
            self.assertEqual(store.load("b").as_tuple(), (2020, 6, 1))
            self.assertEqual(sorted(p.name for p in Path(tmp).iterdir()), ["state.json"])

    def test_non_object_file_reads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "state.json"
            path.write_text("[1, 2, 3]", encoding="utf-8")
            with self.assertLogs("state_store", level="WARNING"):
                self.assertIsNone(JsonFileStore(str(path)).load("a"))


if __name__ == "__main__":
    unittest.main()
