"""Keyed storage for picker state that must survive redraws."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Protocol

from selection import WorkingSelection

logger = logging.getLogger(__name__)

_STATE_PATH = os.path.join(os.path.expanduser("~"), ".mini-date-picker-state.json")


class SelectionStore(Protocol):
    def load(self, key: str) -> WorkingSelection | None: ...

    def store(self, key: str, selection: WorkingSelection) -> None: ...


class MemoryStore:
    """Process-local store; state is lost when the application exits."""

    def __init__(self) -> None:
        self._data: dict[str, WorkingSelection] = {}

    def load(self, key: str) -> WorkingSelection | None:
        sel = self._data.get(key)
        return sel.copy() if sel is not None else None

    def store(self, key: str, selection: WorkingSelection) -> None:
        self._data[key] = selection.copy()


class JsonFileStore:
    """Store that writes every key to a JSON file on each update."""

    def __init__(self, path: str = _STATE_PATH) -> None:
        self.path = path

    def _read_all(self) -> dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except FileNotFoundError:
            return {}
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        if not isinstance(stored, dict):
            logger.warning("Ignoring state file %s: top level is not an object", self.path)
            return {}
        return stored

    def load(self, key: str) -> WorkingSelection | None:
        entry = self._read_all().get(key)
        if entry is None:
            return None
        sel = WorkingSelection.from_dict(entry)
        if sel is None:
            logger.warning("Discarding malformed state for %r: %r", key, entry)
        return sel

    def store(self, key: str, selection: WorkingSelection) -> None:
        data = self._read_all()
        data[key] = selection.to_dict()
        # Write beside the target and swap it in so a crash never leaves a
        # half-written file behind
        fd, tmp_path = tempfile.mkstemp(
            prefix=".state-", suffix=".tmp", dir=os.path.dirname(os.path.abspath(self.path)),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_path, self.path)
        except BaseException:
            os.unlink(tmp_path)
            raise
