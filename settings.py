"""JSON-based settings persistence for the date picker."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-date-picker-settings.json")

COMMIT_LIVE = "live"
COMMIT_CONFIRM = "confirm"

_DEFAULTS = {
    "combo_boxes": True,
    "arrows": True,
    "calendar": True,
    "calendar_week": True,
    "commit_mode": COMMIT_LIVE,
    "years_before": 5,
    "years_after": 10,
    "date_format": "%Y-%m-%d",
}


def load_settings(path: str = _SETTINGS_PATH) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    try:
        with open(path, "r", encoding="utf-8") as f:
            stored = json.load(f)
        if not isinstance(stored, dict):
            return settings
        for key in ("combo_boxes", "arrows", "calendar", "calendar_week"):
            if key in stored and isinstance(stored[key], bool):
                settings[key] = stored[key]
        if stored.get("commit_mode") in (COMMIT_LIVE, COMMIT_CONFIRM):
            settings["commit_mode"] = stored["commit_mode"]
        for key in ("years_before", "years_after"):
            value = stored.get(key)
            if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
                settings[key] = value
        if "date_format" in stored and isinstance(stored["date_format"], str):
            settings["date_format"] = stored["date_format"]
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        pass
    return settings


def save_settings(settings: dict, path: str = _SETTINGS_PATH) -> None:
    """Persist settings to disk."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


@dataclass(frozen=True)
class PickerOptions:
    """Which parts of the popup are shown and how edits are committed."""

    combo_boxes: bool = True
    arrows: bool = True
    calendar: bool = True
    calendar_week: bool = True
    commit_mode: str = COMMIT_LIVE
    years_before: int = 5
    years_after: int = 10
    date_format: str = "%Y-%m-%d"

    @classmethod
    def from_settings(cls, settings: dict) -> PickerOptions:
        return cls(**{k: settings[k] for k in _DEFAULTS if k in settings})

    @property
    def live_commit(self) -> bool:
        return self.commit_mode == COMMIT_LIVE
