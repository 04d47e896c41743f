"""Working copy of the date being edited in a picker."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from datetime import MAXYEAR, MINYEAR, date
from typing import Callable

from calendar_logic import carry_day, carry_month, last_day_of_month, year_in_range


class DateRef:
    """Mutable holder for the externally owned (bound) date.

    ``on_change`` is called with the new value whenever :meth:`set` changes it.
    """

    __slots__ = ("_value", "on_change")

    def __init__(self, value: date,
                 on_change: Callable[[date], None] | None = None) -> None:
        self._value = value
        self.on_change = on_change

    def get(self) -> date:
        return self._value

    def set(self, value: date) -> None:
        changed = value != self._value
        self._value = value
        if changed and self.on_change is not None:
            self.on_change(value)


@dataclass
class WorkingSelection:
    """In-progress (year, month, day) triple plus its session flag.

    ``initialized`` stays True for the whole show session so redraws do not
    overwrite the user's edits with the bound date.
    """

    year: int = 0
    month: int = 0
    day: int = 0
    initialized: bool = False

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def initialize_from(self, d: date) -> bool:
        """Copy ``d`` once per session. Returns True if it copied."""
        if self.initialized:
            return False
        self.year, self.month, self.day = d.year, d.month, d.day
        self.initialized = True
        return True

    def reset(self) -> None:
        self.initialized = False

    def commit_to(self, ref: DateRef) -> None:
        ref.set(self.as_date())

    # ------------------------------------------------------------------
    # Direct edits
    # ------------------------------------------------------------------
    def set_year(self, year: int) -> None:
        self.year = min(max(year, MINYEAR), MAXYEAR)
        self._clamp_day()

    def set_month(self, month: int) -> None:
        self.month = month
        self._clamp_day()

    def set_day(self, day: int) -> None:
        self.day = day

    def select_date(self, year: int, month: int, day: int) -> None:
        if year_in_range(year):
            self.year, self.month, self.day = year, month, day

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------
    # Steps that would leave the years a date can hold are ignored, so the
    # selection always stays committable.
    def step_year(self, delta: int) -> None:
        if year_in_range(self.year + delta):
            self.year += delta
            self._clamp_day()

    def step_month(self, delta: int) -> None:
        year, month = carry_month(self.year, self.month + delta)
        if year_in_range(year):
            self.year, self.month = year, month
            self._clamp_day()

    def step_day(self, delta: int) -> None:
        year, month, day = carry_day(self.year, self.month, self.day + delta)
        if year_in_range(year):
            self.year, self.month, self.day = year, month, day

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def last_day_of_month(self) -> int:
        return last_day_of_month(self.year, self.month)

    def as_tuple(self) -> tuple[int, int, int]:
        return self.year, self.month, self.day

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    def copy(self) -> WorkingSelection:
        return replace(self)

    def _clamp_day(self) -> None:
        self.day = min(self.day, self.last_day_of_month())

    # ------------------------------------------------------------------
    # Persistence shape
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> WorkingSelection | None:
        """Rebuild a selection from :meth:`to_dict` output.

        Returns None when ``data`` does not describe a valid selection.
        """
        if not isinstance(data, dict):
            return None
        fields = {}
        for key in ("year", "month", "day"):
            value = data.get(key)
            if not isinstance(value, int) or isinstance(value, bool):
                return None
            fields[key] = value
        initialized = data.get("initialized")
        if not isinstance(initialized, bool):
            return None
        if initialized:
            if not year_in_range(fields["year"]) or not 1 <= fields["month"] <= 12:
                return None
            if not 1 <= fields["day"] <= last_day_of_month(fields["year"], fields["month"]):
                return None
        return cls(initialized=initialized, **fields)
