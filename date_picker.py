"""Date picker popup controller: maps UI events onto the working selection."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from calendar_logic import CalendarDay, Week, month_grid, month_name
from selection import DateRef, WorkingSelection
from settings import PickerOptions
from state_store import SelectionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayCell:
    """A grid day plus the facts the view needs to style it."""

    day: CalendarDay
    is_today: bool
    is_selected: bool
    in_month: bool

    @property
    def is_weekend(self) -> bool:
        return self.day.is_weekend


def _check_delta(delta: int) -> None:
    if delta not in (-1, 1):
        raise ValueError(f"Step delta must be -1 or +1, got {delta!r}")


class DatePickerPopup:
    """Editing session for one bound date.

    State lives in ``store`` under ``key`` and is reloaded on every call, so
    any number of views can redraw from it. With a live commit policy every
    edit is written straight back to ``ref``; otherwise only :meth:`save`
    writes it.
    """

    def __init__(self, ref: DateRef, store: SelectionStore, key: str,
                 options: PickerOptions | None = None,
                 today: Callable[[], date] | None = None,
                 on_close: Callable[[], None] | None = None) -> None:
        self.ref = ref
        self.store = store
        self.key = key
        self.options = options or PickerOptions()
        self._today = today or date.today
        self._on_close = on_close

    @property
    def today(self) -> date:
        return self._today()

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------
    def open(self) -> WorkingSelection:
        """Return the working selection, initialising it on first use."""
        sel = self.store.load(self.key) or WorkingSelection()
        if sel.initialize_from(self.ref.get()):
            logger.debug("Picker %s initialised from %s", self.key, self.ref.get())
            self.store.store(self.key, sel)
        return sel

    def close(self) -> None:
        sel = self.store.load(self.key) or WorkingSelection()
        sel.reset()
        self.store.store(self.key, sel)
        logger.debug("Picker %s closed", self.key)
        if self._on_close is not None:
            self._on_close()

    def save(self) -> None:
        sel = self.open()
        sel.commit_to(self.ref)
        logger.debug("Picker %s saved %s", self.key, self.ref.get())
        self.close()

    def cancel(self) -> None:
        self.close()

    def _apply(self, mutate: Callable[[WorkingSelection], None]) -> WorkingSelection:
        sel = self.open()
        mutate(sel)
        # Commit first so a failed commit leaves the stored state untouched
        if self.options.live_commit:
            sel.commit_to(self.ref)
        self.store.store(self.key, sel)
        return sel

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def select_year(self, year: int) -> WorkingSelection:
        return self._apply(lambda sel: sel.set_year(year))

    def select_month(self, month: int) -> WorkingSelection:
        return self._apply(lambda sel: sel.set_month(month))

    def select_day(self, day: int) -> WorkingSelection:
        return self._apply(lambda sel: sel.set_day(day))

    def step_year(self, delta: int) -> WorkingSelection:
        _check_delta(delta)
        return self._apply(lambda sel: sel.step_year(delta))

    def step_month(self, delta: int) -> WorkingSelection:
        _check_delta(delta)
        return self._apply(lambda sel: sel.step_month(delta))

    def step_day(self, delta: int) -> WorkingSelection:
        _check_delta(delta)
        return self._apply(lambda sel: sel.step_day(delta))

    def pick(self, day: CalendarDay) -> WorkingSelection:
        return self._apply(lambda sel: sel.select_date(day.year, day.month, day.day))

    # ------------------------------------------------------------------
    # Render view
    # ------------------------------------------------------------------
    @property
    def current(self) -> tuple[int, int, int]:
        return self.open().as_tuple()

    def weeks(self, sel: WorkingSelection | None = None) -> list[Week]:
        sel = sel or self.open()
        return month_grid(sel.year, sel.month)

    def cells(self, sel: WorkingSelection | None = None) -> list[tuple[int, list[DayCell]]]:
        """Return ``(week_number, cells)`` for every row of the working month.

        Pass ``sel`` from :meth:`open` to render without reloading the store.
        """
        sel = sel or self.open()
        today = CalendarDay.from_date(self.today)
        rows = []
        for week in self.weeks(sel):
            cells = [
                DayCell(
                    day=d,
                    is_today=d == today,
                    is_selected=d.same_day(sel.year, sel.month, sel.day),
                    in_month=d.in_month(sel.year, sel.month),
                )
                for d in week.days
            ]
            rows.append((week.number, cells))
        return rows

    def year_choices(self) -> list[int]:
        year = self.today.year
        return list(range(year - self.options.years_before, year + self.options.years_after))

    @staticmethod
    def month_choices() -> list[tuple[int, str]]:
        return [(m, month_name(m)) for m in range(1, 13)]

    def day_choices(self, sel: WorkingSelection | None = None) -> list[int]:
        sel = sel or self.open()
        return list(range(1, sel.last_day_of_month() + 1))


class DatePickerButton:
    """Button state: shows the bound date and toggles the popup."""

    def __init__(self, ref: DateRef, store: SelectionStore, key: str,
                 options: PickerOptions | None = None,
                 today: Callable[[], date] | None = None) -> None:
        self.ref = ref
        self.options = options or PickerOptions()
        self.picker_visible = False
        self.popup = DatePickerPopup(
            ref, store, f"{key}/popup", self.options, today, on_close=self._hide,
        )

    def _hide(self) -> None:
        self.picker_visible = False

    def text(self) -> str:
        return self.ref.get().strftime(self.options.date_format)

    def toggle(self) -> None:
        if self.picker_visible:
            self.popup.close()
        else:
            self.picker_visible = True
            self.popup.open()
