"""Pure calendar calculations — no UI dependencies."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date

DAY_ABBR = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]

_MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
               "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

_CAL = calendar.Calendar(firstweekday=0)  # Monday


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise ValueError(f"Unknown month: {month}")


def month_name(month: int) -> str:
    """Return the three-letter English abbreviation for ``month``."""
    _check_month(month)
    return _MONTH_ABBR[month - 1]


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def last_day_of_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year`` (28–31)."""
    _check_month(month)
    return calendar.monthrange(year, month)[1]


def year_in_range(year: int) -> bool:
    """True if ``year`` can be held by a :class:`datetime.date`."""
    return MINYEAR <= year <= MAXYEAR


# ------------------------------------------------------------------
# Carry helpers
# ------------------------------------------------------------------
def carry_month(year: int, month: int) -> tuple[int, int]:
    """Normalise ``month`` into 1–12, carrying whole years into ``year``."""
    carry, index = divmod(month - 1, 12)
    return year + carry, index + 1


def prev_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month earlier."""
    return carry_month(year, month - 1)


def next_month(year: int, month: int) -> tuple[int, int]:
    """Return (year, month) for one month later."""
    return carry_month(year, month + 1)


def carry_day(year: int, month: int, day: int) -> tuple[int, int, int]:
    """Roll a day that stepped one past either end of its month.

    Day 0 becomes the last day of the previous month, ``last + 1`` becomes
    the 1st of the next month. Month (and year) overflow is carried by
    :func:`carry_month`. Days already in range are returned unchanged.
    """
    year, month = carry_month(year, month)
    if day < 1:
        year, month = prev_month(year, month)
        return year, month, last_day_of_month(year, month)
    if day > last_day_of_month(year, month):
        year, month = next_month(year, month)
        return year, month, 1
    return year, month, day


# ------------------------------------------------------------------
# Grid types
# ------------------------------------------------------------------
@dataclass(frozen=True)
class CalendarDay:
    """A concrete calendar date shown in a grid cell.

    Filler days next to December 9999 lie past :data:`datetime.MAXYEAR`,
    so the fields stay plain ints and only :meth:`as_date` needs a
    representable year.
    """

    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, d: date) -> CalendarDay:
        return cls(d.year, d.month, d.day)

    def as_date(self) -> date:
        return date(self.year, self.month, self.day)

    @property
    def weekday(self) -> int:
        """Monday=0 … Sunday=6."""
        return calendar.weekday(self.year, self.month, self.day)

    @property
    def is_weekend(self) -> bool:
        return self.weekday >= 5

    @property
    def selectable(self) -> bool:
        return year_in_range(self.year)

    def in_month(self, year: int, month: int) -> bool:
        return self.year == year and self.month == month

    def same_day(self, year: int, month: int, day: int) -> bool:
        return (self.year, self.month, self.day) == (year, month, day)


@dataclass(frozen=True)
class Week:
    """One grid row: ISO week number plus seven days, Monday first."""

    number: int
    days: tuple[CalendarDay, ...]


def month_grid(year: int, month: int) -> list[Week]:
    """Return the weeks covering ``month`` of ``year``.

    The first row starts on the Monday on or before the 1st and the last
    row ends on the Sunday on or after the month's last day, so leading and
    trailing cells hold days of the adjacent months. The grid has 4, 5 or 6
    rows depending on the month's length and starting weekday.
    """
    _check_month(month)
    days = [CalendarDay(y, m, d) for y, m, d in _CAL.itermonthdays3(year, month)]
    weeks: list[Week] = []
    for i in range(0, len(days), 7):
        row = tuple(days[i:i + 7])
        # A row's Monday never leaves years 1..9999 for any month in that range
        number = row[0].as_date().isocalendar()[1]
        weeks.append(Week(number=number, days=row))
    return weeks
