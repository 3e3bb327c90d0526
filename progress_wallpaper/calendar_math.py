"""
Gregorian date arithmetic for the year-progress grid.

Months are zero-based throughout (0 = January, 11 = December) and
weekdays are Sunday-based (0 = Sunday, 6 = Saturday), which is the
column order of every mini-calendar on the wallpaper.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class CalendarDate:
    """A single render date. Built once per render and never mutated."""
    year: int
    day_of_year: int  # 1-based
    month: int        # 0..11
    day: int          # 1..31

    @classmethod
    def from_date(cls, d: date) -> CalendarDate:
        return cls(
            year=d.year,
            day_of_year=d.timetuple().tm_yday,
            month=d.month - 1,
            day=d.day,
        )

    @classmethod
    def from_ymd(cls, year: int, month: int, day: int) -> CalendarDate:
        """Build from a human-style date where ``month`` is 1..12."""
        return cls.from_date(date(year, month, day))

    def to_date(self) -> date:
        return date(self.year, self.month + 1, self.day)


@dataclass(frozen=True)
class YearProgress:
    """
    How far through its year a date is.

    The current day is never counted as complete, so on Jan 1 the
    fraction is exactly 0 and on Dec 31 it stays just below 1.
    """
    total_days: int
    completed_days: int
    fraction_complete: float

    @property
    def percentage(self) -> int:
        # Round half up, so 12.5% reads as 13%.
        return int(self.fraction_complete * 100 + 0.5)


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(year: int, month: int) -> int:
    """Number of days in zero-based ``month`` of ``year``."""
    return calendar.monthrange(year, month + 1)[1]


def first_weekday_of_month(year: int, month: int) -> int:
    """Sunday-based weekday (0..6) of the 1st of zero-based ``month``."""
    monday_based = calendar.monthrange(year, month + 1)[0]
    return (monday_based + 1) % 7


def day_of_year(d: CalendarDate) -> int:
    return d.day_of_year


def year_progress(d: CalendarDate) -> YearProgress:
    total = days_in_year(d.year)
    completed = d.day_of_year - 1
    return YearProgress(
        total_days=total,
        completed_days=completed,
        fraction_complete=completed / total,
    )
