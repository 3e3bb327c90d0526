# tests/test_calendar_math.py

import pytest
from datetime import date

from progress_wallpaper.calendar_math import (
    CalendarDate,
    day_of_year,
    days_in_month,
    days_in_year,
    first_weekday_of_month,
    is_leap_year,
    year_progress,
)


def test_leap_february():
    assert days_in_month(2024, 1) == 29
    assert days_in_month(2023, 1) == 28
    assert days_in_month(2000, 1) == 29
    assert days_in_month(1900, 1) == 28


def test_month_lengths_sum_to_year():
    for year in (1, 1900, 2000, 2023, 2024, 2100):
        assert sum(days_in_month(year, m) for m in range(12)) == days_in_year(year)


def test_leap_rule():
    assert is_leap_year(2024)
    assert not is_leap_year(2025)
    assert not is_leap_year(2100)
    assert is_leap_year(2400)


def test_first_weekday_is_sunday_based():
    # 2024-01-01 was a Monday, 2024-09-01 a Sunday, 2025-11-01 a Saturday
    assert first_weekday_of_month(2024, 0) == 1
    assert first_weekday_of_month(2024, 8) == 0
    assert first_weekday_of_month(2025, 10) == 6


def test_calendar_date_fields(day_100_2024):
    assert day_100_2024.year == 2024
    assert day_100_2024.month == 3
    assert day_100_2024.day == 9
    assert day_of_year(day_100_2024) == 100
    assert day_100_2024.to_date() == date(2024, 4, 9)


def test_from_date_end_of_year():
    d = CalendarDate.from_date(date(2023, 12, 31))
    assert d.day_of_year == 365
    assert d.month == 11


def test_progress_excludes_today(day_100_2024):
    p = year_progress(day_100_2024)
    assert p.total_days == 366
    assert p.completed_days == 99
    assert p.fraction_complete == pytest.approx(99 / 366)
    assert p.percentage == 27


def test_progress_bounds():
    first = year_progress(CalendarDate.from_ymd(2025, 1, 1))
    last = year_progress(CalendarDate.from_ymd(2025, 12, 31))
    assert first.fraction_complete == 0.0
    assert first.percentage == 0
    assert last.fraction_complete == pytest.approx(364 / 365)
    assert last.fraction_complete < 1.0
    assert last.percentage == 100


def test_progress_monotonic():
    fractions = [
        year_progress(CalendarDate.from_ymd(2025, m, 1)).fraction_complete
        for m in range(1, 13)
    ]
    assert fractions == sorted(fractions)
    assert len(set(fractions)) == 12
