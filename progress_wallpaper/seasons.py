"""
Season and school-holiday classification for individual days.

Every predicate works on a (month, day) pair with a zero-based month,
so windows that wrap the year boundary (winter) need no year context.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Optional, Tuple

MonthDay = Tuple[int, int]  # (zero-based month, day of month)


class SeasonCategory(Enum):
    """Semantic color class of a day, in descending precedence."""
    HOLIDAY = auto()
    WEEKEND = auto()
    WINTER = auto()
    SPRING = auto()
    SUMMER = auto()
    NONE = auto()


# Fixed school calendar. Months are zero-based.
SCHOOL_HOLIDAYS: FrozenSet[MonthDay] = frozenset([
    # Pre-school days
    (7, 11), (7, 12), (7, 13),
    # Labor Day, professional development
    (8, 1), (8, 29),
    # Indigenous Peoples' Day
    (9, 13),
    # Veterans Day, Thanksgiving
    (10, 11), (10, 26), (10, 27), (10, 28),
    # Winter break
    (11, 22), (11, 23), (11, 24), (11, 25), (11, 26),
    (11, 29), (11, 30), (11, 31),
    # New Year's, professional development, MLK Day
    (0, 1), (0, 2), (0, 5), (0, 6), (0, 19),
    # Mid-winter break
    (1, 16), (1, 17), (1, 18), (1, 19), (1, 20),
    # Professional development
    (2, 16), (2, 20),
    # Spring break
    (3, 6), (3, 7), (3, 8), (3, 9), (3, 10),
    # Memorial Day
    (4, 25),
])


def is_winter(month: int, day: int) -> bool:
    """Nov 12 through Feb 2, wrapping the year boundary."""
    if month == 10:
        return day >= 12
    if month == 1:
        return day <= 2
    return month in (11, 0)


def is_spring(month: int, day: int) -> bool:
    """Feb 3 through May 7."""
    if month == 1:
        return day >= 3
    if month == 4:
        return day <= 7
    return month in (2, 3)


def is_summer(month: int, day: int) -> bool:
    """Jun 5 through Aug 13."""
    if month == 5:
        return day >= 5
    if month == 7:
        return day <= 13
    return month == 6


def season(month: int, day: int) -> SeasonCategory:
    """Season window of a day, ignoring holidays and weekends."""
    if is_winter(month, day):
        return SeasonCategory.WINTER
    if is_spring(month, day):
        return SeasonCategory.SPRING
    if is_summer(month, day):
        return SeasonCategory.SUMMER
    return SeasonCategory.NONE


def is_weekend(weekday: int) -> bool:
    return weekday in (0, 6)


@dataclass(frozen=True)
class SeasonClassifier:
    """
    Maps a day to its SeasonCategory.

    The holiday table is injected at construction and never written
    afterwards, so one classifier can be shared by any number of renders.
    Precedence: holiday > weekend > winter > spring > summer > none.
    """
    holidays: FrozenSet[MonthDay] = SCHOOL_HOLIDAYS

    def is_holiday(self, month: int, day: int) -> bool:
        return (month, day) in self.holidays

    def classify(
        self, month: int, day: int, weekday: Optional[int] = None
    ) -> SeasonCategory:
        """
        Classify a day of a zero-based month.

        ``weekday`` (Sunday = 0) is optional because the weekend rule is
        the only one that depends on the year; without it the result is a
        pure function of (month, day).
        """
        if self.is_holiday(month, day):
            return SeasonCategory.HOLIDAY
        if weekday is not None and is_weekend(weekday):
            return SeasonCategory.WEEKEND
        return season(month, day)


DEFAULT_CLASSIFIER = SeasonClassifier()


def classify(month: int, day: int, weekday: Optional[int] = None) -> SeasonCategory:
    return DEFAULT_CLASSIFIER.classify(month, day, weekday)


def is_holiday(month: int, day: int) -> bool:
    return DEFAULT_CLASSIFIER.is_holiday(month, day)
