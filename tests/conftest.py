import pytest

from progress_wallpaper.calendar_math import CalendarDate


@pytest.fixture
def day_100_2024():
    """2024-04-09, the 100th day of a leap year."""
    return CalendarDate.from_ymd(2024, 4, 9)
