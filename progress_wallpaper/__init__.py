"""
Year-progress calendar wallpaper.

    CalendarDate / YearProgress - date math        (calendar_math)
    SeasonClassifier            - day categories   (seasons)
    LayoutEngine                - grid geometry    (layout)
    SceneBuilder / render()     - drawing list     (scene)
    to_svg() / Rasterizer       - output adapters  (svg, raster)
"""

from .calendar_math import (
    CalendarDate,
    YearProgress,
    day_of_year,
    days_in_month,
    first_weekday_of_month,
    is_leap_year,
    year_progress,
)
from .errors import RasterizeError, WallpaperError
from .raster import Rasterizer
from .resolve import resolve_date
from .scene import SceneBuilder, SceneDocument, render
from .seasons import SeasonCategory, SeasonClassifier, classify, is_holiday
from .svg import to_svg

__all__ = [
    "CalendarDate",
    "YearProgress",
    "day_of_year",
    "days_in_month",
    "first_weekday_of_month",
    "is_leap_year",
    "year_progress",
    "RasterizeError",
    "WallpaperError",
    "Rasterizer",
    "resolve_date",
    "SceneBuilder",
    "SceneDocument",
    "render",
    "SeasonCategory",
    "SeasonClassifier",
    "classify",
    "is_holiday",
    "to_svg",
]

__version__ = "0.1.0"
