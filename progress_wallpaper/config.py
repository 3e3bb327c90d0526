"""
Static render configuration and environment-driven runtime settings.

The layout numbers are fixed for the target lock screen; they are kept
in frozen dataclasses so a different device or style can be passed in
without touching the engine.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from .seasons import SeasonCategory

logger = logging.getLogger(__name__)

Bounds = Tuple[float, float, float, float]  # left, top, right, bottom


# ─────────────────────────── Device Profiles ──────────────────

@dataclass(frozen=True)
class SafeZone:
    """Region to avoid placing content (in pixels from edge)."""
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0


@dataclass(frozen=True)
class DeviceProfile:
    """
    Screen resolution and lock screen safe zones.

    Top keeps the grid clear of the dynamic island and clock, bottom
    clears the home indicator. Left/right double as the horizontal
    padding of the month grid.
    """
    name: str
    width: int
    height: int
    safe_zone: SafeZone

    @property
    def content_bounds(self) -> Bounds:
        """Usable content area after applying safe zones."""
        return (
            self.safe_zone.left,
            self.safe_zone.top,
            self.width - self.safe_zone.right,
            self.height - self.safe_zone.bottom,
        )


DEVICE_IPHONE_15_PRO = DeviceProfile(
    name="iPhone 15 Pro",
    width=1179,
    height=2556,
    safe_zone=SafeZone(top=450, bottom=200, left=60, right=60),
)


# ─────────────────────────── Grid Style ───────────────────────

@dataclass(frozen=True)
class GridStyle:
    """Spacing and typography of the month grid and progress bar."""
    cols: int = 4
    rows: int = 3
    month_gap_x: float = 30
    month_gap_y: float = 50
    dot_radius: float = 12
    dot_gap: float = 8
    label_height: float = 45
    max_week_rows: int = 6          # No month spans more than 6 weeks
    outline_width: float = 3
    outline_inset: float = 1.5      # Keeps the stroke inside the dot radius
    bar_height: float = 16
    bar_gap: float = 35             # Between the last month row and the bar
    bar_label_gap: float = 20
    bar_label_width: float = 60     # Reserved for the percentage text
    month_font_size: float = 32
    month_font_weight: int = 600
    month_letter_spacing: float = 2
    progress_font_size: float = 24
    progress_font_weight: int = 500
    progress_baseline_shift: float = 8


# ─────────────────────────── Palette ──────────────────────────

MUTED_ALPHA = "80"  # 50% opacity suffix for #RRGGBB colors


@dataclass(frozen=True)
class Palette:
    """
    Hex colors for the wallpaper.

    completed: fill for elapsed days (and the default season color).
    incomplete: outline for upcoming days in monochrome mode.
    """
    background: str = "#1C1D17"
    completed: str = "#D9D9DA"
    incomplete: str = "#A6A6A4"
    month_label: str = "#898989ff"
    summer: str = "#E8D9A0"
    spring: str = "#C5E0B4"
    winter: str = "#D4C5E8"
    holiday: str = "#B0B0B0"
    track_opacity: float = 0.3

    def season_color(self, category: SeasonCategory) -> str:
        return {
            SeasonCategory.HOLIDAY: self.holiday,
            SeasonCategory.WEEKEND: self.holiday,
            SeasonCategory.WINTER: self.winter,
            SeasonCategory.SPRING: self.spring,
            SeasonCategory.SUMMER: self.summer,
            SeasonCategory.NONE: self.completed,
        }[category]

    @staticmethod
    def muted(color: str) -> str:
        return color + MUTED_ALPHA


DEFAULT_PALETTE = Palette()

MONTH_NAMES = (
    "JAN", "FEB", "MAR", "APR", "MAY", "JUN",
    "JUL", "AUG", "SEP", "OCT", "NOV", "DEC",
)

# Progress bar gradient as (offset percent, palette attribute). A rough
# approximation of the season windows, intentionally not derived from them.
SEASON_GRADIENT_STOPS: Tuple[Tuple[int, str], ...] = (
    (0, "winter"),
    (9, "winter"),
    (10, "spring"),
    (35, "spring"),
    (42, "summer"),
    (61, "summer"),
    (62, "completed"),
    (86, "completed"),
    (87, "winter"),
    (100, "winter"),
)

CACHE_MAX_AGE = 3600  # seconds a rendered image stays valid


# ─────────────────────────── Runtime Settings ─────────────────

STYLES = ("mono", "colored")
FORMATS = ("png", "svg")


@dataclass(frozen=True)
class Settings:
    """Runtime options read from the environment (and ``.env``)."""
    timezone: str = "UTC"
    style: str = "mono"
    output_format: str = "png"
    font_path: Optional[Path] = None
    output_dir: Path = Path("public")

    @property
    def colored(self) -> bool:
        return self.style == "colored"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> Settings:
        if load_dotenv_file:
            load_dotenv()

        style = os.getenv("WALLPAPER_STYLE", "mono").strip().lower()
        if style not in STYLES:
            logger.warning("Unknown WALLPAPER_STYLE %r, using mono", style)
            style = "mono"
        output_format = os.getenv("WALLPAPER_FORMAT", "png").strip().lower()
        if output_format not in FORMATS:
            logger.warning("Unknown WALLPAPER_FORMAT %r, using png", output_format)
            output_format = "png"
        font = os.getenv("WALLPAPER_FONT", "").strip()

        return cls(
            timezone=os.getenv("WALLPAPER_TZ", "").strip() or "UTC",
            style=style,
            output_format=output_format,
            font_path=Path(font) if font else None,
            output_dir=Path(os.getenv("OUTPUT_DIR", "public")),
        )
