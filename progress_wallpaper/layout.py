"""
Pixel geometry of the 4×3 month grid and the year progress bar.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .calendar_math import days_in_month, first_weekday_of_month
from .config import DEVICE_IPHONE_15_PRO, DeviceProfile, GridStyle

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class DayPosition:
    """Center of one day's dot inside its month cell."""
    day: int        # 1-based day of month
    weekday: int    # 0 = Sunday
    week: int       # 0-based row inside the month
    cx: float
    cy: float


@dataclass(frozen=True)
class MonthCell:
    """
    One mini-calendar. Origin is the top-left of the label band; the
    dot rows start ``label_height`` below it.
    """
    index: int
    col: int
    row: int
    origin_x: float
    origin_y: float
    width: float
    height: float
    first_weekday: int
    day_count: int

    @property
    def label_x(self) -> float:
        return self.origin_x + self.width / 2

    @property
    def label_y(self) -> float:
        return self.origin_y


@dataclass(frozen=True)
class GradientStop:
    offset: int     # percent
    color: str


@dataclass(frozen=True)
class ProgressBarSpec:
    x: float
    y: float
    width: float
    height: float
    corner_radius: float
    filled_width: float
    label_x: float
    label_y: float
    gradient_stops: Optional[Tuple[GradientStop, ...]] = None


@dataclass(frozen=True)
class GridConfig:
    """
    Computed layout for one year.

    Month cells all share the same height (six week rows, whatever the
    actual week count) so every grid row lines up.
    """
    month_width: float
    month_height: float
    dot_radius: float
    dot_spacing: float      # Horizontal distance between weekday columns
    dot_pitch: float        # Vertical distance between week rows
    label_height: float
    vertical_offset: float
    total_height: float
    months: Tuple[MonthCell, ...]
    bar_x: float
    bar_y: float
    bar_right: float        # Right edge of the rightmost month column

    def day_positions(self, cell: MonthCell) -> Iterator[DayPosition]:
        """Yield every day of ``cell`` in order, Sunday in column 0."""
        dots_top = cell.origin_y + self.label_height
        for offset in range(cell.day_count):
            slot = cell.first_weekday + offset
            weekday = slot % DAYS_PER_WEEK
            week = slot // DAYS_PER_WEEK
            yield DayPosition(
                day=offset + 1,
                weekday=weekday,
                week=week,
                cx=cell.origin_x + self.dot_radius + weekday * self.dot_spacing,
                cy=dots_top + week * self.dot_pitch + self.dot_radius,
            )


class LayoutEngine:
    """
    Computes grid geometry from the device profile and grid style.

    Horizontal padding comes from the device's left safe zone. The block
    of months plus progress bar is centered on the full canvas height;
    the top/bottom safe zones are only checked, never used to shift it.
    """

    @classmethod
    def compute(
        cls,
        year: int,
        device: DeviceProfile = DEVICE_IPHONE_15_PRO,
        style: Optional[GridStyle] = None,
    ) -> GridConfig:
        s = style or GridStyle()
        padding = device.safe_zone.left

        available_width = device.width - 2 * padding - (s.cols - 1) * s.month_gap_x
        month_width = available_width / s.cols

        dot_pitch = 2 * s.dot_radius + s.dot_gap
        month_height = s.label_height + s.max_week_rows * dot_pitch

        # First and last dot centers sit flush with the cell's inner edges.
        dot_spacing = (month_width - 2 * s.dot_radius) / (DAYS_PER_WEEK - 1)

        months_height = s.rows * month_height + (s.rows - 1) * s.month_gap_y
        total_height = months_height + s.bar_gap + s.bar_height
        vertical_offset = (device.height - total_height) / 2

        months = tuple(
            cls._month_cell(
                year, m, padding, vertical_offset, month_width, month_height, s
            )
            for m in range(12)
        )

        bar_right = padding + (s.cols - 1) * (month_width + s.month_gap_x) + month_width

        grid = GridConfig(
            month_width=month_width,
            month_height=month_height,
            dot_radius=s.dot_radius,
            dot_spacing=dot_spacing,
            dot_pitch=dot_pitch,
            label_height=s.label_height,
            vertical_offset=vertical_offset,
            total_height=total_height,
            months=months,
            bar_x=padding,
            bar_y=vertical_offset + months_height + s.bar_gap,
            bar_right=bar_right,
        )
        cls._check_safe_zone(grid, device)
        logger.debug(
            "Layout %d on %s: month %.2fx%.2f, dot spacing %.2f, offset %.2f",
            year, device.name, month_width, month_height, dot_spacing, vertical_offset,
        )
        return grid

    @staticmethod
    def _month_cell(
        year: int,
        month: int,
        padding: float,
        vertical_offset: float,
        month_width: float,
        month_height: float,
        s: GridStyle,
    ) -> MonthCell:
        col = month % s.cols
        row = month // s.cols
        return MonthCell(
            index=month,
            col=col,
            row=row,
            origin_x=padding + col * (month_width + s.month_gap_x),
            origin_y=vertical_offset + row * (month_height + s.month_gap_y),
            width=month_width,
            height=month_height,
            first_weekday=first_weekday_of_month(year, month),
            day_count=days_in_month(year, month),
        )

    @staticmethod
    def _check_safe_zone(grid: GridConfig, device: DeviceProfile) -> None:
        _, top, _, bottom = device.content_bounds
        if grid.vertical_offset < top or grid.vertical_offset + grid.total_height > bottom:
            logger.warning(
                "Grid (%.0f..%.0f) intrudes into the safe zone of %s",
                grid.vertical_offset,
                grid.vertical_offset + grid.total_height,
                device.name,
            )

    @staticmethod
    def progress_bar(
        grid: GridConfig,
        fraction: float,
        style: Optional[GridStyle] = None,
        gradient_stops: Optional[Tuple[GradientStop, ...]] = None,
    ) -> ProgressBarSpec:
        """
        Bar spanning the grid width minus room for the percentage label.

        ``filled_width`` uses the same fraction as the label, so it may
        trail the dot fill by up to a day; that is expected.
        """
        s = style or GridStyle()
        total_width = grid.bar_right - grid.bar_x
        width = total_width - s.bar_label_width - s.bar_label_gap
        return ProgressBarSpec(
            x=grid.bar_x,
            y=grid.bar_y,
            width=width,
            height=s.bar_height,
            corner_radius=s.bar_height / 2,
            filled_width=width * fraction,
            label_x=grid.bar_right,
            label_y=grid.bar_y + s.bar_height / 2 + s.progress_baseline_shift,
            gradient_stops=gradient_stops,
        )
