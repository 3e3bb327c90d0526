"""
Builds the format-agnostic SceneDocument for one render.

A scene is an ordered tuple of drawing primitives; later primitives are
painted on top of earlier ones. Serializing to SVG or rasterizing to PNG
happens elsewhere (see ``svg`` and ``raster``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .calendar_math import CalendarDate, year_progress
from .config import (
    DEFAULT_PALETTE,
    DEVICE_IPHONE_15_PRO,
    MONTH_NAMES,
    SEASON_GRADIENT_STOPS,
    DeviceProfile,
    GridStyle,
    Palette,
)
from .layout import (
    DayPosition,
    GradientStop,
    GridConfig,
    LayoutEngine,
    MonthCell,
    ProgressBarSpec,
)
from .seasons import DEFAULT_CLASSIFIER, SeasonClassifier

SEASON_GRADIENT_ID = "seasonGradient"


# ─────────────────────────── Primitives ───────────────────────

@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float
    fill: Optional[str] = None
    gradient: Optional[str] = None  # id of a LinearGradient, overrides fill
    rx: float = 0
    opacity: float = 1.0


@dataclass(frozen=True)
class Circle:
    """A day dot: either filled, or outlined with ``stroke``."""
    cx: float
    cy: float
    r: float
    filled: bool
    fill: Optional[str] = None
    stroke: Optional[str] = None
    stroke_width: float = 0


@dataclass(frozen=True)
class Text:
    x: float
    y: float             # baseline
    content: str
    anchor: str          # "middle" or "end"
    font_size: float
    font_weight: int
    fill: str
    letter_spacing: float = 0


@dataclass(frozen=True)
class LinearGradient:
    """Left-to-right gradient sized to whatever shape references it."""
    id: str
    stops: Tuple[GradientStop, ...]


Shape = Union[Rect, Circle, Text, LinearGradient]


@dataclass(frozen=True)
class SceneDocument:
    width: int
    height: int
    shapes: Tuple[Shape, ...]

    def circles(self) -> List[Circle]:
        return [s for s in self.shapes if isinstance(s, Circle)]


# ─────────────────────────── Builder ──────────────────────────

class SceneBuilder:
    """
    Composes layout, classification and palette into a SceneDocument.

    Holds only read-only configuration, so a single builder can serve
    any number of renders.
    """

    def __init__(
        self,
        device: DeviceProfile = DEVICE_IPHONE_15_PRO,
        style: Optional[GridStyle] = None,
        palette: Palette = DEFAULT_PALETTE,
        classifier: SeasonClassifier = DEFAULT_CLASSIFIER,
    ):
        self.device = device
        self.style = style or GridStyle()
        self.palette = palette
        self.classifier = classifier

    def build(self, date: CalendarDate, colored: bool = False) -> SceneDocument:
        progress = year_progress(date)
        grid = LayoutEngine.compute(date.year, self.device, self.style)

        shapes: List[Shape] = [
            Rect(0, 0, self.device.width, self.device.height, fill=self.palette.background)
        ]

        day_counter = 0
        for cell in grid.months:
            shapes.append(self._month_label(cell))
            for pos in grid.day_positions(cell):
                day_counter += 1
                complete = day_counter < date.day_of_year
                shapes.append(self._dot(cell, pos, grid, complete, colored))

        bar = LayoutEngine.progress_bar(
            grid,
            progress.fraction_complete,
            self.style,
            self.season_gradient_stops() if colored else None,
        )
        shapes.extend(self._progress_bar(bar, progress.percentage))

        return SceneDocument(self.device.width, self.device.height, tuple(shapes))

    def season_gradient_stops(self) -> Tuple[GradientStop, ...]:
        return tuple(
            GradientStop(offset, getattr(self.palette, attr))
            for offset, attr in SEASON_GRADIENT_STOPS
        )

    def _month_label(self, cell: MonthCell) -> Text:
        s = self.style
        return Text(
            x=cell.label_x,
            y=cell.label_y,
            content=MONTH_NAMES[cell.index],
            anchor="middle",
            font_size=s.month_font_size,
            font_weight=s.month_font_weight,
            fill=self.palette.month_label,
            letter_spacing=s.month_letter_spacing,
        )

    def _dot(
        self,
        cell: MonthCell,
        pos: DayPosition,
        grid: GridConfig,
        complete: bool,
        colored: bool,
    ) -> Circle:
        p = self.palette
        if colored:
            category = self.classifier.classify(cell.index, pos.day, pos.weekday)
            color = p.season_color(category)
        else:
            color = None

        if complete:
            return Circle(pos.cx, pos.cy, grid.dot_radius, True, fill=color or p.completed)

        # Upcoming days (today included) are outlined. Colored mode mutes the
        # season color, falling back to muted "completed" rather than gray.
        stroke = p.muted(color) if colored else p.incomplete
        return Circle(
            pos.cx,
            pos.cy,
            grid.dot_radius - self.style.outline_inset,
            False,
            stroke=stroke,
            stroke_width=self.style.outline_width,
        )

    def _progress_bar(
        self,
        bar: ProgressBarSpec,
        percentage: int,
    ) -> List[Shape]:
        p = self.palette
        s = self.style
        gradient = None
        if bar.gradient_stops:
            gradient = LinearGradient(SEASON_GRADIENT_ID, bar.gradient_stops)
        shapes: List[Shape] = [
            Rect(
                bar.x, bar.y, bar.width, bar.height,
                fill=p.incomplete, rx=bar.corner_radius, opacity=p.track_opacity,
            )
        ]
        if gradient is not None:
            shapes.append(gradient)
        if bar.filled_width > 0:
            if gradient is not None:
                fill = Rect(
                    bar.x, bar.y, bar.filled_width, bar.height,
                    gradient=gradient.id, rx=bar.corner_radius,
                )
            else:
                fill = Rect(
                    bar.x, bar.y, bar.filled_width, bar.height,
                    fill=p.completed, rx=bar.corner_radius,
                )
            shapes.append(fill)
        shapes.append(
            Text(
                x=bar.label_x,
                y=bar.label_y,
                content=f"{percentage}%",
                anchor="end",
                font_size=s.progress_font_size,
                font_weight=s.progress_font_weight,
                fill=p.month_label,
            )
        )
        return shapes


_DEFAULT_BUILDER = SceneBuilder()


def render(date: CalendarDate, colored: bool = False) -> SceneDocument:
    """Deterministic scene for ``date`` in monochrome or colored style."""
    return _DEFAULT_BUILDER.build(date, colored)
