# tests/test_scene.py

import pytest

from progress_wallpaper.calendar_math import CalendarDate
from progress_wallpaper.config import DEFAULT_PALETTE as P
from progress_wallpaper.config import Palette
from progress_wallpaper.scene import (
    SEASON_GRADIENT_ID,
    Circle,
    LinearGradient,
    Rect,
    SceneBuilder,
    Text,
    render,
)
from progress_wallpaper.seasons import SeasonClassifier


def _bar_fill(scene):
    rects = [s for s in scene.shapes if isinstance(s, Rect)]
    # background, track, and optionally the fill
    return rects[2] if len(rects) == 3 else None


def _circle_for(scene, month, day):
    """Circle of (zero-based month, day) found by walking the month labels."""
    current = -1
    seen = 0
    for shape in scene.shapes:
        if isinstance(shape, Text) and shape.anchor == "middle":
            current += 1
            seen = 0
        elif isinstance(shape, Circle) and current == month:
            seen += 1
            if seen == day:
                return shape
    raise AssertionError("day not found")


def test_deterministic(day_100_2024):
    assert render(day_100_2024, True) == render(day_100_2024, True)
    assert render(day_100_2024, False) == render(day_100_2024, False)


def test_day_coverage():
    assert len(render(CalendarDate.from_ymd(2024, 6, 1)).circles()) == 366
    assert len(render(CalendarDate.from_ymd(2025, 6, 1)).circles()) == 365


def test_fill_boundary(day_100_2024):
    circles = render(day_100_2024).circles()
    filled = [c.filled for c in circles]
    assert filled[:99] == [True] * 99
    assert not any(filled[99:])
    assert circles[99].filled is False


def test_first_day_has_nothing_filled():
    scene = render(CalendarDate.from_ymd(2025, 1, 1))
    assert not any(c.filled for c in scene.circles())
    assert _bar_fill(scene) is None


def test_shape_order(day_100_2024):
    shapes = render(day_100_2024, colored=True).shapes
    assert isinstance(shapes[0], Rect)
    assert shapes[0].fill == P.background
    assert isinstance(shapes[1], Text) and shapes[1].content == "JAN"
    assert all(isinstance(s, Circle) for s in shapes[2:33])
    assert isinstance(shapes[33], Text) and shapes[33].content == "FEB"

    tail = shapes[-4:]
    assert isinstance(tail[0], Rect) and tail[0].opacity == pytest.approx(0.3)
    assert isinstance(tail[1], LinearGradient)
    assert isinstance(tail[2], Rect) and tail[2].gradient == tail[1].id
    assert isinstance(tail[3], Text) and tail[3].content == "27%"
    assert tail[3].anchor == "end"
    assert len(shapes) == 1 + 12 + 366 + 4


def test_month_labels_in_order(day_100_2024):
    labels = [
        s.content for s in render(day_100_2024).shapes
        if isinstance(s, Text) and s.anchor == "middle"
    ]
    assert labels == ["JAN", "FEB", "MAR", "APR", "MAY", "JUN",
                      "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"]


def test_dot_sizes(day_100_2024):
    circles = render(day_100_2024).circles()
    assert circles[0].r == 12
    assert circles[-1].r == pytest.approx(10.5)
    assert circles[-1].stroke_width == 3
    assert circles[-1].fill is None


def test_monochrome_ignores_classification(day_100_2024):
    scene = render(day_100_2024, colored=False)
    assert {c.fill for c in scene.circles() if c.filled} == {P.completed}
    assert {c.stroke for c in scene.circles() if not c.filled} == {P.incomplete}
    assert not any(isinstance(s, LinearGradient) for s in scene.shapes)
    assert _bar_fill(scene).fill == P.completed


def test_colored_holiday_beats_winter():
    scene = render(CalendarDate.from_ymd(2024, 12, 31), colored=True)
    assert _circle_for(scene, 11, 25).fill == P.holiday
    # Thursday 2024-12-05 is an ordinary winter day
    assert _circle_for(scene, 11, 5).fill == P.winter


def test_colored_weekend_and_seasons():
    scene = render(CalendarDate.from_ymd(2025, 12, 31), colored=True)
    assert _circle_for(scene, 2, 1).fill == P.holiday    # Saturday
    assert _circle_for(scene, 2, 3).fill == P.spring     # Monday
    assert _circle_for(scene, 6, 15).fill == P.summer    # Tuesday
    assert _circle_for(scene, 8, 15).fill == P.completed  # Monday, no season


def test_colored_outlines_are_muted():
    scene = render(CalendarDate.from_ymd(2025, 1, 1), colored=True)
    today = _circle_for(scene, 0, 1)
    assert not today.filled
    assert today.stroke == P.holiday + "80"
    assert _circle_for(scene, 2, 3).stroke == P.spring + "80"
    # Outside every window the muted completed color is used, not gray
    assert _circle_for(scene, 8, 15).stroke == P.completed + "80"


def test_gradient_is_date_independent():
    offsets = [0, 9, 10, 35, 42, 61, 62, 86, 87, 100]
    for d in (CalendarDate.from_ymd(2025, 1, 1), CalendarDate.from_ymd(2025, 9, 30)):
        gradients = [s for s in render(d, True).shapes if isinstance(s, LinearGradient)]
        assert len(gradients) == 1
        stops = gradients[0].stops
        assert [s.offset for s in stops] == offsets
        colors = [s.color for s in stops]
        assert len({tuple(colors[i:i + 2]) for i in range(0, 10, 2)}) == 4
        assert all(colors[i] == colors[i + 1] for i in range(0, 10, 2))


def test_bar_fill_is_monotonic():
    widths = []
    for month in range(1, 13):
        fill = _bar_fill(render(CalendarDate.from_ymd(2025, month, 15)))
        widths.append(fill.width)
    assert widths == sorted(widths)


def test_injected_classifier():
    builder = SceneBuilder(classifier=SeasonClassifier(holidays=frozenset()))
    scene = builder.build(CalendarDate.from_ymd(2024, 12, 31), colored=True)
    assert _circle_for(scene, 11, 25).fill == P.winter


def test_gradient_comes_from_bar_stops():
    builder = SceneBuilder(palette=Palette(winter="#112233"))
    shapes = builder.build(CalendarDate.from_ymd(2025, 6, 1), colored=True).shapes
    gradient = next(s for s in shapes if isinstance(s, LinearGradient))
    assert gradient.id == SEASON_GRADIENT_ID
    assert gradient.stops == builder.season_gradient_stops()
    assert gradient.stops[0].color == "#112233"
    assert gradient.stops[-1].color == "#112233"
