# tests/test_svg.py

from progress_wallpaper.calendar_math import CalendarDate
from progress_wallpaper.scene import SceneDocument, Text, render
from progress_wallpaper.svg import _num, to_svg


def test_number_format():
    assert _num(847.0) == "847"
    assert _num(181.125) == "181.125"
    assert _num(10.5) == "10.5"
    assert _num(128 / 255) == "0.502"


def test_document_frame(day_100_2024):
    svg = to_svg(render(day_100_2024))
    lines = svg.splitlines()
    assert lines[0] == (
        '<svg xmlns="http://www.w3.org/2000/svg" width="1179" height="2556" '
        'viewBox="0 0 1179 2556">'
    )
    assert lines[1] == '  <rect x="0" y="0" width="1179" height="2556" fill="#1C1D17"/>'
    assert lines[-1] == "</svg>"


def test_month_label_markup(day_100_2024):
    svg = to_svg(render(day_100_2024))
    assert (
        '<text x="181.125" y="847" text-anchor="middle" font-family="sans-serif" '
        'font-size="32" font-weight="600" fill="#898989" letter-spacing="2">JAN</text>'
    ) in svg


def test_circles(day_100_2024):
    svg = to_svg(render(day_100_2024))
    assert svg.count("<circle ") == 366
    assert '<circle cx="108.375" cy="904" r="12" fill="#D9D9DA"/>' in svg
    assert 'fill="none" stroke="#A6A6A4" stroke-width="3"/>' in svg


def test_colored_markup(day_100_2024):
    svg = to_svg(render(day_100_2024, colored=True))
    assert 'stroke="#D9D9DA" stroke-opacity="0.502"' in svg
    assert svg.count("<stop ") == 10
    assert '<linearGradient id="seasonGradient"' in svg
    assert 'fill="url(#seasonGradient)"' in svg
    assert svg.index("<linearGradient") < svg.index("url(#seasonGradient)")
    assert ">27%</text>" in svg


def test_text_is_escaped():
    scene = SceneDocument(10, 10, (Text(0, 0, "<&>", "end", 12, 400, "#FFFFFF"),))
    assert "&lt;&amp;&gt;" in to_svg(scene)


def test_zero_progress_has_no_fill_rect():
    svg = to_svg(render(CalendarDate.from_ymd(2025, 1, 1), colored=True))
    assert "url(#seasonGradient)" not in svg
    assert ">0%</text>" in svg
