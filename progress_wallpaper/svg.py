"""SVG serialization of a SceneDocument."""

from __future__ import annotations

from typing import List
from xml.sax.saxutils import escape, quoteattr

from .scene import Circle, LinearGradient, Rect, SceneDocument, Shape, Text

SVG_NS = "http://www.w3.org/2000/svg"


def _num(value: float) -> str:
    """Shortest stable form of a coordinate: 847.0 -> "847"."""
    value = round(float(value), 4)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _paint(attr: str, color: str) -> str:
    """
    Split ``#RRGGBBAA`` into a color plus ``*-opacity`` attribute, which
    more SVG consumers understand than 8-digit hex.
    """
    h = color.lstrip("#")
    if len(h) == 8:
        alpha = int(h[6:8], 16)
        base = f'{attr}="#{h[:6]}"'
        if alpha == 255:
            return base
        return f'{base} {attr}-opacity="{_num(alpha / 255)}"'
    return f'{attr}="{color}"'


def _rect(r: Rect) -> str:
    parts = [
        f'x="{_num(r.x)}"', f'y="{_num(r.y)}"',
        f'width="{_num(r.width)}"', f'height="{_num(r.height)}"',
    ]
    if r.rx:
        parts.append(f'rx="{_num(r.rx)}"')
    if r.gradient:
        parts.append(f'fill="url(#{r.gradient})"')
    elif r.fill:
        parts.append(_paint("fill", r.fill))
    if r.opacity != 1.0:
        parts.append(f'opacity="{_num(r.opacity)}"')
    return f"<rect {' '.join(parts)}/>"


def _circle(c: Circle) -> str:
    parts = [f'cx="{_num(c.cx)}"', f'cy="{_num(c.cy)}"', f'r="{_num(c.r)}"']
    if c.filled:
        parts.append(_paint("fill", c.fill or "#000000"))
    else:
        parts.append('fill="none"')
        parts.append(_paint("stroke", c.stroke or "#000000"))
        parts.append(f'stroke-width="{_num(c.stroke_width)}"')
    return f"<circle {' '.join(parts)}/>"


def _text(t: Text) -> str:
    parts = [
        f'x="{_num(t.x)}"', f'y="{_num(t.y)}"',
        f'text-anchor="{t.anchor}"',
        'font-family="sans-serif"',
        f'font-size="{_num(t.font_size)}"',
        f'font-weight="{t.font_weight}"',
        _paint("fill", t.fill),
    ]
    if t.letter_spacing:
        parts.append(f'letter-spacing="{_num(t.letter_spacing)}"')
    return f"<text {' '.join(parts)}>{escape(t.content)}</text>"


def _gradient(g: LinearGradient) -> str:
    lines = [
        "<defs>",
        f'    <linearGradient id={quoteattr(g.id)} x1="0%" y1="0%" x2="100%" y2="0%">',
    ]
    for stop in g.stops:
        lines.append(f'      <stop offset="{stop.offset}%" stop-color="{stop.color}"/>')
    lines.append("    </linearGradient>")
    lines.append("  </defs>")
    return "\n".join(lines)


_WRITERS = {
    Rect: _rect,
    Circle: _circle,
    Text: _text,
    LinearGradient: _gradient,
}


def _shape(shape: Shape) -> str:
    return _WRITERS[type(shape)](shape)


def to_svg(scene: SceneDocument) -> str:
    """Serialize ``scene`` to SVG markup, one element per line, in order."""
    w, h = scene.width, scene.height
    lines: List[str] = [
        f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
    ]
    lines.extend("  " + _shape(s) for s in scene.shapes)
    lines.append("</svg>")
    return "\n".join(lines)
