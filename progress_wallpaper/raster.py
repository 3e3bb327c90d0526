"""
Rasterization gateway: paints a SceneDocument with Pillow and encodes PNG.

The core never touches this module; it only hands over a finished scene.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image, ImageDraw, ImageFont

from .errors import RasterizeError
from .layout import GradientStop
from .scene import Circle, LinearGradient, Rect, SceneDocument, Text

logger = logging.getLogger(__name__)

ColorRGBA = Tuple[int, int, int, int]
Box = Tuple[int, int, int, int]

# SVG text-anchor -> Pillow anchor on the baseline
_TEXT_ANCHORS = {"start": "ls", "middle": "ms", "end": "rs"}


def _hex_to_rgba(value: str, opacity: float = 1.0) -> ColorRGBA:
    h = value.strip().lstrip("#")
    if len(h) not in (6, 8):
        raise ValueError(f"Invalid hex color: {value}")
    alpha = int(h[6:8], 16) if len(h) == 8 else 255
    return (
        int(h[0:2], 16),
        int(h[2:4], 16),
        int(h[4:6], 16),
        int(round(alpha * opacity)),
    )


def _mix_rgb(a: ColorRGBA, b: ColorRGBA, ratio: float) -> ColorRGBA:
    ratio = max(0.0, min(1.0, ratio))
    return tuple(int(round(x * (1.0 - ratio) + y * ratio)) for x, y in zip(a, b))


def _gradient_color(stops: Sequence[GradientStop], percent: float) -> ColorRGBA:
    """Color of a left-to-right gradient at ``percent`` (0..100)."""
    if percent <= stops[0].offset:
        return _hex_to_rgba(stops[0].color)
    for left, right in zip(stops, stops[1:]):
        if percent <= right.offset:
            span = right.offset - left.offset
            ratio = (percent - left.offset) / span if span else 1.0
            return _mix_rgb(_hex_to_rgba(left.color), _hex_to_rgba(right.color), ratio)
    return _hex_to_rgba(stops[-1].color)


def _box(x: float, y: float, width: float, height: float) -> Box:
    x0, y0 = int(round(x)), int(round(y))
    return x0, y0, int(round(x + width)) - 1, int(round(y + height)) - 1


def _glyph_positions(
    font: ImageFont.FreeTypeFont, content: str, spacing: float, anchor: str, x: float
) -> List[Tuple[float, str]]:
    """
    Left edge of each glyph when ``spacing`` px of tracking is added
    between glyphs, aligned on ``x`` per the SVG text-anchor.
    """
    advances = [font.getlength(ch) for ch in content]
    total = sum(advances) + spacing * max(0, len(content) - 1)
    if anchor == "middle":
        left = x - total / 2
    elif anchor == "end":
        left = x - total
    else:
        left = x

    positions = []
    for ch, advance in zip(content, advances):
        positions.append((left, ch))
        left += advance + spacing
    return positions


class Rasterizer:
    """
    Turns scenes into PNG bytes.

    Font setup happens once, lazily, on the first render: the embedded
    font bytes are validated and per-size faces are cached afterwards.
    Without font bytes Pillow's bundled scalable font is used.
    """

    def __init__(self, font_bytes: Optional[bytes] = None, font_family: str = "Inter"):
        self.font_family = font_family
        self._font_bytes = font_bytes
        self._fonts: Dict[int, ImageFont.FreeTypeFont] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def _setup(self) -> None:
        if self._initialized:
            return
        if self._font_bytes is not None:
            try:
                ImageFont.truetype(BytesIO(self._font_bytes), 12)
            except OSError as exc:
                raise RasterizeError(f"Cannot load font {self.font_family!r}: {exc}") from exc
            logger.debug("Loaded font %s (%d bytes)", self.font_family, len(self._font_bytes))
        else:
            logger.warning("No font bytes supplied, using Pillow's default font")
        self._initialized = True

    def _font(self, size: float) -> ImageFont.FreeTypeFont:
        px = max(1, int(round(size)))
        font = self._fonts.get(px)
        if font is None:
            if self._font_bytes is not None:
                font = ImageFont.truetype(BytesIO(self._font_bytes), px)
            else:
                font = ImageFont.load_default(size=px)
            self._fonts[px] = font
        return font

    def render(self, scene: SceneDocument) -> Image.Image:
        """Paint ``scene`` in order onto a new RGB image."""
        self._setup()
        img = Image.new("RGB", (scene.width, scene.height), (0, 0, 0))
        # RGBA mode blends translucent fills onto the RGB canvas.
        draw = ImageDraw.Draw(img, "RGBA")
        gradients: Dict[str, LinearGradient] = {}

        for shape in scene.shapes:
            if isinstance(shape, LinearGradient):
                gradients[shape.id] = shape
            elif isinstance(shape, Rect):
                self._draw_rect(img, draw, shape, gradients)
            elif isinstance(shape, Circle):
                self._draw_circle(draw, shape)
            elif isinstance(shape, Text):
                self._draw_text(draw, shape)
            else:
                raise RasterizeError(f"Unsupported shape: {type(shape).__name__}")

        logger.debug("Rasterized %d shapes at %dx%d", len(scene.shapes), scene.width, scene.height)
        return img

    def rasterize(self, scene: SceneDocument) -> bytes:
        """Render ``scene`` and return encoded PNG bytes."""
        img = self.render(scene)
        buf = BytesIO()
        try:
            img.save(buf, format="PNG", optimize=True)
        except OSError as exc:
            raise RasterizeError(f"PNG encoding failed: {exc}") from exc
        return buf.getvalue()

    def _draw_rect(
        self,
        img: Image.Image,
        draw: ImageDraw.ImageDraw,
        rect: Rect,
        gradients: Dict[str, LinearGradient],
    ) -> None:
        box = _box(rect.x, rect.y, rect.width, rect.height)
        if box[2] < box[0] or box[3] < box[1]:
            return  # narrower than a pixel

        if rect.gradient is not None:
            gradient = gradients.get(rect.gradient)
            if gradient is None:
                raise RasterizeError(f"Unknown gradient: {rect.gradient}")
            self._paste_gradient(img, box, rect.rx, gradient)
            return

        fill = _hex_to_rgba(rect.fill or "#000000", rect.opacity)
        if rect.rx:
            draw.rounded_rectangle(box, radius=rect.rx, fill=fill)
        else:
            draw.rectangle(box, fill=fill)

    @staticmethod
    def _paste_gradient(
        img: Image.Image, box: Box, radius: float, gradient: LinearGradient
    ) -> None:
        """Gradient spans the referencing shape's own width, as in SVG."""
        width = box[2] - box[0] + 1
        height = box[3] - box[1] + 1
        strip = Image.new("RGBA", (width, height))
        strip_draw = ImageDraw.Draw(strip)
        for i in range(width):
            percent = 100.0 * i / (width - 1) if width > 1 else 0.0
            strip_draw.line(
                [(i, 0), (i, height - 1)], fill=_gradient_color(gradient.stops, percent)
            )

        mask = Image.new("L", (width, height), 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (0, 0, width - 1, height - 1), radius=radius, fill=255
        )
        img.paste(strip, box[:2], mask)

    @staticmethod
    def _draw_circle(draw: ImageDraw.ImageDraw, circle: Circle) -> None:
        if circle.filled:
            r = circle.r
            draw.ellipse(
                (circle.cx - r, circle.cy - r, circle.cx + r, circle.cy + r),
                fill=_hex_to_rgba(circle.fill or "#000000"),
            )
            return
        # Pillow strokes inward from the bounding box; SVG centers the stroke.
        r = circle.r + circle.stroke_width / 2
        draw.ellipse(
            (circle.cx - r, circle.cy - r, circle.cx + r, circle.cy + r),
            outline=_hex_to_rgba(circle.stroke or "#000000"),
            width=max(1, int(round(circle.stroke_width))),
        )

    def _draw_text(self, draw: ImageDraw.ImageDraw, text: Text) -> None:
        font = self._font(text.font_size)
        fill = _hex_to_rgba(text.fill)
        if not text.letter_spacing:
            draw.text(
                (text.x, text.y),
                text.content,
                font=font,
                fill=fill,
                anchor=_TEXT_ANCHORS.get(text.anchor, "ls"),
            )
            return
        for x, glyph in _glyph_positions(font, text.content, text.letter_spacing, text.anchor, text.x):
            draw.text((x, text.y), glyph, font=font, fill=fill, anchor="ls")
