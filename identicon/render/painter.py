#!/usr/bin/env python3
"""
Painters: the only code that turns DrawDirective objects into pixels.

- PillowPainter draws onto an opaque RGB Pillow image, blending each shape
  with its alpha.
- RecordingPainter keeps the directives it receives, for tests and dry runs.
"""

import math
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from identicon.core import get_logger

from .sdk import BLACK, RGB, WHITE, DrawDirective, ShapeKind

log = get_logger("identicon.painter")

# Shapes that get a white companion outline when drawn as a double shape
OUTLINED_KINDS = {ShapeKind.CIRCLE, ShapeKind.CIRCLE_FILLED, ShapeKind.ARC, ShapeKind.POLYGON}


def polygon_vertices(x: float, y: float, radius: float, edges: int) -> List[Tuple[float, float]]:
    """Vertices of a regular polygon around (x, y), first vertex straight up."""
    return [
        (
            x + radius * math.cos(2 * math.pi * k / edges - math.pi / 2),
            y + radius * math.sin(2 * math.pi * k / edges - math.pi / 2),
        )
        for k in range(edges)
    ]


def _px(width: float) -> int:
    return max(1, int(round(width)))


class Painter:
    """Drawing surface interface consumed by the renderer."""

    def fill(self, color: RGB) -> None:
        raise NotImplementedError

    def draw(self, directive: DrawDirective) -> None:
        raise NotImplementedError

    def draw_all(self, directives) -> None:
        for directive in directives:
            self.draw(directive)


class RecordingPainter(Painter):
    """Painter that only remembers what it was asked to draw."""

    def __init__(self, size: int = 0):
        self.size = size
        self.background: Optional[RGB] = None
        self.directives: List[DrawDirective] = []

    def fill(self, color: RGB) -> None:
        self.background = color

    def draw(self, directive: DrawDirective) -> None:
        self.directives.append(directive)

    def kinds(self) -> List[ShapeKind]:
        return [d.kind for d in self.directives]


class PillowPainter(Painter):
    """Paints onto a square, opaque RGB Pillow image."""

    def __init__(self, size: int, font_path: Optional[str] = None):
        self.size = size
        self.font_path = font_path
        self.image = Image.new("RGB", (size, size), BLACK)
        self._draw = ImageDraw.Draw(self.image, "RGBA")
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def fill(self, color: RGB) -> None:
        self.image.paste(tuple(color), (0, 0, self.size, self.size))

    def draw(self, directive: DrawDirective) -> None:
        kind = directive.kind
        if kind == ShapeKind.TEXT:
            self._text(directive)
        elif kind == ShapeKind.SQUARE:
            self._square(directive)
        elif kind == ShapeKind.POLYLINE:
            self._polyline(directive)
        else:
            self._round_shape(directive, directive.rgba, directive.size, directive.stroke_width)
            if directive.double and kind in OUTLINED_KINDS and directive.size:
                # Companion outline just outside the main shape
                companion = (WHITE[0], WHITE[1], WHITE[2], directive.alpha // 2)
                self._round_shape(
                    directive,
                    companion,
                    abs(directive.size) + directive.stroke_width / 2.0,
                    max(1.0, directive.stroke_width / 4.0),
                    outline_only=True,
                )

    # ------------------------------------------------------------------

    def _round_shape(self, d: DrawDirective, color, radius: float, width: float, outline_only: bool = False) -> None:
        r = abs(radius)
        if r <= 0:
            return
        box = [d.x - r, d.y - r, d.x + r, d.y + r]
        filled = d.filled and not outline_only
        if d.kind == ShapeKind.ARC:
            self._draw.arc(box, d.start_angle, d.end_angle, fill=color, width=_px(width))
        elif d.kind == ShapeKind.POLYGON:
            if d.edges < 3:
                return
            vertices = polygon_vertices(d.x, d.y, r, d.edges)
            if filled:
                self._draw.polygon(vertices, fill=color)
            else:
                self._draw.polygon(vertices, outline=color, width=_px(width))
        elif filled:
            self._draw.ellipse(box, fill=color)
        else:
            self._draw.ellipse(box, outline=color, width=_px(width))

    def _square(self, d: DrawDirective) -> None:
        box = [d.x, d.y, d.x + d.size, d.y + d.size]
        if d.filled:
            self._draw.rectangle(box, fill=d.rgba)
        else:
            self._draw.rectangle(box, outline=d.rgba, width=_px(d.stroke_width))

    def _polyline(self, d: DrawDirective) -> None:
        if len(d.points) < 2:
            return
        self._draw.line(list(d.points), fill=d.rgba, width=_px(d.stroke_width), joint="curve")

    def _font(self, size: int):
        if size in self._fonts:
            return self._fonts[size]
        font = None
        if self.font_path:
            try:
                font = ImageFont.truetype(self.font_path, size=size)
            except OSError as e:
                log.warning(f"Font {self.font_path} unavailable ({e}), using default font")
                self.font_path = None
        if font is None:
            font = ImageFont.load_default(size=size)
        self._fonts[size] = font
        return font

    def _text(self, d: DrawDirective) -> None:
        if not d.text:
            return
        font = self._font(_px(d.size))
        left, top, right, bottom = self._draw.textbbox((0, 0), d.text, font=font)
        origin = (d.x - (right - left) / 2.0 - left, d.y - (bottom - top) / 2.0 - top)
        self._draw.text(origin, d.text, fill=d.rgba, font=font)
