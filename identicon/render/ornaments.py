#!/usr/bin/env python3
"""
Secondary ornaments and the fixed initial-letter overlay.

Ornaments are layered on top of the main pattern. Exactly one ornament kind
is chosen per image; the last kind draws nothing.
"""

import math
from typing import Callable, Dict, List, Tuple

from identicon.core import get_logger

from .color_engine import clamp_alpha
from .hash_source import HashCursor
from .sdk import (
    BLACK,
    RGB,
    WHITE,
    YELLOW,
    DrawDirective,
    OrnamentKind,
    Profile,
    ShapeKind,
    offset,
)

log = get_logger("identicon.ornaments")

Point = Tuple[float, float]
OrnamentFn = Callable[[Profile, int, Point, RGB], List[DrawDirective]]

ORNAMENT_ORDER = (
    OrnamentKind.WORD_CIRCLES,
    OrnamentKind.SPIROGRAPH,
    OrnamentKind.BEAMS,
    OrnamentKind.NONE,
)

SPIRO_PEN = 0.8
SPIRO_POINTS_PER_LOOP = 72
MIN_SPIRO_RATIO = 1e-3

BEAM_STYLES = ("plain", "tipped", "hollow", "alternating")


def select_ornament(profile: Profile) -> OrnamentKind:
    selector = HashCursor(profile.digest).byte_at(offset("selection", "pattern"))
    return ORNAMENT_ORDER[selector % 4]


def ornament_center(profile: Profile, image_size: int) -> Point:
    """Ornament centre inside [0, image_size) on both axes."""
    cursor = HashCursor(profile.digest)
    cx = image_size * ((cursor.byte_at(offset("selection", "center_x")) % 128) / 128.0)
    cy = image_size * ((cursor.byte_at(offset("selection", "center_y")) % 128) / 128.0)
    return cx, cy


# ============================================================================
# ORNAMENTS
# ============================================================================


def word_circles(profile: Profile, image_size: int, center: Point, background: RGB) -> List[DrawDirective]:
    """One white double circle per name part, fading in and shrinking with the index."""
    words = profile.part_count
    step = HashCursor(profile.digest).byte_at(offset("word_circles", "offset")) * 2.0
    radius_factor = image_size * 0.4
    cx, cy = center

    directives = []
    for i in range(words):
        scale = words / (i + 1.0)
        directives.append(
            DrawDirective(
                kind=ShapeKind.CIRCLE,
                color=WHITE,
                alpha=clamp_alpha(((i + 1.0) / words) * 120.0, "word circle"),
                x=cx + i * step,
                y=cy - i * step,
                size=scale * radius_factor,
                stroke_width=scale * 80.0,
                double=True,
            )
        )
    return directives


def spiro_curve(
    cx: float, cy: float, scale: float, ratio: float, loops: int
) -> Tuple[Point, ...]:
    """Hypotrochoid points for a rolling-circle ratio, over the given number of loops."""
    if abs(ratio) < MIN_SPIRO_RATIO:
        ratio = MIN_SPIRO_RATIO
    frequency = (1.0 - ratio) / ratio
    total = loops * SPIRO_POINTS_PER_LOOP
    points = []
    for n in range(total + 1):
        t = 2.0 * math.pi * loops * n / total
        x = (1.0 - ratio) * math.cos(t) + SPIRO_PEN * ratio * math.cos(frequency * t)
        y = (1.0 - ratio) * math.sin(t) - SPIRO_PEN * ratio * math.sin(frequency * t)
        points.append((cx + scale * x, cy + scale * y))
    return tuple(points)


def spirograph(profile: Profile, image_size: int, center: Point, background: RGB) -> List[DrawDirective]:
    """Three overlaid spirograph curves centred on the canvas."""
    cursor = HashCursor(profile.digest)
    alpha = clamp_alpha(255 - cursor.byte_at(offset("spirograph", "alpha")) * 2, "spirograph")
    ratios = (
        0.3 - ord(profile.first_char) / 255.0,
        0.3 - cursor.byte_at(offset("spirograph", "ratio_b")) / 255.0,
        0.3 - cursor.byte_at(offset("spirograph", "ratio_c")) / 255.0,
    )
    loops = max(5, cursor.byte_at(offset("spirograph", "loops")) >> 2)
    half = image_size * 0.5
    stroke_width = max(1.0, image_size / 360.0)

    log.debug(f"[spirograph] ratios={tuple(round(r, 3) for r in ratios)} loops={loops}")
    return [
        DrawDirective(
            kind=ShapeKind.POLYLINE,
            color=color,
            alpha=alpha,
            x=half,
            y=half,
            stroke_width=stroke_width,
            points=spiro_curve(half, half, image_size * 0.4, ratio, loops),
        )
        for color, ratio in zip((WHITE, YELLOW, BLACK), ratios)
    ]


def beams(profile: Profile, image_size: int, center: Point, background: RGB) -> List[DrawDirective]:
    """
    Radial beams around the ornament centre in the background colour.

    Styles: plain rays, rays with a dot at the tip, rays with a hollow core,
    and rays alternating between long and short.
    """
    cursor = HashCursor(profile.digest)
    alpha = clamp_alpha(cursor.byte_at(offset("beams", "alpha")) // 5, "beams")
    style = BEAM_STYLES[cursor.byte_at(offset("beams", "mode")) % 4]
    count = cursor.byte_at(offset("beams", "density")) * 3
    length = cursor.byte_at(offset("beams", "length")) * 0.6
    angle = cursor.byte_at(offset("beams", "angle")) * 0.15
    delta = 7.0 if cursor.byte_at(offset("beams", "large_delta")) % 2 == 0 else 1.5
    wide = cursor.byte_at(offset("beams", "wide_strokes")) % 2 == 0
    stroke_width = max(1.0, image_size / (90.0 if wide else 360.0))
    cx, cy = center

    log.debug(f"[beams] {count} {style} beams, length {length:.1f}, wide={wide}")
    directives = []
    for i in range(count):
        if style == "hollow":
            inner, outer = length, length * (2 + i % 5)
        elif style == "alternating":
            inner, outer = 0.0, length * (5 if i % 2 == 0 else 2)
        else:
            inner, outer = 0.0, length * (1 + i % 5)
        rad = math.radians(angle + i * delta)
        cos_a, sin_a = math.cos(rad), math.sin(rad)
        tip = (cx + outer * cos_a, cy + outer * sin_a)
        directives.append(
            DrawDirective(
                kind=ShapeKind.POLYLINE,
                color=background,
                alpha=alpha,
                x=cx,
                y=cy,
                stroke_width=stroke_width,
                points=((cx + inner * cos_a, cy + inner * sin_a), tip),
            )
        )
        if style == "tipped":
            directives.append(
                DrawDirective(
                    kind=ShapeKind.CIRCLE_FILLED,
                    color=background,
                    alpha=alpha,
                    x=tip[0],
                    y=tip[1],
                    size=stroke_width * 1.5,
                    filled=True,
                )
            )
    return directives


def no_ornament(profile: Profile, image_size: int, center: Point, background: RGB) -> List[DrawDirective]:
    return []


ORNAMENTS: Dict[OrnamentKind, OrnamentFn] = {
    OrnamentKind.WORD_CIRCLES: word_circles,
    OrnamentKind.SPIROGRAPH: spirograph,
    OrnamentKind.BEAMS: beams,
    OrnamentKind.NONE: no_ornament,
}


# ============================================================================
# INITIAL LETTER ON CIRCLE
# ============================================================================


def central_overlay(
    profile: Profile, image_size: int, background: RGB, letter_color: RGB
) -> List[DrawDirective]:
    """Background-coloured circle in the middle of the canvas with the first letter on it."""
    half = image_size * 0.5
    alpha_source = HashCursor(profile.digest).byte_at(offset("selection", "central_circle_alpha"))
    return [
        DrawDirective(
            kind=ShapeKind.CIRCLE_FILLED,
            color=background,
            alpha=clamp_alpha(255 - 2 * alpha_source, "central circle"),
            x=half,
            y=half,
            size=image_size / 3.0,
            filled=True,
        ),
        DrawDirective(
            kind=ShapeKind.TEXT,
            color=letter_color,
            alpha=255,
            x=half,
            y=half,
            size=image_size / 3.0,
            text=profile.first_char,
        ),
    ]
