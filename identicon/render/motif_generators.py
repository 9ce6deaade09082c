#!/usr/bin/env python3
"""
Main Pattern Generators for the Identicon Renderer

Each generator turns a profile into a list of DrawDirective objects for a
square canvas of the given side length. They never touch a drawing surface;
the orchestrator hands the directives to a painter afterwards. All functions
are deterministic given the same profile.

Generators:
- square_matrix: parity-gated 3x5 block grid with two accent columns
- wandering_shapes: a drifting walk of circles, arcs or polygons
- circle_matrix: a first-name-length squared grid of filled circles
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, List

from identicon.core import get_logger

from .color_engine import AlphaTally, ColorOracle, clamp_alpha
from .hash_source import HashCursor, is_odd_parity
from .sdk import (
    MAX_WANDERING_SHAPES,
    MIN_WANDERING_SHAPES,
    SQUARE_GRID_BANDS,
    WHITE,
    DrawDirective,
    MainPattern,
    Profile,
    ShapeKind,
    offset,
)

log = get_logger("identicon.motif_generators")

GeneratorFn = Callable[[Profile, int, ColorOracle], List[DrawDirective]]

# Off-grid columns for the square matrix accents, keyed on the source column
ACCENT_COLUMNS = {0: 4, 1: 3}


# ============================================================================
# SQUARE MATRIX
# ============================================================================


def square_matrix(profile: Profile, image_size: int, oracle: ColorOracle) -> List[DrawDirective]:
    """
    Fill a 3x5 grid of squares, one hash byte per cell.

    A cell is painted when its byte has odd bit parity. Painted cells in
    column 0 get a white accent in column 4 and cells in column 1 get a candy
    accent in column 3, both at alpha 200 - byte.
    """
    cell = image_size / SQUARE_GRID_BANDS
    cursor = HashCursor(profile.digest)

    main_color = oracle.generate_color(
        profile.first_char,
        cursor.char_at(offset("square_matrix", "color_a")),
        profile.part_count,
        cursor.byte_at(offset("square_matrix", "color_b")),
    )
    accent_colors = {
        0: WHITE,
        1: oracle.candy_color(cursor.char_at(offset("square_matrix", "accent_color"))),
    }

    accent_alpha = AlphaTally("square accent")
    directives: List[DrawDirective] = []
    for y in range(5):
        for x in range(3):
            byte = cursor.advance()
            if not is_odd_parity(byte):
                continue
            directives.append(_square(main_color, 255, x, y, cell))
            if x in ACCENT_COLUMNS:
                directives.append(
                    _square(
                        accent_colors[x],
                        accent_alpha.clamp(200 - byte),
                        ACCENT_COLUMNS[x],
                        y,
                        cell,
                    )
                )

    accent_alpha.report()
    log.debug(f"[square-matrix] {len(directives)} squares at cell size {cell:.1f}")
    return directives


def _square(color, alpha: int, column: int, row: int, cell: float) -> DrawDirective:
    return DrawDirective(
        kind=ShapeKind.SQUARE,
        color=color,
        alpha=alpha,
        x=column * cell,
        y=row * cell,
        size=cell,
        filled=True,
    )


# ============================================================================
# WANDERING SHAPES
# ============================================================================

# Displacement per unit of the step value, selected by value mod 6
WALK_MOVES = {
    0: (1, 1),
    1: (-1, -1),
    2: (2, 0),
    3: (0, 2),
    4: (-2, -1),
    5: (-1, -2),
}
STROKE_GROWTH = 0.05


@dataclass(frozen=True)
class WalkState:
    """Position and stroke width carried from one wandering shape to the next."""

    x: float
    y: float
    stroke_width: float

    def moved(self, value: int) -> "WalkState":
        dx, dy = WALK_MOVES[value % 6]
        return replace(self, x=self.x + dx * value, y=self.y + dy * value)

    def widened(self) -> "WalkState":
        return replace(self, stroke_width=self.stroke_width + STROKE_GROWTH)


def wandering_shape_count(name_length: int) -> int:
    """Number of shapes for a name: 4 per character, at most 25, doubled up to at least 10."""
    if name_length <= 0:
        raise ValueError("name_length must be positive")
    count = min(name_length * 4, MAX_WANDERING_SHAPES)
    while count < MIN_WANDERING_SHAPES:
        count *= 2
    return count


def polygon_edges(profile: Profile) -> int:
    """Edge count for polygon mode, or 0 when this profile paints no polygons."""
    edges = len(profile.name_parts[0])
    toggle = HashCursor(profile.digest).byte_at(offset("wandering_shapes", "polygon_toggle"))
    if toggle % 3 != 0 and 2 < edges < 7:
        return edges
    return 0


def wandering_shapes(profile: Profile, image_size: int, oracle: ColorOracle) -> List[DrawDirective]:
    """
    Paint a walk of double shapes whose centre drifts from step to step.

    Fill mode, alpha, arcs and the arc end angle are decided once per image;
    position, colour, radius and shape kind change every step.
    """
    cursor = HashCursor(profile.digest)
    edges = polygon_edges(profile)

    color_char_a = profile.first_char
    color_char_b = profile.name_parts[-1][0]

    paint_filled = cursor.byte_at(offset("wandering_shapes", "fill_mode")) % 2 == 0
    alpha = cursor.byte_at(offset("wandering_shapes", "alpha")) * 2
    if paint_filled:
        alpha //= 2
    alpha = clamp_alpha(alpha, "wandering shapes")

    paint_arcs = cursor.byte_at(offset("wandering_shapes", "arc_toggle")) % 2 != 0
    end_angle = cursor.byte_at(offset("wandering_shapes", "end_angle")) * 2
    radius_step = cursor.byte_at(offset("wandering_shapes", "radius_step"))

    count = wandering_shape_count(len(profile.full_name))
    log.debug(
        f"[wandering-shapes] {count} shapes, polygon edges={edges}, "
        f"filled={paint_filled}, arcs={paint_arcs}"
    )

    state = WalkState(
        x=image_size * 0.5,
        y=image_size * 0.5,
        stroke_width=cursor.byte_at(offset("wandering_shapes", "stroke_width")) * 2.0,
    )
    directives: List[DrawDirective] = []
    for i in range(count):
        value = cursor.advance() + i
        state = state.moved(value)

        if paint_arcs and value % 2 == 0:
            kind = ShapeKind.ARC
        elif edges:
            kind = ShapeKind.POLYGON
        elif paint_filled:
            kind = ShapeKind.CIRCLE_FILLED
        else:
            kind = ShapeKind.CIRCLE

        directives.append(
            DrawDirective(
                kind=kind,
                color=oracle.generate_color(color_char_a, color_char_b, value, i + 1),
                alpha=alpha,
                x=state.x,
                y=state.y,
                size=i * radius_step,
                stroke_width=state.stroke_width,
                edges=edges,
                start_angle=value * 2,
                end_angle=end_angle,
                filled=paint_filled and kind != ShapeKind.ARC,
                double=True,
            )
        )
        state = state.widened()

    return directives


# ============================================================================
# CIRCLE MATRIX
# ============================================================================


def circle_matrix(profile: Profile, image_size: int, oracle: ColorOracle) -> List[DrawDirective]:
    """
    Fill the image with circles in a grid of first-name-length squared cells.

    Single-word names get white circles; longer names get candy colours keyed
    on the hash byte of each cell.
    """
    side = len(profile.name_parts[0])
    cursor = HashCursor(profile.digest)
    stroke_width = cursor.byte_at(offset("circle_matrix", "stroke_width")) * 2.0
    distance = image_size / side + image_size / (side * 2.0)
    colored = profile.part_count > 1
    alphas = AlphaTally("circle matrix")

    directives: List[DrawDirective] = []
    for y in range(side):
        for x in range(side):
            byte = cursor.advance()
            index = y * side + x
            directives.append(
                DrawDirective(
                    kind=ShapeKind.CIRCLE_FILLED,
                    color=oracle.candy_color(chr(byte)) if colored else WHITE,
                    alpha=alphas.clamp(200 - byte + index),
                    x=x * distance,
                    y=y * distance,
                    size=byte * 2.0 if index % 2 == 0 else byte * 3.0,
                    stroke_width=stroke_width,
                    filled=True,
                    double=True,
                )
            )

    alphas.report()
    log.debug(f"[circle-matrix] {side}x{side} grid, spacing {distance:.1f}")
    return directives


GENERATORS: Dict[MainPattern, GeneratorFn] = {
    MainPattern.CIRCLE_MATRIX: circle_matrix,
    MainPattern.WANDERING_SHAPES: wandering_shapes,
    MainPattern.SQUARE_MATRIX: square_matrix,
}
