"""
Identicon Renderer

Pattern generators, ornaments, colour derivation and painters that turn a
contact profile into drawing directives and pixels.
"""

from .color_engine import AlphaTally, ColorOracle, clamp_alpha, contrast_ratio, pick_letter_color
from .hash_source import HashCursor, is_odd_parity
from .motif_generators import (
    GENERATORS,
    circle_matrix,
    square_matrix,
    wandering_shape_count,
    wandering_shapes,
)
from .ornaments import ORNAMENTS, central_overlay, ornament_center, select_ornament
from .painter import Painter, PillowPainter, RecordingPainter
from .qa_gates import QAResult, check_canvas, image_signature
from .sdk import (  # Constants; Enums; Models; Errors
    HASH_OFFSETS,
    MIN_HASH_LENGTH,
    DrawDirective,
    InvalidProfile,
    MainPattern,
    OrnamentKind,
    Profile,
    RenderWarning,
    ShapeKind,
)

__all__ = [
    "HASH_OFFSETS",
    "MIN_HASH_LENGTH",
    "ShapeKind",
    "MainPattern",
    "OrnamentKind",
    "Profile",
    "DrawDirective",
    "InvalidProfile",
    "RenderWarning",
    "HashCursor",
    "is_odd_parity",
    "ColorOracle",
    "AlphaTally",
    "clamp_alpha",
    "contrast_ratio",
    "pick_letter_color",
    "GENERATORS",
    "square_matrix",
    "wandering_shapes",
    "wandering_shape_count",
    "circle_matrix",
    "ORNAMENTS",
    "select_ornament",
    "ornament_center",
    "central_overlay",
    "Painter",
    "PillowPainter",
    "RecordingPainter",
    "QAResult",
    "check_canvas",
    "image_signature",
]
