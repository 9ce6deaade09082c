#!/usr/bin/env python3
"""
Core SDK for the Identicon Renderer

This module provides the single source of truth for types, constants and the
hash offset tables. All render modules import from this file to avoid drift.
"""

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ValidationError, validator


# ============================================================================
# CONSTANTS
# ============================================================================

# (exclusive upper bound of the screen width hint, canvas side length)
SIZE_TIERS = (
    (601, 640),
    (1000, 720),
    (1200, 1080),
)
MAX_IMAGE_SIZE = 1440

MIN_HASH_LENGTH = 28
# Hash characters are read as byte values
MAX_HASH_BYTE = 0xFF
MAX_WANDERING_SHAPES = 25
MIN_WANDERING_SHAPES = 10
SQUARE_GRID_BANDS = 5

ALPHA_MIN = 0
ALPHA_MAX = 255

RGB = Tuple[int, int, int]
WHITE: RGB = (255, 255, 255)
BLACK: RGB = (0, 0, 0)
YELLOW: RGB = (255, 255, 0)


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    CIRCLE_FILLED = "circle_filled"
    ARC = "arc"
    POLYGON = "polygon"
    SQUARE = "square"
    POLYLINE = "polyline"
    TEXT = "text"


class MainPattern(str, Enum):
    CIRCLE_MATRIX = "circle_matrix"
    WANDERING_SHAPES = "wandering_shapes"
    SQUARE_MATRIX = "square_matrix"


class OrnamentKind(str, Enum):
    WORD_CIRCLES = "word_circles"
    SPIROGRAPH = "spirograph"
    BEAMS = "beams"
    NONE = "none"


# ============================================================================
# HASH OFFSETS
# ============================================================================

# Which hash character feeds which parameter, per component.
HASH_OFFSETS: Dict[str, Dict[str, int]] = {
    "selection": {
        "center_y": 3,
        "center_x": 9,
        "pattern": 20,
        "central_circle_alpha": 27,
    },
    "square_matrix": {
        "color_a": 12,
        "color_b": 13,
        "accent_color": 14,
    },
    "wandering_shapes": {
        "fill_mode": 0,
        "arc_toggle": 1,
        "radius_step": 2,
        "alpha": 6,
        "stroke_width": 7,
        "end_angle": 8,
        "polygon_toggle": 15,
    },
    "circle_matrix": {
        "stroke_width": 19,
    },
    "word_circles": {
        "offset": 18,
    },
    "spirograph": {
        "alpha": 19,
        "ratio_b": 25,
        "ratio_c": 26,
        "loops": 27,
    },
    "beams": {
        "length": 5,
        "mode": 12,
        "density": 13,
        "angle": 14,
        "alpha": 17,
        "large_delta": 20,
        "wide_strokes": 21,
    },
}


def offset(component: str, purpose: str) -> int:
    """Look up the hash index for a component parameter."""
    return HASH_OFFSETS[component][purpose]


# ============================================================================
# ERRORS
# ============================================================================


class InvalidProfile(ValueError):
    """Profile data that would make grid sizes or hash lookups degenerate."""

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.message = message
        self.field_name = field_name
        super().__init__(self.message)


class RenderWarning(UserWarning):
    """A computed drawing value was out of range and has been clamped."""


# ============================================================================
# MODELS
# ============================================================================


def split_name(full_name: str) -> Tuple[str, ...]:
    return tuple(full_name.split())


def name_digest(full_name: str, variant: int = 0) -> str:
    """MD5 hex digest of a (normalized) name, optionally salted with a variant number."""
    payload = full_name if variant <= 0 else f"{full_name}{variant}"
    return hashlib.md5(payload.encode("utf-8")).hexdigest()


class Profile(BaseModel):
    """Identity record: full name, its ordered parts and a hash string.

    Invalid records raise InvalidProfile naming the first offending field.
    """

    full_name: str
    name_parts: Tuple[str, ...]
    digest: str

    class Config:
        frozen = True

    def __init__(self, **data):
        try:
            super().__init__(**data)
        except ValidationError as e:
            error = e.errors()[0]
            field_name = str(error["loc"][0]) if error["loc"] else None
            raise InvalidProfile(f"{field_name}: {error['msg']}", field_name) from e

    @validator("full_name")
    def validate_full_name(cls, v):
        if not v:
            raise ValueError("Full name must not be empty")
        return v

    @validator("name_parts")
    def validate_name_parts(cls, v):
        if not v:
            raise ValueError("At least one name part is required")
        for i, part in enumerate(v):
            if not part:
                raise ValueError(f"Name part {i} is empty")
        return v

    @validator("digest")
    def validate_digest(cls, v):
        if len(v) < MIN_HASH_LENGTH:
            raise ValueError(f"Hash must be at least {MIN_HASH_LENGTH} characters, got {len(v)}")
        for i, char in enumerate(v):
            if ord(char) > MAX_HASH_BYTE:
                raise ValueError(f"Hash character {i} ({char!r}) is not a byte value")
        return v

    @classmethod
    def from_name(cls, full_name: str, variant: int = 0) -> "Profile":
        normalized = " ".join(full_name.split())
        return cls(
            full_name=normalized,
            name_parts=split_name(normalized),
            digest=name_digest(normalized, variant),
        )

    @property
    def first_char(self) -> str:
        return self.full_name[0]

    @property
    def part_count(self) -> int:
        return len(self.name_parts)


@dataclass(frozen=True)
class DrawDirective:
    """One shape to hand to a painter. Alpha is already clamped to 0..255."""

    kind: ShapeKind
    color: RGB
    alpha: int
    x: float = 0.0
    y: float = 0.0
    size: float = 0.0
    stroke_width: float = 1.0
    edges: int = 0
    start_angle: float = 0.0
    end_angle: float = 0.0
    filled: bool = False
    double: bool = False
    points: Tuple[Tuple[float, float], ...] = field(default_factory=tuple)
    text: str = ""

    @property
    def rgba(self) -> Tuple[int, int, int, int]:
        return (self.color[0], self.color[1], self.color[2], self.alpha)
