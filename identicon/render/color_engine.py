#!/usr/bin/env python3
"""
Color Engine for the Identicon Renderer

Maps characters and hash-derived integers to stable RGB colours, and provides
the contrast and alpha helpers the generators share. Nothing here is random:
the same inputs always give the same colour.
"""

import colorsys
import warnings
from typing import Dict, Optional

from identicon.core import get_logger
from identicon.utils.palette import Palette, default_candy_palette, load_palette

from .sdk import ALPHA_MAX, ALPHA_MIN, BLACK, RGB, WHITE, RenderWarning

log = get_logger("identicon.color_engine")

# WCAG contrast ratio for large text (the initial letter is always large)
WCAG_AA_LARGE = 3.0

_rgb_cache: Dict[str, RGB] = {}


def hex_to_rgb(hex_color: str) -> RGB:
    """Convert hex color to RGB tuple."""
    if hex_color in _rgb_cache:
        return _rgb_cache[hex_color]
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = "".join(c + c for c in h)
    result = tuple(int(h[i:i + 2], 16) for i in (0, 2, 4))
    _rgb_cache[hex_color] = result
    return result


def relative_luminance(rgb: RGB) -> float:
    """Relative luminance using the WCAG 2.1 formula."""

    def to_linear(c):
        c = c / 255.0
        if c <= 0.03928:
            return c / 12.92
        return ((c + 0.055) / 1.055) ** 2.4

    r, g, b = rgb
    return 0.2126 * to_linear(r) + 0.7152 * to_linear(g) + 0.0722 * to_linear(b)


def contrast_ratio(c1: RGB, c2: RGB) -> float:
    l1, l2 = relative_luminance(c1), relative_luminance(c2)
    hi, lo = max(l1, l2), min(l1, l2)
    return (hi + 0.05) / (lo + 0.05)


def pick_letter_color(background: RGB, preference: str = "auto") -> RGB:
    """
    Colour for the initial letter on top of the background.

    White is the house colour; black is used only when white is not legible
    at large-text contrast and black reads better.
    """
    if preference != "auto":
        return hex_to_rgb(preference)
    white = contrast_ratio(WHITE, background)
    if white >= WCAG_AA_LARGE:
        return WHITE
    return BLACK if contrast_ratio(BLACK, background) > white else WHITE


def clamp_alpha(value: float, context: str = "", quiet: bool = False) -> int:
    """
    Clamp an alpha value into 0..255.

    Out-of-range values are not fatal: they are reported as a RenderWarning
    so callers (and tests) can see them, and logged unless quiet is set.
    """
    alpha = int(value)
    if ALPHA_MIN <= alpha <= ALPHA_MAX:
        return alpha
    clamped = max(ALPHA_MIN, min(ALPHA_MAX, alpha))
    message = f"Alpha {alpha} out of range for {context or 'shape'}, clamping to {clamped}"
    if not quiet:
        log.warning(message)
    warnings.warn(message, RenderWarning, stacklevel=2)
    return clamped


class AlphaTally:
    """Clamps a run of alpha values for one generator and logs a single summary."""

    def __init__(self, context: str):
        self.context = context
        self.clamped = 0

    def clamp(self, value: float) -> int:
        alpha = clamp_alpha(value, self.context, quiet=True)
        if alpha != int(value):
            self.clamped += 1
        return alpha

    def report(self) -> None:
        if self.clamped:
            log.warning(
                f"{self.clamped} alpha values out of range for {self.context}, "
                f"clamped to {ALPHA_MIN}..{ALPHA_MAX}"
            )


class ColorOracle:
    """Stable colour lookups keyed on characters and hash values."""

    def __init__(self, candy: Optional[Palette] = None):
        self.candy = candy if candy is not None and candy.colors else default_candy_palette()

    @classmethod
    def from_config(cls, cfg) -> "ColorOracle":
        if cfg.palette.source:
            palette = load_palette(cfg.palette.source)
            log.info(f"Loaded {len(palette.colors)} candy colors from {cfg.palette.source}")
            return cls(palette)
        if cfg.palette.candy:
            return cls(Palette(colors=list(cfg.palette.candy), name="candy"))
        return cls()

    def candy_color(self, char: str) -> RGB:
        """Palette colour for a character, keyed on its code point."""
        return hex_to_rgb(self.candy.get(ord(char)))

    def generate_color(self, char_a: str, char_b: str, value_a: int, value_b: int) -> RGB:
        """
        General four-argument derivation used for varied per-shape colouring.

        Hue comes from all four inputs; saturation and value stay in a band
        that keeps shapes visible against both light and dark backgrounds.
        """
        a, b = ord(char_a), ord(char_b)
        hue = ((a * 7 + b * 13 + value_a * 3 + value_b * 17) % 360) / 360.0
        saturation = 0.45 + ((a + value_a) % 50) / 100.0
        value = 0.55 + ((b + value_b) % 40) / 100.0
        r, g, bl = colorsys.hsv_to_rgb(hue, saturation, value)
        return (int(round(r * 255)), int(round(g * 255)), int(round(bl * 255)))
