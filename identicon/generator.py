#!/usr/bin/env python3
"""
Identicon orchestrator.

Sizes the canvas, picks the background, dispatches to exactly one main
pattern and one ornament, then adds the central circle with the initial
letter. Planning (pure computation) is kept apart from rendering so the
selection logic can be inspected without a drawing surface.

Public API:
- image_size_for_screen(screen_width) -> int
- plan(profile, screen_width_hint) -> IdenticonPlan
- render(plan, painter) -> painter
- generate(profile, screen_width_hint) -> PIL.Image.Image
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple

from identicon.core import IdenticonCfg, get_logger, load_config
from identicon.render.color_engine import ColorOracle, pick_letter_color
from identicon.render.hash_source import HashCursor
from identicon.render.motif_generators import GENERATORS
from identicon.render.ornaments import (
    ORNAMENTS,
    central_overlay,
    ornament_center,
    select_ornament,
)
from identicon.render.painter import Painter, PillowPainter
from identicon.render.qa_gates import check_canvas
from identicon.render.sdk import (
    MAX_IMAGE_SIZE,
    RGB,
    SIZE_TIERS,
    DrawDirective,
    InvalidProfile,
    MainPattern,
    OrnamentKind,
    Profile,
    offset,
)

log = get_logger("identicon.generator")

PATTERN_ORDER = (
    MainPattern.CIRCLE_MATRIX,
    MainPattern.WANDERING_SHAPES,
    MainPattern.SQUARE_MATRIX,
)


@dataclass(frozen=True)
class IdenticonPlan:
    """Everything needed to paint one identicon, in drawing order."""

    image_size: int
    background: RGB
    letter_color: RGB
    main_pattern: MainPattern
    ornament: OrnamentKind
    pattern_directives: Tuple[DrawDirective, ...]
    ornament_directives: Tuple[DrawDirective, ...]
    overlay_directives: Tuple[DrawDirective, ...]

    @property
    def directives(self) -> Tuple[DrawDirective, ...]:
        return self.pattern_directives + self.ornament_directives + self.overlay_directives


@lru_cache(maxsize=1)
def _default_config() -> IdenticonCfg:
    return load_config()


def image_size_for_screen(screen_width: int) -> int:
    """Canvas side length for a screen width hint in pixels."""
    if isinstance(screen_width, bool) or not isinstance(screen_width, int) or screen_width <= 0:
        raise ValueError(f"Screen width hint must be a positive integer, got {screen_width!r}")
    for limit, size in SIZE_TIERS:
        if screen_width < limit:
            return size
    return MAX_IMAGE_SIZE


def select_main_pattern(profile: Profile) -> MainPattern:
    selector = HashCursor(profile.digest).byte_at(offset("selection", "pattern"))
    return PATTERN_ORDER[selector % 3]


def _as_profile(profile) -> Profile:
    if isinstance(profile, Profile):
        return profile
    try:
        return Profile(
            full_name=profile.full_name,
            name_parts=tuple(profile.name_parts),
            digest=profile.digest,
        )
    except (AttributeError, TypeError) as e:
        raise InvalidProfile(f"Not a profile: {e}") from e


def plan(
    profile,
    screen_width_hint: int,
    cfg: Optional[IdenticonCfg] = None,
    oracle: Optional[ColorOracle] = None,
) -> IdenticonPlan:
    """Compute every draw directive for a profile without painting anything."""
    profile = _as_profile(profile)
    cfg = cfg or _default_config()
    oracle = oracle or ColorOracle.from_config(cfg)

    image_size = image_size_for_screen(screen_width_hint)
    background = oracle.candy_color(profile.first_char)
    letter_color = pick_letter_color(background, cfg.render.letter_color)

    main_pattern = select_main_pattern(profile)
    pattern_directives = GENERATORS[main_pattern](profile, image_size, oracle)

    ornament = select_ornament(profile)
    center = ornament_center(profile, image_size)
    ornament_directives = ORNAMENTS[ornament](profile, image_size, center, background)

    log.info(
        f"Planned {image_size}px identicon: pattern={main_pattern.value} "
        f"ornament={ornament.value} center=({center[0]:.1f}, {center[1]:.1f})"
    )
    return IdenticonPlan(
        image_size=image_size,
        background=background,
        letter_color=letter_color,
        main_pattern=main_pattern,
        ornament=ornament,
        pattern_directives=tuple(pattern_directives),
        ornament_directives=tuple(ornament_directives),
        overlay_directives=tuple(central_overlay(profile, image_size, background, letter_color)),
    )


def render(identicon_plan: IdenticonPlan, painter: Painter) -> Painter:
    """Paint a plan: background first, then pattern, ornament and overlay."""
    painter.fill(identicon_plan.background)
    painter.draw_all(identicon_plan.directives)
    return painter


def generate(
    profile,
    screen_width_hint: Optional[int] = None,
    cfg: Optional[IdenticonCfg] = None,
) -> "PIL.Image.Image":
    """
    Generate the identicon image for a profile.

    Args:
        profile: Profile (name, name parts and hash) to draw
        screen_width_hint: Screen width in pixels; picks the canvas size tier
        cfg: Optional configuration; loaded from conf/ when omitted

    Returns:
        Square RGB PIL Image

    Raises:
        InvalidProfile: If the profile would make the pattern maths degenerate
        ValueError: If the screen width hint is not a positive integer
    """
    cfg = cfg or _default_config()
    if screen_width_hint is None:
        screen_width_hint = cfg.render.default_screen_width

    identicon_plan = plan(profile, screen_width_hint, cfg)
    painter = PillowPainter(identicon_plan.image_size, cfg.render.font_path)
    render(identicon_plan, painter)

    result = check_canvas(painter.image)
    for failure in result.fails:
        log.warning(f"[qa] {failure}")
    for warning in result.warnings:
        log.info(f"[qa] {warning}")
    return painter.image
