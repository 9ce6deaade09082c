#!/usr/bin/env python3
"""
QA Gates for rendered identicons

Post-render checks that catch degenerate canvases (a single flat colour, or
shapes that are all but invisible). All functions are side-effect free and
return structured results.
"""

import hashlib
from dataclasses import dataclass
from typing import Any, Dict, List

import numpy as np

# Sampling grid per axis
SAMPLE_STEPS = 64
MIN_LUMINANCE_STD = 2.0


@dataclass
class QAResult:
    """Structured result from QA checks"""
    ok: bool
    fails: List[str]
    warnings: List[str]
    details: Dict[str, Any]


def image_signature(img: "PIL.Image.Image") -> str:
    """Stable hash of the raw pixel buffer."""
    return hashlib.sha1(img.tobytes()).hexdigest()[:16]


def check_canvas(img: "PIL.Image.Image") -> QAResult:
    """
    Check that a rendered canvas is not visually degenerate.

    Args:
        img: Rendered PIL Image

    Returns:
        QAResult; fails on a single-colour canvas, warns on very low luminance spread
    """
    fails: List[str] = []
    warnings: List[str] = []

    if img.mode != "RGB":
        img = img.convert("RGB")
    pixels = np.asarray(img, dtype=np.uint8)
    height, width = pixels.shape[:2]
    step = max(1, min(width, height) // SAMPLE_STEPS)
    sample = pixels[::step, ::step].reshape(-1, 3)

    distinct = int(np.unique(sample, axis=0).shape[0])
    luminance = sample.astype(np.float64) @ np.array([0.2126, 0.7152, 0.0722])
    spread = float(luminance.std())

    if distinct <= 1:
        fails.append("Flat canvas: a single colour was sampled")
    elif spread < MIN_LUMINANCE_STD:
        warnings.append(f"Low luminance spread {spread:.2f}, shapes may be invisible")

    return QAResult(
        ok=len(fails) == 0,
        fails=fails,
        warnings=warnings,
        details={
            "size": [width, height],
            "sample_step": step,
            "distinct_colors": distinct,
            "luminance_std": spread,
        },
    )


def qa_result_to_dict(result: QAResult) -> Dict[str, Any]:
    return {
        "ok": result.ok,
        "fails": result.fails,
        "warnings": result.warnings,
        "details": result.details,
    }
