"""
Contact identicons: deterministic abstract pictures drawn from a name and its hash.
"""

from .generator import IdenticonPlan, generate, image_size_for_screen, plan, render
from .render.sdk import InvalidProfile, Profile, RenderWarning

__version__ = "0.1.0"
__all__ = [
    "Profile",
    "InvalidProfile",
    "RenderWarning",
    "IdenticonPlan",
    "image_size_for_screen",
    "plan",
    "render",
    "generate",
]
