"""
Animation Layer
===============

Bounded Context: Blending between unfolding steps.

Responsibilities:
- Interpolate rays and rooms (no time, no easing)
- Playback: step ordering, easing, frames to draw
"""

from lookglass_engine.animation.interpolator import (
    InterpolationShapeError,
    interpolate_ray,
    interpolate_room,
)
from lookglass_engine.animation.playback import (
    AnimationFrame,
    AnimationPlayback,
    smoothstep,
)

__all__ = [
    "InterpolationShapeError",
    "interpolate_ray",
    "interpolate_room",
    "AnimationFrame",
    "AnimationPlayback",
    "smoothstep",
]
