"""
Interpolator Module
===================

Blends two structurally matching rays or rooms by t in [0, 1].

Design:
- t is clamped; t=0 gives a, t=1 gives b
- Structure (trail length, bounce count, termination kind, tags, item
  kinds) comes from a for t < 1 and from b at t = 1
- No notion of time or easing (see playback)
"""

from typing import List, Optional

from lookglass_engine.geometry.shapes import InterpolationShapeError, Segment
from lookglass_engine.logging import LogEvent, create_logger
from lookglass_engine.room.model import Room
from lookglass_engine.tracing.sight_ray import (
    Bounce,
    ExhaustedBudget,
    HitItem,
    SightRay,
    Termination,
)

logger = create_logger("interpolation")

__all__ = [
    "InterpolationShapeError",
    "clamp_unit",
    "interpolate_ray",
    "interpolate_room",
]


def clamp_unit(t: float) -> float:
    return max(0.0, min(1.0, float(t)))


def _mirror_at(ray: SightRay, path_index: int) -> Optional[Segment]:
    """Mirror of the bounce sitting at `path_index` of ray.path, if any."""
    j = path_index - len(ray.trail) - 1
    if 0 <= j < len(ray.bounces):
        return ray.bounces[j].mirror
    return None


def interpolate_ray(a: SightRay, b: SightRay, t: float) -> SightRay:
    """
    Blend two rays point-for-point along their paths.

    Args:
        a: Ray at t=0
        b: Ray at t=1
        t: Blend factor (clamped to [0, 1])

    Raises:
        InterpolationShapeError: If the paths have different point counts
    """
    path_a, path_b = a.path, b.path
    if len(path_a) != len(path_b):
        logger.warning(
            event=LogEvent.INTERPOLATION_REJECTED,
            message="Ray paths do not match",
            metadata={'points_a': len(path_a), 'points_b': len(path_b)}
        )
        raise InterpolationShapeError(
            f"Cannot interpolate rays with {len(path_a)} and {len(path_b)} path points"
        )

    t = clamp_unit(t)
    if t == 0.0:
        return a
    if t == 1.0:
        return b

    points = [p.lerp(q, t) for p, q in zip(path_a, path_b)]
    offset = len(a.trail)

    bounces: List[Bounce] = []
    for j, bounce in enumerate(a.bounces):
        path_index = offset + 1 + j
        other = _mirror_at(b, path_index)
        mirror = bounce.mirror if other is None else bounce.mirror.lerp(other, t)
        bounces.append(Bounce(points[path_index], mirror, bounce.edge_index))

    terminal: Termination
    if isinstance(a.terminal, HitItem):
        item = a.terminal.item
        if isinstance(b.terminal, HitItem):
            item = item.lerp(b.terminal.item, t)
        terminal = HitItem(points[-1], item)
    else:
        terminal = ExhaustedBudget(points[-1])

    return SightRay(
        start=points[offset],
        direction=a.direction.lerp(b.direction, t),
        budget=a.budget.lerp(b.budget, t),
        terminal=terminal,
        bounces=tuple(bounces),
        trail=tuple(points[:offset]),
    )


def interpolate_room(a: Room, b: Room, t: float) -> Room:
    """
    Blend two rooms vertex-for-vertex and item-for-item.

    Raises:
        InterpolationShapeError: If vertex or item counts differ
    """
    try:
        return b.interpolate_from(a, clamp_unit(t))
    except InterpolationShapeError as e:
        logger.warning(
            event=LogEvent.INTERPOLATION_REJECTED,
            message=str(e),
            metadata={
                'vertices_a': len(a.boundary),
                'vertices_b': len(b.boundary),
                'items_a': len(a.items),
                'items_b': len(b.items),
            }
        )
        raise
