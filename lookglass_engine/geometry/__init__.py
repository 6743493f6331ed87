"""
Geometry Layer
==============

Bounded Context: Pure geometric values and ray queries.

Responsibilities:
- Unit types (Length, Direction)
- Shape representation (Point, Segment, Edge, Polygon)
- Intersection, reflection, interpolation
- Ray casting against edges and item disks
- NO tracing policy, NO rooms, NO drawing

Design Philosophy:
- Pure functions where possible
- Immutable data structures
- Fail-fast validation
- Zero side effects
"""

from lookglass_engine.geometry.units import (
    Length,
    Direction,
    closeness_tolerance,
    lengths_close,
)
from lookglass_engine.geometry.shapes import (
    Point,
    Segment,
    SegmentHit,
    Edge,
    Polygon,
    InterpolationShapeError,
    reflect_points,
    lerp_point,
    lerp_direction,
)
from lookglass_engine.geometry.caster import RayCaster, EdgeHit, ItemHit

__all__ = [
    "Length",
    "Direction",
    "closeness_tolerance",
    "lengths_close",
    "Point",
    "Segment",
    "SegmentHit",
    "Edge",
    "Polygon",
    "InterpolationShapeError",
    "reflect_points",
    "lerp_point",
    "lerp_direction",
    "RayCaster",
    "EdgeHit",
    "ItemHit",
]
