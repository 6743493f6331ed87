"""
lookglass engine
================

Bounded Context: Sight-lines in mirrored rooms.

A viewer stands in a room bounded by mirrors and solid walls, aims a
fixed-length sight-line and finds out what it shows after bouncing.
The engine also explains the answer: it unfolds the bounced path into
a straight line through a hallway of reflected rooms.

Design Philosophy:
- Separation of Concerns: Geometry, Room, Tracing, Animation, Rendering
- Immutable values, pure functions, results re-derived on demand
- Fail fast on invalid values (distinct Length/Direction types)

Architecture:

    lookglass_engine/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── units.py       # Length, Direction
    │   ├── shapes.py      # Point, Segment, Edge, Polygon
    │   └── caster.py      # RayCaster (edge and item hits)
    │
    ├── room/              # Scene description
    │   └── model.py       # Item, ItemKind, Room
    │
    ├── tracing/           # Sight-lines
    │   ├── sight_ray.py   # SightRay, Bounce, ExhaustedBudget, HitItem
    │   ├── tracer.py      # trace, ReflectionTracer, TraceSettings
    │   └── hallway.py     # hallway, uncurl, uncurled_series, unfold
    │
    ├── animation/         # Blending between steps
    │   ├── interpolator.py
    │   └── playback.py
    │
    ├── session/           # Player session reducer
    │   └── state.py
    │
    ├── rendering/         # Visualization (stateless drawing)
    │   └── visualizer.py
    │
    ├── logging/           # Structured JSON logging
    └── pipeline.py        # Video orchestration

Usage:

    from lookglass_engine import (
        Direction, Item, ItemKind, Length, Point, Polygon, Room, trace, unfold,
    )

    room = Room(
        boundary=Polygon(
            (Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)),
            (True, True, True, True),
        ),
        items=(
            Item(Point(1, 1), Length(0.2), ItemKind.PLAYER),
            Item(Point(9, 9), Length(0.2), ItemKind.TARGET),
        ),
    )
    ray = trace(room, Point(5, 5), Direction.from_degrees(0), Length(12.0))
    unfolding = unfold(room, ray)
"""

# Geometry Layer (immutable, stateless)
from lookglass_engine.geometry import (
    Direction,
    Edge,
    InterpolationShapeError,
    Length,
    Point,
    Polygon,
    Segment,
    closeness_tolerance,
    lerp_direction,
    lerp_point,
)

# Room Layer
from lookglass_engine.room import Item, ItemKind, Room

# Tracing Layer
from lookglass_engine.tracing import (
    Bounce,
    ExhaustedBudget,
    HitItem,
    SightRay,
    TraceSettings,
    Unfolding,
    hallway,
    retrace_matches,
    trace,
    uncurl,
    uncurled_series,
    unfold,
)

# Animation Layer
from lookglass_engine.animation import (
    AnimationFrame,
    AnimationPlayback,
    interpolate_ray,
    interpolate_room,
    smoothstep,
)

__all__ = [
    # Geometry
    "Direction",
    "Edge",
    "InterpolationShapeError",
    "Length",
    "Point",
    "Polygon",
    "Segment",
    "closeness_tolerance",
    "lerp_direction",
    "lerp_point",
    # Room
    "Item",
    "ItemKind",
    "Room",
    # Tracing
    "Bounce",
    "ExhaustedBudget",
    "HitItem",
    "SightRay",
    "TraceSettings",
    "Unfolding",
    "hallway",
    "retrace_matches",
    "trace",
    "uncurl",
    "uncurled_series",
    "unfold",
    # Animation
    "AnimationFrame",
    "AnimationPlayback",
    "interpolate_ray",
    "interpolate_room",
    "smoothstep",
]

__version__ = "0.1.0"
