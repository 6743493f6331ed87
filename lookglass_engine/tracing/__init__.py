"""
Tracing Layer
=============

Bounded Context: Sight-line tracing and unfolding.

Responsibilities:
- Trace a sight-line through a room (bounces, termination)
- Build the hallway of reflected rooms
- Straighten a traced ray one bounce at a time (uncurl)

Design Philosophy:
- Pure functions over immutable rooms and rays
- Results are re-derived on demand, never cached between events
"""

from lookglass_engine.tracing.sight_ray import (
    Bounce,
    ExhaustedBudget,
    HitItem,
    SightRay,
    Termination,
)
from lookglass_engine.tracing.tracer import (
    DEFAULT_SETTINGS,
    ReflectionTracer,
    TraceSettings,
    trace,
)
from lookglass_engine.tracing.hallway import (
    Unfolding,
    hallway,
    retrace_matches,
    uncurl,
    uncurled_series,
    unfold,
)

__all__ = [
    "Bounce",
    "ExhaustedBudget",
    "HitItem",
    "SightRay",
    "Termination",
    "DEFAULT_SETTINGS",
    "ReflectionTracer",
    "TraceSettings",
    "trace",
    "Unfolding",
    "hallway",
    "retrace_matches",
    "uncurl",
    "uncurled_series",
    "unfold",
]
