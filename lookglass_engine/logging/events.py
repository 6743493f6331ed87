"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<action>

    component: trace, hallway, interpolation, level, session, render

Example Log Query (jq over a captured log):
    jq 'select(.event == "trace.loop_guard") | .metadata'
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - trace.*: Reflection tracer
    - hallway.*: Hallway unfolding
    - interpolation.*: Geometric blending
    - level.*: Level loading and selection
    - session.*: Player session reducer
    - render.*: Frame and video rendering
    """

    # ========== Trace Events ==========
    TRACE_COMPLETED = "trace.completed"
    """Sight-line traced to its termination."""

    TRACE_LOOP_GUARD = "trace.loop_guard"
    """Bounce cap reached; ray stopped at last consistent position."""

    TRACE_CORNER_STOP = "trace.corner_stop"
    """Vertex hit that cannot be reflected; ray stopped at the vertex."""

    # ========== Hallway Events ==========
    HALLWAY_BUILT = "hallway.built"
    """Hallway and uncurled series derived from a traced ray."""

    # ========== Interpolation Events ==========
    INTERPOLATION_REJECTED = "interpolation.rejected"
    """Interpolation inputs were structurally mismatched."""

    # ========== Level Events ==========
    LEVEL_LOADED = "level.loaded"
    """Level configuration turned into a validated room."""

    LEVEL_INVALID = "level.invalid"
    """Level configuration failed validation."""

    LEVEL_REGISTERED = "level.registered"
    """Level added to the registry."""

    # ========== Session Events ==========
    SESSION_PHOTO_TAKEN = "session.photo_taken"
    """Player took a photo; outcome recorded."""

    SESSION_STEP_COMPLETED = "session.step_completed"
    """Unfolding animation finished one depth step."""

    SESSION_RESET = "session.reset"
    """Session returned to aiming mode."""

    # ========== Render Events ==========
    RENDER_STARTED = "render.started"
    """Video rendering started."""

    RENDER_COMPLETED = "render.completed"
    """Video rendering finished."""


# Event categories for filtering
TRACE_EVENTS = {
    LogEvent.TRACE_COMPLETED,
    LogEvent.TRACE_LOOP_GUARD,
    LogEvent.TRACE_CORNER_STOP,
    LogEvent.HALLWAY_BUILT,
    LogEvent.INTERPOLATION_REJECTED,
}

LEVEL_EVENTS = {
    LogEvent.LEVEL_LOADED,
    LogEvent.LEVEL_INVALID,
    LogEvent.LEVEL_REGISTERED,
}

SESSION_EVENTS = {
    LogEvent.SESSION_PHOTO_TAKEN,
    LogEvent.SESSION_STEP_COMPLETED,
    LogEvent.SESSION_RESET,
}

RENDER_EVENTS = {
    LogEvent.RENDER_STARTED,
    LogEvent.RENDER_COMPLETED,
}
