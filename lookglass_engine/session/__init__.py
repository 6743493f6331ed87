"""
Session Layer
=============

Bounded Context: One player's attempt at a level.

Responsibilities:
- Aiming, taking photos, stepping the unfolding animation
- Judging photo outcomes (success or FailReason)
- NO event loop (the host drives reduce())
"""

from lookglass_engine.session.state import (
    Aim,
    AimAt,
    FailReason,
    PhotoFailure,
    PhotoResult,
    PhotoSuccess,
    Reset,
    SessionEvent,
    SessionMode,
    SessionState,
    TakePhoto,
    Tick,
    evaluate_photo,
    reduce,
)

__all__ = [
    "Aim",
    "AimAt",
    "FailReason",
    "PhotoFailure",
    "PhotoResult",
    "PhotoSuccess",
    "Reset",
    "SessionEvent",
    "SessionMode",
    "SessionState",
    "TakePhoto",
    "Tick",
    "evaluate_photo",
    "reduce",
]
