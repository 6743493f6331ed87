"""
Session State Module
====================

Player session as an explicit reducer over immutable state.

Design:
- reduce(state, event) -> new state; no hidden engine caches
- Every aim change re-derives the sight-line from the room
- Events that do not apply in the current mode leave the state unchanged
- Photo outcomes are a tagged union: PhotoSuccess | PhotoFailure
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from lookglass_engine.animation.playback import AnimationPlayback
from lookglass_engine.geometry.shapes import Point
from lookglass_engine.geometry.units import Direction, Length
from lookglass_engine.logging import LogEvent, create_logger
from lookglass_engine.room.model import Item, ItemKind, Room
from lookglass_engine.tracing.hallway import unfold
from lookglass_engine.tracing.sight_ray import HitItem, SightRay
from lookglass_engine.tracing.tracer import TraceSettings, trace

logger = create_logger("session")


class SessionMode(str, Enum):
    AIMING = "aiming"
    ANIMATING = "animating"
    RESULT = "result"


class FailReason(str, Enum):
    """Why a photo did not show the target."""
    NOTHING_IN_SIGHT = "nothing_in_sight"
    WRONG_ITEM = "wrong_item"
    SELF_PORTRAIT = "self_portrait"


@dataclass(frozen=True)
class PhotoSuccess:
    target: Item

    @property
    def succeeded(self) -> bool:
        return True


@dataclass(frozen=True)
class PhotoFailure:
    reason: FailReason
    item: Optional[Item] = None

    @property
    def succeeded(self) -> bool:
        return False


PhotoResult = Union[PhotoSuccess, PhotoFailure]


def evaluate_photo(room: Room, ray: SightRay) -> PhotoResult:
    """
    Judge what a photo along `ray` shows.

    A sight-line that runs out of budget still counts as seeing the target
    when it ends within the target's closeness tolerance of its center.
    """
    target = room.target_item
    if isinstance(ray.terminal, HitItem):
        item = ray.terminal.item
        if item.kind is ItemKind.TARGET:
            return PhotoSuccess(item)
        if item.kind is ItemKind.PLAYER:
            return PhotoFailure(FailReason.SELF_PORTRAIT, item)
        return PhotoFailure(FailReason.WRONG_ITEM, item)

    if ray.end_position.distance_to(target.position) <= target.tolerance:
        return PhotoSuccess(target)
    return PhotoFailure(FailReason.NOTHING_IN_SIGHT)


# ============================================================================
# Events
# ============================================================================

@dataclass(frozen=True)
class Aim:
    direction: Direction


@dataclass(frozen=True)
class AimAt:
    """Drag the aim towards a point in the room."""
    point: Point


@dataclass(frozen=True)
class TakePhoto:
    pass


@dataclass(frozen=True)
class Tick:
    seconds: float


@dataclass(frozen=True)
class Reset:
    pass


SessionEvent = Union[Aim, AimAt, TakePhoto, Tick, Reset]


# ============================================================================
# State
# ============================================================================

@dataclass(frozen=True)
class SessionState:
    """
    Immutable session snapshot.

    Attributes:
        room: Room being played
        direction: Current aim
        budget: Sight budget
        ray: Sight-line for the current aim
        mode: Aiming, animating a photo, or showing its result
        settings: Tracer settings
        step_seconds: Duration of one unfolding step
        playback: Unfolding animation (set once a photo is taken)
        result: Photo outcome (set once a photo is taken)
    """

    room: Room
    direction: Direction
    budget: Length
    ray: SightRay
    mode: SessionMode = SessionMode.AIMING
    settings: Optional[TraceSettings] = None
    step_seconds: float = 0.8
    playback: Optional[AnimationPlayback] = None
    result: Optional[PhotoResult] = None

    @classmethod
    def start(
        cls,
        room: Room,
        direction: Direction,
        budget: Length,
        settings: Optional[TraceSettings] = None,
        step_seconds: float = 0.8,
    ) -> "SessionState":
        ray = trace(room, room.player_item.position, direction, budget, settings)
        return cls(
            room=room,
            direction=direction,
            budget=budget,
            ray=ray,
            settings=settings,
            step_seconds=step_seconds,
        )

    def aimed(self, direction: Direction) -> "SessionState":
        """Same state aiming along `direction`, with the sight-line re-derived."""
        ray = trace(
            self.room, self.room.player_item.position, direction, self.budget, self.settings
        )
        return replace(self, direction=direction, ray=ray)


def reduce(state: SessionState, event: SessionEvent) -> SessionState:
    """
    Apply one event.

    Args:
        state: Current state
        event: Aim, AimAt, TakePhoto, Tick or Reset

    Returns:
        New state (or `state` itself when the event does not apply)
    """
    if isinstance(event, Aim):
        if state.mode is not SessionMode.AIMING:
            return state
        return state.aimed(event.direction)

    if isinstance(event, AimAt):
        if state.mode is not SessionMode.AIMING:
            return state
        player = state.room.player_item
        if player.position.distance_to(event.point) <= player.tolerance:
            return state
        direction = player.position.direction_to(event.point)
        if direction is None:
            return state
        return state.aimed(direction)

    if isinstance(event, TakePhoto):
        if state.mode is not SessionMode.AIMING:
            return state
        unfolding = unfold(state.room, state.ray)
        result = evaluate_photo(state.room, state.ray)
        logger.info(
            event=LogEvent.SESSION_PHOTO_TAKEN,
            message="Photo taken",
            metadata={
                'succeeded': result.succeeded,
                'reason': None if result.succeeded else result.reason.value,
                'bounces': len(state.ray.bounces),
            }
        )
        return replace(
            state,
            mode=SessionMode.ANIMATING,
            playback=AnimationPlayback(unfolding, step_seconds=state.step_seconds),
            result=result,
        )

    if isinstance(event, Tick):
        if state.mode is not SessionMode.ANIMATING or state.playback is None:
            return state
        playback = state.playback.advance(event.seconds)
        if playback.depth != state.playback.depth:
            logger.debug(
                event=LogEvent.SESSION_STEP_COMPLETED,
                message="Unfolding step completed",
                metadata={'depth': playback.depth, 'of': playback.unfolding.depth}
            )
        mode = SessionMode.RESULT if playback.finished else SessionMode.ANIMATING
        return replace(state, playback=playback, mode=mode)

    if isinstance(event, Reset):
        if state.mode is SessionMode.AIMING:
            return state
        logger.info(
            event=LogEvent.SESSION_RESET,
            message="Session reset to aiming",
            metadata={'from_mode': state.mode.value}
        )
        return replace(state, mode=SessionMode.AIMING, playback=None, result=None)

    raise TypeError(f"Unknown session event: {event!r}")
