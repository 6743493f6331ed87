"""
Animation Playback Module
=========================

Orders the unfolding animation: one uncurl step at a time.

Design:
- Immutable playback state; advance() returns a new playback
- Step k+1 starts only after step k reached t=1 (surplus time is dropped)
- Easing is applied here, before the interpolator sees t
"""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from lookglass_engine.animation.interpolator import (
    clamp_unit,
    interpolate_ray,
    interpolate_room,
)
from lookglass_engine.room.model import Room
from lookglass_engine.tracing.hallway import Unfolding
from lookglass_engine.tracing.sight_ray import SightRay


def smoothstep(t: float) -> float:
    """Ease-in/ease-out curve with exact endpoints."""
    t = clamp_unit(t)
    return t * t * (3.0 - 2.0 * t)


@dataclass(frozen=True)
class AnimationFrame:
    """
    What to draw at one instant.

    Attributes:
        rooms: Hallway rooms already in place
        swinging: Room currently swinging into place (None when finished)
        ray: Interpolated sight-line
        depth: Current uncurl step
        progress: Eased progress within the step
    """

    rooms: Tuple[Room, ...]
    swinging: Optional[Room]
    ray: SightRay
    depth: int
    progress: float

    @property
    def all_rooms(self) -> Tuple[Room, ...]:
        if self.swinging is None:
            return self.rooms
        return self.rooms + (self.swinging,)


@dataclass(frozen=True)
class AnimationPlayback:
    """
    Playback position within an unfolding.

    Attributes:
        unfolding: Hallway and uncurled series being animated
        step_seconds: Duration of one uncurl step
        depth: Step being animated (0..unfolding.depth)
        progress: Linear progress within the step, in [0, 1)
    """

    unfolding: Unfolding
    step_seconds: float = 0.8
    depth: int = 0
    progress: float = 0.0

    def __post_init__(self):
        """Validate playback state."""
        if self.step_seconds <= 0:
            raise ValueError(f"step_seconds must be > 0, got {self.step_seconds}")
        if not 0 <= self.depth <= self.unfolding.depth:
            raise ValueError(
                f"depth must be in [0, {self.unfolding.depth}], got {self.depth}"
            )
        if not 0.0 <= self.progress < 1.0:
            raise ValueError(f"progress must be in [0, 1), got {self.progress}")

    @property
    def finished(self) -> bool:
        return self.depth >= self.unfolding.depth

    def advance(self, seconds: float) -> "AnimationPlayback":
        """
        Move forward by `seconds`.

        At most one step completes per call.
        """
        if seconds < 0:
            raise ValueError(f"seconds must be >= 0, got {seconds}")
        if self.finished:
            return self

        progress = self.progress + seconds / self.step_seconds
        if progress >= 1.0:
            return replace(self, depth=self.depth + 1, progress=0.0)
        return replace(self, progress=progress)

    def frame(self) -> AnimationFrame:
        hallway = self.unfolding.hallway
        series = self.unfolding.series
        settled = hallway[:self.depth + 1]

        if self.finished:
            return AnimationFrame(
                rooms=settled,
                swinging=None,
                ray=series[self.depth],
                depth=self.depth,
                progress=0.0,
            )

        eased = smoothstep(self.progress)
        return AnimationFrame(
            rooms=settled,
            swinging=interpolate_room(hallway[self.depth], hallway[self.depth + 1], eased),
            ray=interpolate_ray(series[self.depth], series[self.depth + 1], eased),
            depth=self.depth,
            progress=eased,
        )
