"""
Hallway Unfolder Module
=======================

Turns a bounced (curled) sight-line into straight views through
mirror-reflected copies of the room.

Design:
- hallway[i+1] is hallway[i] reflected across the edge hit at bounce i,
  applied in the already-transformed frame
- uncurl drops the earliest bounce and re-expresses the rest as a
  straight continuation, leaving the old start in the ray's trail
- series[k] is the straight sub-ray valid inside hallway[k]
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from lookglass_engine.geometry.units import closeness_tolerance
from lookglass_engine.logging import LogEvent, create_logger
from lookglass_engine.room.model import Room
from lookglass_engine.tracing.sight_ray import (
    Bounce,
    ExhaustedBudget,
    HitItem,
    SightRay,
    Termination,
)
from lookglass_engine.tracing.tracer import TraceSettings, trace

logger = create_logger("hallway")


def hallway(room: Room, ray: SightRay) -> Tuple[Room, ...]:
    """
    Reflected room copies along the ray's bounces.

    Returns:
        Tuple of len(ray.bounces) + 1 rooms, the first being `room`
    """
    rooms: List[Room] = [room]
    for bounce in ray.bounces:
        current = rooms[-1]
        rooms.append(current.reflect_across(current.boundary.edge(bounce.edge_index)))
    return tuple(rooms)


def uncurl(ray: SightRay) -> Optional[SightRay]:
    """
    Straighten the earliest bounce.

    The new ray starts at the first bounce point and keeps the original
    direction; its budget is what was left after reaching that point.
    Every later bounce and the terminal are reflected across the first
    mirror's line.

    Returns:
        Uncurled ray, or None when there is nothing to uncurl
    """
    if not ray.bounces:
        return None

    first = ray.bounces[0]
    line = first.mirror

    bounces = tuple(
        Bounce(
            point=bounce.point.reflected_across(line),
            mirror=bounce.mirror.reflected_across(line),
            edge_index=bounce.edge_index,
        )
        for bounce in ray.bounces[1:]
    )

    terminal: Termination
    if isinstance(ray.terminal, HitItem):
        terminal = HitItem(
            point=ray.terminal.point.reflected_across(line),
            item=ray.terminal.item.reflected_across(line),
        )
    else:
        terminal = ExhaustedBudget(ray.terminal.point.reflected_across(line))

    return SightRay(
        start=first.point,
        direction=ray.direction,
        budget=ray.budget - ray.start.distance_to(first.point),
        terminal=terminal,
        bounces=bounces,
        trail=ray.trail + (ray.start,),
    )


def uncurled_series(ray: SightRay) -> Tuple[SightRay, ...]:
    """`ray` followed by successive uncurls until no bounce remains."""
    series: List[SightRay] = []
    current: Optional[SightRay] = ray
    while current is not None:
        series.append(current)
        current = uncurl(current)
    return tuple(series)


@dataclass(frozen=True)
class Unfolding:
    """
    Hallway plus matching uncurled series.

    Attributes:
        hallway: Reflected room copies (hallway[0] is the real room)
        series: Straight sub-ray for each hallway room

    Invariants:
        - len(hallway) == len(series)
    """

    hallway: Tuple[Room, ...]
    series: Tuple[SightRay, ...]

    def __post_init__(self):
        """Validate that rooms and rays pair up."""
        if len(self.hallway) != len(self.series):
            raise ValueError(
                f"Hallway has {len(self.hallway)} rooms but series has "
                f"{len(self.series)} rays"
            )

    @property
    def depth(self) -> int:
        """Number of uncurl steps (bounces of the original ray)."""
        return len(self.series) - 1

    @property
    def ray(self) -> SightRay:
        return self.series[0]

    @property
    def room(self) -> Room:
        return self.hallway[0]


def unfold(room: Room, ray: SightRay) -> Unfolding:
    """Build the hallway and uncurled series for a traced ray."""
    unfolding = Unfolding(hallway=hallway(room, ray), series=uncurled_series(ray))
    logger.debug(
        event=LogEvent.HALLWAY_BUILT,
        message="Unfolded sight-line",
        metadata={'depth': unfolding.depth}
    )
    return unfolding


def retrace_matches(
    unfolding: Unfolding,
    settings: Optional[TraceSettings] = None,
) -> bool:
    """
    Check every straight sub-ray against a fresh trace in its hallway room.

    Terminals must agree within the closeness tolerance of the player.
    """
    for room, ray in zip(unfolding.hallway, unfolding.series):
        retraced = trace(room, ray.start, ray.direction, ray.budget, settings)
        tolerance = closeness_tolerance(room.player_item.radius)
        if retraced.end_position.distance_to(ray.end_position) > tolerance:
            return False
    return True
