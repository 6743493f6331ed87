"""
Sight Ray Module
================

Result types of the reflection tracer.

Design:
- Termination is a tagged union: ExhaustedBudget | HitItem
- SightRay is immutable; uncurl/interpolate build new rays
- `trail` holds the straightened prefix left behind by uncurl, so the
  full `path` keeps the same number of points across an uncurled series
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from lookglass_engine.geometry.shapes import Point, Segment
from lookglass_engine.geometry.units import Direction, Length
from lookglass_engine.room.model import Item


@dataclass(frozen=True)
class Bounce:
    """
    Reflection off a mirror edge.

    Attributes:
        point: Where the ray met the mirror
        mirror: Mirror segment, in the same frame as the ray
        edge_index: Index of the mirror edge in the room boundary
    """

    point: Point
    mirror: Segment
    edge_index: int


@dataclass(frozen=True)
class ExhaustedBudget:
    """Ray ran out of travel (or hit a solid wall) at `point`."""

    point: Point

    kind = "exhausted_budget"


@dataclass(frozen=True)
class HitItem:
    """Ray reached the surface of `item` at `point`."""

    point: Point
    item: Item

    kind = "hit_item"


Termination = Union[ExhaustedBudget, HitItem]


@dataclass(frozen=True)
class SightRay:
    """
    Traced sight-line.

    Attributes:
        start: Origin of the traced part
        direction: Initial direction at `start`
        budget: Travel allowed from `start`
        terminal: How the ray ended
        bounces: Mirror reflections in travel order
        trail: Straightened prefix (empty for freshly traced rays)
    """

    start: Point
    direction: Direction
    budget: Length
    terminal: Termination
    bounces: Tuple[Bounce, ...] = ()
    trail: Tuple[Point, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'bounces', tuple(self.bounces))
        object.__setattr__(self, 'trail', tuple(self.trail))

    @property
    def bounce_points(self) -> Tuple[Point, ...]:
        return tuple(bounce.point for bounce in self.bounces)

    @property
    def path(self) -> Tuple[Point, ...]:
        """trail + start + bounce points + terminal point."""
        return self.trail + (self.start,) + self.bounce_points + (self.terminal.point,)

    @property
    def length(self) -> Length:
        """Travel from start through every bounce to the terminal."""
        points = (self.start,) + self.bounce_points + (self.terminal.point,)
        return _polyline_length(points)

    @property
    def total_length(self) -> Length:
        """Travel including the straightened trail."""
        return _polyline_length(self.path)

    @property
    def end_position(self) -> Point:
        return self.terminal.point

    @property
    def end_item(self) -> Optional[Item]:
        if isinstance(self.terminal, HitItem):
            return self.terminal.item
        return None

    def to_dict(self) -> Dict[str, Any]:
        terminal: Dict[str, Any] = {
            'kind': self.terminal.kind,
            'x': self.terminal.point.x,
            'y': self.terminal.point.y,
        }
        if isinstance(self.terminal, HitItem):
            terminal['item'] = self.terminal.item.to_dict()

        return {
            'start': {'x': self.start.x, 'y': self.start.y},
            'degrees': self.direction.degrees,
            'budget': self.budget.meters,
            'length': self.length.meters,
            'bounces': [
                {
                    'x': bounce.point.x,
                    'y': bounce.point.y,
                    'edge_index': bounce.edge_index,
                }
                for bounce in self.bounces
            ],
            'trail': [{'x': p.x, 'y': p.y} for p in self.trail],
            'terminal': terminal,
        }


def _polyline_length(points: Tuple[Point, ...]) -> Length:
    total = Length.zero()
    for a, b in zip(points, points[1:]):
        total = total + a.distance_to(b)
    return total
