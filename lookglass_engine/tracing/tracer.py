"""
Reflection Tracer Module
========================

Walks a sight-line through a room, bouncing off mirror edges.

Design:
- Pure function of (room, start, direction, budget, settings)
- Item wins ties against an edge at the same distance (within epsilon)
- Degenerate geometry never raises: parallel and zero-length edges
  are simply not hit, and a bounce cap stops runaway loops
- A vertex between two mirrors reflects across both edges (two bounces
  at the same point); any other vertex hit stops the sight-line there
"""

from dataclasses import dataclass
from typing import List, Optional

from lookglass_engine.geometry.caster import EdgeHit, RayCaster
from lookglass_engine.geometry.shapes import Point
from lookglass_engine.geometry.units import Direction, Length
from lookglass_engine.logging import LogEvent, create_logger
from lookglass_engine.room.model import Room
from lookglass_engine.tracing.sight_ray import (
    Bounce,
    ExhaustedBudget,
    HitItem,
    SightRay,
)

logger = create_logger("tracer")


@dataclass(frozen=True)
class TraceSettings:
    """
    Tracer tolerances.

    Attributes:
        epsilon: Minimum travel before an edge counts as hit; also the
                 slack within which an item beats an edge
        max_bounces: Bounce cap (loop guard)
    """

    epsilon: float = 1e-6
    max_bounces: int = 64

    def __post_init__(self):
        """Validate settings."""
        if not self.epsilon > 0:
            raise ValueError(f"epsilon must be > 0, got {self.epsilon}")
        if self.max_bounces < 0:
            raise ValueError(f"max_bounces must be >= 0, got {self.max_bounces}")


DEFAULT_SETTINGS = TraceSettings()


class ReflectionTracer:
    """
    Traces sight-lines through one room.

    Item arrays are packed once per tracer so repeated traces in the same
    room (e.g. while aiming) skip the repacking.

    Usage:
        tracer = ReflectionTracer(room)
        ray = tracer.trace(start, Direction.from_degrees(0), Length(12.0))
    """

    def __init__(self, room: Room, settings: Optional[TraceSettings] = None):
        self.room = room
        self.settings = settings or DEFAULT_SETTINGS
        self._centers, self._radii = room.item_arrays()

    def trace(self, start: Point, direction: Direction, budget: Length) -> SightRay:
        """
        Trace a sight-line.

        Args:
            start: Ray origin
            direction: Initial direction
            budget: Maximum travel length

        Returns:
            SightRay with its bounces and termination
        """
        epsilon = self.settings.epsilon
        position = start
        heading = direction
        remaining = budget
        bounces: List[Bounce] = []

        while True:
            edge_hit = RayCaster.cast_edges(
                self.room.boundary, position, heading, remaining, epsilon
            )
            item_hit = RayCaster.cast_items(
                self._centers, self._radii, position, heading, remaining
            )

            if item_hit is not None and (
                edge_hit is None
                or item_hit.distance.meters <= edge_hit.distance.meters + epsilon
            ):
                terminal = HitItem(item_hit.point, self.room.items[item_hit.item_index])
                break

            if edge_hit is None:
                terminal = ExhaustedBudget(position.offset(heading, remaining))
                break

            remaining = remaining - edge_hit.distance
            if not edge_hit.is_mirror:
                terminal = ExhaustedBudget(edge_hit.point)
                break

            # A vertex belongs to two edges: reflect across both or stop
            mirror_indices = [edge_hit.edge_index]
            neighbor = self._corner_neighbor(edge_hit)
            if neighbor is not None:
                if not self.room.boundary.mirrors[neighbor]:
                    self._log_corner_stop(edge_hit, neighbor, "solid edge at vertex")
                    terminal = ExhaustedBudget(edge_hit.point)
                    break
                mirror_indices.append(neighbor)

            if len(bounces) + len(mirror_indices) > self.settings.max_bounces:
                logger.warning(
                    event=LogEvent.TRACE_LOOP_GUARD,
                    message="Bounce cap reached, stopping sight-line",
                    metadata={
                        'max_bounces': self.settings.max_bounces,
                        'x': position.x,
                        'y': position.y,
                    }
                )
                terminal = ExhaustedBudget(position)
                break

            mirrors = [self.room.boundary.edge(i).segment for i in mirror_indices]
            reflected = heading
            for mirror in mirrors:
                reflected = reflected.reflected_across(mirror)

            if neighbor is not None and not self._heads_inside(edge_hit.point, reflected):
                self._log_corner_stop(edge_hit, neighbor, "reflection leaves the room")
                terminal = ExhaustedBudget(edge_hit.point)
                break

            for index, mirror in zip(mirror_indices, mirrors):
                bounces.append(Bounce(edge_hit.point, mirror, index))
            position = edge_hit.point
            heading = reflected

        ray = SightRay(
            start=start,
            direction=direction,
            budget=budget,
            terminal=terminal,
            bounces=tuple(bounces),
        )
        logger.debug(
            event=LogEvent.TRACE_COMPLETED,
            message="Traced sight-line",
            metadata={
                'bounces': len(ray.bounces),
                'termination': terminal.kind,
                'length': ray.length.meters,
            }
        )
        return ray

    def _corner_neighbor(self, edge_hit: EdgeHit) -> Optional[int]:
        """
        Other edge meeting the hit edge at a vertex, or None when the hit
        is not within epsilon of either end. Zero-length edges are skipped.
        """
        boundary = self.room.boundary
        count = len(boundary)
        edge_length = boundary.edge(edge_hit.edge_index).segment.length.meters
        along = edge_hit.edge_param * edge_length

        if along <= self.settings.epsilon:
            step = -1
        elif edge_length - along <= self.settings.epsilon:
            step = 1
        else:
            return None

        index = edge_hit.edge_index
        for _ in range(count - 1):
            index = (index + step) % count
            if not boundary.edge(index).segment.is_degenerate:
                return index
        return None

    def _heads_inside(self, point: Point, heading: Direction) -> bool:
        ahead = point.offset(heading, Length(100 * self.settings.epsilon))
        return self.room.boundary.contains_point(ahead)

    def _log_corner_stop(self, edge_hit: EdgeHit, neighbor: int, reason: str) -> None:
        logger.warning(
            event=LogEvent.TRACE_CORNER_STOP,
            message="Sight-line stopped at a vertex",
            metadata={
                'edges': [edge_hit.edge_index, neighbor],
                'reason': reason,
                'x': edge_hit.point.x,
                'y': edge_hit.point.y,
            }
        )


def trace(
    room: Room,
    start: Point,
    direction: Direction,
    budget: Length,
    settings: Optional[TraceSettings] = None,
) -> SightRay:
    """Trace a sight-line through `room` (see ReflectionTracer.trace)."""
    return ReflectionTracer(room, settings).trace(start, direction, budget)
