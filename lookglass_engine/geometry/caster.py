"""
Ray Caster Module
=================

Stateless ray queries - applies a ray to boundary edges and item disks.

Design:
- Pure functions (no state)
- Vectorized over all edges / all items with numpy
- Deterministic tie handling (lowest index wins on equal distance)
- Returns hit records, never mutates inputs
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from lookglass_engine.geometry.shapes import Point, Polygon
from lookglass_engine.geometry.units import Direction, Length

# Relative slack on the edge parameter so rays aimed exactly at a vertex
# cannot slip between the two edges sharing it.
_EDGE_PARAM_SLACK = 1e-12
_PARALLEL_TOLERANCE = 1e-12


@dataclass(frozen=True)
class EdgeHit:
    """
    Nearest boundary edge crossed by a ray.

    Attributes:
        edge_index: Index of the edge in the polygon
        distance: Travel distance from the ray origin
        point: Intersection point
        is_mirror: Tag of the edge that was hit
        edge_param: Position along the edge (0 at its start vertex,
                    1 at its end vertex)
    """

    edge_index: int
    distance: Length
    point: Point
    is_mirror: bool
    edge_param: float


@dataclass(frozen=True)
class ItemHit:
    """
    Nearest item disk entered by a ray.

    Attributes:
        item_index: Index into the item sequence
        distance: Travel distance to the disk surface
        point: Surface point where the ray enters the disk
    """

    item_index: int
    distance: Length
    point: Point


class RayCaster:
    """
    Stateless caster for rays against room geometry.

    Design Philosophy:
    - All methods are static (no instance state)
    - One numpy pass per query
    - Hit records are frozen values
    """

    @staticmethod
    def cast_edges(
        polygon: Polygon,
        origin: Point,
        direction: Direction,
        max_distance: Length,
        epsilon: float = 1e-6,
    ) -> Optional[EdgeHit]:
        """
        Find the nearest edge the ray crosses within `max_distance`.

        Solves origin + t*direction = a + u*(b - a) for every edge a->b.

        Args:
            polygon: Room boundary
            origin: Ray origin
            direction: Ray direction
            max_distance: Longest travel considered
            epsilon: Hits closer than this are ignored (the ray may start
                     on the edge it just bounced off)

        Returns:
            EdgeHit for the nearest edge, or None if nothing is in reach.
            Edges parallel to the ray and zero-length edges are never hit.
        """
        starts = polygon.as_array()
        spans = np.roll(starts, -1, axis=0) - starts
        vx, vy = direction.dx, direction.dy

        den = vx * spans[:, 1] - vy * spans[:, 0]
        wx = starts[:, 0] - origin.x
        wy = starts[:, 1] - origin.y

        with np.errstate(divide='ignore', invalid='ignore'):
            t = (wx * spans[:, 1] - wy * spans[:, 0]) / den
            u = (wx * vy - wy * vx) / den

        valid = (
            (np.abs(den) > _PARALLEL_TOLERANCE)
            & (t >= epsilon)
            & (t <= max_distance.meters)
            & (u >= -_EDGE_PARAM_SLACK)
            & (u <= 1.0 + _EDGE_PARAM_SLACK)
        )
        if not valid.any():
            return None

        candidates = np.where(valid, t, np.inf)
        index = int(np.argmin(candidates))
        distance = Length(float(candidates[index]))
        return EdgeHit(
            edge_index=index,
            distance=distance,
            point=origin.offset(direction, distance),
            is_mirror=polygon.mirrors[index],
            edge_param=float(u[index]),
        )

    @staticmethod
    def cast_items(
        centers: np.ndarray,
        radii: np.ndarray,
        origin: Point,
        direction: Direction,
        max_distance: Length,
    ) -> Optional[ItemHit]:
        """
        Find the nearest item disk the ray enters within `max_distance`.

        A disk that already contains the origin is not hit on the way
        out, so a sight-line starting at the viewer does not see the
        viewer until it comes back through a mirror.

        Args:
            centers: Mx2 array of disk centers
            radii: M array of disk radii
            origin: Ray origin
            direction: Ray direction
            max_distance: Longest travel considered

        Returns:
            ItemHit for the nearest disk, or None
        """
        if len(centers) == 0:
            return None

        fx = origin.x - centers[:, 0]
        fy = origin.y - centers[:, 1]
        # |f + t*d|^2 = r^2 with |d| = 1  ->  t^2 + 2bt + c = 0
        b = fx * direction.dx + fy * direction.dy
        c = fx * fx + fy * fy - radii * radii
        disc = b * b - c

        with np.errstate(invalid='ignore'):
            entry = -b - np.sqrt(disc)

        valid = (
            (disc >= 0.0)
            & (c > 0.0)
            & (entry >= 0.0)
            & (entry <= max_distance.meters)
        )
        if not valid.any():
            return None

        candidates = np.where(valid, entry, np.inf)
        index = int(np.argmin(candidates))
        distance = Length(float(candidates[index]))
        return ItemHit(
            item_index=index,
            distance=distance,
            point=origin.offset(direction, distance),
        )

    @staticmethod
    def item_arrays(items: Sequence) -> tuple:
        """Pack item positions and radii into (Mx2, M) float arrays."""
        centers = np.array(
            [item.position.as_tuple() for item in items], dtype=np.float64
        ).reshape((-1, 2))
        radii = np.array([item.radius.meters for item in items], dtype=np.float64)
        return centers, radii

