"""
Geometric Shapes Module
========================

Pure geometric representations - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- numpy for whole-polygon transforms (reflection, interpolation)
- One reflection routine shared by points, segments and polygons so
  every reflected copy of the same vertex is bit-for-bit identical
- Interpolation as a*(1-t) + b*t: t=0 gives a and t=1 gives b exactly
"""

import math
import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from lookglass_engine.geometry.units import Direction, Length


class InterpolationShapeError(ValueError):
    """Raised when two values cannot be blended point-for-point."""
    pass


_PARALLEL_TOLERANCE = 1e-12


def reflect_points(points: np.ndarray, line: "Segment") -> np.ndarray:
    """
    Reflect an Nx2 array of points across the supporting line of `line`.

    Args:
        points: Nx2 float array
        line: Segment whose supporting line is the mirror

    Returns:
        New Nx2 array (input untouched). Degenerate lines reflect nothing.
    """
    points = np.asarray(points, dtype=np.float64)
    ax, ay = line.start.x, line.start.y
    tx = line.end.x - ax
    ty = line.end.y - ay
    norm = math.hypot(tx, ty)
    if norm == 0.0:
        return points.copy()
    tx, ty = tx / norm, ty / norm

    # Foot of the perpendicular: a + ((p - a) . t) t
    along = (points[:, 0] - ax) * tx + (points[:, 1] - ay) * ty
    foot_x = ax + along * tx
    foot_y = ay + along * ty

    reflected = np.empty_like(points)
    reflected[:, 0] = 2.0 * foot_x - points[:, 0]
    reflected[:, 1] = 2.0 * foot_y - points[:, 1]
    return reflected


def lerp_arrays(a: np.ndarray, b: np.ndarray, t: float) -> np.ndarray:
    if a.shape != b.shape:
        raise InterpolationShapeError(f"Cannot interpolate shapes {a.shape} and {b.shape}")
    return a * (1.0 - t) + b * t


@dataclass(frozen=True)
class Point:
    """
    Position in scene meters.

    Attributes:
        x: x coordinate (meters)
        y: y coordinate (meters)
    """

    x: float
    y: float

    def __post_init__(self):
        x, y = float(self.x), float(self.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Point coordinates must be finite, got ({x}, {y})")
        object.__setattr__(self, 'x', x)
        object.__setattr__(self, 'y', y)

    @classmethod
    def from_array(cls, row: Sequence[float]) -> "Point":
        return cls(float(row[0]), float(row[1]))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def offset(self, direction: Direction, length: Length) -> "Point":
        """Move `length` meters along `direction`."""
        return Point(self.x + direction.dx * length.meters, self.y + direction.dy * length.meters)

    def distance_to(self, other: "Point") -> Length:
        return Length(math.hypot(other.x - self.x, other.y - self.y))

    def direction_to(self, other: "Point") -> Optional[Direction]:
        """Direction towards `other`, or None when the points coincide."""
        dx, dy = other.x - self.x, other.y - self.y
        if dx == 0.0 and dy == 0.0:
            return None
        return Direction.from_vector(dx, dy)

    def lerp(self, other: "Point", t: float) -> "Point":
        return Point(self.x * (1.0 - t) + other.x * t, self.y * (1.0 - t) + other.y * t)

    def reflected_across(self, line: "Segment") -> "Point":
        return Point.from_array(reflect_points(np.array([[self.x, self.y]]), line)[0])


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return a.lerp(b, t)


def lerp_direction(a: Direction, b: Direction, t: float) -> Direction:
    return a.lerp(b, t)


@dataclass(frozen=True)
class SegmentHit:
    """
    Intersection of two segments.

    Attributes:
        point: Intersection point
        t: Fraction along the first segment (0 = start, 1 = end)
        u: Fraction along the second segment
    """

    point: Point
    t: float
    u: float


@dataclass(frozen=True)
class Segment:
    """
    Ordered pair of points.

    Attributes:
        start: First endpoint
        end: Second endpoint
    """

    start: Point
    end: Point

    @property
    def length(self) -> Length:
        return self.start.distance_to(self.end)

    @property
    def is_degenerate(self) -> bool:
        return self.start == self.end

    def intersect(self, other: "Segment") -> Optional[SegmentHit]:
        """
        Intersect two segments.

        Solves start + t*(end-start) = other.start + u*(other.end-other.start)
        with t, u in [0, 1].

        Returns:
            SegmentHit, or None for parallel, collinear, degenerate or
            non-overlapping segments
        """
        rx, ry = self.end.x - self.start.x, self.end.y - self.start.y
        sx, sy = other.end.x - other.start.x, other.end.y - other.start.y
        den = rx * sy - ry * sx
        if abs(den) <= _PARALLEL_TOLERANCE:
            return None

        wx, wy = other.start.x - self.start.x, other.start.y - self.start.y
        t = (wx * sy - wy * sx) / den
        u = (wx * ry - wy * rx) / den
        if not (0.0 <= t <= 1.0 and 0.0 <= u <= 1.0):
            return None
        return SegmentHit(point=self.start.lerp(self.end, t), t=t, u=u)

    def reflect_point(self, point: Point) -> Point:
        """Reflect `point` across this segment's supporting line."""
        return point.reflected_across(self)

    def reflected_across(self, line: "Segment") -> "Segment":
        reflected = reflect_points(np.array([self.start.as_tuple(), self.end.as_tuple()]), line)
        return Segment(Point.from_array(reflected[0]), Point.from_array(reflected[1]))

    def distance_to_point(self, point: Point) -> Length:
        """Shortest distance from `point` to any point of the segment."""
        dx, dy = self.end.x - self.start.x, self.end.y - self.start.y
        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            return self.start.distance_to(point)
        t = ((point.x - self.start.x) * dx + (point.y - self.start.y) * dy) / length_sq
        t = max(0.0, min(1.0, t))
        return Point(self.start.x + t * dx, self.start.y + t * dy).distance_to(point)

    def lerp(self, other: "Segment", t: float) -> "Segment":
        return Segment(self.start.lerp(other.start, t), self.end.lerp(other.end, t))


@dataclass(frozen=True)
class Edge:
    """
    Boundary segment tagged as mirror or solid wall.

    Attributes:
        segment: Edge geometry
        is_mirror: True if the edge reflects sight-lines
    """

    segment: Segment
    is_mirror: bool

    @property
    def start(self) -> Point:
        return self.segment.start

    @property
    def end(self) -> Point:
        return self.segment.end


@dataclass(frozen=True)
class Polygon:
    """
    Closed polygon with one mirror tag per edge.

    Edge i runs from vertex i to vertex (i + 1) mod n and is a mirror
    when mirrors[i] is True. Simplicity is NOT checked here: blended
    rooms legitimately collapse onto a line half-way through a reflection.
    Level loading calls is_simple() instead.

    Attributes:
        vertices: Ordered vertices (>= 3)
        mirrors: Mirror tag per edge (same length as vertices)
    """

    vertices: Tuple[Point, ...]
    mirrors: Tuple[bool, ...]

    def __post_init__(self):
        """Validate inputs and cache the vertex array."""
        vertices = tuple(self.vertices)
        mirrors = tuple(bool(flag) for flag in self.mirrors)
        if len(vertices) < 3:
            raise ValueError(f"Polygon must have at least 3 vertices, got {len(vertices)}")
        if len(mirrors) != len(vertices):
            raise ValueError(
                f"Polygon needs one mirror tag per edge: "
                f"{len(vertices)} vertices, {len(mirrors)} tags"
            )
        object.__setattr__(self, 'vertices', vertices)
        object.__setattr__(self, 'mirrors', mirrors)

        array = np.array([v.as_tuple() for v in vertices], dtype=np.float64)
        array.flags.writeable = False
        object.__setattr__(self, '_array', array)

    @classmethod
    def from_array(cls, array: np.ndarray, mirrors: Sequence[bool]) -> "Polygon":
        return cls(tuple(Point.from_array(row) for row in array), tuple(mirrors))

    def as_array(self) -> np.ndarray:
        """Read-only Nx2 vertex array."""
        return self._array

    def __len__(self) -> int:
        return len(self.vertices)

    def edge(self, index: int) -> Edge:
        n = len(self.vertices)
        return Edge(
            segment=Segment(self.vertices[index % n], self.vertices[(index + 1) % n]),
            is_mirror=self.mirrors[index % n],
        )

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return tuple(self.edge(i) for i in range(len(self.vertices)))

    @property
    def signed_area(self) -> float:
        """Shoelace area; positive for counter-clockwise winding."""
        x, y = self._array[:, 0], self._array[:, 1]
        return 0.5 * float(np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))

    def reflected_across(self, line: Segment) -> "Polygon":
        """
        Mirror image across `line`.

        Vertex order is kept, so winding flips while edge i stays edge i
        with the same tag.
        """
        return Polygon.from_array(reflect_points(self._array, line), self.mirrors)

    def lerp(self, other: "Polygon", t: float) -> "Polygon":
        """
        Blend vertex-for-vertex. Tags come from self for t < 1.

        Raises:
            InterpolationShapeError: If vertex counts differ
        """
        if len(self) != len(other):
            raise InterpolationShapeError(
                f"Cannot interpolate polygons with {len(self)} and {len(other)} vertices"
            )
        mirrors = self.mirrors if t < 1.0 else other.mirrors
        return Polygon.from_array(lerp_arrays(self._array, other._array, t), mirrors)

    def is_simple(self) -> bool:
        """True when no two non-adjacent edges touch (O(n^2))."""
        if abs(self.signed_area) == 0.0:
            return False
        segments = [edge.segment for edge in self.edges]
        n = len(segments)
        for i in range(n):
            if segments[i].is_degenerate:
                return False
            for j in range(i + 1, n):
                if j == i + 1 or (i == 0 and j == n - 1):
                    continue
                if segments[i].intersect(segments[j]) is not None:
                    return False
        return True

    def contains_point(self, point: Point) -> bool:
        """
        Strict point-in-polygon test (points on the boundary are outside).

        Uses cv2.pointPolygonTest on float vertices.
        """
        import cv2

        contour = self._array.astype(np.float32).reshape((-1, 1, 2))
        return cv2.pointPolygonTest(contour, (float(point.x), float(point.y)), False) > 0
