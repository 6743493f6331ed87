"""
Units Module
============

Distinct value types for scene quantities.

Design:
- Length is meters, never a bare float
- Direction is a unit vector, never a raw angle
- Conversions are explicit and checked (fail fast on bad input)
- Immutable (frozen dataclass pattern)
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Length:
    """
    Non-negative distance in meters.

    Subtraction saturates at zero so a travel budget can be drawn down
    without float noise producing a negative length.

    Attributes:
        meters: Distance in meters (>= 0)
    """

    meters: float

    def __post_init__(self):
        """Validate and normalize to float."""
        if isinstance(self.meters, bool) or not isinstance(self.meters, (int, float)):
            raise TypeError(f"meters must be a real number, got {type(self.meters)}")
        value = float(self.meters)
        if not math.isfinite(value):
            raise ValueError(f"Length must be finite, got {value}")
        if value < 0.0:
            raise ValueError(f"Length must be >= 0, got {value}")
        object.__setattr__(self, 'meters', value)

    @classmethod
    def zero(cls) -> "Length":
        return cls(0.0)

    @classmethod
    def from_pixels(cls, pixels: float, pixels_per_meter: float) -> "Length":
        """Convert a screen distance to scene meters."""
        if pixels_per_meter <= 0:
            raise ValueError(f"pixels_per_meter must be > 0, got {pixels_per_meter}")
        return cls(pixels / pixels_per_meter)

    def to_pixels(self, pixels_per_meter: float) -> float:
        """Convert to a screen distance."""
        if pixels_per_meter <= 0:
            raise ValueError(f"pixels_per_meter must be > 0, got {pixels_per_meter}")
        return self.meters * pixels_per_meter

    def __add__(self, other: "Length") -> "Length":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(self.meters + other.meters)

    def __sub__(self, other: "Length") -> "Length":
        if not isinstance(other, Length):
            return NotImplemented
        return Length(max(0.0, self.meters - other.meters))

    def __mul__(self, factor: float) -> "Length":
        if isinstance(factor, Length) or not isinstance(factor, (int, float)):
            return NotImplemented
        return Length(self.meters * factor)

    __rmul__ = __mul__

    def close_to(self, other: "Length", tolerance: "Length") -> bool:
        """True when the two lengths differ by at most `tolerance`."""
        return abs(self.meters - other.meters) <= tolerance.meters

    def lerp(self, other: "Length", t: float) -> "Length":
        return Length(self.meters * (1.0 - t) + other.meters * t)

    def __str__(self) -> str:
        return f"{self.meters:.3f}m"


def closeness_tolerance(radius: Length) -> Length:
    """
    Shared closeness tolerance: twice an item's radius.

    Used wherever two lengths or positions must be judged "close enough",
    so logical hit-testing agrees with what is drawn on screen.
    """
    return radius * 2.0


def lengths_close(a: Length, b: Length, radius: Length) -> bool:
    return a.close_to(b, closeness_tolerance(radius))


_UNIT_TOLERANCE = 1e-9


@dataclass(frozen=True)
class Direction:
    """
    Unit vector in the scene plane.

    Construct through from_vector(), from_radians() or from_degrees();
    the raw constructor only accepts components that are already unit length.

    Attributes:
        dx: x component
        dy: y component
    """

    dx: float
    dy: float

    def __post_init__(self):
        """Validate unit length."""
        dx, dy = float(self.dx), float(self.dy)
        if not (math.isfinite(dx) and math.isfinite(dy)):
            raise ValueError(f"Direction components must be finite, got ({dx}, {dy})")
        norm = math.hypot(dx, dy)
        if abs(norm - 1.0) > _UNIT_TOLERANCE:
            raise ValueError(
                f"Direction must be a unit vector (|v|={norm}). "
                f"Use Direction.from_vector() to normalize."
            )
        object.__setattr__(self, 'dx', dx)
        object.__setattr__(self, 'dy', dy)

    @classmethod
    def from_vector(cls, dx: float, dy: float) -> "Direction":
        """
        Normalize an arbitrary vector into a Direction.

        Raises:
            ValueError: If the vector has zero length
        """
        norm = math.hypot(dx, dy)
        if norm == 0.0 or not math.isfinite(norm):
            raise ValueError(f"Cannot derive a direction from vector ({dx}, {dy})")
        return cls(dx / norm, dy / norm)

    @classmethod
    def from_radians(cls, radians: float) -> "Direction":
        if not math.isfinite(radians):
            raise ValueError(f"Angle must be finite, got {radians}")
        return cls.from_vector(math.cos(radians), math.sin(radians))

    @classmethod
    def from_degrees(cls, degrees: float) -> "Direction":
        return cls.from_radians(math.radians(degrees))

    @property
    def radians(self) -> float:
        """Angle counter-clockwise from +x, in (-pi, pi]."""
        return math.atan2(self.dy, self.dx)

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def negated(self) -> "Direction":
        return Direction(-self.dx, -self.dy)

    def reflected_across(self, line) -> "Direction":
        """
        Reflect about a line given by two points (anything with start/end).

        The component along the line's normal flips sign. A zero-length
        line has no normal and leaves the direction unchanged.
        """
        tx = line.end.x - line.start.x
        ty = line.end.y - line.start.y
        norm = math.hypot(tx, ty)
        if norm == 0.0:
            return self
        tx, ty = tx / norm, ty / norm
        along = self.dx * tx + self.dy * ty
        return Direction.from_vector(2.0 * along * tx - self.dx, 2.0 * along * ty - self.dy)

    def lerp(self, other: "Direction", t: float) -> "Direction":
        """
        Rotate towards `other` along the shorter arc.

        Endpoints are returned as-is so t=0 and t=1 reproduce the inputs.
        """
        if t <= 0.0:
            return self
        if t >= 1.0:
            return other
        start = self.radians
        delta = other.radians - start
        delta = (delta + math.pi) % (2.0 * math.pi) - math.pi
        return Direction.from_radians(start + delta * t)

    def __str__(self) -> str:
        return f"{self.degrees:.1f}°"
