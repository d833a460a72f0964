"""Geometry primitives: Vector, Ray and a few segment helpers.

Coordinate conventions:
- Cartesian, x to the right, y upward (the renderer flips y itself).
- Everything here is immutable; operations return new objects.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .errors import DegenerateVector

# Tolerance for zero-length checks, containment and wall classification.
EPSILON = 1e-4

DEFAULT_RAY_LENGTH = 1000.0


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


@dataclass(frozen=True)
class Vector:
    x: float
    y: float
    # Tag used by renderers ("assassin", "target", "guard"). Not part of equality.
    label: Optional[str] = field(default=None, compare=False)

    def add(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def subtract(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Vector":
        return Vector(self.x * k, self.y * k)

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> "Vector":
        n = self.norm()
        if n < EPSILON:
            raise DegenerateVector(f"cannot normalize near-zero vector ({self.x}, {self.y})")
        return Vector(self.x / n, self.y / n)

    def distance(self, other: "Vector") -> float:
        return self.subtract(other).norm()

    def dot(self, other: "Vector") -> float:
        return self.x * other.x + self.y * other.y

    def copy(self) -> "Vector":
        return Vector(self.x, self.y, self.label)

    def with_label(self, label: Optional[str]) -> "Vector":
        return replace(self, label=label)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


def midpoint(a: Vector, b: Vector) -> Vector:
    return Vector((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


@dataclass(frozen=True)
class Ray:
    """A finite ray { center + t * direction : 0 <= t <= length }.

    The direction is normalized on construction. The length only exists so
    that traced paths are finite.
    """

    center: Vector
    direction: Vector
    length: float = DEFAULT_RAY_LENGTH

    def __post_init__(self) -> None:
        if not self.length > 0:
            raise ValueError(f"ray length must be positive, got {self.length}")
        # Frozen dataclass: normalize in place once, before anyone sees it.
        object.__setattr__(self, "direction", self.direction.normalized())

    def point_at(self, t: float) -> Vector:
        return self.center.add(self.direction.scale(t))

    def endpoint(self) -> Vector:
        return self.point_at(self.length)

    def aimed(self, direction: Vector) -> "Ray":
        """Same origin and length, new direction."""
        return Ray(self.center, direction, self.length)


def point_segment_distance(p: Vector, a: Vector, b: Vector) -> float:
    """Euclidean distance from point p to segment ab."""
    v = b.subtract(a)
    w = p.subtract(a)
    vv = v.dot(v)
    if vv < 1e-12:
        return p.distance(a)
    t = clamp(w.dot(v) / vv, 0.0, 1.0)
    return p.distance(a.add(v.scale(t)))


def segment_stop_parameter(p: Vector, a: Vector, b: Vector, radius: float) -> Optional[float]:
    """Distance along segment ab at which it first enters the disc (p, radius).

    Returns None if the segment never comes within `radius` of p, or if a
    already lies inside the disc (a segment cannot be stopped by something
    it starts in).
    """
    if point_segment_distance(p, a, b) > radius:
        return None
    seg_len = a.distance(b)
    if seg_len < 1e-12 or p.distance(a) <= radius:
        return None
    direction = b.subtract(a).scale(1.0 / seg_len)
    along = p.subtract(a).dot(direction)
    perp_sq = max(0.0, p.subtract(a).dot(p.subtract(a)) - along * along)
    enter = along - math.sqrt(max(0.0, radius * radius - perp_sq))
    return clamp(enter, 0.0, seg_len)
