"""Rectangular arena: containment, wall intersection and bounce tracing.

A shot is traced as a polyline. Each step runs the current ray to the first
wall it hits, reflects it (angle of incidence equals angle of reflection)
and continues with whatever length is left, until the length budget runs out
or the path runs into a stopping point (a guard or the target).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from .errors import GeometryInvariantViolation, InvalidBoundaryPoint
from .geometry import EPSILON, Ray, Vector, midpoint, segment_stop_parameter

logger = logging.getLogger(__name__)

# Reflections with less length than this left are not worth drawing.
MIN_REFLECTION_LENGTH = 10.0

# Radius within which a passing path counts as hitting a stopping point.
STOP_RADIUS = 6.0

Segment = Tuple[Vector, Vector]


@dataclass(frozen=True)
class SplitResult:
    segment: Segment
    # Continuation after the bounce, None when the trace ends here.
    ray: Optional[Ray] = None


@dataclass
class Trace:
    points: List[Vector]
    stopped_by: Optional[Vector] = None
    bounces: int = 0
    length: float = 0.0

    @property
    def stopped(self) -> bool:
        return self.stopped_by is not None

    def segments(self) -> List[Segment]:
        return list(zip(self.points[:-1], self.points[1:]))


@dataclass(frozen=True)
class Rectangle:
    bottom_left: Vector
    top_right: Vector
    eps: float = field(default=EPSILON, compare=False)

    def __post_init__(self) -> None:
        if not (self.bottom_left.x < self.top_right.x and self.bottom_left.y < self.top_right.y):
            raise ValueError(
                f"degenerate rectangle: bottom_left={self.bottom_left.as_tuple()} "
                f"top_right={self.top_right.as_tuple()}"
            )

    @property
    def width(self) -> float:
        return self.top_right.x - self.bottom_left.x

    @property
    def height(self) -> float:
        return self.top_right.y - self.bottom_left.y

    @property
    def center(self) -> Vector:
        return midpoint(self.bottom_left, self.top_right)

    @property
    def top_left(self) -> Vector:
        return Vector(self.bottom_left.x, self.top_right.y)

    @property
    def bottom_right(self) -> Vector:
        return Vector(self.top_right.x, self.bottom_left.y)

    def contains(self, point: Vector) -> bool:
        """Inside-test with every bound relaxed outward by eps.

        Intersection points come out of a division and land on a wall only up
        to rounding, so a strict test would reject them.
        """
        eps = self.eps
        return (
            self.bottom_left.x - eps <= point.x <= self.top_right.x + eps
            and self.bottom_left.y - eps <= point.y <= self.top_right.y + eps
        )

    # ------------------------------------------------------------------
    # Walls
    # ------------------------------------------------------------------

    def ray_intersection(self, ray: Ray) -> Vector:
        """First point where a ray starting inside the rectangle meets the boundary.

        With bottom_left = (x1, y1), top_right = (x2, y2) and the ray
        { (c1, c2) + t (v1, v2) : t > 0 }, each wall gives one candidate t:

            top:    c2 + t v2 = y2        bottom: c2 + t v2 = y1
            left:   c1 + t v1 = x1        right:  c1 + t v1 = x2

        The answer is the candidate with t > eps whose point lies in the
        rectangle. Axis-aligned rays are handled directly.
        """
        c1, c2 = ray.center.x, ray.center.y
        v1, v2 = ray.direction.x, ray.direction.y
        x1, y1 = self.bottom_left.x, self.bottom_left.y
        x2, y2 = self.top_right.x, self.top_right.y

        if abs(v1) < self.eps:
            return Vector(c1, y2 if v2 > 0 else y1)
        if abs(v2) < self.eps:
            return Vector(x2 if v1 > 0 else x1, c2)

        candidates = [(y2 - c2) / v2, (y1 - c2) / v2, (x1 - c1) / v1, (x2 - c1) / v1]
        best: Optional[Tuple[float, Vector]] = None
        for t in candidates:
            if t <= self.eps:
                continue
            hit = Vector(c1 + t * v1, c2 + t * v2)
            if self.contains(hit) and (best is None or t < best[0]):
                best = (t, hit)

        if best is None:
            raise GeometryInvariantViolation(
                f"ray from {ray.center.as_tuple()} along {ray.direction.as_tuple()} "
                f"never meets the boundary of {self.bottom_left.as_tuple()}-{self.top_right.as_tuple()}"
            )
        return best[1]

    def is_on_vertical_wall(self, point: Vector) -> bool:
        """True for the left/right walls, False for top/bottom.

        Corners count as vertical. Raises InvalidBoundaryPoint for points off
        the boundary.
        """
        if self._on_vertical(point):
            return True
        if self._on_horizontal(point):
            return False
        raise InvalidBoundaryPoint(f"{point.as_tuple()} is not on the boundary")

    def is_on_horizontal_wall(self, point: Vector) -> bool:
        if self._on_horizontal(point):
            return True
        if self._on_vertical(point):
            return False
        raise InvalidBoundaryPoint(f"{point.as_tuple()} is not on the boundary")

    def _on_vertical(self, point: Vector) -> bool:
        return abs(point.x - self.bottom_left.x) < self.eps or abs(point.x - self.top_right.x) < self.eps

    def _on_horizontal(self, point: Vector) -> bool:
        return abs(point.y - self.bottom_left.y) < self.eps or abs(point.y - self.top_right.y) < self.eps

    def reflect(self, direction: Vector, point: Vector) -> Vector:
        """Reflect a direction off the wall containing `point`.

        A corner lies on both walls and sends the ray straight back.
        """
        vertical = self.is_on_vertical_wall(point)
        horizontal = self._on_horizontal(point)
        return Vector(-direction.x if vertical else direction.x, -direction.y if horizontal else direction.y)

    # ------------------------------------------------------------------
    # Tracing
    # ------------------------------------------------------------------

    def split_ray(self, ray: Ray, min_reflection_length: float = MIN_REFLECTION_LENGTH) -> SplitResult:
        """Cut a ray at the first wall; return the segment and the bounced ray.

        If less than `min_reflection_length` would remain after the bounce,
        the segment instead runs to the ray's unreflected endpoint and no
        continuation is returned.
        """
        hit = self.ray_intersection(ray)
        remaining = ray.length - ray.center.distance(hit)
        if remaining <= 0 or remaining < min_reflection_length:
            return SplitResult(segment=(ray.center, ray.endpoint()), ray=None)

        bounced = Ray(hit, self.reflect(ray.direction, hit), remaining)
        return SplitResult(segment=(ray.center, hit), ray=bounced)

    def trace(
        self,
        ray: Ray,
        stopping_points: Iterable[Vector] = (),
        stop_radius: float = STOP_RADIUS,
        min_reflection_length: float = MIN_REFLECTION_LENGTH,
    ) -> Trace:
        """Follow a ray through its bounces.

        Before each bounce the segment is checked against the stopping points;
        the nearest one the segment passes within `stop_radius` of ends the
        trace at the point where the path enters its radius. A stopping point
        is skipped only for a segment that starts inside its radius, so a
        disc around the shooter still stops the shot when it comes back
        after a bounce.
        """
        stops: Sequence[Vector] = list(stopping_points)
        result = Trace(points=[ray.center])
        current: Optional[Ray] = ray

        # Terminates: every continuation has strictly less length, and a
        # continuation is only produced with at least min_reflection_length.
        while current is not None:
            split = self.split_ray(current, min_reflection_length)
            start, end = split.segment

            hit = _first_stop(start, end, stops, stop_radius)
            if hit is not None:
                along, stop = hit
                result.points.append(start.add(end.subtract(start).normalized().scale(along)))
                result.length += along
                result.stopped_by = stop
                logger.debug("trace stopped at %s after %d bounce(s)", stop.as_tuple(), result.bounces)
                break

            result.points.append(end)
            result.length += start.distance(end)
            current = split.ray
            if current is not None:
                result.bounces += 1
                logger.debug("bounce %d at %s, %.3f left", result.bounces, end.as_tuple(), current.length)

        return result

    def ray_to_points(
        self,
        ray: Ray,
        stopping_points: Iterable[Vector] = (),
        stop_radius: float = STOP_RADIUS,
        min_reflection_length: float = MIN_REFLECTION_LENGTH,
    ) -> List[Vector]:
        """Vertices of the bounce path: the origin, then every segment end."""
        return self.trace(ray, stopping_points, stop_radius, min_reflection_length).points


def _first_stop(
    start: Vector, end: Vector, stops: Sequence[Vector], radius: float
) -> Optional[Tuple[float, Vector]]:
    best: Optional[Tuple[float, Vector]] = None
    for p in stops:
        along = segment_stop_parameter(p, start, end, radius)
        if along is None or along <= EPSILON:
            continue
        if best is None or along < best[0]:
            best = (along, p)
    return best
