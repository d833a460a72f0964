"""Error types raised by the geometry core.

All of these signal bad input or a precision problem, never a retryable
condition. Callers are expected to let them propagate.
"""

from __future__ import annotations


class GeometryError(Exception):
    """Base class."""


class DegenerateVector(GeometryError, ValueError):
    """Normalizing a vector whose length is (numerically) zero."""


class InvalidBoundaryPoint(GeometryError, ValueError):
    """Wall classification asked about a point that is not on the boundary."""


class GeometryInvariantViolation(GeometryError, RuntimeError):
    """No valid wall intersection was found for a ray starting inside the arena."""


class PointOutsideArena(GeometryError, ValueError):
    """A point required to lie in the arena does not."""
