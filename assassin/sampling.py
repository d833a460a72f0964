"""Random scene points for the demo."""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np

from .arena import Rectangle
from .geometry import Vector

logger = logging.getLogger(__name__)

DEFAULT_MARGIN = 50.0
DEFAULT_MIN_SEPARATION = 100.0
MAX_ATTEMPTS = 1000

ASSASSIN_LABEL = "assassin"
TARGET_LABEL = "target"


def random_point(square: Rectangle, rng: np.random.Generator, margin: float = DEFAULT_MARGIN) -> Vector:
    """Integer point at least `margin` away from every wall."""
    min_x = int(np.ceil(square.bottom_left.x + margin))
    max_x = int(np.floor(square.top_right.x - margin))
    min_y = int(np.ceil(square.bottom_left.y + margin))
    max_y = int(np.floor(square.top_right.y - margin))
    if min_x > max_x or min_y > max_y:
        raise ValueError(f"margin {margin} leaves no room inside the arena")
    # integers() excludes the upper bound
    return Vector(float(rng.integers(min_x, max_x + 1)), float(rng.integers(min_y, max_y + 1)))


def random_assassin_and_target(
    square: Rectangle,
    rng: np.random.Generator,
    margin: float = DEFAULT_MARGIN,
    min_separation: float = DEFAULT_MIN_SEPARATION,
) -> Tuple[Vector, Vector]:
    """Draw the assassin, then redraw the target until it is far enough away."""
    assassin = random_point(square, rng, margin).with_label(ASSASSIN_LABEL)
    for attempt in range(MAX_ATTEMPTS):
        target = random_point(square, rng, margin)
        if target.distance(assassin) >= min_separation:
            logger.debug("target found after %d attempt(s)", attempt + 1)
            return assassin, target.with_label(TARGET_LABEL)
    raise RuntimeError(f"no target at least {min_separation} from {assassin.as_tuple()} after {MAX_ATTEMPTS} attempts")
