"""Guard placement by the method of images.

Unfold the arena: reflecting a rectangle across its walls over and over
tiles the plane, and a bouncing shot inside the arena becomes a straight
line through the tiling. Every shot from the assassin that reaches the target
is then a straight segment from the assassin to some image of the target.

The images repeat with period (2 * width, 2 * height), so one 2x2 block of
tiles holds four of them (the target, mirrored across the top wall, across
the right wall, and across both). Translating that block left, down and
diagonally gives 16 images around the arena.

A guard at the midpoint of each assassin-to-image segment blocks that shot.
Folding the midpoint back through the tiling (undo the translation, then undo
the mirroring) gives where the guard stands in the real arena.
"""

from __future__ import annotations

import logging
import math
from typing import List

from .arena import Rectangle
from .errors import PointOutsideArena
from .geometry import Vector, midpoint

logger = logging.getLogger(__name__)

GUARD_LABEL = "guard"


def mirror_across_top(square: Rectangle, p: Vector) -> Vector:
    return Vector(p.x, 2.0 * square.top_right.y - p.y)


def mirror_across_right(square: Rectangle, p: Vector) -> Vector:
    return Vector(2.0 * square.top_right.x - p.x, p.y)


def mirrored_targets(square: Rectangle, target: Vector) -> List[Vector]:
    """The four images of the target inside the 2x2 block anchored at bottom_left."""
    top = mirror_across_top(square, target)
    return [
        Vector(target.x, target.y),
        top,
        mirror_across_right(square, target),
        mirror_across_right(square, top),
    ]


def translated_images(square: Rectangle, p: Vector) -> List[Vector]:
    """p, and p moved one block left, down, and left+down."""
    dx = 2.0 * square.width
    dy = 2.0 * square.height
    return [
        p,
        Vector(p.x - dx, p.y),
        Vector(p.x, p.y - dy),
        Vector(p.x - dx, p.y - dy),
    ]


def image_points(square: Rectangle, target: Vector) -> List[Vector]:
    """All 16 target images, grouped by mirror (4 mirrors x 4 translations)."""
    return [t for m in mirrored_targets(square, target) for t in translated_images(square, m)]


def untranslate(square: Rectangle, p: Vector) -> Vector:
    """Shift p by whole blocks into the 2x2 block anchored at bottom_left."""
    block_w = 2.0 * square.width
    block_h = 2.0 * square.height
    kx = math.floor((p.x - square.bottom_left.x) / block_w)
    ky = math.floor((p.y - square.bottom_left.y) / block_h)
    return Vector(p.x - kx * block_w, p.y - ky * block_h)


def unmirror(square: Rectangle, p: Vector) -> Vector:
    """Fold a point of the 2x2 block back across the right and/or top wall."""
    x, y = p.x, p.y
    if x > square.top_right.x:
        x = 2.0 * square.top_right.x - x
    if y > square.top_right.y:
        y = 2.0 * square.top_right.y - y
    return Vector(x, y)


def fold_into(square: Rectangle, p: Vector) -> Vector:
    """Map a point of the unfolded plane to where it lies in the arena."""
    return unmirror(square, untranslate(square, p))


def compute_optimal_guards(square: Rectangle, assassin: Vector, target: Vector) -> List[Vector]:
    """Return the 16 guard positions that block every shot from assassin to target.

    Guards come back labelled "guard", one per image, in image_points order.
    Raises PointOutsideArena if either point is not in the square.
    """
    for name, p in (("assassin", assassin), ("target", target)):
        if not square.contains(p):
            raise PointOutsideArena(f"{name} {p.as_tuple()} lies outside the arena")

    guards = []
    for image in image_points(square, target):
        guard = fold_into(square, midpoint(assassin, image)).with_label(GUARD_LABEL)
        guards.append(guard)

    logger.debug("placed %d guards for assassin=%s target=%s", len(guards), assassin.as_tuple(), target.as_tuple())
    return guards
