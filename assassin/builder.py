"""Build a Scene from YAML scene + config dicts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .arena import Rectangle
from .geometry import DEFAULT_RAY_LENGTH, Ray, Vector
from .sampling import (
    ASSASSIN_LABEL,
    DEFAULT_MARGIN,
    DEFAULT_MIN_SEPARATION,
    TARGET_LABEL,
    random_assassin_and_target,
)


@dataclass
class Scene:
    square: Rectangle
    assassin: Vector
    target: Vector
    shot: Ray
    guards: Optional[List[Vector]] = None


def parse_point(value: Any, label: Optional[str] = None) -> Vector:
    if not isinstance(value, Sequence) or isinstance(value, str) or len(value) != 2:
        raise ValueError(f"expected a point [x, y], got {value!r}")
    return Vector(float(value[0]), float(value[1]), label)


def build_from_spec(config: Dict[str, Any], scene: Dict[str, Any]) -> Scene:
    arena_cfg = scene['arena']
    square = Rectangle(parse_point(arena_cfg['bottom_left']), parse_point(arena_cfg['top_right']))

    a_raw = scene.get('assassin', 'random')
    t_raw = scene.get('target', 'random')
    rand_a = rand_t = None
    if a_raw == 'random' or t_raw == 'random':
        s_cfg = config.get('sampling') or {}
        rng = np.random.default_rng(s_cfg.get('seed'))
        rand_a, rand_t = random_assassin_and_target(
            square,
            rng,
            margin=float(s_cfg.get('margin', DEFAULT_MARGIN)),
            min_separation=float(s_cfg.get('min_separation', DEFAULT_MIN_SEPARATION)),
        )
    assassin = rand_a if a_raw == 'random' else parse_point(a_raw, ASSASSIN_LABEL)
    target = rand_t if t_raw == 'random' else parse_point(t_raw, TARGET_LABEL)

    shot_cfg = scene.get('shot') or {}
    if 'direction' in shot_cfg:
        direction = parse_point(shot_cfg['direction'])
    else:
        # Aim straight at the target by default.
        direction = target.subtract(assassin)
    shot = Ray(assassin, direction, float(shot_cfg.get('length', DEFAULT_RAY_LENGTH)))

    return Scene(square=square, assassin=assassin, target=target, shot=shot)
