"""Visualization utilities: arena snapshot + GIF of a shot being traced."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle as RectPatch

import imageio.v2 as imageio

from .arena import Rectangle, STOP_RADIUS
from .geometry import Vector
from .guards import image_points

# Fill / edge colors per point label.
LABEL_TO_COLOR = {
    'assassin': ('#999999', '#333333'),
    'guard': ('red', '#330000'),
    'target': ('green', '#003300'),
}


def _xy(points: Sequence[Vector]) -> Tuple[List[float], List[float]]:
    return [p.x for p in points], [p.y for p in points]


def _scatter(ax: plt.Axes, points: Sequence[Vector], label: str, size: float = 60.0) -> None:
    if not points:
        return
    face, edge = LABEL_TO_COLOR[label]
    xs, ys = _xy(points)
    ax.scatter(xs, ys, s=size, color=face, edgecolors=edge, linewidths=1.5, zorder=3, label=label)


def plot_scene(
    square: Rectangle,
    assassin: Vector,
    target: Vector,
    guards: Optional[Sequence[Vector]] = None,
    path: Optional[Sequence[Vector]] = None,
    show_images: bool = False,
    stop_radius: float = STOP_RADIUS,
    title: str = "Assassin puzzle",
) -> Tuple[plt.Figure, plt.Axes]:
    fig, ax = plt.subplots(figsize=(7, 7))

    # Unfolded tiles and target images around the arena
    if show_images:
        w, h = square.width, square.height
        for i in range(-2, 2):
            for j in range(-2, 2):
                ax.add_patch(RectPatch(
                    (square.bottom_left.x + i * w, square.bottom_left.y + j * h), w, h,
                    fill=False, edgecolor='0.8', linestyle=':', linewidth=1.0,
                ))
        ix, iy = _xy(image_points(square, target))
        ax.scatter(ix, iy, s=25, marker='x', color='0.5', zorder=2)

    ax.add_patch(RectPatch(
        square.bottom_left.as_tuple(), square.width, square.height,
        fill=False, edgecolor='black', linewidth=3.0, zorder=1,
    ))

    if path:
        xs, ys = _xy(path)
        ax.plot(xs, ys, linewidth=1.5, color='tab:blue', zorder=2)

    # Circles show the stop radius in data units.
    for g in guards or []:
        ax.add_patch(plt.Circle(g.as_tuple(), stop_radius, fill=False, edgecolor='#330000', alpha=0.5))
    _scatter(ax, list(guards or []), 'guard', size=30.0)
    _scatter(ax, [assassin], 'assassin')
    _scatter(ax, [target], 'target')

    pad = 0.05 * max(square.width, square.height)
    if show_images:
        ax.set_xlim(square.bottom_left.x - 2 * square.width - pad, square.top_right.x + square.width + pad)
        ax.set_ylim(square.bottom_left.y - 2 * square.height - pad, square.top_right.y + square.height + pad)
    else:
        ax.set_xlim(square.bottom_left.x - pad, square.top_right.x + pad)
        ax.set_ylim(square.bottom_left.y - pad, square.top_right.y + pad)
    ax.set_title(title)
    ax.set_aspect('equal', adjustable='box')
    ax.legend(loc='upper right', fontsize='small')
    fig.tight_layout()
    return fig, ax


def save_figure(fig: plt.Figure, path: str, dpi: int = 150) -> None:
    fig.savefig(path, dpi=dpi)
    plt.close(fig)


def _frame(fig: plt.Figure) -> np.ndarray:
    fig.canvas.draw()
    return np.asarray(fig.canvas.buffer_rgba())[..., :3].copy()


def make_gif(
    square: Rectangle,
    assassin: Vector,
    target: Vector,
    guards: Optional[Sequence[Vector]],
    path: Sequence[Vector],
    out_gif_path: str,
    cfg: Dict[str, Any],
) -> int:
    """Animate the path growing segment by segment. Returns the frame count.

    The background is drawn once; only the path line is updated per frame.
    """
    frames_per_segment = max(1, int(cfg.get('frames_per_segment', 4)))
    dpi = int(cfg.get('dpi', 100))

    fig, ax = plot_scene(
        square, assassin, target, guards=guards, path=None,
        stop_radius=float(cfg.get('stop_radius', STOP_RADIUS)),
        title=str(cfg.get('title', 'Shot trace')),
    )
    fig.set_dpi(dpi)
    line, = ax.plot([], [], linewidth=2.0, color='tab:blue')

    frames: List[np.ndarray] = [_frame(fig)]
    for k in range(1, len(path)):
        a, b = path[k - 1], path[k]
        done_x, done_y = _xy(path[:k])
        for step in range(1, frames_per_segment + 1):
            f = step / frames_per_segment
            tip = a.add(b.subtract(a).scale(f))
            line.set_data(done_x + [tip.x], done_y + [tip.y])
            frames.append(_frame(fig))

    plt.close(fig)
    imageio.mimsave(out_gif_path, frames, duration=float(cfg.get('duration_s', 0.1)))
    return len(frames)
