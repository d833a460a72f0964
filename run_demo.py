#!/usr/bin/env python
"""Run the assassin puzzle demo.

Usage:
  python run_demo.py --config configs/demo_config.yaml --scene configs/demo_scene.yaml

Places the 16 guards, traces the configured shot against them and writes
outputs/<timestamp>/ with report.json, final.png and trace.gif.
"""

from __future__ import annotations

import argparse
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import yaml

from assassin.arena import MIN_REFLECTION_LENGTH, STOP_RADIUS, Trace
from assassin.builder import build_from_spec
from assassin.guards import compute_optimal_guards
from assassin.logging_config import configure_logging
from assassin.sampling import TARGET_LABEL
from assassin.visualization import make_gif, plot_scene, save_figure

logger = logging.getLogger("assassin.demo")


def load_yaml(path: Path):
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def classify_outcome(trace: Trace) -> str:
    if trace.stopped_by is None:
        return 'missed'
    if trace.stopped_by.label == TARGET_LABEL:
        return 'hit_target'
    return 'blocked_by_guard'


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument('--config', type=str, default='configs/demo_config.yaml')
    ap.add_argument('--scene', type=str, default='configs/demo_scene.yaml')
    ap.add_argument('--out', type=str, default=None, help='output directory (default: outputs/<timestamp>)')
    ap.add_argument('--log-level', type=str, default=None)
    args = ap.parse_args(argv)

    configure_logging(level=args.log_level)

    root = Path(__file__).resolve().parent
    cfg = load_yaml(root / args.config)
    scene_data = load_yaml(root / args.scene)

    out_dir = Path(args.out) if args.out else (root / 'outputs' / datetime.now().strftime('%Y%m%d_%H%M%S'))
    out_dir.mkdir(parents=True, exist_ok=True)

    scene = build_from_spec(cfg, scene_data)
    logger.info("assassin=%s target=%s", scene.assassin.as_tuple(), scene.target.as_tuple())

    scene.guards = compute_optimal_guards(scene.square, scene.assassin, scene.target)

    t_cfg = cfg.get('tracing') or {}
    stop_radius = float(t_cfg.get('stop_radius', STOP_RADIUS))
    stopping_points = list(scene.guards)
    if bool(t_cfg.get('stop_at_target', True)):
        stopping_points.append(scene.target)
    trace = scene.square.trace(
        scene.shot,
        stopping_points,
        stop_radius=stop_radius,
        min_reflection_length=float(t_cfg.get('min_reflection_length', MIN_REFLECTION_LENGTH)),
    )
    logger.info("shot traced: %d bounce(s), length %.2f", trace.bounces, trace.length)

    outcome = classify_outcome(trace)

    report = {
        'arena': {
            'bottom_left': scene.square.bottom_left.as_tuple(),
            'top_right': scene.square.top_right.as_tuple(),
        },
        'assassin': scene.assassin.as_tuple(),
        'target': scene.target.as_tuple(),
        'guards': [g.as_tuple() for g in scene.guards],
        'shot': {
            'direction': scene.shot.direction.as_tuple(),
            'length': scene.shot.length,
            'bounces': trace.bounces,
            'traversed': trace.length,
            'points': [p.as_tuple() for p in trace.points],
            'stopped_by': trace.stopped_by.as_tuple() if trace.stopped_by else None,
            'outcome': outcome,
        },
    }
    with open(out_dir / 'report.json', 'w', encoding='utf-8') as f:
        json.dump(report, f, ensure_ascii=False, indent=2)

    vis_cfg = cfg.get('visualization') or {}
    fig, _ = plot_scene(
        scene.square,
        scene.assassin,
        scene.target,
        guards=scene.guards,
        path=trace.points,
        show_images=bool(vis_cfg.get('show_images', False)),
        stop_radius=stop_radius,
        title=f'Assassin puzzle ({outcome})',
    )
    save_figure(fig, str(out_dir / 'final.png'), dpi=int(vis_cfg.get('output_dpi', 150)))

    gif_cfg = dict(vis_cfg.get('gif') or {})
    if bool(gif_cfg.get('enable', True)):
        gif_cfg.setdefault('stop_radius', stop_radius)
        n = make_gif(scene.square, scene.assassin, scene.target, scene.guards, trace.points,
                     str(out_dir / 'trace.gif'), gif_cfg)
        logger.info("wrote %d GIF frames", n)

    print(f"[demo] Output directory: {out_dir}")
    print(json.dumps(report['shot'], ensure_ascii=False, indent=2))
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
