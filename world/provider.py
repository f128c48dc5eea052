from __future__ import annotations
import random
from typing import Any, Dict, Optional

from flamearena.teams import get_bases
from .arena import generate_flames, generate_obstacles
from .types import WorldState


def make_rng(cfg: Dict[str, Any]) -> random.Random:
    """Seeded from config when a seed is set, otherwise from system entropy."""
    seed = cfg.get('seed', None)
    if seed in (None, ''):
        return random.Random()
    return random.Random(str(seed))


def build_world(cfg: Dict[str, Any], rng: Optional[random.Random] = None) -> WorldState:
    """Generate a fresh match: obstacles first, then flames around them.
    Raises ArenaGenerationError when the configured constraints cannot be met.
    """
    rng = rng or make_rng(cfg)
    attempts = int(cfg['generation']['max_attempts'])
    obs_cfg = cfg['obstacles']
    obstacles = generate_obstacles(
        rng,
        count=int(obs_cfg['count']),
        x_range=tuple(obs_cfg['x_range']),
        y_range=tuple(obs_cfg['y_range']),
        size_range=tuple(obs_cfg['size_range']),
        bases=get_bases(cfg),
        min_base_distance=float(obs_cfg['min_base_distance']),
        max_attempts=attempts,
    )
    fl_cfg = cfg['flames']
    flames = generate_flames(
        rng,
        obstacles,
        count=int(fl_cfg['count']),
        width=float(cfg['arena']['width']),
        height=float(cfg['arena']['height']),
        margin=float(fl_cfg['spawn_margin']),
        max_attempts=attempts,
    )
    return WorldState(
        time_left=int(cfg['match']['duration']),
        flames={f.id: f for f in flames},
        obstacles=obstacles,
    )
