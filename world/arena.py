from __future__ import annotations
import math
import random
from typing import List, Sequence, Tuple

from .types import Flame, Obstacle


class ArenaGenerationError(RuntimeError):
    """Placement constraints could not be met within the attempt budget."""


def is_inside_obstacle(x: float, y: float, obstacles: Sequence[Obstacle], margin: float = 15) -> bool:
    return any(o.intersects_box(x, y, margin) for o in obstacles)


def generate_obstacles(rng: random.Random,
                       count: int = 3,
                       x_range: Tuple[float, float] = (200, 600),
                       y_range: Tuple[float, float] = (200, 400),
                       size_range: Tuple[float, float] = (40, 100),
                       bases: Sequence[Tuple[float, float]] = ((50, 50), (750, 550)),
                       min_base_distance: float = 200,
                       max_attempts: int = 10000) -> List[Obstacle]:
    """Place `count` rectangles near the middle of the arena.
    A candidate is kept only if its origin is farther than `min_base_distance`
    from every base. Obstacles may overlap each other.
    """
    obstacles: List[Obstacle] = []
    x0, x1 = x_range
    y0, y1 = y_range
    s0, s1 = size_range
    while len(obstacles) < count:
        for _ in range(max_attempts):
            cand = Obstacle(
                x=rng.random() * (x1 - x0) + x0,
                y=rng.random() * (y1 - y0) + y0,
                width=rng.random() * (s1 - s0) + s0,
                height=rng.random() * (s1 - s0) + s0,
            )
            if all(math.hypot(cand.x - bx, cand.y - by) > min_base_distance for bx, by in bases):
                obstacles.append(cand)
                break
        else:
            raise ArenaGenerationError(
                f"could not place obstacle {len(obstacles) + 1}/{count} "
                f"after {max_attempts} attempts; check obstacle ranges and min_base_distance")
    return obstacles


def generate_flames(rng: random.Random,
                    obstacles: Sequence[Obstacle],
                    count: int = 20,
                    width: float = 800,
                    height: float = 600,
                    margin: float = 15,
                    max_attempts: int = 10000) -> List[Flame]:
    """Scatter `count` flames uniformly, resampling any that touch an obstacle.
    Ids are sequential insertion indices. Flames may overlap each other.
    """
    flames: List[Flame] = []
    while len(flames) < count:
        for _ in range(max_attempts):
            x = rng.random() * width
            y = rng.random() * height
            if not is_inside_obstacle(x, y, obstacles, margin):
                flames.append(Flame(id=len(flames), x=x, y=y))
                break
        else:
            raise ArenaGenerationError(
                f"could not place flame {len(flames) + 1}/{count} "
                f"after {max_attempts} attempts; obstacles cover the arena")
    return flames
