# FlameArena/flamearena/teams.py
from typing import Any, Dict, Literal, Tuple

Team = Literal['green', 'purple']

TEAMS: Tuple[Team, ...] = ('green', 'purple')


def assign_team(player_count: int) -> Team:
    # Parity of the current roster size, not a persistent counter
    return 'green' if player_count % 2 == 0 else 'purple'


def get_base(team: str, cfg: Dict[str, Any]) -> Tuple[float, float]:
    bx, by = cfg['bases'][team]
    return float(bx), float(by)


def get_bases(cfg: Dict[str, Any]) -> Tuple[Tuple[float, float], ...]:
    return tuple(get_base(t, cfg) for t in TEAMS)


def is_near_base(team: str, x: float, y: float, cfg: Dict[str, Any]) -> bool:
    bx, by = get_base(team, cfg)
    dist = ((x - bx) ** 2 + (y - by) ** 2) ** 0.5
    return dist < float(cfg['movement']['base_proximity'])
