# FlameArena/flamearena/movement.py
from __future__ import annotations
import math
from typing import Any, Dict, Literal, Optional, TypedDict

from world.arena import is_inside_obstacle
from world.types import Player, Position, WorldState
from .teams import is_near_base

# Intent model (client -> server 'move' payload)
class MoveIntent(TypedDict):
    x: float
    y: float

MoveOutcome = Literal['accepted', 'unknown_player', 'game_over', 'throttled', 'rejected']

class MoveResult(TypedDict):
    outcome: MoveOutcome
    collected: int
    banked: int


def _result(outcome: MoveOutcome, collected: int = 0, banked: int = 0) -> MoveResult:
    return {'outcome': outcome, 'collected': collected, 'banked': banked}


def _as_coord(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    v = float(value)
    return v if math.isfinite(v) else None


def parse_move_intent(data: Any) -> Optional[MoveIntent]:
    """Return a clean intent or None for anything that is not {x: num, y: num}."""
    if not isinstance(data, dict):
        return None
    x = _as_coord(data.get('x'))
    y = _as_coord(data.get('y'))
    if x is None or y is None:
        return None
    return {'x': x, 'y': y}


def position_allowed(world: WorldState, x: float, y: float, cfg: Dict[str, Any]) -> bool:
    """Server-side re-check used by the 'arena' validation mode.
    Same bounds and obstacle box the browser client applies before sending.
    """
    r = float(cfg['movement']['player_radius'])
    w = float(cfg['arena']['width'])
    h = float(cfg['arena']['height'])
    if not (0 <= x <= w - r and 0 <= y <= h - r):
        return False
    return not is_inside_obstacle(x, y, world.obstacles, r)


def collect_flames(world: WorldState, player: Player, radius: float) -> int:
    # Every flame in range is taken; no first-match short circuit
    px, py = player.position.x, player.position.y
    taken = [fid for fid, f in world.flames.items() if math.hypot(f.x - px, f.y - py) < radius]
    for fid in taken:
        del world.flames[fid]
    player.flames_carried += len(taken)
    return len(taken)


def bank_flames(world: WorldState, player: Player, cfg: Dict[str, Any]) -> int:
    if player.flames_carried <= 0:
        return 0
    if not is_near_base(player.team, player.position.x, player.position.y, cfg):
        return 0
    banked = player.flames_carried
    world.team_scores[player.team] = world.team_scores.get(player.team, 0) + banked
    player.flames_carried = 0
    return banked


def apply_move(world: WorldState, sid: str, intent: MoveIntent, cfg: Dict[str, Any]) -> MoveResult:
    """Validate and apply one move intent. Only 'accepted' mutates the world.

    The submitted position is trusted apart from the throttle filter unless
    movement.validation is 'arena'. After the clock runs out, moves are
    dropped ('ignore') or applied without scoring ('move_only').
    """
    player = world.players.get(sid)
    if player is None:
        return _result('unknown_player')
    post_game = world.is_over
    if post_game and cfg['match']['moves_after_game_over'] == 'ignore':
        return _result('game_over')

    x, y = intent['x'], intent['y']
    if player.position.distance_to(x, y) <= float(cfg['movement']['throttle_distance']):
        return _result('throttled')
    if cfg['movement']['validation'] == 'arena' and not position_allowed(world, x, y, cfg):
        return _result('rejected')

    player.position = Position(x, y)
    player.last_position = Position(x, y)
    collected = collect_flames(world, player, float(cfg['flames']['pickup_radius']))
    banked = 0 if post_game else bank_flames(world, player, cfg)
    return _result('accepted', collected, banked)
