# FlameArena/flamearena/sessions.py
from typing import Any, Dict, Optional

from world.types import Player, Position, WorldState
from .teams import assign_team, get_base


def connect_player(world: WorldState, sid: str, cfg: Dict[str, Any]) -> Player:
    """Register a new player for connection `sid`, spawned on its team base.
    A repeated connect for a known sid returns the existing player.
    """
    existing = world.players.get(sid)
    if existing is not None:
        return existing
    team = assign_team(len(world.players))
    bx, by = get_base(team, cfg)
    player = Player(id=sid, team=team, position=Position(bx, by))
    world.players[sid] = player
    return player


def disconnect_player(world: WorldState, sid: str) -> Optional[Player]:
    # Carried flames leave with the player; they are not put back on the map
    return world.players.pop(sid, None)
