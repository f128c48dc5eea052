from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class Position:
    x: float
    y: float

    def distance_to(self, x: float, y: float) -> float:
        return ((self.x - x) ** 2 + (self.y - y) ** 2) ** 0.5

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y}


@dataclass
class Obstacle:
    """Axis-aligned rectangle, origin at the top-left corner."""
    x: float
    y: float
    width: float
    height: float

    def intersects_box(self, x: float, y: float, margin: float) -> bool:
        # Treats the point as a square of half-size `margin`
        return (x + margin > self.x and
                x - margin < self.x + self.width and
                y + margin > self.y and
                y - margin < self.y + self.height)

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'width': self.width, 'height': self.height}


@dataclass
class Flame:
    id: int
    x: float
    y: float

    def to_dict(self) -> Dict[str, Any]:
        return {'x': self.x, 'y': self.y, 'id': self.id}


@dataclass
class Player:
    id: str
    team: str
    position: Position
    flames_carried: int = 0
    last_position: Optional[Position] = None

    def to_dict(self) -> Dict[str, Any]:
        # 'flames' is the key the browser client reads
        return {
            'id': self.id,
            'team': self.team,
            'flames': self.flames_carried,
            'position': self.position.to_dict(),
            'lastPosition': self.last_position.to_dict() if self.last_position else None,
        }


def _zero_scores() -> Dict[str, int]:
    return {'green': 0, 'purple': 0}


@dataclass
class WorldState:
    """The single authoritative match state.
    Flames are keyed by id; dict order is spawn order.
    """
    time_left: int
    players: Dict[str, Player] = field(default_factory=dict)
    flames: Dict[int, Flame] = field(default_factory=dict)
    obstacles: list = field(default_factory=list)
    team_scores: Dict[str, int] = field(default_factory=_zero_scores)

    @property
    def is_over(self) -> bool:
        return self.time_left <= 0

    def snapshot(self) -> Dict[str, Any]:
        """Full JSON-ready copy; safe to emit after the lock is released."""
        return {
            'players': {sid: p.to_dict() for sid, p in self.players.items()},
            'flames': [f.to_dict() for f in self.flames.values()],
            'obstacles': [o.to_dict() for o in self.obstacles],
            'teamScores': dict(self.team_scores),
            'timeLeft': self.time_left,
        }
