# FlameArena/flamearena/game.py
import logging
import random
import threading
from typing import Any, Callable, Dict, Optional, Tuple

from world.provider import build_world
from world.types import WorldState
from .clock import TickResult, advance_clock
from .config import get_game_config
from .movement import MoveResult, apply_move, parse_move_intent
from .sessions import connect_player, disconnect_player

# Snapshot event understood by the browser client
STATE_EVENT = 'gameState'

# publish(event_name, payload); must only queue, never block on a client
Publish = Callable[[str, Any], None]

LOGGER = logging.getLogger(__name__)


class Game:
    """Owner of the one WorldState for a match.

    Connection events, move intents and clock ticks arrive on different
    threads; every read and write of the world goes through `_lock`.
    A `publish` callback passed to a mutating method is called while the
    lock is still held, so clients see snapshots in mutation order.
    """

    def __init__(self, cfg: Optional[Dict[str, Any]] = None,
                 world: Optional[WorldState] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.cfg = cfg if cfg is not None else get_game_config()
        self.world = world if world is not None else build_world(self.cfg, rng)
        self._lock = threading.Lock()

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self.world.snapshot()

    def connect(self, sid: str, publish: Optional[Publish] = None) -> Dict[str, Any]:
        with self._lock:
            player = connect_player(self.world, sid, self.cfg)
            snap = self.world.snapshot()
            if publish is not None:
                publish(STATE_EVENT, snap)
        LOGGER.info("player connected: %s (team %s)", sid, player.team)
        return snap

    def disconnect(self, sid: str, publish: Optional[Publish] = None) -> Optional[Dict[str, Any]]:
        with self._lock:
            player = disconnect_player(self.world, sid)
            if player is None:
                return None
            snap = self.world.snapshot()
            if publish is not None:
                publish(STATE_EVENT, snap)
        LOGGER.info("player disconnected: %s (dropped %d carried flames)", sid, player.flames_carried)
        return snap

    def move(self, sid: str, data: Any,
             publish: Optional[Publish] = None) -> Tuple[Optional[MoveResult], Optional[Dict[str, Any]]]:
        """Apply a raw 'move' payload. The snapshot is None unless the move was accepted."""
        intent = parse_move_intent(data)
        if intent is None:
            LOGGER.debug("ignoring malformed move from %s: %r", sid, data)
            return None, None
        with self._lock:
            result = apply_move(self.world, sid, intent, self.cfg)
            snap = self.world.snapshot() if result['outcome'] == 'accepted' else None
            if snap is not None and publish is not None:
                publish(STATE_EVENT, snap)
        if snap is None:
            LOGGER.debug("move from %s not applied: %s", sid, result['outcome'])
        elif result['banked']:
            LOGGER.info("%s banked %d flames", sid, result['banked'])
        return result, snap

    def tick(self, publish: Optional[Publish] = None) -> TickResult:
        with self._lock:
            was_running = not self.world.is_over
            result = advance_clock(self.world, self.cfg)
            now_over = self.world.is_over
            scores = dict(self.world.team_scores)
            if publish is not None:
                for name, payload in result['events']:
                    publish(name, payload)
        if was_running and now_over:
            LOGGER.info("match over: green=%d purple=%d", scores.get('green', 0), scores.get('purple', 0))
        return result
