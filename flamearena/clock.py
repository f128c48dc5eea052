# FlameArena/flamearena/clock.py
from typing import Any, Dict, List, Literal, Tuple, TypedDict

from world.types import WorldState

TIMER_EVENT = 'timerUpdate'
GAME_OVER_EVENT = 'gameOver'

ClockState = Literal['running', 'over']

class TickResult(TypedDict):
    events: List[Tuple[str, Any]]
    # False once the loop should stop firing (only with stop_clock_on_game_over)
    running: bool


def clock_state(world: WorldState) -> ClockState:
    return 'over' if world.is_over else 'running'


def advance_clock(world: WorldState, cfg: Dict[str, Any]) -> TickResult:
    """One tick of the match clock.

    running: decrement and report the new value. The tick that reaches 0
    also reports final scores. over: report final scores again on every
    tick, unless match.stop_clock_on_game_over asks the loop to stop.
    """
    keep_going = not bool(cfg['match']['stop_clock_on_game_over'])
    if world.time_left > 0:
        world.time_left -= 1
        events: List[Tuple[str, Any]] = [(TIMER_EVENT, world.time_left)]
        if world.time_left == 0:
            events.append((GAME_OVER_EVENT, dict(world.team_scores)))
            return {'events': events, 'running': keep_going}
        return {'events': events, 'running': True}
    return {'events': [(GAME_OVER_EVENT, dict(world.team_scores))], 'running': keep_going}
