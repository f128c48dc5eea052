"""Tests for move validation, flame pickup and base returns."""

from __future__ import annotations

from flamearena.config import default_config
from flamearena.movement import apply_move, parse_move_intent, position_allowed
from world.types import Flame, Obstacle, Player, Position, WorldState


def _world(*flames: tuple[float, float], time_left: int = 300) -> WorldState:
    world = WorldState(time_left=time_left)
    for i, (x, y) in enumerate(flames):
        world.flames[i] = Flame(id=i, x=x, y=y)
    return world


def _add_player(world: WorldState, sid: str = "p1", team: str = "green",
                pos: tuple[float, float] = (50, 50), carried: int = 0) -> Player:
    player = Player(id=sid, team=team, position=Position(*pos), flames_carried=carried)
    world.players[sid] = player
    return player


def _move(world: WorldState, x: float, y: float, cfg=None, sid: str = "p1"):
    return apply_move(world, sid, {"x": x, "y": y}, cfg or default_config())


def test_parse_move_intent_accepts_numbers_only() -> None:
    assert parse_move_intent({"x": 1, "y": 2.5}) == {"x": 1.0, "y": 2.5}
    assert parse_move_intent({"x": 1, "y": 2, "extra": "ok"}) == {"x": 1.0, "y": 2.0}
    assert parse_move_intent(None) is None
    assert parse_move_intent([1, 2]) is None
    assert parse_move_intent({"x": "1", "y": 2}) is None
    assert parse_move_intent({"x": True, "y": 2}) is None
    assert parse_move_intent({"x": float("nan"), "y": 2}) is None
    assert parse_move_intent({"x": float("inf"), "y": 2}) is None
    assert parse_move_intent({"x": 1}) is None


def test_move_at_throttle_distance_is_dropped() -> None:
    world = _world()
    player = _add_player(world)
    result = _move(world, 52, 50)
    assert result["outcome"] == "throttled"
    assert player.position == Position(50, 50)
    assert player.last_position is None


def test_move_past_throttle_distance_is_applied() -> None:
    world = _world()
    player = _add_player(world)
    result = _move(world, 53, 50)
    assert result["outcome"] == "accepted"
    assert player.position == Position(53, 50)
    assert player.last_position == Position(53, 50)


def test_large_jumps_are_not_clamped_when_trusting_clients() -> None:
    world = _world()
    player = _add_player(world)
    assert _move(world, 5000, -300)["outcome"] == "accepted"
    assert player.position == Position(5000, -300)


def test_unknown_player_is_a_no_op() -> None:
    world = _world((60, 50))
    result = _move(world, 60, 50, sid="ghost")
    assert result == {"outcome": "unknown_player", "collected": 0, "banked": 0}
    assert len(world.flames) == 1


def test_every_flame_in_range_is_collected() -> None:
    # two flames equidistant from the target, one just outside the radius
    world = _world((400, 310), (400, 290), (420, 300), (500, 500))
    player = _add_player(world)
    result = _move(world, 400, 300)
    assert result["collected"] == 2
    assert player.flames_carried == 2
    assert sorted(world.flames) == [2, 3]


def test_pickup_count_matches_removed_flames() -> None:
    world = _world((300, 300), (305, 300), (310, 310), (100, 500))
    player = _add_player(world, carried=4)
    before = len(world.flames)
    result = _move(world, 302, 302)
    assert before - len(world.flames) == result["collected"] == 3
    assert player.flames_carried == 7


def test_flames_collected_next_to_base_are_banked_in_the_same_move() -> None:
    world = _world((60, 50))
    player = _add_player(world, pos=(53, 50))
    result = _move(world, 58, 50)
    assert result == {"outcome": "accepted", "collected": 1, "banked": 1}
    assert world.flames == {}
    assert player.flames_carried == 0
    assert world.team_scores == {"green": 1, "purple": 0}


def test_carry_then_return_to_base_scores() -> None:
    world = _world((160, 50))
    player = _add_player(world)
    _move(world, 155, 50)
    assert player.flames_carried == 1
    assert world.team_scores["green"] == 0

    result = _move(world, 52, 50)
    assert result["banked"] == 1
    assert player.flames_carried == 0
    assert world.team_scores == {"green": 1, "purple": 0}


def test_no_banking_outside_base_radius_or_at_other_base() -> None:
    world = _world()
    green = _add_player(world, "g", "green", (300, 300), carried=3)
    _move(world, 100, 50, sid="g")  # exactly 50 away from green base
    assert green.flames_carried == 3
    _move(world, 740, 545, sid="g")  # purple base
    assert green.flames_carried == 3
    assert world.team_scores == {"green": 0, "purple": 0}


def test_purple_banks_at_its_own_base() -> None:
    world = _world()
    purple = _add_player(world, "p", "purple", (600, 500), carried=2)
    result = _move(world, 745, 550, sid="p")
    assert result["banked"] == 2
    assert purple.flames_carried == 0
    assert world.team_scores == {"green": 0, "purple": 2}


def test_empty_handed_return_changes_nothing() -> None:
    world = _world()
    _add_player(world, pos=(300, 300))
    result = _move(world, 50, 55)
    assert result["banked"] == 0
    assert world.team_scores == {"green": 0, "purple": 0}


def test_arena_validation_rejects_out_of_bounds_and_obstacles() -> None:
    cfg = default_config()
    cfg["movement"]["validation"] = "arena"
    world = _world()
    world.obstacles.append(Obstacle(x=300, y=300, width=50, height=50))
    player = _add_player(world, pos=(200, 200))

    assert _move(world, -5, 200, cfg)["outcome"] == "rejected"
    assert _move(world, 790, 200, cfg)["outcome"] == "rejected"
    assert _move(world, 320, 290, cfg)["outcome"] == "rejected"
    assert player.position == Position(200, 200)

    assert _move(world, 250, 250, cfg)["outcome"] == "accepted"
    assert player.position == Position(250, 250)


def test_position_allowed_edges() -> None:
    cfg = default_config()
    world = _world()
    assert position_allowed(world, 0, 0, cfg)
    assert position_allowed(world, 785, 585, cfg)
    assert not position_allowed(world, 786, 300, cfg)


def test_moves_are_ignored_after_game_over_by_default() -> None:
    world = _world((160, 50), time_left=0)
    player = _add_player(world, pos=(100, 50), carried=2)
    result = _move(world, 52, 50)
    assert result["outcome"] == "game_over"
    assert player.position == Position(100, 50)
    assert player.flames_carried == 2
    assert world.team_scores == {"green": 0, "purple": 0}


def test_move_only_mode_moves_but_never_scores_after_game_over() -> None:
    cfg = default_config()
    cfg["match"]["moves_after_game_over"] = "move_only"
    world = _world((60, 50), time_left=0)
    player = _add_player(world, pos=(150, 50), carried=2)
    result = _move(world, 55, 50, cfg)
    assert result == {"outcome": "accepted", "collected": 1, "banked": 0}
    assert player.position == Position(55, 50)
    assert player.flames_carried == 3
    assert world.team_scores == {"green": 0, "purple": 0}
