"""Tests for command-line config handling."""

from __future__ import annotations

import copy
import json

import main
from flamearena import config as game_config


def test_seed_override_leaves_cached_config_alone(monkeypatch) -> None:
    monkeypatch.delenv("FLAMEARENA_CONFIG", raising=False)
    monkeypatch.setattr(game_config, "_game_config", {})
    before = copy.deepcopy(game_config.get_game_config())

    cfg = main.build_config(main.parse_args(["--seed", "s1"]))
    assert cfg["seed"] == "s1"
    assert game_config.get_game_config() == before
    assert game_config.get_game_config() is not cfg


def test_config_file_and_seed_are_combined(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(game_config, "_game_config", {})
    path = tmp_path / "game_config.json"
    path.write_text(json.dumps({"seed": "file", "match": {"duration": 42}}), encoding="utf-8")

    cfg = main.build_config(main.parse_args(["--config", str(path)]))
    assert cfg["seed"] == "file"
    assert cfg["match"]["duration"] == 42

    cfg = main.build_config(main.parse_args(["--config", str(path), "--seed", "cli"]))
    assert cfg["seed"] == "cli"
    assert game_config._game_config == {}


def test_main_hands_built_config_to_the_server(monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(main, "run_server", lambda cfg, **kw: calls.append((cfg, kw)))
    main.main(["--seed", "s2", "--port", "6001", "--no-qr"])
    cfg, kw = calls[0]
    assert cfg["seed"] == "s2"
    assert kw == {"host": None, "port": 6001, "show_qr": False}
