"""Tests for the web config editor."""

from __future__ import annotations

import json

import pytest

from flamearena.config import default_config
from tools import config_editor


@pytest.fixture
def editor(tmp_path, monkeypatch):
    path = tmp_path / "game_config.json"
    path.write_text(json.dumps(default_config(), indent=2), encoding="utf-8")
    monkeypatch.setattr(config_editor, "CONFIG_PATH", path)
    config_editor.app.config["TESTING"] = True
    return config_editor.app.test_client(), path


def _form(**overrides) -> dict:
    form = {
        "seed": "",
        "arena.width": "800",
        "arena.height": "600",
        "bases.green.x": "50",
        "bases.green.y": "50",
        "bases.purple.x": "750",
        "bases.purple.y": "550",
        "obstacles.count": "3",
        "obstacles.min_base_distance": "200",
        "flames.count": "20",
        "flames.spawn_margin": "15",
        "flames.pickup_radius": "20",
        "generation.max_attempts": "10000",
        "movement.throttle_distance": "2",
        "movement.base_proximity": "50",
        "movement.player_radius": "15",
        "movement.validation": "trust",
        "match.duration": "300",
        "match.tick_interval": "1",
        "match.moves_after_game_over": "ignore",
        "server.host": "0.0.0.0",
        "server.port": "3000",
    }
    form.update(overrides)
    return form


def test_index_renders_current_values(editor) -> None:
    client, _ = editor
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "FlameArena" in body
    assert 'name="flames.count" value="20"' in body


def test_save_writes_values_and_backup(editor) -> None:
    client, path = editor
    resp = client.post("/save", data=_form(**{
        "seed": "lan-party",
        "match.duration": "120",
        "bases.purple.x": "700",
        "movement.validation": "arena",
        "match.stop_clock_on_game_over": "on",
    }))
    assert resp.status_code == 302
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["seed"] == "lan-party"
    assert saved["match"]["duration"] == 120
    assert saved["match"]["stop_clock_on_game_over"] is True
    assert saved["bases"]["purple"] == [700.0, 550.0]
    assert saved["movement"]["validation"] == "arena"
    assert list(path.parent.glob("game_config.json.bak.*"))


def test_invalid_values_leave_file_untouched(editor) -> None:
    client, path = editor
    before = path.read_text(encoding="utf-8")
    resp = client.post("/save", data=_form(**{"flames.count": "lots"}), follow_redirects=True)
    assert "Invalid number" in resp.get_data(as_text=True)
    assert path.read_text(encoding="utf-8") == before

    client.post("/save", data=_form(**{"movement.validation": "paranoid"}))
    assert path.read_text(encoding="utf-8") == before
