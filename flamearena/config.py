# FlameArena/flamearena/config.py
import copy
import json
import os
from typing import Any, Dict, Optional

_base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
_config_dir = os.path.join(_base_dir, 'config')
DEFAULT_CONFIG_PATH = os.path.join(_config_dir, 'game_config.json')

VALIDATION_MODES = ('trust', 'arena')
POST_GAME_MOVE_MODES = ('ignore', 'move_only')

_game_config: Dict[str, Any] = {}


def _load_json(path: str, default):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except Exception:
        return default


def _section(cfg: Dict[str, Any], key: str) -> Dict[str, Any]:
    sec = cfg.get(key)
    if not isinstance(sec, dict):
        sec = {}
    cfg[key] = sec
    return sec


def apply_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Fill every missing key in place and return the same dict."""
    cfg.setdefault('seed', None)

    arena = _section(cfg, 'arena')
    arena.setdefault('width', 800)
    arena.setdefault('height', 600)

    bases = _section(cfg, 'bases')
    bases.setdefault('green', [50, 50])
    bases.setdefault('purple', [750, 550])

    obs = _section(cfg, 'obstacles')
    obs.setdefault('count', 3)
    obs.setdefault('x_range', [200, 600])
    obs.setdefault('y_range', [200, 400])
    obs.setdefault('size_range', [40, 100])
    obs.setdefault('min_base_distance', 200)

    flames = _section(cfg, 'flames')
    flames.setdefault('count', 20)
    flames.setdefault('spawn_margin', 15)
    flames.setdefault('pickup_radius', 20)

    mv = _section(cfg, 'movement')
    mv.setdefault('throttle_distance', 2)
    mv.setdefault('base_proximity', 50)
    mv.setdefault('validation', 'trust')
    mv.setdefault('player_radius', 15)
    if mv['validation'] not in VALIDATION_MODES:
        mv['validation'] = 'trust'

    match = _section(cfg, 'match')
    match.setdefault('duration', 300)
    match.setdefault('tick_interval', 1.0)
    match.setdefault('moves_after_game_over', 'ignore')
    match.setdefault('stop_clock_on_game_over', False)
    if match['moves_after_game_over'] not in POST_GAME_MOVE_MODES:
        match['moves_after_game_over'] = 'ignore'

    gen = _section(cfg, 'generation')
    gen.setdefault('max_attempts', 10000)

    srv = _section(cfg, 'server')
    srv.setdefault('host', '0.0.0.0')
    srv.setdefault('port', 3000)
    return cfg


def default_config() -> Dict[str, Any]:
    return apply_defaults({})


def load_game_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Read a config file (missing or broken files yield pure defaults)."""
    raw = _load_json(path or DEFAULT_CONFIG_PATH, {})
    if not isinstance(raw, dict):
        raw = {}
    return apply_defaults(copy.deepcopy(raw))


def reload_all() -> None:
    global _game_config
    _game_config = load_game_config(os.environ.get('FLAMEARENA_CONFIG'))


def get_game_config() -> Dict[str, Any]:
    if not _game_config:
        reload_all()
    return _game_config
