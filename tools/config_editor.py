#!/usr/bin/env python3
import json
import os
import shutil
import time
from pathlib import Path

from flask import Flask, request, redirect, url_for, render_template_string, flash

from flamearena.config import POST_GAME_MOVE_MODES, VALIDATION_MODES, apply_defaults

APP_ROOT = Path(__file__).resolve().parents[1]
CONFIG_PATH = Path(os.environ.get("FLAMEARENA_CONFIG") or APP_ROOT / "config" / "game_config.json")

app = Flask(__name__)
app.secret_key = os.environ.get("CONFIG_EDITOR_SECRET", "dev-secret")

VALIDATION_LABELS = {
    "trust": "Trust client positions (only the throttle filter)",
    "arena": "Re-check arena bounds and obstacles on the server",
}
POST_GAME_LABELS = {
    "ignore": "Ignore moves after game over",
    "move_only": "Apply moves, never score after game over",
}

TEMPLATE = """
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>FlameArena — Config Editor</title>
    <style>
      body { font-family: system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif; margin: 24px; color: #111; }
      h1 { margin: 0 0 8px; }
      .card { border: 1px solid #ddd; border-radius: 8px; padding: 16px; margin: 12px 0; }
      .row { display: flex; flex-wrap: wrap; gap: 12px; }
      .col { flex: 1 1 200px; min-width: 200px; }
      label { display: block; font-weight: 600; margin-bottom: 6px; }
      input[type=number], select, input[type=text] { width: 100%; padding: 8px; border: 1px solid #ccc; border-radius: 6px; }
      .checkbox { display: flex; align-items: center; gap: 8px; margin: 8px 0; }
      .actions { display: flex; gap: 12px; margin-top: 16px; }
      button, .btn { background: #0d6efd; color: white; border: 0; padding: 10px 14px; border-radius: 6px; cursor: pointer; text-decoration: none; }
      .btn.secondary { background: #6c757d; }
      .flash { padding: 10px 12px; border-radius: 6px; margin: 12px 0; }
      .flash.ok { background: #e7f7ec; color: #0f5132; border: 1px solid #badbcc; }
      .flash.err { background: #fdecea; color: #842029; border: 1px solid #f5c2c7; }
      small.hint { color: #666; display:block; margin-top: 4px; }
    </style>
  </head>
  <body>
    <h1>FlameArena — Config Editor</h1>
    <p>Editing: <code>{{ config_path }}</code></p>

    {% for m,cat in messages %}
      <div class="flash {{ 'ok' if cat=='ok' else 'err' }}">{{ m }}</div>
    {% endfor %}

    <form method="post" action="{{ url_for('save') }}">
      <div class="card">
        <h3>Arena</h3>
        <div class="row">
          <div class="col">
            <label for="seed">Seed</label>
            <input type="text" id="seed" name="seed" value="{{ cfg.seed or '' }}" placeholder="(empty = random each run)">
            <small class="hint">Set a value to make obstacle and flame placement reproducible.</small>
          </div>
          <div class="col">
            <label for="arena.width">Width</label>
            <input type="number" id="arena.width" name="arena.width" value="{{ cfg.arena.width }}" min="1" step="1">
          </div>
          <div class="col">
            <label for="arena.height">Height</label>
            <input type="number" id="arena.height" name="arena.height" value="{{ cfg.arena.height }}" min="1" step="1">
          </div>
        </div>
        <div class="row">
          {% for team in ['green', 'purple'] %}
          <div class="col">
            <label for="bases.{{ team }}.x">{{ team|capitalize }} base x</label>
            <input type="number" id="bases.{{ team }}.x" name="bases.{{ team }}.x" value="{{ cfg.bases[team][0] }}" step="any">
          </div>
          <div class="col">
            <label for="bases.{{ team }}.y">{{ team|capitalize }} base y</label>
            <input type="number" id="bases.{{ team }}.y" name="bases.{{ team }}.y" value="{{ cfg.bases[team][1] }}" step="any">
          </div>
          {% endfor %}
        </div>
      </div>

      <div class="card">
        <h3>Generation</h3>
        <div class="row">
          <div class="col">
            <label for="obstacles.count">Obstacles</label>
            <input type="number" id="obstacles.count" name="obstacles.count" value="{{ cfg.obstacles.count }}" min="0" step="1">
          </div>
          <div class="col">
            <label for="obstacles.min_base_distance">Min distance from bases</label>
            <input type="number" id="obstacles.min_base_distance" name="obstacles.min_base_distance" value="{{ cfg.obstacles.min_base_distance }}" min="0" step="any">
          </div>
          <div class="col">
            <label for="flames.count">Flames</label>
            <input type="number" id="flames.count" name="flames.count" value="{{ cfg.flames.count }}" min="0" step="1">
          </div>
          <div class="col">
            <label for="flames.spawn_margin">Flame spawn margin</label>
            <input type="number" id="flames.spawn_margin" name="flames.spawn_margin" value="{{ cfg.flames.spawn_margin }}" min="0" step="any">
          </div>
          <div class="col">
            <label for="generation.max_attempts">Max placement attempts</label>
            <input type="number" id="generation.max_attempts" name="generation.max_attempts" value="{{ cfg.generation.max_attempts }}" min="1" step="1">
            <small class="hint">Startup fails with an error if an obstacle or flame cannot be placed in this many tries.</small>
          </div>
        </div>
      </div>

      <div class="card">
        <h3>Movement & Scoring</h3>
        <div class="row">
          <div class="col">
            <label for="movement.throttle_distance">Throttle distance</label>
            <input type="number" id="movement.throttle_distance" name="movement.throttle_distance" value="{{ cfg.movement.throttle_distance }}" min="0" step="any">
          </div>
          <div class="col">
            <label for="flames.pickup_radius">Pickup radius</label>
            <input type="number" id="flames.pickup_radius" name="flames.pickup_radius" value="{{ cfg.flames.pickup_radius }}" min="0" step="any">
          </div>
          <div class="col">
            <label for="movement.base_proximity">Base return radius</label>
            <input type="number" id="movement.base_proximity" name="movement.base_proximity" value="{{ cfg.movement.base_proximity }}" min="0" step="any">
          </div>
          <div class="col">
            <label for="movement.player_radius">Player radius</label>
            <input type="number" id="movement.player_radius" name="movement.player_radius" value="{{ cfg.movement.player_radius }}" min="0" step="any">
          </div>
        </div>
        <div class="row">
          <div class="col">
            <label for="movement.validation">Position validation</label>
            <select id="movement.validation" name="movement.validation">
              {% for val,label in validation_modes %}
                <option value="{{ val }}" {% if cfg.movement.validation == val %}selected{% endif %}>{{ label }}</option>
              {% endfor %}
            </select>
          </div>
        </div>
      </div>

      <div class="card">
        <h3>Match</h3>
        <div class="row">
          <div class="col">
            <label for="match.duration">Duration (seconds)</label>
            <input type="number" id="match.duration" name="match.duration" value="{{ cfg.match.duration }}" min="1" step="1">
          </div>
          <div class="col">
            <label for="match.tick_interval">Tick interval (seconds)</label>
            <input type="number" id="match.tick_interval" name="match.tick_interval" value="{{ cfg.match.tick_interval }}" min="0.01" step="any">
          </div>
          <div class="col">
            <label for="match.moves_after_game_over">After game over</label>
            <select id="match.moves_after_game_over" name="match.moves_after_game_over">
              {% for val,label in post_game_modes %}
                <option value="{{ val }}" {% if cfg.match.moves_after_game_over == val %}selected{% endif %}>{{ label }}</option>
              {% endfor %}
            </select>
          </div>
          <div class="col">
            <label>Clock</label>
            <div class="checkbox">
              <input type="checkbox" id="match.stop_clock_on_game_over" name="match.stop_clock_on_game_over" {% if cfg.match.stop_clock_on_game_over %}checked{% endif %}>
              <label for="match.stop_clock_on_game_over">Stop the clock after game over</label>
            </div>
            <small class="hint">Unchecked: game over is re-sent every tick.</small>
          </div>
        </div>
      </div>

      <div class="card">
        <h3>Server</h3>
        <div class="row">
          <div class="col">
            <label for="server.host">Host</label>
            <input type="text" id="server.host" name="server.host" value="{{ cfg.server.host }}">
          </div>
          <div class="col">
            <label for="server.port">Port</label>
            <input type="number" id="server.port" name="server.port" value="{{ cfg.server.port }}" min="1" max="65535" step="1">
          </div>
        </div>
      </div>

      <div class="actions">
        <button type="submit">Save</button>
        <a class="btn secondary" href="{{ url_for('index') }}">Reload</a>
      </div>
    </form>

    <p><small>Tip: A timestamped backup is written to the same folder on save. Restart the server to apply.</small></p>
  </body>
</html>
"""


def load_config():
    if not CONFIG_PATH.exists():
        raise FileNotFoundError(f"Config not found: {CONFIG_PATH}")
    with CONFIG_PATH.open("r", encoding="utf-8") as f:
        return apply_defaults(json.load(f))


def save_config(cfg: dict):
    # Backup existing file
    ts = time.strftime("%Y%m%d-%H%M%S")
    backup = CONFIG_PATH.with_suffix(f".json.bak.{ts}")
    shutil.copy2(CONFIG_PATH, backup)
    # Write new config with pretty formatting
    tmp_path = CONFIG_PATH.with_suffix(".json.tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)
        f.write("\n")
    os.replace(tmp_path, CONFIG_PATH)


def as_int(value, default=None):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def as_float(value, default=None):
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def as_bool(value):
    # HTML checkbox returns 'on' when checked, missing otherwise
    return value is not None


def nested_set(d, path, value):
    keys = path.split('.')
    cur = d
    for k in keys[:-1]:
        cur = cur.setdefault(k, {})
    cur[keys[-1]] = value


@app.route("/", methods=["GET"])
def index():
    try:
        cfg = load_config()
        messages = [(m, 'ok') for m in list(get_flashed_messages_safe('ok'))] + [(m, 'err') for m in list(get_flashed_messages_safe('err'))]
        return render_template_string(
            TEMPLATE,
            cfg=SimpleNamespace.from_dict(cfg),
            config_path=str(CONFIG_PATH),
            validation_modes=[(m, VALIDATION_LABELS[m]) for m in VALIDATION_MODES],
            post_game_modes=[(m, POST_GAME_LABELS[m]) for m in POST_GAME_MOVE_MODES],
            messages=messages,
        )
    except Exception as e:
        return f"Error loading config: {e}", 500


@app.route("/save", methods=["POST"])
def save():
    try:
        cfg = load_config()
        form = request.form

        # Seed (string; empty clears to None)
        raw_seed = (form.get('seed') or '').strip()
        nested_set(cfg, 'seed', (raw_seed if raw_seed != '' else None))

        # Integer fields
        set_num(cfg, 'arena.width', form.get('arena.width'), min_val=1)
        set_num(cfg, 'arena.height', form.get('arena.height'), min_val=1)
        set_num(cfg, 'obstacles.count', form.get('obstacles.count'), min_val=0)
        set_num(cfg, 'flames.count', form.get('flames.count'), min_val=0)
        set_num(cfg, 'generation.max_attempts', form.get('generation.max_attempts'), min_val=1)
        set_num(cfg, 'match.duration', form.get('match.duration'), min_val=1)
        set_num(cfg, 'server.port', form.get('server.port'), min_val=1)

        # Float fields
        set_num(cfg, 'obstacles.min_base_distance', form.get('obstacles.min_base_distance'), min_val=0, parse=as_float)
        set_num(cfg, 'flames.spawn_margin', form.get('flames.spawn_margin'), min_val=0, parse=as_float)
        set_num(cfg, 'flames.pickup_radius', form.get('flames.pickup_radius'), min_val=0, parse=as_float)
        set_num(cfg, 'movement.throttle_distance', form.get('movement.throttle_distance'), min_val=0, parse=as_float)
        set_num(cfg, 'movement.base_proximity', form.get('movement.base_proximity'), min_val=0, parse=as_float)
        set_num(cfg, 'movement.player_radius', form.get('movement.player_radius'), min_val=0, parse=as_float)
        set_num(cfg, 'match.tick_interval', form.get('match.tick_interval'), min_val=0.01, parse=as_float)

        # Base coordinates are stored as [x, y]
        for team in ('green', 'purple'):
            bx = as_float(form.get(f'bases.{team}.x'))
            by = as_float(form.get(f'bases.{team}.y'))
            if bx is None or by is None:
                raise ValueError(f"Invalid base coordinates for {team!r}")
            nested_set(cfg, f'bases.{team}', [bx, by])

        # Selects / booleans
        validation = form.get('movement.validation') or 'trust'
        if validation not in VALIDATION_MODES:
            raise ValueError(f"Unknown validation mode {validation!r}")
        nested_set(cfg, 'movement.validation', validation)
        post_game = form.get('match.moves_after_game_over') or 'ignore'
        if post_game not in POST_GAME_MOVE_MODES:
            raise ValueError(f"Unknown game over mode {post_game!r}")
        nested_set(cfg, 'match.moves_after_game_over', post_game)
        nested_set(cfg, 'match.stop_clock_on_game_over', as_bool(form.get('match.stop_clock_on_game_over')))
        nested_set(cfg, 'server.host', (form.get('server.host') or '').strip() or '0.0.0.0')

        save_config(cfg)
        flash("Saved config (backup written)", 'ok')
        return redirect(url_for('index'))
    except Exception as e:
        flash(f"Error: {e}", 'err')
        return redirect(url_for('index'))


# Helpers to bridge simple dict to dot-access in template
class SimpleNamespace(dict):
    __getattr__ = dict.get
    __setattr__ = dict.__setitem__

    @classmethod
    def from_dict(cls, d):
        def convert(x):
            if isinstance(x, dict):
                ns = cls()
                for k, v in x.items():
                    ns[k] = convert(v)
                return ns
            elif isinstance(x, list):
                return [convert(v) for v in x]
            return x
        return convert(d)


def set_num(cfg, path, raw, min_val=None, parse=as_int):
    val = parse(raw, None)
    if val is None:
        raise ValueError(f"Invalid number for {path!r}: {raw!r}")
    if min_val is not None and val < min_val:
        raise ValueError(f"{path} must be >= {min_val}")
    nested_set(cfg, path, val)


def get_flashed_messages_safe(category):
    # Avoid importing flask's global just to keep file self-contained
    from flask import get_flashed_messages
    return get_flashed_messages(category_filter=[category])


if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5080"))
    host = os.environ.get("HOST", "127.0.0.1")
    debug = os.environ.get("FLASK_DEBUG", "0") == "1"
    print(f"[info] Config editor running at http://{host}:{port}")
    print(f"[info] Editing {CONFIG_PATH}")
    app.run(host=host, port=port, debug=debug)
