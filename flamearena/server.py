# FlameArena/flamearena/server.py
import logging
import os
import threading
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_socketio import SocketIO, emit

from .config import get_game_config
from .game import STATE_EVENT, Game
from .utils import join_url, render_qr_ascii

# Client -> server event
MOVE_EVENT = 'move'

LOGGER = logging.getLogger(__name__)


class ArenaServer:
    """Socket.IO front for one Game.

    Snapshots go to the connecting client on connect and to everyone after
    every accepted mutation. The match clock runs as a background task.
    Client files are served elsewhere; this app only exposes the event
    protocol plus /health and /state.
    """

    def __init__(self, game: Optional[Game] = None, cfg: Optional[Dict[str, Any]] = None,
                 socketio_logger: bool = False) -> None:
        self.game = game if game is not None else Game(cfg)
        self.cfg = self.game.cfg
        self.app = Flask(__name__, static_folder=None)
        self.app.config['SECRET_KEY'] = os.environ.get('FLAMEARENA_SECRET', 'secret!')
        self.socketio = SocketIO(self.app, cors_allowed_origins='*', async_mode='threading',
                                 logger=socketio_logger, engineio_logger=socketio_logger)
        self.clock_task = None
        self._clock_started = False
        self._clock_lock = threading.Lock()
        self._clock_stop = threading.Event()
        self._register_routes()
        self._register_events()

    def _register_routes(self) -> None:
        app = self.app

        @app.get('/health')
        def health_check():
            return {'status': 'ok'}

        @app.get('/state')
        def state():
            return jsonify(self.game.snapshot())

    def _register_events(self) -> None:
        self.socketio.on_event('connect', self._on_connect)
        self.socketio.on_event('disconnect', self._on_disconnect)
        self.socketio.on_event(MOVE_EVENT, self._on_move)

    def _on_connect(self, auth=None):
        # Only the new connection gets the full state here
        self.game.connect(request.sid, publish=emit)

    def _on_disconnect(self, reason=None):
        self.game.disconnect(request.sid, publish=self.socketio.emit)

    def _on_move(self, data=None):
        self.game.move(request.sid, data, publish=self.socketio.emit)

    def tick_once(self) -> bool:
        """Advance the match clock once and emit its events. Returns False when the clock should stop."""
        return self.game.tick(publish=self.socketio.emit)['running']

    def _clock_loop(self) -> None:
        interval = float(self.cfg['match']['tick_interval'])
        while not self._clock_stop.is_set():
            self.socketio.sleep(interval)
            if self._clock_stop.is_set():
                break
            if not self.tick_once():
                break
        LOGGER.info("match clock stopped")

    def start_clock(self) -> bool:
        """Start the clock task once. Returns True if this call started it."""
        if self._clock_started:
            return False
        with self._clock_lock:
            if self._clock_started:
                return False
            self._clock_started = True
        self.clock_task = self.socketio.start_background_task(self._clock_loop)
        return True

    def stop_clock(self, timeout: Optional[float] = None) -> None:
        """Ask the clock task to exit after its current sleep and wait for it."""
        self._clock_stop.set()
        if self.clock_task is not None:
            self.clock_task.join(timeout)

    def run(self, host: Optional[str] = None, port: Optional[int] = None, show_qr: bool = True) -> None:
        host = host or self.cfg['server']['host']
        port = int(port or self.cfg['server']['port'])
        url = join_url(host, port)
        print(f"Join at: {url}")
        if show_qr:
            print(render_qr_ascii(url))
        self.start_clock()
        try:
            self.socketio.run(self.app, host=host, port=port, allow_unsafe_werkzeug=True)
        finally:
            self.stop_clock(timeout=0)


def run_server(cfg: Optional[Dict[str, Any]] = None, host: Optional[str] = None,
               port: Optional[int] = None, show_qr: bool = True):
    cfg = cfg if cfg is not None else get_game_config()
    host = host or os.environ.get('HOST') or cfg['server']['host']
    port = int(port or os.environ.get('PORT') or cfg['server']['port'])
    ArenaServer(cfg=cfg).run(host=host, port=port, show_qr=show_qr)
