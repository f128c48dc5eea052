# FlameArena/main.py
import argparse
import copy
import logging

from flamearena.config import get_game_config, load_game_config
from flamearena.server import run_server


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="FlameArena capture-the-flame server")
    p.add_argument('--config', help="path to a game_config.json (default: config/game_config.json)")
    p.add_argument('--host', help="bind address (overrides config)")
    p.add_argument('--port', type=int, help="bind port (overrides config)")
    p.add_argument('--seed', help="arena generation seed (overrides config)")
    p.add_argument('--log-level', default='INFO', help="DEBUG, INFO, WARNING, ...")
    p.add_argument('--no-qr', action='store_true', help="do not print the join QR code")
    return p.parse_args(argv)


def build_config(args):
    # Private copy; the cached module config stays untouched
    if args.config:
        cfg = load_game_config(args.config)
    else:
        cfg = copy.deepcopy(get_game_config())
    if args.seed is not None:
        cfg['seed'] = args.seed
    return cfg


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    run_server(build_config(args), host=args.host, port=args.port, show_qr=not args.no_qr)


if __name__ == "__main__":
    main()
