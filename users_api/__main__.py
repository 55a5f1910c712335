"""Run the users API: ``python -m users_api [--host H] [--port P] [--debug]``."""

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from users_api.config import Config
from users_api.server import serve
from users_api.users import create_app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="users_api", description="In-memory users CRUD server"
    )
    parser.add_argument("--host", "-H", help="Server host")
    parser.add_argument("--port", "-p", type=int, help="Server port")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> Config:
    """Merge command-line flags over the environment configuration."""
    config = Config.from_env()
    overrides = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.debug:
        overrides["debug"] = True
    return replace(config, **overrides)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        config = load_config(parse_args(argv))
    except ValueError as err:
        print(f"users_api: {err}", file=sys.stderr)
        return 2

    serve(create_app(debug=config.debug), config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
