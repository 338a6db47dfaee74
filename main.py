"""Command-line interface for the layered application."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from typing import Sequence

from layered.backend.user import InvalidArgumentError, create_user_facade
from layered.config import Settings, load_settings, resolve_config_path, resolve_database_url
from layered.database import Database
from layered.models import User

logger = logging.getLogger("layered.main")

KNOWN_COMMANDS = {"serve", "init-db", "user:create"}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--config",
        default=None,
        help="Path to the YAML settings file (defaults to LAYERED_CONFIG or config/settings.yaml)",
    )
    common.add_argument(
        "--database-url",
        default=None,
        help="SQLAlchemy URL of the database (overrides the settings file)",
    )

    parser = argparse.ArgumentParser(description="Layered application utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", parents=[common], help="Start the HTTP service")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address for the web app")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port for the web app (default: 8000)",
    )

    subparsers.add_parser("init-db", parents=[common], help="Create the database schema")
    subparsers.add_parser("user:create", parents=[common], help="Create or update a user")

    args_list = list(argv) if argv is not None else sys.argv[1:]

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in KNOWN_COMMANDS:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _load_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(resolve_config_path(args.config) if args.config else None)
    if args.database_url:
        settings = replace(settings, database_url=resolve_database_url(args.database_url))
    return settings


def _initialise_database(settings: Settings) -> Database:
    database = Database(settings.database_url)
    database.initialize()
    return database


def _serve(*, database: Database, settings: Settings, host: str, port: int) -> None:
    from layered.web import create_app
    import uvicorn

    logger.info("Starting web app on http://%s:%s", host, port)

    app = create_app(database=database, settings=settings)
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


def _create_user(database: Database) -> int:
    """Prompt for an email address and create or update that user."""

    email = input("Email: ").strip()
    print(email)

    try:
        with database.session() as session:
            user = create_user_facade(session).persist_user(User(email=email or None))
    except InvalidArgumentError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logger.debug("Stored user %s", user.id)
    print("User created successfully")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    args = _parse_args(argv)
    settings = _load_settings(args)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    database = _initialise_database(settings)

    if args.command == "serve":
        _serve(database=database, settings=settings, host=args.host, port=args.port)
    elif args.command == "init-db":
        print("Database initialisation complete.")
    elif args.command == "user:create":
        return _create_user(database)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
