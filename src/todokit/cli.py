"""Command-line entrypoint: ``todokit <address> <port>``."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from fastapi import FastAPI

from todokit.api import ServiceBuilder, run_app
from todokit.core.logging import configure_logging, get_logger
from todokit.core.settings import Settings

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the server command."""
    parser = argparse.ArgumentParser(
        prog="todokit",
        description="Serve the task list API. Database settings come from DB_* or TODOKIT_DATABASE_URL.",
    )
    parser.add_argument("address", help="Interface to bind, e.g. 0.0.0.0")
    parser.add_argument("port", type=int, help="TCP port to listen on")
    return parser


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the task service application from settings (environment by default)."""
    return ServiceBuilder.from_settings(settings or Settings.from_env()).build()


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, configure logging and serve until a termination signal."""
    args = build_parser().parse_args(argv)
    settings = Settings.from_env()

    configure_logging(level=settings.log_level, fmt=settings.log_format)
    logger.info("service.configured", address=args.address, port=args.port, static_dir=str(settings.static_dir))

    run_app(
        create_app(settings),
        host=args.address,
        port=args.port,
        shutdown_timeout=settings.shutdown_timeout,
    )


if __name__ == "__main__":
    main()
