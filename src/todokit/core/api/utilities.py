"""Helpers for serving a built application."""

from __future__ import annotations

import math
from typing import Any

import uvicorn
from fastapi import FastAPI

from todokit.core.logging import get_logger

logger = get_logger(__name__)


def run_app(
    app: FastAPI | str,
    *,
    host: str = "127.0.0.1",
    port: int = 8080,
    shutdown_timeout: float = 30.0,
    **uvicorn_kwargs: Any,
) -> None:
    """Serve the app with uvicorn until SIGINT/SIGTERM.

    On a termination signal uvicorn stops accepting connections and waits up to
    ``shutdown_timeout`` seconds for in-flight requests before exiting.
    """
    logger.info("service.starting", host=host, port=port)
    uvicorn.run(
        app,
        host=host,
        port=port,
        timeout_graceful_shutdown=math.ceil(shutdown_timeout),
        log_config=None,
        **uvicorn_kwargs,
    )
    logger.info("service.stopped")
