"""Structured logging configuration built on structlog."""

from __future__ import annotations

import logging
import os
import sys
from typing import Any

import structlog
from structlog.typing import Processor


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_logging(*, level: str | None = None, fmt: str | None = None) -> None:
    """Configure structlog and route stdlib logging through the same renderer.

    Level and format default to the ``LOG_LEVEL`` and ``LOG_FORMAT`` environment
    variables. ``LOG_FORMAT=console`` selects the human readable renderer,
    anything else emits one JSON object per line.
    """
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_format = (fmt or os.getenv("LOG_FORMAT", "json")).lower()

    renderer: Processor
    if log_format == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    shared = _shared_processors()

    structlog.configure(
        processors=[
            *shared,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level_name)

    # uvicorn installs its own handlers; let records propagate to ours instead
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers.clear()
        uv_logger.propagate = True


def get_logger(name: str | None = None, **initial_values: Any) -> Any:
    """Return a structlog logger bound to the given name."""
    return structlog.get_logger(name, **initial_values)
