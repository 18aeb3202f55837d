"""Error handlers and request logging middleware."""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable
from typing import Any, cast

import structlog
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from todokit.core.exceptions import TodoError
from todokit.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


async def todo_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map domain errors to their HTTP status with a ``detail`` message."""
    error = cast(TodoError, exc)
    logger.info("http.domain_error", error=type(error).__name__, detail=error.message, path=request.url.path)
    return JSONResponse(status_code=error.status_code, content={"detail": error.message})


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Report malformed JSON and wrongly typed fields as 400 Bad Request."""
    errors: list[dict[str, Any]] = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in cast(RequestValidationError, exc).errors()
    ]
    logger.info("http.invalid_payload", path=request.url.path, errors=len(errors))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": "Invalid request payload", "errors": errors}),
    )


async def database_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Surface store failures as 500 with the driver message."""
    logger.error("http.database_error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})


def add_error_handlers(app: FastAPI) -> None:
    """Install domain, payload and database error handlers on the app."""
    app.add_exception_handler(TodoError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)


def add_logging_middleware(app: FastAPI) -> None:
    """Bind a request id to the log context and log one event per request."""

    @app.middleware("http")
    async def log_requests(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("http.request_failed", method=request.method, path=request.url.path)
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
