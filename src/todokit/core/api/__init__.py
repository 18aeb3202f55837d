"""FastAPI framework layer - routers, middleware, utilities."""

from .dependencies import get_database, get_session
from .middleware import add_error_handlers, add_logging_middleware, database_error_handler, validation_error_handler
from .router import Router
from .routers import HealthRouter, HealthState, HealthStatus
from .service_builder import BaseServiceBuilder, ServiceInfo
from .utilities import run_app

__all__ = [
    # Base router class
    "Router",
    # Service builder
    "BaseServiceBuilder",
    "ServiceInfo",
    # Dependencies
    "get_database",
    "get_session",
    # Middleware
    "add_error_handlers",
    "add_logging_middleware",
    "database_error_handler",
    "validation_error_handler",
    # System routers
    "HealthRouter",
    "HealthState",
    "HealthStatus",
    # Utilities
    "run_app",
]
