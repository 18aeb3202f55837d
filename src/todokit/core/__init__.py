"""Core framework - database, models, errors, logging, settings."""

from .database import Database
from .exceptions import (
    InvalidParameterError,
    InvalidSortFieldError,
    NotFoundError,
    TaskNotFoundError,
    TaskValidationError,
    TodoError,
    ValidationError,
)
from .logging import configure_logging, get_logger
from .models import Base
from .settings import Settings

__all__ = [
    # Database
    "Database",
    "Base",
    # Errors
    "TodoError",
    "ValidationError",
    "TaskValidationError",
    "InvalidSortFieldError",
    "InvalidParameterError",
    "NotFoundError",
    "TaskNotFoundError",
    # Logging
    "configure_logging",
    "get_logger",
    # Settings
    "Settings",
]
