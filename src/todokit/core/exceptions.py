"""Domain error taxonomy mapped to HTTP status codes by the API middleware."""

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors raised by todokit."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TodoError):
    """Client supplied data that violates a business rule."""

    status_code = 400


class TaskValidationError(ValidationError):
    """Task payload failed validation."""


class InvalidSortFieldError(ValidationError):
    """Requested sort field is not in the sortable whitelist."""

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid sort field: {field}")
        self.field = field


class InvalidParameterError(ValidationError):
    """Query parameter could not be parsed."""


class NotFoundError(TodoError):
    """Requested entity does not exist."""

    status_code = 404


class TaskNotFoundError(NotFoundError):
    """No task row matched the given id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
