"""Todokit - task list CRUD service with core framework and features."""

# Core framework
from todokit.core import (
    Base,
    Database,
    InvalidSortFieldError,
    NotFoundError,
    Settings,
    TaskNotFoundError,
    TaskValidationError,
    TodoError,
    ValidationError,
)

# Task feature
from todokit.modules.task import Task, TaskIn, TaskManager, TaskOut, TaskRepository, TaskRouter, TaskStatus

__all__ = [
    # Core framework
    "Database",
    "Base",
    "Settings",
    "TodoError",
    "ValidationError",
    "TaskValidationError",
    "InvalidSortFieldError",
    "NotFoundError",
    "TaskNotFoundError",
    # Task feature
    "Task",
    "TaskIn",
    "TaskOut",
    "TaskStatus",
    "TaskRepository",
    "TaskManager",
    "TaskRouter",
]
