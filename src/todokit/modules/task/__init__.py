"""Task feature - to-do items with planned dates and status codes."""

from .manager import TaskManager
from .models import Task
from .repository import SORTABLE_FIELDS, TaskRepository
from .router import TaskRouter
from .schemas import TaskIn, TaskOut, TaskStatus

__all__ = [
    "Task",
    "TaskIn",
    "TaskOut",
    "TaskStatus",
    "TaskRepository",
    "TaskManager",
    "TaskRouter",
    "SORTABLE_FIELDS",
]
