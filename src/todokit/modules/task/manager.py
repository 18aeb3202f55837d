"""Task manager enforcing business rules around repository operations."""

from __future__ import annotations

from todokit.core.exceptions import TaskNotFoundError, TaskValidationError
from todokit.core.logging import get_logger

from .models import TEXT_MAX_LENGTH, Task
from .repository import TaskRepository
from .schemas import TaskIn, TaskOut, TaskStatus

logger = get_logger(__name__)

VALID_STATUSES = frozenset(int(s) for s in TaskStatus)


class TaskManager:
    """Manager for Task entities: validation, persistence and output conversion."""

    def __init__(self, repo: TaskRepository) -> None:
        """Initialize task manager with repository."""
        self.repo = repo

    @staticmethod
    def validate(data: TaskIn) -> TaskIn:
        """Check a task payload and return a copy with trimmed text.

        Rules are checked in a fixed order and the first violation is raised
        as ``TaskValidationError``.
        """
        text = data.text.strip()
        if not text:
            raise TaskValidationError("Task text cannot be empty")

        if len(text) > TEXT_MAX_LENGTH:
            raise TaskValidationError(f"Task text cannot exceed {TEXT_MAX_LENGTH} characters")

        if (
            data.created_date is not None
            and data.expected_date is not None
            and data.expected_date < data.created_date
        ):
            raise TaskValidationError("Expected date cannot be earlier than created date")

        if data.status not in VALID_STATUSES:
            raise TaskValidationError("Invalid task status")

        if data.created_date is None:
            raise TaskValidationError("Task created date is required")

        if data.expected_date is None:
            raise TaskValidationError("Task expected date is required")

        return data.model_copy(update={"text": text})

    async def find_all(
        self,
        *,
        status: TaskStatus | None = None,
        sort_order: str | None = None,
        sort_field: str | None = None,
    ) -> list[TaskOut]:
        """List tasks with optional status filter and whitelisted sorting."""
        tasks = await self.repo.find_all(status=status, sort_order=sort_order, sort_field=sort_field)
        return [self._to_output_schema(task) for task in tasks]

    async def create(self, data: TaskIn) -> TaskOut:
        """Validate and insert a new task, returning it with the assigned id."""
        valid = self._validate_logged(data)
        task = self._to_entity(valid)
        task.id = await self.repo.create(task)
        await self.repo.commit()
        logger.info("task.created", task_id=task.id, status=task.status)
        return self._to_output_schema(task)

    async def update(self, id: int, data: TaskIn) -> TaskOut:
        """Validate and fully replace the task with the given id."""
        valid = self._validate_logged(data)
        task = self._to_entity(valid, id=id)
        await self.repo.update(task)
        await self.repo.commit()

        stored = await self.repo.find_by_id(id)
        if stored is None:
            raise TaskNotFoundError(id)
        logger.info("task.updated", task_id=id, status=stored.status)
        return self._to_output_schema(stored)

    async def delete(self, id: int) -> None:
        """Delete the task with the given id."""
        await self.repo.delete_by_id(id)
        await self.repo.commit()
        logger.info("task.deleted", task_id=id)

    def _validate_logged(self, data: TaskIn) -> TaskIn:
        try:
            return self.validate(data)
        except TaskValidationError as e:
            logger.info("task.validation_failed", reason=e.message)
            raise

    @staticmethod
    def _to_entity(data: TaskIn, *, id: int | None = None) -> Task:
        task = Task(
            text=data.text,
            created_date=data.created_date,
            expected_date=data.expected_date,
            status=data.status,
        )
        if id is not None:
            task.id = id
        return task

    @staticmethod
    def _to_output_schema(entity: Task) -> TaskOut:
        """Convert ORM entity to output schema."""
        return TaskOut.model_validate(entity, from_attributes=True)
