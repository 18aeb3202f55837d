"""Task repository for database access and querying."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import delete as sql_delete
from sqlalchemy import select
from sqlalchemy import update as sql_update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from todokit.core.exceptions import InvalidSortFieldError, TaskNotFoundError

from .models import Task
from .schemas import TaskStatus

# Public sort names -> mapped columns. Only these ever reach ORDER BY.
SORTABLE_FIELDS: Mapping[str, InstrumentedAttribute[Any]] = {
    "id": Task.id,
    "text": Task.text,
    "createdDate": Task.created_date,
    "expectedDate": Task.expected_date,
    "status": Task.status,
}

SORT_DESC = "desc"


class TaskRepository:
    """Repository for Task entities with filtered and sorted listing."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize task repository with database session."""
        self.s = session
        self.model = Task

    async def find_all(
        self,
        *,
        status: TaskStatus | None = None,
        sort_order: str | None = None,
        sort_field: str | None = None,
    ) -> list[Task]:
        """List tasks, optionally filtered by status and ordered by a whitelisted field.

        An unknown ``sort_field`` raises ``InvalidSortFieldError`` before any
        statement is sent to the store. Only ``sort_order == "desc"`` sorts
        descending; without ``sort_field`` rows come back in store order.
        """
        stmt = select(self.model)

        if status is not None:
            stmt = stmt.where(self.model.status == int(status))

        if sort_field:
            column = SORTABLE_FIELDS.get(sort_field)
            if column is None:
                raise InvalidSortFieldError(sort_field)
            stmt = stmt.order_by(column.desc() if sort_order == SORT_DESC else column.asc())

        result = await self.s.scalars(stmt)
        return list(result.all())

    async def find_by_id(self, id: int) -> Task | None:
        """Find a task by id, reloading it if the session already holds a stale copy."""
        return await self.s.get(self.model, id, populate_existing=True)

    async def create(self, task: Task) -> int:
        """Insert a task and return the id generated by the store."""
        self.s.add(task)
        await self.s.flush()
        return task.id

    async def update(self, task: Task) -> None:
        """Replace text, dates and status of the row with ``task.id``."""
        stmt = (
            sql_update(self.model)
            .where(self.model.id == task.id)
            .values(
                {
                    self.model.text: task.text,
                    self.model.created_date: task.created_date,
                    self.model.expected_date: task.expected_date,
                    self.model.status: task.status,
                }
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.s.execute(stmt)
        if result.rowcount == 0:
            raise TaskNotFoundError(task.id)

    async def delete_by_id(self, id: int) -> None:
        """Delete the row with the given id."""
        stmt = sql_delete(self.model).where(self.model.id == id).execution_options(synchronize_session=False)
        result = await self.s.execute(stmt)
        if result.rowcount == 0:
            raise TaskNotFoundError(id)

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self.s.commit()
