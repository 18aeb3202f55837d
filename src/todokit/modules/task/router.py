"""Task router exposing list, create, update and delete over JSON."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from fastapi import Depends, Query, Response, status

from todokit.core.api.router import Router
from todokit.core.exceptions import InvalidParameterError

from .manager import VALID_STATUSES, TaskManager
from .schemas import TaskIn, TaskOut, TaskStatus

_INT_PATTERN = re.compile(r"-?[0-9]+")
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1


class TaskRouter(Router):
    """Router for Task entities using query-parameter ids."""

    def __init__(
        self,
        prefix: str,
        tags: Sequence[str],
        manager_factory: Any,
        **kwargs: Any,
    ) -> None:
        """Initialize task router with manager factory."""
        self.manager_factory = manager_factory
        super().__init__(prefix=prefix, tags=list(tags), **kwargs)

    def _register_routes(self) -> None:
        """Register task list, create, update and delete routes."""
        manager_dependency = Depends(self.manager_factory)

        @self.router.get("", summary="List tasks", response_model=list[TaskOut])
        async def list_tasks(
            status_filter: str | None = Query(default=None, alias="status", description="Status code 0-3"),
            sort: str | None = Query(default=None, description='"desc" for descending order'),
            sort_field: str | None = Query(
                default=None,
                alias="sortField",
                description="One of id, text, createdDate, expectedDate, status",
            ),
            manager: TaskManager = manager_dependency,
        ) -> list[TaskOut]:
            return await manager.find_all(
                status=self._parse_status(status_filter),
                sort_order=sort,
                sort_field=sort_field,
            )

        @self.router.post(
            "/create",
            summary="Create task",
            response_model=TaskOut,
            status_code=status.HTTP_201_CREATED,
        )
        async def create_task(data: TaskIn, manager: TaskManager = manager_dependency) -> TaskOut:
            return await manager.create(data)

        @self.router.put("/update", summary="Replace task", response_model=TaskOut)
        async def update_task(
            data: TaskIn,
            id: str | None = Query(default=None, description="Task id"),
            manager: TaskManager = manager_dependency,
        ) -> TaskOut:
            return await manager.update(self._parse_id(id), data)

        @self.router.delete("/delete", summary="Delete task", status_code=status.HTTP_200_OK)
        async def delete_task(
            id: str | None = Query(default=None, description="Task id"),
            manager: TaskManager = manager_dependency,
        ) -> Response:
            await manager.delete(self._parse_id(id))
            return Response(status_code=status.HTTP_200_OK)

    @staticmethod
    def _parse_id(value: str | None) -> int:
        """Parse the ``id`` query parameter as a signed 64-bit decimal or raise a 400."""
        if value is None or not _INT_PATTERN.fullmatch(value):
            raise InvalidParameterError("Invalid task ID")
        task_id = int(value)
        if not _ID_MIN <= task_id <= _ID_MAX:
            raise InvalidParameterError("Invalid task ID")
        return task_id

    @staticmethod
    def _parse_status(value: str | None) -> TaskStatus | None:
        """Parse the ``status`` filter; blank means no filter."""
        if value is None or not value.strip():
            return None
        if _INT_PATTERN.fullmatch(value) and int(value) in VALID_STATUSES:
            return TaskStatus(int(value))
        raise InvalidParameterError(f"Invalid status filter: {value}")
