"""Service builder with module integration (task)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Self

from fastapi import FastAPI

from todokit.core.api.service_builder import BaseServiceBuilder, ServiceInfo
from todokit.core.settings import Settings
from todokit.modules.task import TaskRouter

from .dependencies import get_task_manager


@dataclass(slots=True)
class _TaskOptions:
    """Internal task options for ServiceBuilder."""

    prefix: str = "/api/tasks"
    tags: List[str] = field(default_factory=lambda: ["Tasks"])


class ServiceBuilder(BaseServiceBuilder):
    """Service builder with integrated module support (task)."""

    def __init__(self, **kwargs: Any) -> None:
        """Initialize service builder with module-specific state."""
        super().__init__(**kwargs)
        self._task_options: _TaskOptions | None = None

    @classmethod
    def from_settings(cls, settings: Settings, *, info: ServiceInfo | None = None) -> Self:
        """Create a builder with database, health, logging and static assets taken from settings."""
        builder = cls(
            info=info or ServiceInfo(display_name="Todo Service", summary="Task list CRUD service"),
            database_url=settings.database_url,
            include_logging=True,
        )
        builder.with_health().with_tasks()
        if settings.static_dir is not None:
            builder.with_static(settings.static_dir)
        return builder

    # --------------------------------------------------------------------- Module-specific fluent methods

    def with_tasks(
        self,
        *,
        prefix: str = "/api/tasks",
        tags: List[str] | None = None,
    ) -> Self:
        """Enable task list/create/update/delete endpoints."""
        self._task_options = _TaskOptions(
            prefix=prefix,
            tags=list(tags) if tags else ["Tasks"],
        )
        return self

    # --------------------------------------------------------------------- Extension point implementations

    def _register_module_routers(self, app: FastAPI) -> None:
        """Register module-specific routers (task)."""
        if self._task_options:
            task_options = self._task_options
            task_router = TaskRouter.create(
                prefix=task_options.prefix,
                tags=task_options.tags,
                manager_factory=get_task_manager,
            )
            app.include_router(task_router)
