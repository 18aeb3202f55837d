"""Base service builder for FastAPI applications without module dependencies."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncContextManager, AsyncIterator, Awaitable, Callable, Dict, List, Self

from fastapi import APIRouter, FastAPI
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict
from sqlalchemy import text

from todokit.core import Database
from todokit.core.logging import configure_logging, get_logger

from .middleware import add_error_handlers, add_logging_middleware
from .routers import HealthRouter
from .routers.health import HealthCheck, HealthState

logger = get_logger(__name__)


class ServiceInfo(BaseModel):
    """Service metadata for FastAPI application."""

    display_name: str
    version: str = "1.0.0"
    summary: str | None = None
    description: str | None = None

    model_config = ConfigDict(extra="forbid")


class BaseServiceBuilder:
    """Base service builder providing core FastAPI functionality without module dependencies."""

    def __init__(
        self,
        *,
        info: ServiceInfo,
        database_url: str = "sqlite+aiosqlite:///:memory:",
        include_error_handlers: bool = True,
        include_logging: bool = False,
    ) -> None:
        """Initialize base service builder with core options."""
        self.info = info
        self._database_url = database_url
        self._database_instance: Database | None = None
        self._include_error_handlers = include_error_handlers
        self._include_logging = include_logging
        self._health_options: tuple[str, List[str], dict[str, HealthCheck], bool] | None = None
        self._static_directory: Path | None = None
        self._custom_routers: List[APIRouter] = []
        self._dependency_overrides: Dict[Callable[..., object], Callable[..., object]] = {}
        self._startup_hooks: List[Callable[[FastAPI], Awaitable[None]]] = []
        self._shutdown_hooks: List[Callable[[FastAPI], Awaitable[None]]] = []

    # --------------------------------------------------------------------- Fluent configuration

    def with_database(self, url: str) -> Self:
        """Configure database URL."""
        self._database_url = url
        return self

    def with_database_instance(self, database: Database) -> Self:
        """Inject a pre-configured database instance; its lifecycle stays with the caller."""
        self._database_instance = database
        return self

    def with_logging(self, enabled: bool = True) -> Self:
        """Enable structured logging with request tracing."""
        self._include_logging = enabled
        return self

    def with_health(
        self,
        *,
        prefix: str = "/api/health",
        tags: List[str] | None = None,
        checks: dict[str, HealthCheck] | None = None,
        include_database_check: bool = True,
    ) -> Self:
        """Add health check endpoint with optional custom checks."""
        self._health_options = (
            prefix,
            list(tags) if tags is not None else ["health"],
            dict(checks or {}),
            include_database_check,
        )
        return self

    def with_static(self, directory: str | Path) -> Self:
        """Serve static client assets from ``directory`` at the root path."""
        self._static_directory = Path(directory)
        return self

    def include_router(self, router: APIRouter) -> Self:
        """Include a custom router."""
        self._custom_routers.append(router)
        return self

    def override_dependency(self, dependency: Callable[..., object], override: Callable[..., object]) -> Self:
        """Override a dependency for testing or customization."""
        self._dependency_overrides[dependency] = override
        return self

    def on_startup(self, hook: Callable[[FastAPI], Awaitable[None]]) -> Self:
        """Register a startup hook."""
        self._startup_hooks.append(hook)
        return self

    def on_shutdown(self, hook: Callable[[FastAPI], Awaitable[None]]) -> Self:
        """Register a shutdown hook."""
        self._shutdown_hooks.append(hook)
        return self

    # --------------------------------------------------------------------- Build mechanics

    def build(self) -> FastAPI:
        """Build and configure the FastAPI application."""
        self._validate_configuration()

        app = FastAPI(
            title=self.info.display_name,
            description=self.info.description or self.info.summary or "",
            version=self.info.version,
            lifespan=self._build_lifespan(),
        )
        app.state.database_url = self._database_url

        if self._include_error_handlers:
            add_error_handlers(app)

        if self._include_logging:
            add_logging_middleware(app)

        if self._health_options:
            prefix, tags, checks, include_database_check = self._health_options
            if include_database_check:
                checks = {**checks, "database": self._create_database_health_check(app)}
            app.include_router(HealthRouter.create(prefix=prefix, tags=tags, checks=checks))

        # Extension point for module-specific routers
        self._register_module_routers(app)

        for router in self._custom_routers:
            app.include_router(router)

        for dependency, override in self._dependency_overrides.items():
            app.dependency_overrides[dependency] = override

        self._install_info_endpoint(app, info=self.info)

        # Mounted last so API routes take precedence over the catch-all mount
        if self._static_directory is not None:
            app.mount("/", StaticFiles(directory=self._static_directory, html=True), name="static")

        return app

    # --------------------------------------------------------------------- Extension points

    def _register_module_routers(self, app: FastAPI) -> None:
        """Extension point for registering module-specific routers (override in subclasses)."""
        pass

    # --------------------------------------------------------------------- Core helpers

    def _validate_configuration(self) -> None:
        """Validate core configuration."""
        if self._health_options:
            _, _, checks, _ = self._health_options
            for name in checks.keys():
                if not name.replace("_", "").replace("-", "").isalnum():
                    raise ValueError(
                        f"Health check name '{name}' contains invalid characters. "
                        "Only alphanumeric characters, underscores, and hyphens are allowed."
                    )

        if self._static_directory is not None and not self._static_directory.is_dir():
            raise ValueError(f"Static directory '{self._static_directory}' does not exist")

    def _build_lifespan(self) -> Callable[[FastAPI], AsyncContextManager[None]]:
        """Build lifespan context manager for app startup/shutdown."""
        database_url = self._database_url
        database_instance = self._database_instance
        include_logging = self._include_logging
        startup_hooks = list(self._startup_hooks)
        shutdown_hooks = list(self._shutdown_hooks)
        display_name = self.info.display_name

        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncIterator[None]:
            if include_logging:
                configure_logging()

            # Use injected database or create new one from URL
            if database_instance is not None:
                database = database_instance
                should_manage_lifecycle = False
            else:
                database = Database(database_url)
                should_manage_lifecycle = True

            # Failing to reach the store here aborts startup
            await database.init()
            app.state.database = database
            logger.info("service.started", service=display_name)

            for hook in startup_hooks:
                await hook(app)
            try:
                yield
            finally:
                for hook in shutdown_hooks:
                    await hook(app)
                app.state.database = None

                # Dispose database only if we created it
                if should_manage_lifecycle:
                    await database.dispose()
                logger.info("service.shutdown", service=display_name)

        return lifespan

    @staticmethod
    def _create_database_health_check(app: FastAPI) -> HealthCheck:
        """Create database connectivity health check bound to the running app."""

        async def check_database() -> tuple[HealthState, str | None]:
            db: Database | None = getattr(app.state, "database", None)
            if db is None:
                return (HealthState.UNHEALTHY, "Database not initialized")
            try:
                async with db.session() as session:
                    await session.execute(text("SELECT 1"))
                return (HealthState.HEALTHY, None)
            except Exception as e:
                return (HealthState.UNHEALTHY, f"Database connection failed: {e}")

        return check_database

    @staticmethod
    def _install_info_endpoint(app: FastAPI, *, info: ServiceInfo) -> None:
        """Install service info endpoint."""
        info_type = type(info)

        @app.get("/api/info", include_in_schema=False, response_model=info_type)
        async def get_info() -> ServiceInfo:
            return info

    # --------------------------------------------------------------------- Convenience

    @classmethod
    def create(cls, *, info: ServiceInfo, **kwargs: Any) -> FastAPI:
        """Create and build a FastAPI application in one call."""
        return cls(info=info, **kwargs).build()
