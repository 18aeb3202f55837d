"""Health check router."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from enum import StrEnum

from fastapi import Response, status
from pydantic import BaseModel, Field

from todokit.core.logging import get_logger

from ..router import Router

logger = get_logger(__name__)


class HealthState(StrEnum):
    """Health state reported by a single check or the service as a whole."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


HealthCheck = Callable[[], Awaitable[tuple[HealthState, str | None]]]


class CheckResult(BaseModel):
    """Outcome of one named check."""

    state: HealthState
    message: str | None = Field(default=None, description="Error detail when the check is not healthy")


class HealthStatus(BaseModel):
    """Aggregated health response."""

    status: HealthState
    checks: dict[str, CheckResult] | None = None


def aggregate_state(results: Mapping[str, CheckResult]) -> HealthState:
    """Worst state wins: any unhealthy check makes the service unhealthy."""
    states = {result.state for result in results.values()}
    if HealthState.UNHEALTHY in states:
        return HealthState.UNHEALTHY
    if HealthState.DEGRADED in states:
        return HealthState.DEGRADED
    return HealthState.HEALTHY


class HealthRouter(Router):
    """Health endpoint that runs the configured checks on every call.

    Responds 200 while the service is healthy or degraded and 503 once any
    check reports unhealthy, so load balancers can take the instance out.
    """

    def __init__(
        self,
        prefix: str,
        tags: list[str],
        checks: Mapping[str, HealthCheck] | None = None,
        **kwargs: object,
    ) -> None:
        """Initialize health router with optional named checks."""
        self.checks = dict(checks or {})
        super().__init__(prefix=prefix, tags=tags, **kwargs)

    async def run_checks(self) -> HealthStatus:
        """Run every check; a raising check counts as unhealthy."""
        if not self.checks:
            return HealthStatus(status=HealthState.HEALTHY)

        results: dict[str, CheckResult] = {}
        for name, check_fn in self.checks.items():
            try:
                state, message = await check_fn()
            except Exception as e:
                logger.warning("health.check_failed", check=name, error=str(e))
                state, message = HealthState.UNHEALTHY, f"Check failed: {e}"
            results[name] = CheckResult(state=state, message=message)

        return HealthStatus(status=aggregate_state(results), checks=results)

    def _register_routes(self) -> None:
        """Register health check endpoint."""

        @self.router.get("", summary="Health check", response_model=HealthStatus, response_model_exclude_none=True)
        async def health_check(response: Response) -> HealthStatus:
            result = await self.run_checks()
            if result.status == HealthState.UNHEALTHY:
                response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return result
