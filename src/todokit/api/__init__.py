"""Application layer - service builder with feature modules."""

from todokit.core.api import run_app
from todokit.core.api.service_builder import ServiceInfo

from .dependencies import get_task_manager
from .service_builder import ServiceBuilder

__all__ = [
    "ServiceBuilder",
    "ServiceInfo",
    "get_task_manager",
    "run_app",
]
