"""Base class for routers that register their endpoints on construction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from fastapi import APIRouter


class Router(ABC):
    """Wraps a FastAPI APIRouter; subclasses add endpoints in ``_register_routes``."""

    router: APIRouter

    def __init__(self, prefix: str, tags: Sequence[str], **kwargs: Any) -> None:
        """Create the underlying APIRouter and register routes on it."""
        self.router = APIRouter(prefix=prefix, tags=list(tags), **kwargs)
        self._register_routes()

    @classmethod
    def create(cls, prefix: str, tags: Sequence[str], **kwargs: Any) -> APIRouter:
        """Build the router and return the APIRouter ready for ``app.include_router``."""
        return cls(prefix=prefix, tags=tags, **kwargs).router

    @abstractmethod
    def _register_routes(self) -> None:
        """Register endpoints on ``self.router``."""
        ...
