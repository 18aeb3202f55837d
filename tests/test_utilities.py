"""Tests for the uvicorn bootstrap helper."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi import FastAPI

import todokit.core.api.utilities as utilities


@pytest.mark.parametrize(("shutdown_timeout", "expected"), [(30.0, 30), (0.5, 1), (2.1, 3)])
def test_run_app_rounds_shutdown_timeout_up(
    monkeypatch: pytest.MonkeyPatch, shutdown_timeout: float, expected: int
) -> None:
    captured: dict[str, Any] = {}

    def fake_run(app: FastAPI, **kwargs: Any) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(utilities.uvicorn, "run", fake_run)
    app = FastAPI()

    utilities.run_app(app, host="0.0.0.0", port=8081, shutdown_timeout=shutdown_timeout)

    assert captured["app"] is app
    assert captured["host"] == "0.0.0.0"
    assert captured["port"] == 8081
    assert captured["timeout_graceful_shutdown"] == expected
    assert captured["log_config"] is None
