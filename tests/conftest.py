from __future__ import annotations

from typing import List

import pytest

from connectors.radiobrowser.config import ConnectionParams


@pytest.fixture
def sleeps(monkeypatch) -> List[float]:
    """Record (and skip) every retry sleep taken by the transport."""
    seen: List[float] = []
    monkeypatch.setattr("connectors.radiobrowser.http.time.sleep", lambda s: seen.append(s))
    return seen


@pytest.fixture
def cfg() -> ConnectionParams:
    return ConnectionParams(
        api_url="https://api.example.test/",
        timeout_s=5.0,
        user_agent="tests/1.0",
        retries=3,
        retry_interval_s=0.25,
    )


@pytest.fixture(autouse=True)
def _no_radiobrowser_env(monkeypatch):
    for name in ConnectionParams.model_fields:
        monkeypatch.delenv(f"RADIOBROWSER_{name.upper()}", raising=False)
