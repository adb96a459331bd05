"""
tests.api.conftest

Shared pytest fixtures for API tests.
"""

from __future__ import annotations

from typing import Any, List, Sequence

import pytest
from fastapi.testclient import TestClient

from backend.api.main import create_app
from backend.api.settings import Settings
from quantedge_agents.contracts.analysis import AnalysisResult
from quantedge_agents.llm.mock_client import MockAnalysisProvider

FAST_SETTINGS = Settings(progress_tick_interval_s=0.01, progress_ramp_duration_s=0.2, completion_delay_s=0)


class FailingProvider:
    def __init__(self, exc: BaseException) -> None:
        self.exc = exc

    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        raise self.exc


class EmptyProvider:
    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        return []


@pytest.fixture()
def client_factory():
    """
    Factory fixture that creates a fresh TestClient.

    IMPORTANT:
        Defaults to the deterministic mock provider so no test reaches the network.
        Pass provider= to exercise failure paths.
    """

    def _make(provider: Any = None, settings: Settings | None = None) -> TestClient:
        app = create_app(provider=provider or MockAnalysisProvider(), settings=settings or FAST_SETTINGS)
        return TestClient(app, raise_server_exceptions=True)

    return _make


@pytest.fixture()
def client(client_factory) -> TestClient:
    """
    Simple alias for tests that only need the default app.
    """
    return client_factory()


@pytest.fixture()
def failing_provider() -> type[FailingProvider]:
    return FailingProvider


@pytest.fixture()
def empty_provider() -> EmptyProvider:
    return EmptyProvider()
