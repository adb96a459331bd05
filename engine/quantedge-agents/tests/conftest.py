"""
engine.quantedge-agents.tests.conftest

Purpose:
    Shared fixtures for engine tests: well-formed result payloads, fake SDK responses
    and scripted providers. Nothing here touches the network.
"""

from __future__ import annotations

import asyncio
import copy
import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Sequence

import pytest

from quantedge_agents.contracts.analysis import AnalysisResult

_BASE_PAYLOAD: Dict[str, Any] = {
    "ticker": "AAPL",
    "companyName": "Apple Inc.",
    "currentPrice": 190.25,
    "value": {
        "forwardPE": 29.5,
        "forwardPE_2YR": 26.1,
        "sectorMedianPE": 24.0,
        "valuationGrade": "High",
        "assessment": "Premium to sector.",
    },
    "quality": {
        "roe": 147.2,
        "roic": 55.3,
        "debtToEquity": 1.8,
        "dcfIntrinsicValue": 172.4,
        "dcfMarginOfSafety": -0.1035,
        "qualityScore": 84,
        "assessment": "Exceptional returns on capital.",
    },
    "momentum": {
        "revisionsUp90D": 14,
        "revisionsDown90D": 6,
        "revisionsGrade": "Neutral",
        "assessment": "Mixed revisions.",
    },
    "deepAnalysis": "Services growth offsets hardware cyclicality.",
    "finalRecommendation": "Hold",
    "riskFactors": ["China exposure", "Regulatory scrutiny"],
}


def make_payload(ticker: str = "AAPL", **overrides: Any) -> Dict[str, Any]:
    payload = copy.deepcopy(_BASE_PAYLOAD)
    payload["ticker"] = ticker
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(payload.get(key), dict):
            payload[key].update(value)
        else:
            payload[key] = value
    return payload


def make_chunks(n: int) -> List[SimpleNamespace]:
    return [
        SimpleNamespace(web=SimpleNamespace(title=f"Source {i}", uri=f"https://example.com/{i}"))
        for i in range(n)
    ]


def make_response(text: str | None, chunks: Sequence[Any] = ()) -> SimpleNamespace:
    metadata = SimpleNamespace(grounding_chunks=list(chunks))
    return SimpleNamespace(text=text, candidates=[SimpleNamespace(grounding_metadata=metadata)])


class ScriptedProvider:
    """
    Provider returning a fixed outcome. `gate` (asyncio.Event) holds the call open until set.
    """

    def __init__(self, outcome: Any, gate: asyncio.Event | None = None) -> None:
        self._outcome = outcome
        self._gate = gate
        self.calls: List[List[str]] = []

    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        self.calls.append(list(tickers))
        if self._gate is not None:
            await self._gate.wait()
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return list(self._outcome)


@pytest.fixture()
def payload_factory() -> Callable[..., Dict[str, Any]]:
    return make_payload


@pytest.fixture()
def result_factory() -> Callable[..., AnalysisResult]:
    def _make(ticker: str = "AAPL", **overrides: Any) -> AnalysisResult:
        return AnalysisResult.model_validate(make_payload(ticker, **overrides))

    return _make


@pytest.fixture()
def batch_text() -> Callable[..., str]:
    def _make(*tickers: str) -> str:
        return json.dumps({"results": [make_payload(t) for t in tickers]})

    return _make


@pytest.fixture()
def scripted_provider() -> type[ScriptedProvider]:
    return ScriptedProvider


@pytest.fixture()
def fake_response() -> Callable[..., SimpleNamespace]:
    return make_response


@pytest.fixture()
def grounding_chunks() -> Callable[[int], List[SimpleNamespace]]:
    return make_chunks
