from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from quantedge_agents.contracts.analysis import AnalysisResult, Source
from quantedge_agents.errors import InputEmpty
from quantedge_agents.llm.client import LLMRuntimeConfig, register_analysis_provider
from quantedge_agents.llm.providers import LLMProvider
from quantedge_agents.llm.response import attach_sources

MOCK_SOURCES = [
    Source(title="Mock Market Data", uri="https://example.com/market-data"),
    Source(title="Mock Analyst Estimates", uri="https://example.com/estimates"),
]

# Tickers that exercise the "no DCF" path (negative FCF).
_NEGATIVE_FCF = {"RIVN", "LCID"}


def _mock_payload(ticker: str, idx: int) -> Dict[str, Any]:
    if ticker in _NEGATIVE_FCF:
        return {
            "ticker": ticker,
            "companyName": f"{ticker} Mock Corp",
            "currentPrice": 12.5 + idx,
            "value": {
                "forwardPE": -8.0,
                "forwardPE_2YR": -15.0,
                "sectorMedianPE": 18.0,
                "valuationGrade": "High",
                "assessment": "Mock: unprofitable, valuation not supported by earnings.",
            },
            "quality": {
                "roe": -35.0,
                "roic": -28.0,
                "debtToEquity": 0.9,
                "dcfIntrinsicValue": 0,
                "dcfMarginOfSafety": 0,
                "qualityScore": 22,
                "assessment": "Mock: negative FCF, DCF skipped.",
            },
            "momentum": {
                "revisionsUp90D": 2,
                "revisionsDown90D": 9,
                "revisionsGrade": "Weak",
                "assessment": "Mock: estimates trending down.",
            },
            "deepAnalysis": f"Mock deep analysis for {ticker}.",
            "finalRecommendation": "Sell",
            "riskFactors": ["Cash burn", "Dilution"],
        }

    price = 150.0 + 10 * idx
    return {
        "ticker": ticker,
        "companyName": f"{ticker} Mock Inc.",
        "currentPrice": price,
        "value": {
            "forwardPE": 28.0,
            "forwardPE_2YR": 24.0,
            "sectorMedianPE": 25.0,
            "valuationGrade": "Fair",
            "assessment": "Mock: in line with sector.",
        },
        "quality": {
            "roe": 30.0,
            "roic": 22.0,
            "debtToEquity": 0.6,
            "dcfIntrinsicValue": round(price * 1.2, 2),
            "dcfMarginOfSafety": round(1 - 1 / 1.2, 4),
            "qualityScore": 88,
            "assessment": "Mock: high returns on capital, modest leverage.",
        },
        "momentum": {
            "revisionsUp90D": 12,
            "revisionsDown90D": 3,
            "revisionsGrade": "Strong",
            "assessment": "Mock: upward revisions dominate.",
        },
        "deepAnalysis": f"Mock deep analysis for {ticker}.",
        "finalRecommendation": "Buy",
        "riskFactors": ["Valuation compression", "Competition"],
    }


@dataclass
class MockAnalysisProvider:
    """
    Deterministic provider for offline runs and tests. Never touches the network.
    """

    latency_s: float = 0.0
    calls: List[List[str]] = field(default_factory=list)

    async def analyze(self, tickers: Sequence[str]) -> List[AnalysisResult]:
        tickers = list(tickers)
        if not tickers:
            raise InputEmpty("analyze() requires at least one ticker")
        self.calls.append(tickers)

        if self.latency_s:
            await asyncio.sleep(self.latency_s)

        results = [AnalysisResult.model_validate(_mock_payload(t, i)) for i, t in enumerate(tickers)]
        return attach_sources(results, MOCK_SOURCES)


def _build_mock_provider(cfg: LLMRuntimeConfig) -> MockAnalysisProvider:
    return MockAnalysisProvider()


register_analysis_provider(LLMProvider.MOCK, _build_mock_provider)
