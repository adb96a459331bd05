"""
backend.api.schemas.analysis

Purpose:
    Request/response schemas for the analysis and dashboard-session endpoints.

Notes:
    - extra="forbid" prevents silent client typos (e.g., "tickrs").
    - /v1/analyze rejects blank input at the API boundary; symbol format is not restricted.
    - /v1/session/submit accepts blank input: it is a documented no-op, not an error.
    - AnalysisResult serializes with its camelCase aliases (FastAPI dumps by_alias).
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quantedge_agents.contracts.analysis import AnalysisResult, parse_tickers
from quantedge_agents.orchestrator.state import ApplicationState
from quantedge_agents.presentation.dashboard import DashboardView


class AnalyzeRequest(BaseModel):
    """
    Request payload for /v1/analyze.
    """

    model_config = ConfigDict(extra="forbid")

    tickers: str = Field(
        ...,
        description="Comma/whitespace separated ticker symbols.",
        examples=["AAPL, NVDA, MSFT"],
    )

    @field_validator("tickers")
    @classmethod
    def validate_tickers(cls, v: str) -> str:
        if not parse_tickers(v):
            raise ValueError("Enter at least one ticker symbol.")
        return v

    @property
    def ticker_list(self) -> List[str]:
        return parse_tickers(self.tickers)


class SessionSubmitRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    tickers: str = Field(default="", examples=["TSLA, RIVN, LCID"])


class AnalyzeResponse(BaseModel):
    tickers: List[str]
    results: List[AnalysisResult]
    dashboard: DashboardView


class SessionStateResponse(BaseModel):
    loading: bool
    progress: float
    error: Optional[str] = None
    data: Optional[List[AnalysisResult]] = None
    step: str
    phase: str

    @classmethod
    def from_state(cls, state: ApplicationState) -> "SessionStateResponse":
        return cls(
            loading=state.loading,
            progress=round(state.progress, 2),
            error=state.error,
            data=state.data,
            step=state.step.value,
            phase=state.phase.value,
        )


class PresetOut(BaseModel):
    label: str
    tickers: str
