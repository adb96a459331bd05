"""
quantedge_agents.contracts.analysis

Purpose:
    Pydantic contracts for one batch analysis: the parsed request and the per-ticker result.

Notes:
    - Field aliases are the camelCase wire names requested from the remote model
      (see contracts/schema.py). Dump with by_alias=True for the public JSON shape.
    - DCF fields are a linked pair: 0 means "not computed" (negative/erratic FCF),
      never a literal zero valuation. Use QualityBlock.has_dcf instead of comparing to 0.
    - sources are shared across every result of a batch (no per-ticker attribution).

Created:
    2026-03-02
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, field_validator

from quantedge_agents.contracts.enums import MomentumGrade, Recommendation, ValuationGrade
from quantedge_agents.errors import InputEmpty

MAX_SOURCES = 5

_TICKER_SPLIT = re.compile(r"[,\s]+")


def parse_tickers(text: str | None) -> list[str]:
    """
    Split free-text input on commas/whitespace into uppercase ticker symbols.

    Order is preserved, empty tokens are dropped and duplicates are kept.
    """
    if not text:
        return []
    return [t.strip().upper() for t in _TICKER_SPLIT.split(text) if t.strip()]


@dataclass(frozen=True)
class AnalysisRequest:
    tickers: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str | None) -> "AnalysisRequest":
        tickers = parse_tickers(text)
        if not tickers:
            raise InputEmpty("No ticker symbols found in input")
        return cls(tickers=tuple(tickers))

    def label(self) -> str:
        return ", ".join(self.tickers)


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Source(_WireModel):
    title: str
    uri: str


class ValueBlock(_WireModel):
    forward_pe: float = Field(..., alias="forwardPE")
    forward_pe_2yr: float = Field(..., alias="forwardPE_2YR")
    sector_median_pe: float = Field(..., alias="sectorMedianPE")
    valuation_grade: ValuationGrade = Field(..., alias="valuationGrade")
    assessment: str


class QualityBlock(_WireModel):
    roe: float
    roic: float
    debt_to_equity: float = Field(..., alias="debtToEquity")
    dcf_intrinsic_value: float = Field(..., alias="dcfIntrinsicValue")
    dcf_margin_of_safety: float = Field(..., alias="dcfMarginOfSafety")
    quality_score: float = Field(..., ge=0, le=100, alias="qualityScore")
    assessment: str

    @property
    def has_dcf(self) -> bool:
        return self.dcf_intrinsic_value > 0


class MomentumBlock(_WireModel):
    revisions_up_90d: int = Field(..., ge=0, alias="revisionsUp90D")
    revisions_down_90d: int = Field(..., ge=0, alias="revisionsDown90D")
    revisions_grade: MomentumGrade = Field(..., alias="revisionsGrade")
    assessment: str


class AnalysisResult(_WireModel):
    ticker: str
    company_name: str = Field(..., alias="companyName")
    current_price: float = Field(..., gt=0, alias="currentPrice")

    value: ValueBlock
    quality: QualityBlock
    momentum: MomentumBlock

    deep_analysis: str = Field(..., alias="deepAnalysis")
    final_recommendation: Recommendation = Field(..., alias="finalRecommendation")
    risk_factors: list[str] = Field(..., alias="riskFactors")

    sources: list[Source] = Field(default_factory=list, max_length=MAX_SOURCES)

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        t = v.strip().upper()
        if not t:
            raise ValueError("ticker must be non-empty")
        return t

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
