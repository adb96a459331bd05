"""
quantedge_agents.presentation.dashboard

Purpose:
    View models for the analysis dashboard: display strings, chart datasets and tones.
    Clients (web UI, CLI pretty output) only draw what is built here.

Notes:
    - DCF 0 is a "not computed" sentinel and always renders as N/A.
    - Factor radar scores: Value Low/Fair/High -> 100/60/20, Quality = quality score,
      Momentum Strong/Neutral/Weak -> 100/50/10.
"""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, Field

from quantedge_agents.contracts.analysis import AnalysisResult, QualityBlock, Source
from quantedge_agents.contracts.enums import MomentumGrade, Recommendation, ValuationGrade

NOT_AVAILABLE = "N/A"
DCF_UNAVAILABLE_NOTE = "DCF N/A (Negative/Unpredictable FCF)"

HIGH_QUALITY_LABEL_ABOVE = 70
QUALITY_BAND_HIGH = 80
QUALITY_BAND_MEDIUM = 50
ROIC_STRONG_PCT = 15
LOW_LEVERAGE_BELOW = 1

_VALUE_SCORES = {ValuationGrade.LOW: 100, ValuationGrade.FAIR: 60, ValuationGrade.HIGH: 20}
_MOMENTUM_SCORES = {MomentumGrade.STRONG: 100, MomentumGrade.NEUTRAL: 50, MomentumGrade.WEAK: 10}
_RECOMMENDATION_TONES = {
    Recommendation.STRONG_BUY: "strong-positive",
    Recommendation.BUY: "positive",
    Recommendation.HOLD: "neutral",
    Recommendation.SELL: "negative",
    Recommendation.STRONG_SELL: "strong-negative",
}


# ----------------------------
# Formatting helpers
# ----------------------------


def format_currency(value: float) -> str:
    return f"${value:,.2f}"


def format_percent(value: float, ndigits: int = 1) -> str:
    return f"{value:.{ndigits}f}%"


def format_multiple(value: float) -> str:
    return f"{value:g}x"


# ----------------------------
# View models
# ----------------------------


class DcfView(BaseModel):
    available: bool
    intrinsic_value: str
    margin_of_safety: str
    margin_positive: bool | None = None
    note: str | None = None


class ChartPoint(BaseModel):
    label: str
    value: float
    full_mark: float | None = None
    highlight: bool = False


class MetricTile(BaseModel):
    label: str
    value: str
    tone: str


class FactorRow(BaseModel):
    factor: str
    primary: str
    secondary: str | None = None
    status: str
    positive: bool


class StockView(BaseModel):
    ticker: str
    company_name: str
    price: str
    recommendation: str
    recommendation_tone: str
    quality_score: float
    quality_band: str
    factor_rows: List[FactorRow]
    dcf: DcfView
    radar: List[ChartPoint]
    valuation_bars: List[ChartPoint]
    fundamentals: List[MetricTile]
    deep_analysis: str
    risk_factors: List[str]
    sources: List[Source] = Field(default_factory=list)


class DashboardView(BaseModel):
    tabs: List[str]
    stocks: List[StockView]


def dcf_view(quality: QualityBlock) -> DcfView:
    if not quality.has_dcf:
        return DcfView(
            available=False,
            intrinsic_value=NOT_AVAILABLE,
            margin_of_safety=NOT_AVAILABLE,
            note=DCF_UNAVAILABLE_NOTE,
        )
    margin_pct = quality.dcf_margin_of_safety * 100
    return DcfView(
        available=True,
        intrinsic_value=format_currency(quality.dcf_intrinsic_value),
        margin_of_safety=format_percent(margin_pct),
        margin_positive=margin_pct > 0,
    )


def quality_band(score: float) -> str:
    if score >= QUALITY_BAND_HIGH:
        return "high"
    if score >= QUALITY_BAND_MEDIUM:
        return "medium"
    return "low"


def quality_label(score: float) -> str:
    return "High Qual" if score > HIGH_QUALITY_LABEL_ABOVE else "Mixed"


def recommendation_tone(rec: Recommendation | str) -> str:
    try:
        return _RECOMMENDATION_TONES[Recommendation(rec)]
    except ValueError:
        return "unknown"


def factor_radar(result: AnalysisResult) -> List[ChartPoint]:
    return [
        ChartPoint(label="Value", value=_VALUE_SCORES[result.value.valuation_grade], full_mark=100),
        ChartPoint(label="Quality", value=result.quality.quality_score, full_mark=100),
        ChartPoint(label="Momentum", value=_MOMENTUM_SCORES[result.momentum.revisions_grade], full_mark=100),
    ]


def valuation_bars(result: AnalysisResult) -> List[ChartPoint]:
    v = result.value
    return [
        ChartPoint(label="Fwd P/E (1Y)", value=v.forward_pe),
        ChartPoint(label="Fwd P/E (2Y)", value=v.forward_pe_2yr),
        ChartPoint(label="Sector Median", value=v.sector_median_pe, highlight=True),
    ]


def factor_rows(result: AnalysisResult) -> List[FactorRow]:
    v, q, m = result.value, result.quality, result.momentum
    dcf = dcf_view(q)
    dcf_line = (
        f"DCF Value: {dcf.intrinsic_value} | Margin: {dcf.margin_of_safety}" if dcf.available else dcf.note
    )
    return [
        FactorRow(
            factor="Value",
            primary=f"{format_multiple(v.forward_pe)} (Next 12M)",
            secondary=f"{format_multiple(v.forward_pe_2yr)} (2-Year Fwd)",
            status=v.valuation_grade.value,
            positive=v.valuation_grade == ValuationGrade.LOW,
        ),
        FactorRow(
            factor="Quality",
            primary=f"ROIC: {q.roic:g}% | ROE: {q.roe:g}%",
            secondary=dcf_line,
            status=quality_label(q.quality_score),
            positive=q.quality_score > HIGH_QUALITY_LABEL_ABOVE,
        ),
        FactorRow(
            factor="Momentum",
            primary=f"{m.revisions_up_90d} Up / {m.revisions_down_90d} Down",
            status=m.revisions_grade.value,
            positive=m.revisions_grade == MomentumGrade.STRONG,
        ),
    ]


def fundamental_tiles(quality: QualityBlock) -> List[MetricTile]:
    dcf = dcf_view(quality)
    return [
        MetricTile(
            label="ROIC (Efficiency)",
            value=format_percent(quality.roic, 2),
            tone="positive" if quality.roic > ROIC_STRONG_PCT else "neutral",
        ),
        MetricTile(label="ROE (Profitability)", value=format_percent(quality.roe, 2), tone="info"),
        MetricTile(
            label="Debt-to-Equity",
            value=f"{quality.debt_to_equity:.2f}",
            tone="positive" if quality.debt_to_equity < LOW_LEVERAGE_BELOW else "caution",
        ),
        MetricTile(label="DCF Intrinsic", value=dcf.intrinsic_value, tone="muted"),
    ]


def build_stock_view(result: AnalysisResult) -> StockView:
    return StockView(
        ticker=result.ticker,
        company_name=result.company_name,
        price=format_currency(result.current_price),
        recommendation=result.final_recommendation.value,
        recommendation_tone=recommendation_tone(result.final_recommendation),
        quality_score=result.quality.quality_score,
        quality_band=quality_band(result.quality.quality_score),
        factor_rows=factor_rows(result),
        dcf=dcf_view(result.quality),
        radar=factor_radar(result),
        valuation_bars=valuation_bars(result),
        fundamentals=fundamental_tiles(result.quality),
        deep_analysis=result.deep_analysis,
        risk_factors=list(result.risk_factors),
        sources=list(result.sources),
    )


def build_dashboard(results: Sequence[AnalysisResult]) -> DashboardView:
    stocks = [build_stock_view(r) for r in results]
    return DashboardView(tabs=[s.ticker for s in stocks], stocks=stocks)
