# Purpose: Dashboard view models: DCF N/A rendering, chart datasets, tones and bands.

import pytest

from quantedge_agents.presentation.dashboard import (
    DCF_UNAVAILABLE_NOTE,
    NOT_AVAILABLE,
    build_dashboard,
    dcf_view,
    factor_radar,
    format_currency,
    quality_band,
    quality_label,
    recommendation_tone,
    valuation_bars,
)
from quantedge_agents.presentation.presets import PRESETS


def test_zero_dcf_renders_not_available(result_factory):
    r = result_factory("RIVN", quality={"dcfIntrinsicValue": 0, "dcfMarginOfSafety": 0})
    view = dcf_view(r.quality)
    assert view.available is False
    assert view.intrinsic_value == NOT_AVAILABLE
    assert view.margin_of_safety == NOT_AVAILABLE
    assert view.note == DCF_UNAVAILABLE_NOTE

    stock = build_dashboard([r]).stocks[0]
    dcf_tile = [t for t in stock.fundamentals if t.label == "DCF Intrinsic"][0]
    assert dcf_tile.value == NOT_AVAILABLE
    quality_row = [row for row in stock.factor_rows if row.factor == "Quality"][0]
    assert quality_row.secondary == DCF_UNAVAILABLE_NOTE


def test_dcf_renders_currency_and_margin(result_factory):
    r = result_factory(quality={"dcfIntrinsicValue": 1234.5, "dcfMarginOfSafety": 0.256})
    view = dcf_view(r.quality)
    assert view.available is True
    assert view.intrinsic_value == "$1,234.50"
    assert view.margin_of_safety == "25.6%"
    assert view.margin_positive is True


def test_negative_margin_is_flagged(result_factory):
    view = dcf_view(result_factory(quality={"dcfMarginOfSafety": -0.12}).quality)
    assert view.margin_of_safety == "-12.0%"
    assert view.margin_positive is False


@pytest.mark.parametrize(
    "value_grade,momentum_grade,expected",
    [
        ("Low", "Strong", [100, 84, 100]),
        ("Fair", "Neutral", [60, 84, 50]),
        ("High", "Weak", [20, 84, 10]),
    ],
)
def test_factor_radar_scores(result_factory, value_grade, momentum_grade, expected):
    r = result_factory(value={"valuationGrade": value_grade}, momentum={"revisionsGrade": momentum_grade})
    points = factor_radar(r)
    assert [p.label for p in points] == ["Value", "Quality", "Momentum"]
    assert [p.value for p in points] == expected
    assert all(p.full_mark == 100 for p in points)


def test_valuation_bars_highlight_sector_median(result_factory):
    bars = valuation_bars(result_factory())
    assert [(b.label, b.value, b.highlight) for b in bars] == [
        ("Fwd P/E (1Y)", 29.5, False),
        ("Fwd P/E (2Y)", 26.1, False),
        ("Sector Median", 24.0, True),
    ]


@pytest.mark.parametrize("score,band", [(100, "high"), (80, "high"), (79.9, "medium"), (50, "medium"), (10, "low")])
def test_quality_band(score, band):
    assert quality_band(score) == band


def test_quality_label_threshold():
    assert quality_label(71) == "High Qual"
    assert quality_label(70) == "Mixed"


def test_recommendation_tones():
    assert recommendation_tone("Strong Buy") == "strong-positive"
    assert recommendation_tone("Sell") == "negative"
    assert recommendation_tone("Maybe") == "unknown"


def test_dashboard_tabs_follow_result_order(result_factory):
    dashboard = build_dashboard([result_factory("TSLA"), result_factory("RIVN")])
    assert dashboard.tabs == ["TSLA", "RIVN"]
    stock = dashboard.stocks[0]
    assert stock.price == format_currency(190.25)
    assert stock.recommendation == "Hold"
    assert stock.recommendation_tone == "neutral"
    assert stock.risk_factors == ["China exposure", "Regulatory scrutiny"]


def test_presets():
    assert [p.tickers for p in PRESETS] == ["AAPL, NVDA, MSFT", "TSLA, RIVN, LCID"]
