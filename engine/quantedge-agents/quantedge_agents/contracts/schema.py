"""
quantedge_agents.contracts.schema

Purpose:
    Structured-output schema sent to the remote model as its response-format constraint.

Notes:
    - Uses the Gemini OpenAPI-subset dict form (type names upper-case) so it can be passed
      straight into GenerateContentConfig.response_schema.
    - This schema is the only thing shaping the model output; the pydantic contracts in
      contracts/analysis.py re-validate whatever comes back.
    - Property names must stay in sync with the aliases on AnalysisResult.

Created:
    2026-03-02
"""

from __future__ import annotations

from typing import Any, Dict

from quantedge_agents.contracts.enums import (
    MomentumGrade,
    Recommendation,
    ValuationGrade,
    enum_values,
)

STRING = "STRING"
NUMBER = "NUMBER"
OBJECT = "OBJECT"
ARRAY = "ARRAY"


def _field(type_: str, description: str | None = None, **extra: Any) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": type_}
    if description:
        out["description"] = description
    out.update(extra)
    return out


def _obj(properties: Dict[str, Any]) -> Dict[str, Any]:
    # Every declared property is required; the model must not drop any field.
    return {"type": OBJECT, "properties": properties, "required": list(properties.keys())}


def build_value_schema() -> Dict[str, Any]:
    return _obj(
        {
            "forwardPE": _field(NUMBER, "Next 12 Months P/E"),
            "forwardPE_2YR": _field(
                NUMBER,
                "Estimated P/E for 2 fiscal years ahead (analyst consensus estimates)",
            ),
            "sectorMedianPE": _field(NUMBER),
            "valuationGrade": _field(STRING, enum=enum_values(ValuationGrade)),
            "assessment": _field(STRING),
        }
    )


def build_quality_schema() -> Dict[str, Any]:
    return _obj(
        {
            "roe": _field(NUMBER, "Return on Equity %"),
            "roic": _field(NUMBER, "Return on Invested Capital %"),
            "debtToEquity": _field(NUMBER, "Total Debt to Equity Ratio"),
            "dcfIntrinsicValue": _field(
                NUMBER, "Intrinsic value per share via DCF. Set to 0 if FCF is negative."
            ),
            "dcfMarginOfSafety": _field(
                NUMBER, "(Intrinsic - Price) / Intrinsic. Set to 0 if FCF is negative."
            ),
            "qualityScore": _field(
                NUMBER,
                "Score 0-100 mixing ROE/ROIC/Debt. Include Margin of Safety only if DCF is valid.",
            ),
            "assessment": _field(STRING),
        }
    )


def build_momentum_schema() -> Dict[str, Any]:
    return _obj(
        {
            "revisionsUp90D": _field(NUMBER),
            "revisionsDown90D": _field(NUMBER),
            "revisionsGrade": _field(STRING, enum=enum_values(MomentumGrade)),
            "assessment": _field(STRING),
        }
    )


def build_stock_item_schema() -> Dict[str, Any]:
    return _obj(
        {
            "ticker": _field(STRING),
            "companyName": _field(STRING),
            "currentPrice": _field(NUMBER),
            "value": build_value_schema(),
            "quality": build_quality_schema(),
            "momentum": build_momentum_schema(),
            "deepAnalysis": _field(STRING),
            "finalRecommendation": _field(STRING, enum=enum_values(Recommendation)),
            "riskFactors": _field(ARRAY, items={"type": STRING}),
        }
    )


def build_batch_schema() -> Dict[str, Any]:
    """Top-level response schema: {"results": [<stock item>, ...]}."""
    return {
        "type": OBJECT,
        "properties": {
            "results": {"type": ARRAY, "items": build_stock_item_schema()},
        },
        "required": ["results"],
    }
