"""
quantedge_agents/contracts/enums.py

Purpose:
    Grade/recommendation enums shared by the response schema, result models and view models.
    String values are the exact labels the remote model is asked to emit.
"""

from __future__ import annotations

from enum import Enum


class ValuationGrade(str, Enum):
    LOW = "Low"
    FAIR = "Fair"
    HIGH = "High"


class MomentumGrade(str, Enum):
    STRONG = "Strong"
    NEUTRAL = "Neutral"
    WEAK = "Weak"


class Recommendation(str, Enum):
    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    HOLD = "Hold"
    SELL = "Sell"
    STRONG_SELL = "Strong Sell"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]
