"""
backend.api.routes.v1.info

Purpose:
    Versioned info endpoint that exposes API metadata and supported options
    for client discovery.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags
from quantedge_agents.contracts.enums import (
    MomentumGrade,
    Recommendation,
    ValuationGrade,
    enum_values,
)
from quantedge_agents.llm.providers import LLMProvider

_paths = ApiPaths()

router = APIRouter(tags=[ApiTags().info])


@router.get(_paths.info)
def info(request: Request) -> dict:
    v1 = _paths.v1_prefix
    session = f"{v1}{_paths.session_prefix}"
    return {
        "api_version": "v1",
        "service": request.app.title,
        "endpoints": {
            "analyze": f"{v1}{_paths.analyze}",
            "presets": f"{v1}{_paths.presets}",
            "health": f"{v1}{_paths.health}",
            "session_state": f"{session}{_paths.session_state}",
            "session_submit": f"{session}{_paths.session_submit}",
            "session_dismiss": f"{session}{_paths.session_dismiss}",
            "session_dashboard": f"{session}{_paths.session_dashboard}",
        },
        "supported": {
            "providers": [p.value for p in LLMProvider],
            "valuation_grades": enum_values(ValuationGrade),
            "momentum_grades": enum_values(MomentumGrade),
            "recommendations": enum_values(Recommendation),
        },
    }
