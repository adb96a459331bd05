"""
backend.api.routes.v1.analysis

Purpose:
    Stateless batch analysis endpoint (POST /v1/analyze) and preset discovery.

Notes:
    - One provider call per request; no retries.
    - Engine failures are mapped onto the stable ErrorResponse contract:
        NoResults -> 404 NO_RESULTS, anything else -> 502 ENGINE_ERROR.
    - EmptyResponse/MalformedResponse share one generic message (no payload leak).
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags
from backend.api.contracts.error_contract import ErrorResponse
from backend.api.dependencies import get_analysis_provider
from backend.api.errors import api_error_from_analysis
from backend.api.schemas.analysis import AnalyzeRequest, AnalyzeResponse, PresetOut
from quantedge_agents.api.run_analysis import run_analysis
from quantedge_agents.llm.client import AnalysisProvider
from quantedge_agents.presentation.dashboard import build_dashboard
from quantedge_agents.presentation.presets import PRESETS

logger = logging.getLogger(__name__)

_paths = ApiPaths()

router = APIRouter(tags=[ApiTags().analysis])


@router.get(_paths.presets, response_model=List[PresetOut])
def presets() -> List[PresetOut]:
    return [PresetOut(**p.as_dict()) for p in PRESETS]


@router.post(
    _paths.analyze,
    response_model=AnalyzeResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Analysis returned no results"},
        422: {"model": ErrorResponse, "description": "Request validation failed"},
        502: {"model": ErrorResponse, "description": "Analysis engine failed"},
    },
)
async def analyze(
    req: AnalyzeRequest,
    provider: AnalysisProvider = Depends(get_analysis_provider),
) -> AnalyzeResponse:
    logger.info("analyze: tickers=%s", req.ticker_list)
    try:
        results = await run_analysis(text=req.tickers, provider=provider)
    except Exception as e:
        api_exc = api_error_from_analysis(e)
        logger.warning("analyze failed: %s (%s)", api_exc, type(e).__name__)
        raise api_exc from e

    return AnalyzeResponse(
        tickers=[r.ticker for r in results],
        results=results,
        dashboard=build_dashboard(results),
    )
