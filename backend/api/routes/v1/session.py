"""
backend.api.routes.v1.session

Purpose:
    Single-owner dashboard session: submit tickers, poll state/progress, dismiss errors
    and fetch dashboard view models for the current results.

Notes:
    - submit schedules the analysis in the background and returns 202 immediately.
    - Blank input is a no-op (200, state unchanged); a submit while loading is 409.
    - Every handler is async: ApplicationState is only touched on the event loop that
      runs the analysis task and its progress ticks.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags
from backend.api.contracts.error_contract import ApiErrorCode, ErrorResponse
from backend.api.dependencies import get_session
from backend.api.errors import ApiError
from backend.api.schemas.analysis import SessionStateResponse, SessionSubmitRequest
from quantedge_agents.contracts.analysis import parse_tickers
from quantedge_agents.orchestrator.session import AnalysisSession
from quantedge_agents.presentation.dashboard import DashboardView, build_dashboard

_paths = ApiPaths()

router = APIRouter(prefix=_paths.session_prefix, tags=[ApiTags().session])


def _state_response(session: AnalysisSession, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    body = SessionStateResponse.from_state(session.snapshot())
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


@router.get(_paths.session_state, response_model=SessionStateResponse)
async def get_state(session: AnalysisSession = Depends(get_session)) -> JSONResponse:
    return _state_response(session)


@router.post(
    _paths.session_submit,
    response_model=SessionStateResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={409: {"model": ErrorResponse, "description": "A request is already in flight"}},
)
async def submit(
    req: SessionSubmitRequest,
    session: AnalysisSession = Depends(get_session),
) -> JSONResponse:
    if not parse_tickers(req.tickers):
        return _state_response(session)

    if not session.start(req.tickers):
        raise ApiError(
            status_code=status.HTTP_409_CONFLICT,
            error_code=ApiErrorCode.SESSION_BUSY,
            message="An analysis is already in progress",
        )
    return _state_response(session, status.HTTP_202_ACCEPTED)


@router.post(_paths.session_dismiss, response_model=SessionStateResponse)
async def dismiss(session: AnalysisSession = Depends(get_session)) -> JSONResponse:
    session.dismiss_error()
    return _state_response(session)


@router.get(_paths.session_dashboard, response_model=DashboardView)
async def dashboard(session: AnalysisSession = Depends(get_session)) -> DashboardView:
    data = session.snapshot().data or []
    return build_dashboard(data)
