"""
backend.api.dependencies

Purpose:
    FastAPI dependencies resolving the app-scoped analysis provider and dashboard session.
    Both are created once in create_app() and stored on app.state.
"""

from __future__ import annotations

from fastapi import Request

from quantedge_agents.llm.client import AnalysisProvider
from quantedge_agents.orchestrator.session import AnalysisSession


def get_analysis_provider(request: Request) -> AnalysisProvider:
    return request.app.state.analysis_provider


def get_session(request: Request) -> AnalysisSession:
    return request.app.state.session
