"""
backend.api.main

Purpose:
    FastAPI application entrypoint for the QuantEdge dashboard backend.

Notes:
    - The analysis provider is built once from env (LLMRuntimeConfig.from_env) unless injected.
    - One AnalysisSession per app: the dashboard state is single-owner and in-memory.
    - Shutdown closes the session so no progress timer outlives the app.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.api.error_handlers import register_error_handlers
from backend.api.logging.logging_config import configure_logging
from backend.api.middleware.request_id import RequestIdMiddleware
from backend.api.routes.health import router as health_router
from backend.api.routes.v1 import v1_router
from backend.api.settings import Settings, get_settings
from quantedge_agents.llm.client import AnalysisProvider, build_analysis_provider_from_env
from quantedge_agents.orchestrator.session import AnalysisSession


def create_app(
    *,
    provider: AnalysisProvider | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    settings = settings or get_settings()

    configure_logging()

    analysis_provider = provider or build_analysis_provider_from_env()
    session = AnalysisSession(
        analysis_provider,
        tick_interval_s=settings.progress_tick_interval_s,
        ramp_duration_s=settings.progress_ramp_duration_s,
        completion_delay_s=settings.completion_delay_s,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await session.aclose()

    app = FastAPI(title=settings.service_name, version=settings.service_version, lifespan=lifespan)
    app.state.analysis_provider = analysis_provider
    app.state.session = session

    @app.get("/")
    def root():
        return {"status": "ok", "service": settings.service_name}

    app.add_middleware(RequestIdMiddleware)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app
