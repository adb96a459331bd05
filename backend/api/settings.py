# backend/api/settings.py
"""
backend.api.settings

Purpose:
    Centralized configuration for the FastAPI service.
    Analysis provider/credential settings live in the engine (LLMRuntimeConfig.from_env);
    this module only holds service metadata and dashboard session timings.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from backend.api.contracts.api_paths import ApiPaths


class Settings(BaseModel):
    service_name: str = Field(default="quantedge-api")
    service_version: str = Field(default="0.1.0")

    api_v1_prefix: str = Field(default=ApiPaths().v1_prefix)

    progress_tick_interval_s: float = Field(default=0.1, gt=0)
    progress_ramp_duration_s: float = Field(default=10.0, gt=0)
    completion_delay_s: float = Field(default=0.4, ge=0)


def get_settings() -> Settings:
    return Settings()
