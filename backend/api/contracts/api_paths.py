# backend/api/contracts/api_paths.py
"""
backend.api.contracts.api_paths

Purpose:
    Central definition of API route paths and versioning.
    Keeps routing stable and prevents string duplication.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ApiPaths:
    v1_prefix: str = "/v1"
    health: str = "/health"
    info: str = "/info"
    presets: str = "/presets"
    analyze: str = "/analyze"

    session_prefix: str = "/session"
    session_state: str = "/state"
    session_submit: str = "/submit"
    session_dismiss: str = "/dismiss"
    session_dashboard: str = "/dashboard"
