"""
backend.api.routes.v1.health

Purpose:
    Versioned health endpoint for API clients.
"""

from __future__ import annotations

from fastapi import APIRouter

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags

router = APIRouter(tags=[ApiTags().health])


@router.get(ApiPaths().health)
def health() -> dict:
    return {"status": "ok"}
