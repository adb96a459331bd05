"""
backend.api.routes.health

Purpose:
    Unversioned liveness probe for containers/load balancers.
    Reports the service name so a probe can tell which deployment answered.
"""

from __future__ import annotations

from fastapi import APIRouter, Request

from backend.api.contracts.api_paths import ApiPaths
from backend.api.contracts.api_tags import ApiTags

router = APIRouter(tags=[ApiTags().health])


@router.get(ApiPaths().health)
def health(request: Request) -> dict:
    return {"ok": True, "service": request.app.title}
