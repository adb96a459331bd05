from fastapi import APIRouter

from backend.api.contracts.api_paths import ApiPaths
from backend.api.routes.v1.analysis import router as analysis_router
from backend.api.routes.v1.health import router as health_router
from backend.api.routes.v1.info import router as info_router
from backend.api.routes.v1.session import router as session_router

v1_router = APIRouter(prefix=ApiPaths().v1_prefix)

v1_router.include_router(health_router)
v1_router.include_router(info_router)
v1_router.include_router(analysis_router)
v1_router.include_router(session_router)
