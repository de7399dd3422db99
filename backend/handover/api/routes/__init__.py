"""HTTP routes: versioned API under /api/v1 plus root health endpoints"""
from fastapi import APIRouter

from .health import router as health_router
from .projects import router as projects_router
from .versions import router as versions_router
from .settings import router as settings_router

api_router = APIRouter()
api_router.include_router(projects_router, prefix="/projects", tags=["Projects"])
api_router.include_router(versions_router, prefix="/projects", tags=["Versions"])
api_router.include_router(settings_router, prefix="/settings", tags=["Settings"])

__all__ = ["api_router", "health_router"]
