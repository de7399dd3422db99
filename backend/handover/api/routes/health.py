"""Liveness and service information, mounted at the application root"""
from fastapi import APIRouter

from ...config.settings import settings
from ...repositories.mongo_client import health_check

APP_NAME = "Handover Ops"
APP_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


@router.get("/health")
def health():
    """Degraded (still 200) when the project store does not answer a ping"""
    mongo = health_check()
    return {
        "status": "healthy" if mongo["status"] == "healthy" else "degraded",
        "version": APP_VERSION,
        "environment": settings.environment,
        "mongo": mongo,
    }


@router.get("/")
def root():
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "docs": "/api/docs" if settings.docs_enabled else None,
    }
