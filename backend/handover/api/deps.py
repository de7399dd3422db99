"""Route dependencies: correlation id and service factories"""
from typing import Optional
from fastapi import Header

from ..services.config_service import ConfigService
from ..services.progress_service import ProgressService
from ..services.project_service import ProjectService
from ..services.version_service import VersionService
from ..utils.logger import set_correlation_id
from ..utils.idgen import generate_correlation_id


async def get_correlation_id_dep(
    x_correlation_id: Optional[str] = Header(None, alias="X-Correlation-Id")
) -> str:
    """Correlation id for the request, taken from X-Correlation-Id or generated"""
    correlation_id = x_correlation_id or generate_correlation_id()
    set_correlation_id(correlation_id)
    return correlation_id


# Services are built per request over the Mongo repositories;
# tests swap them out through app.dependency_overrides

def get_project_service() -> ProjectService:
    return ProjectService()


def get_progress_service() -> ProgressService:
    return ProgressService()


def get_version_service() -> VersionService:
    return VersionService()


def get_config_service() -> ConfigService:
    return ConfigService()
