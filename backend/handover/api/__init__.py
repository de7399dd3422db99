"""API module - Routes and dependencies"""
from .deps import (
    get_correlation_id_dep,
    get_project_service,
    get_progress_service,
    get_version_service,
    get_config_service,
)

__all__ = [
    "get_correlation_id_dep",
    "get_project_service",
    "get_progress_service",
    "get_version_service",
    "get_config_service",
]
