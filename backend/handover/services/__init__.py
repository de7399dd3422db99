"""Service modules - Business logic layer"""
from .config_service import ConfigService
from .progress_service import ProgressService
from .version_service import VersionService
from .project_service import ProjectService

__all__ = [
    "ConfigService",
    "ProgressService",
    "VersionService",
    "ProjectService",
]
