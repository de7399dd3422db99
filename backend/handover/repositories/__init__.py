"""Repository modules - Data access layer"""
from .mongo_client import get_database, get_collection
from .project_repo import ProjectRepository
from .settings_repo import SettingsRepository

__all__ = [
    "get_database",
    "get_collection",
    "ProjectRepository",
    "SettingsRepository",
]
