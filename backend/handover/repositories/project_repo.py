"""Project Repository - Data access for handover projects"""
from typing import Any, Dict, List, Optional
from pymongo.collection import Collection
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from .mongo_client import PROJECTS, get_collection
from ..domain.models import Project, ProgressSnapshot
from ..domain.errors import ProjectNotFoundError, AlreadyExistsError
from ..utils.time import utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ProjectRepository:
    """
    Repository for project documents

    Documents are returned as plain dicts: checklist value bags and version
    histories written by older clients do not always match the current
    models, and the engine reads them tolerantly.
    """

    def __init__(self, collection: Optional[Collection] = None):
        self._projects: Collection = collection if collection is not None else get_collection(PROJECTS)

    def create(self, project: Project) -> Dict[str, Any]:
        """Insert a new project"""
        doc = project.model_dump(mode="json")
        doc["created_at"] = project.created_at
        doc["updated_at"] = project.updated_at

        try:
            self._projects.insert_one(dict(doc))
        except DuplicateKeyError:
            raise AlreadyExistsError(f"Project {project.project_id} already exists")

        logger.info(f"Created project {project.project_id}", extra={"project_id": project.project_id})
        return doc

    def get_by_id(self, project_id: str) -> Optional[Dict[str, Any]]:
        """Get project by ID"""
        doc = self._projects.find_one({"project_id": project_id})
        if doc:
            doc.pop("_id", None)
        return doc

    def get_by_id_or_raise(self, project_id: str) -> Dict[str, Any]:
        """Get project by ID or raise error"""
        doc = self.get_by_id(project_id)
        if not doc:
            raise ProjectNotFoundError.for_project(project_id)
        return doc

    def list_all(self) -> List[Dict[str, Any]]:
        """All projects, newest first"""
        docs = list(self._projects.find({}).sort("created_at", DESCENDING))
        for doc in docs:
            doc.pop("_id", None)
        return docs

    def update(self, project_id: str, updates: Dict[str, Any]) -> bool:
        """
        Partial update ($set); last writer wins

        Keys may be dotted paths (e.g. "checklists.launch").
        """
        updates = {**updates, "updated_at": utc_now()}
        result = self._projects.update_one({"project_id": project_id}, {"$set": updates})
        if result.matched_count == 0:
            raise ProjectNotFoundError.for_project(project_id)
        return result.modified_count > 0

    def delete(self, project_id: str) -> bool:
        """Delete a project"""
        result = self._projects.delete_one({"project_id": project_id})
        if result.deleted_count:
            logger.info(f"Deleted project {project_id}", extra={"project_id": project_id})
        return result.deleted_count > 0

    def update_progress(self, project_id: str, progress: ProgressSnapshot) -> bool:
        """Store recomputed completion percentages"""
        return self.update(project_id, {"progress": progress.model_dump()})

    def update_version_state(
        self,
        project_id: str,
        version_history: List[int],
        version: Optional[int] = None
    ) -> bool:
        """Store the version history and, optionally, a new current version"""
        updates: Dict[str, Any] = {"version_history": list(version_history)}
        if version is not None:
            updates["version"] = version
        return self.update(project_id, updates)
