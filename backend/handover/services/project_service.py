"""Project Service - Project lifecycle business logic"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from ..domain.models import Project, ProjectDetailsUpdate
from ..domain.enums import ChecklistKind, ProjectStatus, PublishingStatus
from ..domain.errors import ValidationError
from ..engine.value_access import seed_launch_integrations
from ..repositories.project_repo import ProjectRepository
from ..repositories.settings_repo import SettingsRepository
from ..utils.idgen import generate_project_id
from ..utils.time import utc_now, today_iso, normalize_date
from ..utils.logger import get_logger
from .progress_service import ProgressService

logger = get_logger(__name__)

# Fields a client may edit through update_details
EDITABLE_FIELDS = tuple(ProjectDetailsUpdate.model_fields)


class ProjectService:
    """Service for project operations"""

    def __init__(
        self,
        project_repo: Optional[ProjectRepository] = None,
        settings_repo: Optional[SettingsRepository] = None,
        progress_service: Optional[ProgressService] = None
    ):
        self.project_repo = project_repo or ProjectRepository()
        self.settings_repo = settings_repo or SettingsRepository()
        self.progress_service = progress_service or ProgressService(self.project_repo, self.settings_repo)

    def create_project(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Create a project at version 1 with empty checklists"""
        fields = dict(fields)
        if "handover_date" in fields:
            try:
                fields["handover_date"] = normalize_date(fields["handover_date"])
            except (ValueError, OverflowError):
                raise ValidationError("Invalid date for handover_date", details={"handover_date": fields["handover_date"]})

        now = utc_now()
        try:
            project = Project(
                **fields,
                project_id=generate_project_id(),
                version=1,
                version_history=[1],
                created_at=now,
                updated_at=now,
            )
        except PydanticValidationError as e:
            raise ValidationError("Invalid project data", details={"errors": e.errors(include_url=False)})

        doc = self.project_repo.create(project)
        logger.info(
            f"Project created: {project.brand_name}",
            extra={"project_id": project.project_id, "action": "create_project"}
        )
        return doc

    def get_project(self, project_id: str) -> Dict[str, Any]:
        """Project with progress computed against the current config"""
        project = self.project_repo.get_by_id_or_raise(project_id)
        return self.progress_service.with_progress([project])[0]

    def list_projects(
        self,
        status: Optional[ProjectStatus] = None,
        publishing_status: Optional[PublishingStatus] = None
    ) -> List[Dict[str, Any]]:
        """All projects, newest first, with recomputed progress"""
        projects = self.project_repo.list_all()
        if status:
            projects = [p for p in projects if p.get("status") == status.value]
        if publishing_status:
            projects = [p for p in projects if p.get("publishing_status") == publishing_status.value]
        return self.progress_service.with_progress(projects)

    def get_checklist_data(self, project_id: str, kind: ChecklistKind) -> Dict[str, Any]:
        """
        Stored values for one checklist form

        An empty launch integration selection is pre-filled from the sales
        selection; nothing is written until the form is saved.
        """
        project = self.project_repo.get_by_id_or_raise(project_id)
        checklists = project.get("checklists") if isinstance(project.get("checklists"), dict) else {}
        data = checklists.get(kind.value)
        data = data if isinstance(data, dict) else {}

        if kind == ChecklistKind.LAUNCH:
            data = seed_launch_integrations(checklists.get(ChecklistKind.SALES.value), data)
        return data

    def update_details(self, project_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        """Edit the descriptive project fields"""
        unknown = sorted(set(updates) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError("Fields cannot be edited", details={"fields": unknown})

        self.project_repo.get_by_id_or_raise(project_id)
        try:
            edited = ProjectDetailsUpdate.model_validate(updates)
        except PydanticValidationError as e:
            raise ValidationError("Invalid project data", details={"errors": e.errors(include_url=False)})

        # Other stored keys are not re-validated; legacy documents stay editable
        dumped = edited.model_dump(mode="json", exclude_unset=True)
        if dumped:
            self.project_repo.update(project_id, dumped)
        return self.get_project(project_id)

    def update_status(
        self,
        project_id: str,
        status: Optional[ProjectStatus] = None,
        publishing_status: Optional[PublishingStatus] = None
    ) -> Dict[str, Any]:
        """
        Change development and/or publishing status

        Going Live stamps today's completion date unless one is already set.
        """
        if status is None and publishing_status is None:
            raise ValidationError("Nothing to update: provide status or publishing_status")

        project = self.project_repo.get_by_id_or_raise(project_id)
        updates: Dict[str, Any] = {}
        if status is not None:
            updates["status"] = status.value
        if publishing_status is not None:
            updates["publishing_status"] = publishing_status.value
            if publishing_status == PublishingStatus.LIVE and not project.get("completion_date"):
                updates["completion_date"] = today_iso()

        self.project_repo.update(project_id, updates)
        logger.info(
            f"Status updated: {updates}",
            extra={"project_id": project_id, "action": "update_status"}
        )
        return self.get_project(project_id)

    def update_dates(self, project_id: str, dates: Dict[str, Optional[str]]) -> Dict[str, Any]:
        """Set or clear handover_date / completion_date"""
        updates: Dict[str, Any] = {}
        for key in ("handover_date", "completion_date"):
            if key not in dates:
                continue
            try:
                updates[key] = normalize_date(dates[key])
            except (ValueError, OverflowError):
                raise ValidationError(f"Invalid date for {key}", details={key: dates[key]})

        if not updates:
            raise ValidationError("Nothing to update: provide handover_date or completion_date")

        self.project_repo.update(project_id, updates)
        return self.get_project(project_id)

    def delete_project(self, project_id: str) -> None:
        """Delete a project"""
        self.project_repo.get_by_id_or_raise(project_id)
        self.project_repo.delete(project_id)
