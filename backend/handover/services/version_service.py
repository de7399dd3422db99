"""Version Service - Project version history and per-version views"""
from typing import Any, Dict, List, Optional, Tuple

from ..config.settings import settings
from ..domain.enums import ChecklistKind
from ..domain.models import IntegrationRecord, ReconciliationResult, VersionDeletionResult
from ..domain.errors import ValidationError
from ..engine.version_reconciler import VersionHistoryReconciler
from ..engine.value_access import STATUSES_SUFFIX, VERSIONS_SUFFIX
from ..repositories.project_repo import ProjectRepository
from ..repositories.settings_repo import SettingsRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_INTEGRATION_STATUS = "Pending"


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


class VersionService:
    """Service for version history reconciliation, advancement and deletion"""

    def __init__(
        self,
        project_repo: Optional[ProjectRepository] = None,
        settings_repo: Optional[SettingsRepository] = None,
        reconciler: Optional[VersionHistoryReconciler] = None,
        persist_backfill: Optional[bool] = None
    ):
        self.project_repo = project_repo or ProjectRepository()
        self.settings_repo = settings_repo or SettingsRepository()
        self.reconciler = reconciler or VersionHistoryReconciler(settings.default_version)
        self.persist_backfill = settings.persist_version_history if persist_backfill is None else persist_backfill

    # =========================================================================
    # Reconciliation (two phases: reconcile is pure, persist is optional)
    # =========================================================================

    def reconcile(self, project_id: str) -> Tuple[Dict[str, Any], ReconciliationResult]:
        """Load a project and reconcile its version list"""
        project = self.project_repo.get_by_id_or_raise(project_id)
        return project, self.reconciler.reconcile(project)

    def persist_history(self, project_id: str, versions: List[int]) -> bool:
        """
        Store a backfilled history

        Failures are logged and swallowed: the reconciled list is already in
        use by the caller and the next read backfills again.
        """
        if not self.persist_backfill:
            return False
        try:
            self.project_repo.update_version_state(project_id, versions)
            logger.info(f"Stored version history {versions}", extra={"project_id": project_id})
            return True
        except Exception as e:
            logger.error(
                f"Error initializing version history: {e}",
                extra={"project_id": project_id},
                exc_info=True
            )
            return False

    def get_available_versions(self, project_id: str) -> Dict[str, Any]:
        """Version list payload for the version selector"""
        project, result = self.reconcile(project_id)
        return {
            "project_id": project_id,
            "current_version": self.reconciler.current_version(project),
            "versions": result.versions,
            "next_version": self.reconciler.next_version(result.versions, project.get("publishing_status")),
            "backfilled": result.backfilled,
        }

    # =========================================================================
    # Mutations
    # =========================================================================

    def set_current_version(self, project_id: str, version: int) -> Dict[str, Any]:
        """Move the current version pointer, filling the history up to it"""
        if isinstance(version, bool) or not isinstance(version, int) or version < 1:
            raise ValidationError("Version must be a positive integer", details={"version": version})

        project, result = self.reconcile(project_id)
        history = self.reconciler.advance_version(result.versions, version)
        self.project_repo.update_version_state(project_id, history, version=version)

        logger.info(
            f"Current version set to {version}",
            extra={"project_id": project_id, "version": version, "action": "set_current_version"}
        )
        return {"project_id": project_id, "version": version, "version_history": history}

    def delete_version(self, project_id: str, version: int) -> VersionDeletionResult:
        """
        Remove a version from the selector

        Works on the same reconciled list get_available_versions returns.
        Versions below the current one are refused because reconciliation
        always restores 1..current. Item data tagged with the version is
        left untouched. Refusals come back as a result with deleted=False.
        """
        project = self.project_repo.get_by_id_or_raise(project_id)
        history = self.reconciler.reconcile(project).versions
        current = self.reconciler.current_version(project)

        if 1 <= version < current:
            result = VersionDeletionResult(
                deleted=False,
                versions=history,
                reason=(
                    f"Versions up to the current version ({current}) are always kept. "
                    "Only later versions can be removed."
                ),
            )
        else:
            result = self.reconciler.delete_version(history, version, current)

        if result.deleted:
            self.project_repo.update_version_state(project_id, result.versions)
            logger.info(
                f"Removed version {version} from history",
                extra={"project_id": project_id, "version": version, "action": "delete_version"}
            )
        else:
            logger.info(
                f"Version deletion refused: {result.reason}",
                extra={"project_id": project_id, "version": version, "action": "delete_version"}
            )
        return result

    # =========================================================================
    # Per-version view
    # =========================================================================

    def get_version_view(self, project_id: str, version: int) -> Dict[str, Any]:
        """Launch checklist items that belong to one version"""
        project = self.project_repo.get_by_id_or_raise(project_id)
        catalog = self.settings_repo.get_integrations()
        return self.build_version_view(project, version, catalog)

    def build_version_view(
        self,
        project: Dict[str, Any],
        version: int,
        catalog: List[IntegrationRecord]
    ) -> Dict[str, Any]:
        """Filter the known versioned launch collections down to one version"""
        launch = _as_dict(_as_dict(project.get("checklists")).get(ChecklistKind.LAUNCH.value))
        development = _as_dict(launch.get("developmentItems"))
        additional = _as_dict(launch.get("additionalInformation"))
        integrations_group = _as_dict(launch.get("integrations"))

        def direct_or_grouped(field_id: str) -> Any:
            # Older projects kept these at the top level, newer ones inside developmentItems
            value = launch.get(field_id)
            return value if value else development.get(field_id)

        filter_items = self.reconciler.filter_by_version
        versions_map = _as_dict(integrations_group.get(f"integrations{VERSIONS_SUFFIX}"))
        statuses_map = _as_dict(integrations_group.get(f"integrations{STATUSES_SUFFIX}"))
        names = {integration.id: integration.name for integration in catalog}

        selected_ids = self.reconciler.filter_integrations_by_version(
            integrations_group.get("integrations"), versions_map, version
        )

        return {
            "project_id": project.get("project_id"),
            "version": version,
            "integrations_credentials": filter_items(launch.get("integrationsCredentials"), version),
            "custom_features": filter_items(direct_or_grouped("customFeatures"), version),
            "change_requests": filter_items(direct_or_grouped("changeRequests"), version),
            "dev_comments": filter_items(additional.get("devComments"), version),
            "external_communications": filter_items(additional.get("externalCommunications"), version),
            "remarks": filter_items(additional.get("remarks"), version),
            "integrations": [
                {
                    "id": integration_id,
                    "name": names.get(integration_id) or integration_id,
                    "version": version,
                    "status": statuses_map.get(integration_id) or DEFAULT_INTEGRATION_STATUS,
                }
                for integration_id in selected_ids
            ],
        }
