"""Progress Service - Recompute and persist checklist completion"""
from typing import Any, Dict, List, Optional

from ..domain.enums import ChecklistKind
from ..domain.models import (
    ChecklistConfig, EvaluationContext, IntegrationRecord, ProgressSnapshot
)
from ..domain.errors import ValidationError
from ..engine.progress_aggregator import ProgressAggregator, combine_overall
from ..engine.checklist_report import ChecklistReporter
from ..repositories.project_repo import ProjectRepository
from ..repositories.settings_repo import SettingsRepository
from ..utils.logger import get_logger, get_context_logger

logger = get_logger(__name__)


def _stored_percentage(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return min(100, max(0, int(round(value))))


class ProgressService:
    """Orchestrates the progress engine around the project store"""

    def __init__(
        self,
        project_repo: Optional[ProjectRepository] = None,
        settings_repo: Optional[SettingsRepository] = None,
        aggregator: Optional[ProgressAggregator] = None
    ):
        self.project_repo = project_repo or ProjectRepository()
        self.settings_repo = settings_repo or SettingsRepository()
        self.aggregator = aggregator or ProgressAggregator()
        self.reporter = ChecklistReporter(self.aggregator)

    # =========================================================================
    # Computation
    # =========================================================================

    def compute_progress(
        self,
        project: Dict[str, Any],
        config: ChecklistConfig,
        catalog: List[IntegrationRecord]
    ) -> ProgressSnapshot:
        """Percentages for a project snapshot against the current config"""
        return self.aggregator.compute_progress(config, project.get("checklists"), catalog)

    def with_progress(
        self,
        projects: List[Dict[str, Any]],
        config: Optional[ChecklistConfig] = None,
        catalog: Optional[List[IntegrationRecord]] = None
    ) -> List[Dict[str, Any]]:
        """
        Copies of the projects with freshly computed progress

        Stored percentages go stale whenever the config changes, so reads
        recompute instead of trusting them.
        """
        config = config or self.settings_repo.get_checklist_config()
        catalog = self.settings_repo.get_integrations() if catalog is None else catalog
        return [
            {**project, "progress": self.compute_progress(project, config, catalog).model_dump()}
            for project in projects
        ]

    # =========================================================================
    # Persistence
    # =========================================================================

    def refresh_project(self, project_id: str) -> ProgressSnapshot:
        """Recompute a project's progress and store it"""
        project = self.project_repo.get_by_id_or_raise(project_id)
        snapshot = self.compute_progress(
            project,
            self.settings_repo.get_checklist_config(),
            self.settings_repo.get_integrations(),
        )
        self.project_repo.update_progress(project_id, snapshot)

        get_context_logger(__name__, project_id=project_id).info(
            f"Progress refreshed: sales={snapshot.sales_completion} "
            f"launch={snapshot.launch_completion} overall={snapshot.overall}"
        )
        return snapshot

    def refresh_all(self) -> int:
        """Recompute and store progress for every project; returns the count"""
        config = self.settings_repo.get_checklist_config()
        catalog = self.settings_repo.get_integrations()

        count = 0
        for project in self.project_repo.list_all():
            snapshot = self.compute_progress(project, config, catalog)
            self.project_repo.update_progress(project["project_id"], snapshot)
            count += 1

        logger.info(f"Refreshed progress for {count} projects")
        return count

    def save_checklist(
        self,
        project_id: str,
        kind: ChecklistKind,
        data: Dict[str, Any]
    ) -> ProgressSnapshot:
        """
        Store one checklist's values and update its percentage

        Only the saved checklist is recomputed; overall is re-averaged with
        the other checklist's stored percentage.
        """
        if not isinstance(data, dict):
            raise ValidationError("Checklist data must be an object")

        project = self.project_repo.get_by_id_or_raise(project_id)
        config = self.settings_repo.get_checklist_config()
        catalog = self.settings_repo.get_integrations() if kind == ChecklistKind.LAUNCH else []

        completion = self.aggregator.compute_checklist(
            config.fields_for(kind), data, EvaluationContext(kind=kind, catalog=catalog)
        )

        stored = project.get("progress") if isinstance(project.get("progress"), dict) else {}
        sales = completion if kind == ChecklistKind.SALES else _stored_percentage(stored.get("sales_completion"))
        launch = completion if kind == ChecklistKind.LAUNCH else _stored_percentage(stored.get("launch_completion"))
        snapshot = ProgressSnapshot(
            sales_completion=sales,
            launch_completion=launch,
            overall=combine_overall(sales, launch),
        )

        self.project_repo.update(project_id, {
            f"checklists.{kind.value}": data,
            "progress": snapshot.model_dump(),
        })

        get_context_logger(__name__, project_id=project_id, checklist=kind.value).info(
            f"Checklist saved at {completion}%"
        )
        return snapshot

    # =========================================================================
    # Reports
    # =========================================================================

    def checklist_summary(self, project_id: str, kind: ChecklistKind) -> Dict[str, Any]:
        """Verdicts, missing fields and unmet integration requirements"""
        project = self.project_repo.get_by_id_or_raise(project_id)
        config = self.settings_repo.get_checklist_config()
        checklists = project.get("checklists") if isinstance(project.get("checklists"), dict) else {}

        return self.reporter.summarize(
            config.fields_for(kind),
            checklists.get(kind.value),
            EvaluationContext(kind=kind, catalog=self.settings_repo.get_integrations()),
        )
