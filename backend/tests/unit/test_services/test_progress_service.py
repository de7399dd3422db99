"""Tests for ProgressService"""

import pytest

from handover.domain.enums import ChecklistKind
from handover.domain.errors import ProjectNotFoundError, ValidationError
from handover.services.progress_service import ProgressService


@pytest.fixture
def service(project_repo, settings_repo):
    return ProgressService(project_repo, settings_repo)


class TestSaveChecklist:

    def test_saving_sales_keeps_stored_launch_percentage(self, service, project_repo, make_project):
        make_project(progress={"sales_completion": 0, "launch_completion": 60, "overall": 30})

        snapshot = service.save_checklist("PRJ-test", ChecklistKind.SALES, {
            "brandName": "Acme",
            "paymentConfirmation": False,
            "designRefs": ["figma"],
        })

        assert snapshot.sales_completion == 67
        assert snapshot.launch_completion == 60
        assert snapshot.overall == 64

        stored = project_repo.docs["PRJ-test"]
        assert stored["checklists"]["sales"]["brandName"] == "Acme"
        assert stored["progress"] == snapshot.model_dump()

    def test_saving_launch_uses_the_catalog(self, service, make_project):
        make_project()
        data = {
            "firebaseAccess": True,
            "integrations": {
                "integrations": ["X"],
                "integrations_requirementStatus": {"X": {"API key": True, "Webhook": True}},
            },
            "integrationsCredentials": [{"value": "key", "version": 1}],
            "developmentItems": {"customFeatures": ["Wishlist"]},
        }

        snapshot = service.save_checklist("PRJ-test", ChecklistKind.LAUNCH, data)

        assert snapshot.launch_completion == 100
        assert snapshot.overall == 50

    def test_corrupt_stored_percentage_counts_as_zero(self, service, make_project):
        make_project(progress={"launch_completion": "n/a"})
        snapshot = service.save_checklist("PRJ-test", ChecklistKind.SALES, {})
        assert snapshot.launch_completion == 0

    def test_data_must_be_an_object(self, service, make_project):
        make_project()
        with pytest.raises(ValidationError):
            service.save_checklist("PRJ-test", ChecklistKind.SALES, ["not", "a", "dict"])

    def test_unknown_project(self, service):
        with pytest.raises(ProjectNotFoundError):
            service.save_checklist("PRJ-missing", ChecklistKind.SALES, {})


class TestRefresh:

    def test_refresh_recomputes_against_current_config(self, service, project_repo, make_project):
        make_project(
            checklists={"sales": {"brandName": "Acme", "paymentConfirmation": True, "designRefs": ["a"]}},
            progress={"sales_completion": 10, "launch_completion": 10, "overall": 10},
        )

        snapshot = service.refresh_project("PRJ-test")

        assert snapshot.model_dump() == {"sales_completion": 100, "launch_completion": 0, "overall": 50}
        assert project_repo.docs["PRJ-test"]["progress"] == snapshot.model_dump()

    def test_refresh_all_counts_projects(self, service, make_project):
        make_project("PRJ-a")
        make_project("PRJ-b")
        assert service.refresh_all() == 2

    def test_with_progress_does_not_write(self, service, project_repo, make_project):
        make_project(progress={"sales_completion": 99, "launch_completion": 99, "overall": 99})

        listed = service.with_progress(project_repo.list_all())

        assert listed[0]["progress"]["overall"] == 0
        assert project_repo.docs["PRJ-test"]["progress"]["overall"] == 99
        assert project_repo.writes == []


class TestChecklistSummary:

    def test_summary_for_stored_checklist(self, service, make_project):
        make_project(checklists={"sales": {"brandName": "Acme"}, "launch": {}})

        summary = service.checklist_summary("PRJ-test", ChecklistKind.SALES)

        assert summary["completion"] == 33
        assert summary["missing"] == ["paymentConfirmation", "designRefs"]
