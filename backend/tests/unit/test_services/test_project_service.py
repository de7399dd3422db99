"""Tests for ProjectService"""

from unittest.mock import patch

import pytest

from handover.domain.enums import ChecklistKind, ProjectStatus, PublishingStatus
from handover.domain.errors import ProjectNotFoundError, ValidationError
from handover.services.project_service import ProjectService


@pytest.fixture
def service(project_repo, settings_repo):
    return ProjectService(project_repo, settings_repo)


class TestCreate:

    def test_new_project_starts_at_version_one(self, service, project_repo):
        doc = service.create_project({"brand_name": "Acme", "handover_date": "2026-03-05T10:00:00"})

        stored = project_repo.docs[doc["project_id"]]
        assert doc["project_id"].startswith("PRJ-")
        assert stored["version"] == 1
        assert stored["version_history"] == [1]
        assert stored["handover_date"] == "2026-03-05"
        assert stored["status"] == "Not Started"

    def test_invalid_data(self, service):
        with pytest.raises(ValidationError):
            service.create_project({"brand_name": "Acme", "release_type": "sideways"})

    def test_invalid_handover_date(self, service):
        with pytest.raises(ValidationError):
            service.create_project({"brand_name": "Acme", "handover_date": "not a date"})


class TestReads:

    def test_get_project_recomputes_progress(self, service, make_project):
        make_project(
            checklists={"sales": {"brandName": "A", "paymentConfirmation": True, "designRefs": ["x"]}},
            progress={"sales_completion": 0, "launch_completion": 0, "overall": 0},
        )
        assert service.get_project("PRJ-test")["progress"]["sales_completion"] == 100

    def test_list_filters_by_status(self, service, make_project):
        make_project("PRJ-a", status="In Progress")
        make_project("PRJ-b", status="Completed")

        listed = service.list_projects(status=ProjectStatus.COMPLETED)

        assert [p["project_id"] for p in listed] == ["PRJ-b"]

    def test_launch_checklist_is_seeded_from_sales(self, service, project_repo, make_project):
        make_project(checklists={"sales": {"integrations": {"integrations": ["X"]}}, "launch": {}})

        data = service.get_checklist_data("PRJ-test", ChecklistKind.LAUNCH)

        assert data["integrations"]["integrations"] == ["X"]
        assert project_repo.docs["PRJ-test"]["checklists"]["launch"] == {}

    def test_missing_project(self, service):
        with pytest.raises(ProjectNotFoundError):
            service.get_project("PRJ-missing")


class TestUpdates:

    def test_going_live_stamps_completion_date(self, service, project_repo, make_project):
        make_project()

        with patch("handover.services.project_service.today_iso", return_value="2026-10-17"):
            service.update_status("PRJ-test", publishing_status=PublishingStatus.LIVE)

        assert project_repo.docs["PRJ-test"]["publishing_status"] == "Live"
        assert project_repo.docs["PRJ-test"]["completion_date"] == "2026-10-17"

    def test_existing_completion_date_is_kept(self, service, project_repo, make_project):
        make_project(completion_date="2026-01-01")
        service.update_status("PRJ-test", publishing_status=PublishingStatus.LIVE)
        assert project_repo.docs["PRJ-test"]["completion_date"] == "2026-01-01"

    def test_status_update_needs_a_value(self, service, make_project):
        make_project()
        with pytest.raises(ValidationError):
            service.update_status("PRJ-test")

    def test_dates_are_normalized_and_cleared(self, service, project_repo, make_project):
        make_project(completion_date="2026-01-01")

        service.update_dates("PRJ-test", {"handover_date": "March 5 2026", "completion_date": ""})

        assert project_repo.docs["PRJ-test"]["handover_date"] == "2026-03-05"
        assert project_repo.docs["PRJ-test"]["completion_date"] is None

    def test_invalid_date(self, service, make_project):
        make_project()
        with pytest.raises(ValidationError):
            service.update_dates("PRJ-test", {"handover_date": "someday"})

    def test_update_details_rejects_other_fields(self, service, make_project):
        make_project()
        with pytest.raises(ValidationError):
            service.update_details("PRJ-test", {"version": 9})

    def test_update_details(self, service, project_repo, make_project):
        make_project()
        service.update_details("PRJ-test", {"brand_name": "Acme Co", "poc": {"name": "Sam"}})
        assert project_repo.docs["PRJ-test"]["brand_name"] == "Acme Co"
        assert project_repo.docs["PRJ-test"]["poc"]["name"] == "Sam"

    def test_update_details_ignores_stale_unrelated_keys(self, service, project_repo, make_project):
        make_project(progress={"sales_completion": 120, "launch_completion": 0, "overall": 60})

        service.update_details("PRJ-test", {"brand_name": "Acme Co"})

        assert project_repo.docs["PRJ-test"]["brand_name"] == "Acme Co"
        assert project_repo.docs["PRJ-test"]["progress"]["sales_completion"] == 120

    def test_update_details_validates_edited_values(self, service, make_project):
        make_project()
        with pytest.raises(ValidationError):
            service.update_details("PRJ-test", {"brand_name": ""})
        with pytest.raises(ValidationError):
            service.update_details("PRJ-test", {"release_type": "someday"})

    def test_delete(self, service, project_repo, make_project):
        make_project()
        service.delete_project("PRJ-test")
        assert "PRJ-test" not in project_repo.docs
