"""
Pytest Configuration and Fixtures

Shared fixtures: a small checklist config, an integrations catalog, and
in-memory stand-ins for the Mongo repositories so services and routes can
be tested without a database.
"""

import copy
from typing import Any, Dict, List, Optional

import pytest

from handover.domain.models import (
    ChecklistConfig, IntegrationRecord, ProgressSnapshot, Project
)
from handover.domain.errors import AlreadyExistsError, ProjectNotFoundError
from handover.utils.time import utc_now


# ============================================================================
# In-memory repositories
# ============================================================================

class InMemoryProjectRepository:
    """Same interface as ProjectRepository, backed by a dict"""

    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}
        self.fail_writes = False
        self.writes: List[Dict[str, Any]] = []

    def create(self, project: Project) -> Dict[str, Any]:
        if project.project_id in self.docs:
            raise AlreadyExistsError(f"Project {project.project_id} already exists")
        doc = project.model_dump(mode="json")
        doc["created_at"] = project.created_at
        doc["updated_at"] = project.updated_at
        self.docs[project.project_id] = doc
        return copy.deepcopy(doc)

    def insert_raw(self, doc: Dict[str, Any]) -> None:
        """Store a document as-is (legacy shapes included)"""
        self.docs[doc["project_id"]] = copy.deepcopy(doc)

    def get_by_id(self, project_id: str) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(project_id)
        return copy.deepcopy(doc) if doc else None

    def get_by_id_or_raise(self, project_id: str) -> Dict[str, Any]:
        doc = self.get_by_id(project_id)
        if not doc:
            raise ProjectNotFoundError.for_project(project_id)
        return doc

    def list_all(self) -> List[Dict[str, Any]]:
        return [copy.deepcopy(d) for d in self.docs.values()]

    def update(self, project_id: str, updates: Dict[str, Any]) -> bool:
        if self.fail_writes:
            raise RuntimeError("store unavailable")
        if project_id not in self.docs:
            raise ProjectNotFoundError.for_project(project_id)

        doc = self.docs[project_id]
        for key, value in {**updates, "updated_at": utc_now()}.items():
            target = doc
            parts = key.split(".")
            for part in parts[:-1]:
                target = target.setdefault(part, {})
            target[parts[-1]] = copy.deepcopy(value)
        self.writes.append(copy.deepcopy(updates))
        return True

    def delete(self, project_id: str) -> bool:
        return self.docs.pop(project_id, None) is not None

    def update_progress(self, project_id: str, progress: ProgressSnapshot) -> bool:
        return self.update(project_id, {"progress": progress.model_dump()})

    def update_version_state(
        self,
        project_id: str,
        version_history: List[int],
        version: Optional[int] = None
    ) -> bool:
        updates: Dict[str, Any] = {"version_history": list(version_history)}
        if version is not None:
            updates["version"] = version
        return self.update(project_id, updates)


class InMemorySettingsRepository:
    """Same interface as SettingsRepository"""

    def __init__(self, config: ChecklistConfig, integrations: List[IntegrationRecord]):
        self.config = config
        self.integrations = list(integrations)

    def get_checklist_config(self) -> ChecklistConfig:
        return self.config

    def save_checklist_config(self, config: ChecklistConfig) -> None:
        self.config = config

    def get_integrations(self) -> List[IntegrationRecord]:
        return list(self.integrations)

    def save_integrations(self, integrations: List[IntegrationRecord]) -> None:
        self.integrations = list(integrations)


# ============================================================================
# Config and catalog
# ============================================================================

SAMPLE_CONFIG = {
    "version": "test-1",
    "sales": [
        {"id": "brandName", "label": "Brand name", "type": "text"},
        {"id": "paymentConfirmation", "label": "Payment confirmation", "type": "checkbox"},
        {"id": "designRefs", "label": "Design references", "type": "multi_input"},
        {"id": "themeType", "label": "Theme", "type": "select", "options": ["Custom", "Standard"],
         "optional": True},
    ],
    "launch": [
        {"id": "firebaseAccess", "label": "Firebase access", "type": "checkbox"},
        {
            "id": "integrations",
            "label": "Integrations",
            "type": "group",
            "fields": [
                {"id": "integrations", "label": "Integrations", "type": "multi_select",
                 "optionsSource": "integrations", "hasStatus": True, "hasVersion": True},
            ],
        },
        {"id": "integrationsCredentials", "label": "Credentials", "type": "multi_input",
         "hasVersion": True},
        {
            "id": "developmentItems",
            "label": "Development Items",
            "type": "group",
            "fields": [
                {"id": "customFeatures", "label": "Custom Features", "type": "multi_input",
                 "hasVersion": True},
                {"id": "changeRequests", "label": "Change Requests", "type": "multi_input",
                 "hasVersion": True, "optional": True},
            ],
        },
    ],
}

SAMPLE_CATALOG = [
    {"id": "X", "name": "Klaviyo", "requirements": ["API key", "Webhook"]},
    {"id": "Y", "name": "Analytics", "requirements": []},
    {"id": "Z", "name": "Reviews", "requirements": ["Token"]},
]


@pytest.fixture
def sample_config() -> ChecklistConfig:
    return ChecklistConfig.model_validate(copy.deepcopy(SAMPLE_CONFIG))


@pytest.fixture
def catalog() -> List[IntegrationRecord]:
    return [IntegrationRecord.model_validate(entry) for entry in SAMPLE_CATALOG]


@pytest.fixture
def project_repo() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def settings_repo(sample_config, catalog) -> InMemorySettingsRepository:
    return InMemorySettingsRepository(sample_config, catalog)


@pytest.fixture
def make_project(project_repo):
    """Insert a raw project document and return it"""

    def _make(project_id: str = "PRJ-test", **fields: Any) -> Dict[str, Any]:
        now = utc_now()
        doc = {
            "project_id": project_id,
            "brand_name": "Acme",
            "status": "Not Started",
            "publishing_status": "Pending",
            "version": 1,
            "version_history": [1],
            "checklists": {"sales": {}, "launch": {}},
            "progress": {"sales_completion": 0, "launch_completion": 0, "overall": 0},
            "created_at": now,
            "updated_at": now,
        }
        doc.update(fields)
        project_repo.insert_raw(doc)
        return doc

    return _make
