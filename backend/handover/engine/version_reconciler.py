"""
Version History Reconciler - Canonical version lists for projects

A project carries a current version pointer and a stored version history.
Items in the launch checklist (features, change requests, credentials,
comments, integration selections) are tagged with the version they belong
to; untagged legacy entries belong to version 1.

The history is backfilled from item tags only when it is missing. Once a
history is stored it is trusted and only gap-filled up to the current
version; item tags are not rescanned.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from ..domain.enums import PublishingStatus
from ..domain.errors import EngineContractError
from ..domain.models import ReconciliationResult, VersionDeletionResult
from .value_access import LEGACY_VERSION, coerce_version, effective_version, VERSIONS_SUFFIX
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Launch checklist locations holding version-tagged lists
DIRECT_VERSIONED_FIELDS: Tuple[str, ...] = (
    "integrationsCredentials",
    "customFeatures",
    "changeRequests",
)
GROUPED_VERSIONED_FIELDS: Dict[str, Tuple[str, ...]] = {
    "developmentItems": ("customFeatures", "changeRequests"),
    "integrations": ("integrations",),
    "additionalInformation": ("devComments", "externalCommunications", "remarks"),
}
# Integration selections are flat id lists; their versions live in a side map
INTEGRATION_SELECTIONS: Tuple[Tuple[str, str], ...] = (
    ("integrations", "integrations"),
)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


class VersionHistoryReconciler:
    """Reconcile, filter, extend and shrink project version histories"""

    def __init__(self, default_version: int = LEGACY_VERSION):
        self.default_version = default_version

    # =========================================================================
    # Reading project state
    # =========================================================================

    def current_version(self, project: Mapping[str, Any]) -> int:
        """Current version pointer, defaulting to 1"""
        return coerce_version(project.get("version")) or self.default_version

    def stored_history(self, project: Mapping[str, Any]) -> List[int]:
        """Usable entries of the stored history (may be empty)"""
        versions = (coerce_version(v) for v in _as_list(project.get("version_history")))
        return sorted({v for v in versions if v is not None})

    def collect_observed_versions(self, launch_checklist: Optional[Mapping[str, Any]]) -> Set[int]:
        """Every version tag found in the known versioned launch locations"""
        launch = _as_dict(launch_checklist)
        observed: Set[int] = set()

        def scan(items: Any) -> None:
            for item in _as_list(items):
                if isinstance(item, dict):
                    version = coerce_version(item.get("version"))
                    if version is not None:
                        observed.add(version)

        for field_id in DIRECT_VERSIONED_FIELDS:
            scan(launch.get(field_id))

        for group_id, field_ids in GROUPED_VERSIONED_FIELDS.items():
            group = _as_dict(launch.get(group_id))
            for field_id in field_ids:
                scan(group.get(field_id))

        for group_id, field_id in INTEGRATION_SELECTIONS:
            versions_map = _as_dict(_as_dict(launch.get(group_id)).get(f"{field_id}{VERSIONS_SUFFIX}"))
            for raw in versions_map.values():
                version = coerce_version(raw)
                if version is not None:
                    observed.add(version)

        return observed

    # =========================================================================
    # Reconciliation
    # =========================================================================

    def reconcile(self, project: Optional[Mapping[str, Any]]) -> ReconciliationResult:
        """
        Canonical sorted version list for a project

        Without a stored history the list is rebuilt from item tags and
        flagged backfilled so the caller can persist it. The backfill also
        includes every version from 1 to current, so a second call over the
        persisted list returns the same result. With a stored history,
        1..current is merged in and item tags are not read.
        """
        if project is None:
            raise EngineContractError("reconcile() requires a project document")

        current = self.current_version(project)
        baseline = set(range(1, current + 1))
        stored = self.stored_history(project)

        if stored:
            return ReconciliationResult(versions=sorted(baseline.union(stored)))

        launch = _as_dict(_as_dict(project.get("checklists")).get("launch"))
        observed = self.collect_observed_versions(launch)
        versions = sorted(baseline | observed)
        logger.info(
            f"Backfilled version history {versions} from item data",
            extra={"project_id": project.get("project_id"), "version": current}
        )
        return ReconciliationResult(versions=versions, backfilled=True, observed=sorted(observed))

    # =========================================================================
    # Filtering
    # =========================================================================

    def filter_by_version(self, items: Any, target_version: int) -> List[Any]:
        """Entries of a versioned list that belong to target_version"""
        return [
            item for item in _as_list(items)
            if isinstance(item, (str, dict)) and effective_version(item) == target_version
        ]

    def filter_integrations_by_version(
        self,
        integration_ids: Any,
        versions_by_id: Optional[Mapping[str, Any]],
        target_version: int
    ) -> List[str]:
        """Selected integration ids whose side-map version equals target_version"""
        versions_by_id = versions_by_id or {}
        return [
            integration_id for integration_id in _as_list(integration_ids)
            if isinstance(integration_id, str)
            and (coerce_version(versions_by_id.get(integration_id)) or LEGACY_VERSION) == target_version
        ]

    # =========================================================================
    # Mutations (pure: return the new history)
    # =========================================================================

    def advance_version(self, history: Iterable[Any], new_version: int) -> List[int]:
        """History extended with every version up to and including new_version"""
        target = coerce_version(new_version)
        if target is None:
            raise EngineContractError(f"Version must be a positive integer, got {new_version!r}")

        kept = {v for v in (coerce_version(raw) for raw in history or []) if v is not None}
        return sorted(kept | set(range(1, target + 1)))

    def delete_version(
        self,
        history: Iterable[Any],
        version: int,
        current_version: int
    ) -> VersionDeletionResult:
        """
        Remove a version from the history

        The current version cannot be removed; emptying the history puts
        version 1 back.
        """
        versions = sorted({v for v in (coerce_version(raw) for raw in history or []) if v is not None})

        if version == current_version:
            return VersionDeletionResult(
                deleted=False,
                versions=versions,
                reason=(
                    f"Version {version} is the current version. "
                    "Switch to a different version before removing it."
                ),
            )

        if version not in versions:
            return VersionDeletionResult(
                deleted=False,
                versions=versions,
                reason=f"Version {version} is not in the version history.",
            )

        remaining = [v for v in versions if v != version]
        if not remaining:
            remaining = [LEGACY_VERSION]
        return VersionDeletionResult(deleted=True, versions=remaining)

    def next_version(
        self,
        available_versions: Iterable[int],
        publishing_status: Optional[str]
    ) -> Optional[int]:
        """
        Version a Live project may advance to

        Returns max(available)+1, or None when the project is not Live.
        """
        if publishing_status != PublishingStatus.LIVE.value:
            return None
        versions = list(available_versions)
        return (max(versions) if versions else self.default_version) + 1
