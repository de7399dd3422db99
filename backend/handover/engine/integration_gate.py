"""Integration Requirement Gate - Check off integration requirement lists"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..domain.models import IntegrationRecord
from ..utils.logger import get_logger

logger = get_logger(__name__)

Catalog = Union[Iterable[IntegrationRecord], Mapping[str, IntegrationRecord]]


class IntegrationRequirementGate:
    """
    Decide whether selected integrations have every requirement checked

    Unknown integration ids are skipped: catalog entries can be removed
    after a project selected them. An integration declaring no requirements
    is satisfied as soon as it is selected.
    """

    def satisfies_requirements(
        self,
        selected_ids: Any,
        requirement_status_map: Optional[Mapping[str, Mapping[str, bool]]],
        catalog: Catalog
    ) -> bool:
        """
        Check the gate for a selection

        Args:
            selected_ids: Selected integration ids (anything but a non-empty list fails)
            requirement_status_map: {integration_id: {requirement: checked}}
            catalog: Integration records, as a list or keyed by id

        Returns:
            True if every known selected integration has all requirements checked
        """
        if not isinstance(selected_ids, list) or not selected_ids:
            return False

        return not self.unmet_requirements(selected_ids, requirement_status_map, catalog)

    def unmet_requirements(
        self,
        selected_ids: Any,
        requirement_status_map: Optional[Mapping[str, Mapping[str, bool]]],
        catalog: Catalog
    ) -> Dict[str, List[str]]:
        """Requirements still unchecked, keyed by integration id"""
        if not isinstance(selected_ids, list):
            return {}

        index = self._index(catalog)
        status_map = requirement_status_map or {}
        unmet: Dict[str, List[str]] = {}

        for integration_id in selected_ids:
            if not isinstance(integration_id, str):
                continue
            integration = index.get(integration_id)
            if integration is None:
                logger.debug(f"Integration {integration_id} not in catalog, skipping requirement check")
                continue

            checks = status_map.get(integration_id) or {}
            missing = [req for req in integration.requirements if checks.get(req) is not True]
            if missing:
                unmet[integration_id] = missing

        return unmet

    def _index(self, catalog: Catalog) -> Mapping[str, IntegrationRecord]:
        if isinstance(catalog, Mapping):
            return catalog
        return {integration.id: integration for integration in catalog or []}
