"""Settings Repository - Checklist configuration and integrations catalog"""
import json
import os
from typing import Any, List, Optional
from pydantic import ValidationError as PydanticValidationError
from pymongo.collection import Collection

from .mongo_client import SETTINGS, get_collection
from ..config.defaults import DEFAULT_CHECKLIST_CONFIG
from ..config.settings import settings
from ..domain.models import ChecklistConfig, IntegrationRecord
from ..utils.time import utc_now
from ..utils.logger import get_logger

logger = get_logger(__name__)

CHECKLIST_SETTING_ID = "checklist"
INTEGRATIONS_SETTING_ID = "integrations"


class SettingsRepository:
    """Repository for the admin-edited settings documents"""

    def __init__(
        self,
        collection: Optional[Collection] = None,
        integrations_seed_path: Optional[str] = None
    ):
        self._settings: Collection = collection if collection is not None else get_collection(SETTINGS)
        self.integrations_seed_path = (
            settings.integrations_seed_path if integrations_seed_path is None else integrations_seed_path
        )

    # =========================================================================
    # Checklist configuration
    # =========================================================================

    def get_checklist_config(self) -> ChecklistConfig:
        """Stored config, or the built-in default when none is saved"""
        doc = self._settings.find_one({"setting_id": CHECKLIST_SETTING_ID})
        if not doc:
            logger.info("No checklist config stored, using default")
            return ChecklistConfig.model_validate(DEFAULT_CHECKLIST_CONFIG)

        doc.pop("_id", None)
        doc.pop("setting_id", None)
        doc.pop("updated_at", None)
        return ChecklistConfig.model_validate(doc)

    def save_checklist_config(self, config: ChecklistConfig) -> None:
        """Replace the stored checklist config"""
        doc = config.model_dump(mode="json", by_alias=True, exclude_none=True)
        doc["setting_id"] = CHECKLIST_SETTING_ID
        doc["updated_at"] = utc_now()
        self._settings.replace_one({"setting_id": CHECKLIST_SETTING_ID}, doc, upsert=True)
        logger.info(f"Saved checklist config version {config.version}")

    # =========================================================================
    # Integrations catalog
    # =========================================================================

    def get_integrations(self) -> List[IntegrationRecord]:
        """
        Stored catalog, falling back to the JSON seed file, then to empty

        A stored document with an empty or malformed list also falls back.
        """
        doc = self._settings.find_one({"setting_id": INTEGRATIONS_SETTING_ID})
        if doc:
            raw = doc.get("integrations")
            if isinstance(raw, list) and raw:
                logger.debug(f"Loaded {len(raw)} integrations from settings")
                return self._parse_integrations(raw)
            logger.warning("Integrations document exists but integrations array is empty or invalid")

        return self._load_seed_integrations()

    def save_integrations(self, integrations: List[IntegrationRecord]) -> None:
        """Replace the stored catalog"""
        self._settings.replace_one(
            {"setting_id": INTEGRATIONS_SETTING_ID},
            {
                "setting_id": INTEGRATIONS_SETTING_ID,
                "integrations": [i.model_dump(mode="json", by_alias=True) for i in integrations],
                "updated_at": utc_now(),
            },
            upsert=True,
        )
        logger.info(f"Saved {len(integrations)} integrations")

    def _load_seed_integrations(self) -> List[IntegrationRecord]:
        path = self.integrations_seed_path
        if not path or not os.path.exists(path):
            logger.warning("No integrations loaded, returning empty catalog")
            return []

        try:
            with open(path, encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading integrations seed file {path}: {e}")
            return []

        if not isinstance(raw, list):
            logger.error(f"Integrations seed file {path} does not contain a JSON array")
            return []

        logger.info(f"Loaded {len(raw)} integrations from seed file")
        return self._parse_integrations(raw)

    def _parse_integrations(self, raw: List[Any]) -> List[IntegrationRecord]:
        records: List[IntegrationRecord] = []
        for entry in raw:
            if not (isinstance(entry, dict) and entry.get("id")):
                logger.warning(f"Skipping malformed integration entry: {entry!r}")
                continue
            try:
                records.append(IntegrationRecord.model_validate(entry))
            except PydanticValidationError as e:
                logger.warning(
                    f"Skipping invalid integration entry {entry.get('id')!r}: {e.error_count()} errors",
                    extra={"action": "load_integrations"}
                )
        return records
