"""Config Service - Checklist configuration and integrations catalog"""
from typing import Any, List, Optional

from ..domain.models import ChecklistConfig, IntegrationRecord
from ..domain.errors import ConfigValidationError
from ..repositories.settings_repo import SettingsRepository
from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConfigService:
    """Service for the admin settings editor"""

    def __init__(self, settings_repo: Optional[SettingsRepository] = None):
        self.settings_repo = settings_repo or SettingsRepository()

    def get_config(self) -> ChecklistConfig:
        return self.settings_repo.get_checklist_config()

    def validate_config(self, raw: Any) -> ChecklistConfig:
        """
        Structural check of a submitted config

        Requires a version label and list-valued sales/launch entries.
        Groups with empty field lists are accepted.

        Raises:
            ConfigValidationError: If the structure or a field entry is invalid
        """
        if not isinstance(raw, dict):
            raise ConfigValidationError("Invalid config structure: expected an object")

        if not raw.get("version") or not isinstance(raw.get("sales"), list) or not isinstance(raw.get("launch"), list):
            raise ConfigValidationError(
                "Invalid config structure",
                details={"required": ["version", "sales", "launch"]}
            )

        try:
            return ChecklistConfig.model_validate(raw)
        except ValueError as e:
            raise ConfigValidationError(f"Invalid field definition: {e}")

    def save_config(self, raw: Any) -> ChecklistConfig:
        """Validate and store a config"""
        config = self.validate_config(raw)
        self.settings_repo.save_checklist_config(config)
        return config

    def get_integrations(self) -> List[IntegrationRecord]:
        return self.settings_repo.get_integrations()

    def save_integrations(self, raw: Any) -> List[IntegrationRecord]:
        """Validate and store the integrations catalog"""
        if not isinstance(raw, list):
            raise ConfigValidationError("Integrations must be an array")
        if not raw:
            raise ConfigValidationError("No integrations to save")

        try:
            integrations = [IntegrationRecord.model_validate(entry) for entry in raw]
        except ValueError as e:
            raise ConfigValidationError(f"Invalid integration entry: {e}")

        ids = [integration.id for integration in integrations]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ConfigValidationError("Duplicate integration ids", details={"ids": duplicates})

        self.settings_repo.save_integrations(integrations)
        return integrations
