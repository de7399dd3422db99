"""Tests for ConfigService"""

import copy

import pytest

from handover.domain.errors import ConfigValidationError
from handover.services.config_service import ConfigService

from tests.conftest import SAMPLE_CONFIG


@pytest.fixture
def service(settings_repo):
    return ConfigService(settings_repo)


class TestValidateConfig:

    @pytest.mark.parametrize("raw", [
        None,
        [],
        {"sales": [], "launch": []},
        {"version": "1", "sales": {}, "launch": []},
        {"version": "1", "sales": []},
    ])
    def test_structure_is_required(self, service, raw):
        with pytest.raises(ConfigValidationError):
            service.validate_config(raw)

    def test_bad_field_entry_is_rejected(self, service):
        raw = {"version": "1", "sales": [{"id": "x", "type": "colour_picker"}], "launch": []}
        with pytest.raises(ConfigValidationError):
            service.validate_config(raw)

    def test_groups_with_empty_field_lists_are_accepted(self, service):
        raw = {"version": "2", "sales": [], "launch": [{"id": "g", "label": "G", "type": "group", "fields": []}]}
        assert service.validate_config(raw).launch[0].fields == []

    def test_save_replaces_the_active_config(self, service, settings_repo):
        raw = copy.deepcopy(SAMPLE_CONFIG)
        raw["version"] = "test-2"

        service.save_config(raw)

        assert settings_repo.config.version == "test-2"


class TestIntegrations:

    def test_save_integrations(self, service, settings_repo):
        saved = service.save_integrations([{"id": "A", "name": "Alpha", "requirements": None}])
        assert saved[0].requirements == []
        assert [i.id for i in settings_repo.integrations] == ["A"]

    @pytest.mark.parametrize("raw", [None, {}, []])
    def test_must_be_a_non_empty_list(self, service, raw):
        with pytest.raises(ConfigValidationError):
            service.save_integrations(raw)

    def test_duplicate_ids_are_rejected(self, service):
        with pytest.raises(ConfigValidationError) as exc:
            service.save_integrations([{"id": "A"}, {"id": "A"}])
        assert exc.value.details == {"ids": ["A"]}
