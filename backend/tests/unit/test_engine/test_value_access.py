"""Tests for value coercion and sibling metadata"""

import pytest

from handover.domain.models import FieldSchema, FlattenedField
from handover.engine.value_access import (
    coerce_version, effective_value, effective_version, find_value_by_id,
    normalize_versioned_entries, read_field_meta, seed_launch_integrations,
)


@pytest.mark.parametrize("raw,expected", [
    (3, 3),
    (3.0, 3),
    (" 4 ", 4),
    (0, None),
    (-2, None),
    (2.5, None),
    (True, None),
    ("v2", None),
    (None, None),
])
def test_coerce_version(raw, expected):
    assert coerce_version(raw) == expected


class TestEffectiveValues:

    def test_plain_and_object_entries(self):
        assert effective_value("a") == "a"
        assert effective_value({"value": "b", "version": 2}) == "b"
        assert effective_value({"version": 2}) == ""
        assert effective_value(None) == ""

    def test_effective_version_defaults_to_one(self):
        assert effective_version("legacy") == 1
        assert effective_version({"value": "x"}) == 1
        assert effective_version({"value": "x", "version": 3}) == 3


class TestNormalizeVersionedEntries:

    def test_every_stored_shape(self):
        assert normalize_versioned_entries(None) == []
        assert normalize_versioned_entries("") == []

        single = normalize_versioned_entries("note")
        assert [(e.value, e.version) for e in single] == [("note", 1)]

        mixed = normalize_versioned_entries([
            "old",
            {"value": "new", "version": 2, "status": "Done", "remark": 5, "unexpected": "kept out"},
            12,
        ])
        assert [(e.value, e.version) for e in mixed] == [("old", 1), ("new", 2)]
        assert mixed[1].status == "Done"
        assert mixed[1].remark is None

    def test_default_version_for_untagged_entries(self):
        entries = normalize_versioned_entries({"value": "x"}, default_version=3)
        assert entries[0].version == 3


class TestFieldMeta:

    def test_meta_read_from_sibling_keys(self):
        field = FlattenedField(
            field=FieldSchema(id="integrations", type="multi_select", optionsSource="integrations"),
            is_sub_field=True,
            group_id="integrations",
        )
        checklist = {
            "integrations": {
                "integrations": ["X"],
                "integrations_requirementStatus": {"X": {"API key": True, "Webhook": "yes"}, "bad": []},
                "integrations_statuses": {"X": "Live", "Y": 3},
                "integrations_versions": {"X": "2", "Y": "nope"},
            }
        }

        meta = read_field_meta(checklist, field)

        assert meta.not_relevant is False
        assert meta.requirement_status == {"X": {"API key": True, "Webhook": False}}
        assert meta.statuses_by_id == {"X": "Live"}
        assert meta.versions_by_id == {"X": 2}

    def test_missing_checklist_gives_empty_meta(self):
        field = FlattenedField(field=FieldSchema(id="f", type="text"))
        meta = read_field_meta(None, field)
        assert meta.not_relevant is False
        assert meta.requirement_status == {}


class TestLookups:

    def test_find_value_by_id_looks_inside_groups(self, sample_config):
        launch = {"firebaseAccess": True, "developmentItems": {"customFeatures": ["Wishlist"]}}
        assert find_value_by_id(launch, sample_config.launch, "firebaseAccess") is True
        assert find_value_by_id(launch, sample_config.launch, "customFeatures") == ["Wishlist"]
        assert find_value_by_id(launch, sample_config.launch, "changeRequests") is None

    def test_launch_integrations_seeded_from_sales(self):
        sales = {"integrations": {"integrations": ["X", "Y"]}}
        launch = {"integrations": {"integrations_versions": {"X": 2}}}

        seeded = seed_launch_integrations(sales, launch)

        assert seeded["integrations"] == {"integrations": ["X", "Y"], "integrations_versions": {"X": 2}}
        assert launch == {"integrations": {"integrations_versions": {"X": 2}}}

    def test_existing_launch_selection_is_kept(self):
        sales = {"integrations": {"integrations": ["X", "Y"]}}
        launch = {"integrations": {"integrations": ["Z"]}}
        assert seed_launch_integrations(sales, launch)["integrations"]["integrations"] == ["Z"]

    def test_nothing_to_seed(self):
        assert seed_launch_integrations({}, None) == {}
