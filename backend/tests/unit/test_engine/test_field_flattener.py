"""Tests for the field flattener"""

import pytest

from handover.domain.models import FieldSchema, FlattenedField
from handover.engine.field_flattener import FieldFlattener, flatten_fields


class TestFlattenOrder:
    """Groups expand in place, in declaration order"""

    def test_group_sub_fields_replace_the_group(self):
        schema = [
            {"id": "A", "label": "A", "type": "text"},
            {"id": "G", "label": "Group", "type": "group", "fields": [
                {"id": "B", "label": "B", "type": "text"},
                {"id": "C", "label": "C", "type": "checkbox"},
            ]},
            {"id": "D", "label": "D", "type": "checkbox"},
        ]

        flattened = FieldFlattener().flatten(schema)

        assert [f.id for f in flattened] == ["A", "B", "C", "D"]
        assert [f.is_sub_field for f in flattened] == [False, True, True, False]
        assert flattened[1].group_id == "G"
        assert flattened[1].group_label == "Group"
        assert flattened[0].group_id is None

    def test_paths_address_values_inside_groups(self):
        schema = [{"id": "G", "label": "G", "type": "group", "fields": [
            {"id": "B", "label": "B", "type": "text"},
        ]}]
        assert [f.path for f in flatten_fields(schema)] == ["G.B"]

    def test_empty_group_contributes_nothing(self):
        schema = [
            {"id": "G", "label": "G", "type": "group", "fields": []},
            {"id": "H", "label": "H", "type": "group"},
            {"id": "A", "label": "A", "type": "text"},
        ]
        assert [f.id for f in flatten_fields(schema)] == ["A"]

    def test_none_and_empty_schemas(self):
        assert flatten_fields(None) == []
        assert flatten_fields([]) == []

    def test_accepts_models_and_dicts(self):
        model = FieldSchema(id="A", label="A", type="text")
        flattened = flatten_fields([model, {"id": "B", "label": "B", "type": "url"}])
        assert [f.id for f in flattened] == ["A", "B"]

    def test_nested_group_is_not_expanded(self):
        schema = [{"id": "G", "label": "G", "type": "group", "fields": [
            {"id": "Inner", "label": "Inner", "type": "group", "fields": [
                {"id": "deep", "label": "Deep", "type": "text"},
            ]},
        ]}]
        flattened = flatten_fields(schema)
        assert [f.id for f in flattened] == ["Inner"]
        assert flattened[0].group_id == "G"


class TestRequiredDefault:
    """required wins over optional; neither set means mandatory"""

    @pytest.mark.parametrize("flags,expected", [
        ({}, True),
        ({"optional": True}, False),
        ({"optional": False}, True),
        ({"required": True, "optional": True}, True),
        ({"required": False}, True),
    ])
    def test_is_required(self, flags, expected):
        field = FieldSchema(id="f", label="F", type="text", **flags)
        assert field.is_required is expected

    def test_sub_field_flag_is_tracked_with_group(self):
        with pytest.raises(ValueError):
            FlattenedField(field=FieldSchema(id="f", type="text"), is_sub_field=True)
