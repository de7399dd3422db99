"""Field Flattener - Expand group fields into addressable leaf fields"""
from typing import Any, Iterable, List, Optional, Union

from ..domain.models import FieldSchema, FlattenedField
from ..utils.logger import get_logger

logger = get_logger(__name__)


class FieldFlattener:
    """
    Walk a checklist schema and produce its leaf fields in declaration order.

    Groups are replaced in place by their sub-fields (tagged with the group
    id); the group itself is never emitted. Only one nesting level is
    expanded.
    """

    def flatten(
        self,
        schema_list: Optional[Iterable[Union[FieldSchema, dict]]]
    ) -> List[FlattenedField]:
        """
        Flatten a top-level schema list

        Args:
            schema_list: Top-level field schemas (models or raw dicts)

        Returns:
            Leaf fields, depth-first in schema order
        """
        flattened: List[FlattenedField] = []

        for raw in schema_list or []:
            field = self._as_schema(raw)

            if field.is_group:
                for sub_field in field.fields or []:
                    flattened.append(
                        FlattenedField(
                            field=sub_field,
                            is_sub_field=True,
                            group_id=field.id,
                            group_label=field.label,
                        )
                    )
            else:
                flattened.append(FlattenedField(field=field))

        return flattened

    def _as_schema(self, raw: Any) -> FieldSchema:
        if isinstance(raw, FieldSchema):
            return raw
        return FieldSchema.model_validate(raw)


def flatten_fields(schema_list: Optional[Iterable[Union[FieldSchema, dict]]]) -> List[FlattenedField]:
    """Module-level shortcut for FieldFlattener().flatten"""
    return FieldFlattener().flatten(schema_list)
