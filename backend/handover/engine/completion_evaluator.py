"""Completion Evaluator - Per-field completion verdicts"""
from typing import Any, Dict, Optional

from ..domain.enums import FieldType
from ..domain.models import EvaluationContext, FieldMeta, FieldVerdict, FlattenedField
from ..domain.errors import EngineContractError
from .integration_gate import IntegrationRequirementGate
from .value_access import effective_value, get_field_value, has_text, read_field_meta
from ..utils.logger import get_logger

logger = get_logger(__name__)


class CompletionEvaluator:
    """
    Decide whether a single leaf field is complete

    Rules by type:
        checkbox      value is True
        multi_input   non-empty list; on the launch checklist every entry
                      must also be non-blank
        multi_select  non-empty list; integration-backed fields on the
                      launch checklist go through the requirement gate
        select/text/textarea/url
                      non-blank text

    Missing or oddly shaped values are incomplete, never an error.
    """

    def __init__(self, gate: Optional[IntegrationRequirementGate] = None):
        self.gate = gate or IntegrationRequirementGate()

    def is_complete(
        self,
        field: FlattenedField,
        value: Any,
        context: EvaluationContext,
        meta: Optional[FieldMeta] = None
    ) -> bool:
        """
        Evaluate one field

        Args:
            field: Flattened leaf field
            value: Stored value (None when absent)
            context: Checklist kind and integration catalog
            meta: Sibling-key metadata; only read for integration fields

        Returns:
            True if the field counts as filled in
        """
        if field is None:
            raise EngineContractError("is_complete() requires a field")

        field_type = field.type

        if field_type == FieldType.CHECKBOX:
            return value is True

        if value is None or value == "":
            return False

        if field_type == FieldType.MULTI_INPUT:
            return self._multi_input_complete(value, context)

        if field_type == FieldType.MULTI_SELECT:
            if field.field.uses_integrations and context.is_launch:
                requirement_status = meta.requirement_status if meta else {}
                return self.gate.satisfies_requirements(value, requirement_status, context.catalog_by_id)
            return isinstance(value, list) and len(value) > 0

        if field_type == FieldType.GROUP:
            # Only reachable for a group nested inside a group, which is not expanded
            logger.debug(f"Nested group {field.path} evaluated as a single value")
            return isinstance(value, dict) and len(value) > 0

        return has_text(value)

    def verdict(
        self,
        field: FlattenedField,
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> FieldVerdict:
        """Read a field's value and metadata from a checklist and evaluate it"""
        meta = read_field_meta(checklist, field)
        value = get_field_value(checklist, field)
        return FieldVerdict(
            field_id=field.id,
            label=field.label,
            type=field.type,
            group_id=field.group_id,
            group_label=field.group_label,
            required=field.is_required,
            not_relevant=meta.not_relevant,
            complete=self.is_complete(field, value, context, meta),
        )

    def _multi_input_complete(self, value: Any, context: EvaluationContext) -> bool:
        if not isinstance(value, list) or not value:
            return False
        if not context.is_launch:
            return True
        return all(effective_value(item).strip() for item in value)
