"""Checklist Report - Structured verdicts for report, export and email consumers"""
from typing import Any, Dict, Iterable, List, Optional

from ..domain.models import EvaluationContext, FieldSchema, FieldVerdict
from .field_flattener import FieldFlattener
from .progress_aggregator import ProgressAggregator, percentage
from .value_access import get_field_value, read_field_meta


class ChecklistReporter:
    """Per-field verdicts and what is still missing from a checklist"""

    def __init__(self, aggregator: Optional[ProgressAggregator] = None):
        self.aggregator = aggregator or ProgressAggregator()
        self.flattener: FieldFlattener = self.aggregator.flattener

    def verdicts(
        self,
        schema_list: Iterable[FieldSchema],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> List[FieldVerdict]:
        return self.aggregator.evaluate(self.flattener.flatten(schema_list), checklist, context)

    def missing_fields(
        self,
        schema_list: Iterable[FieldSchema],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> List[FieldVerdict]:
        """Required, relevant fields that are not complete"""
        return [v for v in self.verdicts(schema_list, checklist, context) if v.missing]

    def unmet_integration_requirements(
        self,
        schema_list: Iterable[FieldSchema],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> Dict[str, Dict[str, List[str]]]:
        """Unchecked requirements per integration-backed field path"""
        gate = self.aggregator.evaluator.gate
        unmet: Dict[str, Dict[str, List[str]]] = {}

        for field in self.flattener.flatten(schema_list):
            if not field.field.uses_integrations:
                continue
            meta = read_field_meta(checklist, field)
            if meta.not_relevant:
                continue
            missing = gate.unmet_requirements(
                get_field_value(checklist, field), meta.requirement_status, context.catalog_by_id
            )
            if missing:
                unmet[field.path] = missing

        return unmet

    def summarize(
        self,
        schema_list: Iterable[FieldSchema],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> Dict[str, Any]:
        """Counts, percentage and verdict list in one payload"""
        schema_list = list(schema_list)
        verdicts = self.verdicts(schema_list, checklist, context)
        counted = [v for v in verdicts if v.counted]
        completed = sum(1 for v in counted if v.complete)
        return {
            "checklist": context.kind.value,
            "completion": percentage(completed, len(counted)),
            "completed_fields": completed,
            "required_fields": len(counted),
            "verdicts": [v.model_dump(mode="json") for v in verdicts],
            "missing": [v.field_id if not v.group_id else f"{v.group_id}.{v.field_id}" for v in verdicts if v.missing],
            "unmet_requirements": self.unmet_integration_requirements(schema_list, checklist, context),
        }
