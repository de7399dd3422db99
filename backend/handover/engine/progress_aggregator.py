"""Progress Aggregator - Completion percentages for checklists and projects"""
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..domain.enums import ChecklistKind, ProgressBand
from ..domain.errors import EngineContractError
from ..domain.models import (
    ChecklistConfig, EvaluationContext, FieldSchema, FieldVerdict, FlattenedField,
    IntegrationRecord, ProgressSnapshot
)
from .completion_evaluator import CompletionEvaluator
from .field_flattener import FieldFlattener


def percentage(numerator: int, denominator: int) -> int:
    """100 * numerator / denominator rounded half up; 0 for an empty denominator"""
    if denominator <= 0:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def combine_overall(sales_completion: int, launch_completion: int) -> int:
    """Unweighted mean of the two checklist percentages, rounded half up"""
    return (sales_completion + launch_completion + 1) // 2


def progress_band(value: int) -> ProgressBand:
    """Dashboard colour band for a percentage"""
    if value >= 67:
        return ProgressBand.HIGH
    if value >= 34:
        return ProgressBand.MEDIUM
    return ProgressBand.LOW


class ProgressAggregator:
    """
    Turn per-field verdicts into percentages

    Only required fields that are not flagged not-relevant are counted;
    not-relevant fields leave both numerator and denominator. Pure: the
    caller persists the result.
    """

    def __init__(
        self,
        evaluator: Optional[CompletionEvaluator] = None,
        flattener: Optional[FieldFlattener] = None
    ):
        self.evaluator = evaluator or CompletionEvaluator()
        self.flattener = flattener or FieldFlattener()

    def evaluate(
        self,
        flattened_fields: Sequence[FlattenedField],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> List[FieldVerdict]:
        """Verdict for every flattened field, in order"""
        if flattened_fields is None:
            raise EngineContractError("Flattened field list is required")
        return [self.evaluator.verdict(field, checklist, context) for field in flattened_fields]

    def compute_completion(
        self,
        flattened_fields: Sequence[FlattenedField],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> int:
        """
        Completion percentage of one checklist

        Args:
            flattened_fields: Leaf fields from the flattener
            checklist: Value bag (None is treated as empty)
            context: Checklist kind and integration catalog

        Returns:
            Integer percentage 0-100

        Raises:
            EngineContractError: flattened_fields is None
        """
        counted = [v for v in self.evaluate(flattened_fields, checklist, context) if v.counted]
        completed = sum(1 for v in counted if v.complete)
        return percentage(completed, len(counted))

    def compute_checklist(
        self,
        schema_list: Iterable[FieldSchema],
        checklist: Optional[Dict[str, Any]],
        context: EvaluationContext
    ) -> int:
        """Flatten a schema list and compute its percentage"""
        return self.compute_completion(self.flattener.flatten(schema_list), checklist, context)

    def compute_progress(
        self,
        config: ChecklistConfig,
        checklists: Optional[Dict[str, Any]],
        catalog: Optional[List[IntegrationRecord]] = None
    ) -> ProgressSnapshot:
        """Sales, launch and overall percentages for a project's checklists"""
        checklists = checklists if isinstance(checklists, dict) else {}
        catalog = catalog or []

        sales = self.compute_checklist(
            config.sales,
            checklists.get(ChecklistKind.SALES.value),
            EvaluationContext(kind=ChecklistKind.SALES, catalog=catalog),
        )
        launch = self.compute_checklist(
            config.launch,
            checklists.get(ChecklistKind.LAUNCH.value),
            EvaluationContext(kind=ChecklistKind.LAUNCH, catalog=catalog),
        )
        return ProgressSnapshot(
            sales_completion=sales,
            launch_completion=launch,
            overall=combine_overall(sales, launch),
        )
