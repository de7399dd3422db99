"""Progress & Version Engine - Checklist completion and version history"""
from .field_flattener import FieldFlattener, flatten_fields
from .integration_gate import IntegrationRequirementGate
from .completion_evaluator import CompletionEvaluator
from .progress_aggregator import ProgressAggregator, combine_overall, percentage, progress_band
from .version_reconciler import VersionHistoryReconciler
from .checklist_report import ChecklistReporter

__all__ = [
    "FieldFlattener",
    "flatten_fields",
    "IntegrationRequirementGate",
    "CompletionEvaluator",
    "ProgressAggregator",
    "combine_overall",
    "percentage",
    "progress_band",
    "VersionHistoryReconciler",
    "ChecklistReporter",
]
