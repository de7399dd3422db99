"""Tests for structured checklist verdicts"""

from handover.domain.enums import ChecklistKind
from handover.domain.models import EvaluationContext
from handover.engine.checklist_report import ChecklistReporter


class TestChecklistReporter:

    def test_summary_lists_missing_fields_and_unmet_requirements(self, sample_config, catalog):
        launch = {
            "firebaseAccess": True,
            "integrations": {
                "integrations": ["X", "Z"],
                "integrations_requirementStatus": {"X": {"API key": True, "Webhook": True}},
            },
            "developmentItems_notRelevant": True,
        }
        context = EvaluationContext(kind=ChecklistKind.LAUNCH, catalog=catalog)

        summary = ChecklistReporter().summarize(sample_config.launch, launch, context)

        assert summary["checklist"] == "launch"
        assert summary["required_fields"] == 3
        assert summary["completed_fields"] == 1
        assert summary["completion"] == 33
        assert summary["missing"] == ["integrations.integrations", "integrationsCredentials"]
        assert summary["unmet_requirements"] == {"integrations.integrations": {"Z": ["Token"]}}
        assert [v["field_id"] for v in summary["verdicts"]] == [
            "firebaseAccess", "integrations", "integrationsCredentials", "customFeatures", "changeRequests"
        ]

    def test_not_relevant_integration_field_has_no_unmet_requirements(self, sample_config, catalog):
        launch = {"integrations_notRelevant": True, "integrations": {"integrations": ["Z"]}}
        context = EvaluationContext(kind=ChecklistKind.LAUNCH, catalog=catalog)

        reporter = ChecklistReporter()

        assert reporter.unmet_integration_requirements(sample_config.launch, launch, context) == {}
        assert [v.field_id for v in reporter.missing_fields(sample_config.launch, launch, context)] == [
            "firebaseAccess", "integrationsCredentials", "customFeatures"
        ]
