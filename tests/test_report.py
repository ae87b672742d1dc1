"""Tests for review report generation."""

from types import SimpleNamespace

from part_reconciler.models import DrawingRecord, PartRecord, RoutingOp
from part_reconciler.report.review_report import (
    ReviewReportGenerator,
    generate_review_without_llm,
)


class _FakeCompletions:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        message = SimpleNamespace(content=self.text)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_template_report_ready(engine, service, bracket_part, bracket_drawing) -> None:
    result = engine.reconcile(bracket_part, bracket_drawing)
    suggestions = service.generate_part_suggestions(result, {})

    report = generate_review_without_llm(result, suggestions, "12345")

    assert report.status == "READY"
    assert not report.needs_review
    assert report.critical_issues == []
    assert report.model_used == "template (no LLM)"
    assert "## Gap Fills" in report.report_text
    assert "- Print = 12345 (fill)" in report.report_text
    assert "Part1 -> 12345_MOUNTING_BRACKET" in report.report_text
    assert report.to_markdown().startswith("# Property Review Report")


def test_template_report_needs_review_on_conflict(engine) -> None:
    result = engine.reconcile(PartRecord(material="304 SS"), DrawingRecord(material="A36 CARBON STEEL"))

    report = generate_review_without_llm(result)

    assert report.status == "NEEDS REVIEW"
    assert report.summary.startswith("NEEDS REVIEW - 1 conflicts")
    assert report.critical_issues == [
        "Material: model 304 SS vs drawing A36 CARBON STEEL (High, recommend UsePart)",
    ]


def test_template_report_needs_review_on_unassigned(service, routing_result, hint) -> None:
    result = routing_result(*[hint(RoutingOp.INSPECT, f"INSPECT {n}") for n in range(7)])
    suggestions = service.generate_part_suggestions(result, {})

    report = generate_review_without_llm(result, suggestions)

    assert report.status == "NEEDS REVIEW"
    assert "## Unplaced Routing Notes" in report.report_text
    assert report.critical_issues[0].startswith("Unplaced Inspect")


def test_llm_report_uses_client(engine, bracket_part, bracket_drawing) -> None:
    result = engine.reconcile(bracket_part, bracket_drawing)
    completions = _FakeCompletions(text="## Summary\nREADY")
    generator = ReviewReportGenerator(api_key="test")
    generator._client = _fake_client(completions)

    report = generator.generate(result, part_number="12345")

    assert report.report_text == "## Summary\nREADY"
    assert report.model_used == "gpt-4o-mini"
    assert report.status == "READY"
    (call,) = completions.calls
    assert call["model"] == "gpt-4o-mini"
    assert call["max_tokens"] == 1500
    prompt = call["messages"][1]["content"]
    assert "Part Number: 12345" in prompt


def test_llm_failure_embeds_raw_data(engine, caplog) -> None:
    result = engine.reconcile(PartRecord(), DrawingRecord(revision="C"))
    generator = ReviewReportGenerator(api_key="test")
    generator._client = _fake_client(_FakeCompletions(error=RuntimeError("rate limited")))

    report = generator.generate(result)

    assert report.report_text.startswith("Error generating report: rate limited")
    assert '"gapFills"' in report.report_text
    assert report.status == "READY"
    assert any("rate limited" in r.getMessage() for r in caplog.records)
