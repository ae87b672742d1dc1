"""Review report generation using GPT-4o-mini.

Narrates a reconciliation result and its property suggestions for the
engineer who approves them: what agreed, what conflicts, what the drawing
fills in, and which routing notes could not be placed.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Any, Optional, List
import json
import logging

from ..config import Config, default_config
from ..models.reconciliation import ReconciliationResult
from ..models.suggestion import SuggestionSet

logger = logging.getLogger(__name__)

STATUS_NEEDS_REVIEW = "NEEDS REVIEW"
STATUS_READY = "READY"


# Report prompt template
REVIEW_PROMPT_TEMPLATE = '''You are a manufacturing engineer reviewing the custom properties of a sheet metal part before they are sent to the ERP.

Write a concise review based on the reconciliation data below.

## Part
- Part Number: {part_number}
- Status: {status}

## Reconciliation
- Confirmations: {confirmation_count}
- Conflicts: {conflict_count}
- Gap Fills: {gap_fill_count}
- Routing Suggestions: {routing_count}
- Rename: {rename}

## Conflicts
{conflicts}

## Gap Fills
{gap_fills}

## Routing
{routing}

## Property Suggestions
{suggestions}

## Unplaced Routing Notes
{unassigned}

---

Write the review with these sections:
1. **Summary** (2-3 sentences: READY or NEEDS REVIEW, key findings)
2. **Conflicts** (each model vs drawing disagreement and the recommended value)
3. **Property Changes** (values that will be filled or overwritten)
4. **Action Items** (what the engineer must decide manually)

Keep the review concise and actionable. Use bullet points.
Use ONLY the data above. Do NOT invent values.
'''


@dataclass
class ReviewReport:
    """
    Generated review of one part's reconciliation.

    Attributes:
        part_number: Part number reviewed
        status: READY or NEEDS REVIEW
        generated_at: ISO timestamp
        report_text: Full report markdown text
        summary: Quick summary line
        critical_issues: Items that need a human decision
        model_used: LLM model that generated the report
    """
    part_number: str = ""
    status: str = "UNKNOWN"
    generated_at: str = ""
    report_text: str = ""
    summary: str = ""
    critical_issues: List[str] = field(default_factory=list)
    model_used: str = ""

    @property
    def needs_review(self) -> bool:
        return self.status == STATUS_NEEDS_REVIEW

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "partNumber": self.part_number,
            "status": self.status,
            "generatedAt": self.generated_at,
            "reportText": self.report_text,
            "summary": self.summary,
            "criticalIssues": self.critical_issues,
            "modelUsed": self.model_used,
        }

    def to_markdown(self) -> str:
        """Generate full markdown report."""
        header = f"""# Property Review Report

**Part Number:** {self.part_number or "(unknown)"}
**Status:** {self.status}
**Summary:** {self.summary}
**Generated:** {self.generated_at}
**Model:** {self.model_used}

---

"""
        return header + self.report_text


def review_status(result: ReconciliationResult, suggestions: Optional[SuggestionSet] = None) -> str:
    """NEEDS REVIEW when anything requires a human decision, otherwise READY."""
    if result.has_conflicts:
        return STATUS_NEEDS_REVIEW
    if suggestions is not None and suggestions.has_unassigned:
        return STATUS_NEEDS_REVIEW
    return STATUS_READY


def critical_issues_for(
    result: ReconciliationResult,
    suggestions: Optional[SuggestionSet] = None,
) -> List[str]:
    issues = []
    for c in result.conflicts:
        issues.append(
            f"{c.field}: model {c.model_value} vs drawing {c.drawing_value} "
            f"({c.severity.value}, recommend {c.recommendation.value})"
        )
    if suggestions is not None:
        for u in suggestions.unassigned:
            issues.append(f"Unplaced {u.routing.operation.value}: {u.reason}")
    return issues


def _summary_line(status: str, result: ReconciliationResult) -> str:
    return f"{status} - {result.summary}"


class ReviewReportGenerator:
    """
    Generate review reports using GPT-4o-mini.

    Usage:
        generator = ReviewReportGenerator(api_key="sk-...")
        report = generator.generate(result, suggestions, part_number="12345")

        print(report.status)  # "READY" or "NEEDS REVIEW"
        print(report.to_markdown())

    Attributes:
        model_id: OpenAI model to use (default: gpt-4o-mini)
        max_tokens: Maximum tokens for response
        temperature: Sampling temperature
    """

    def __init__(
        self,
        api_key: str = None,
        model_id: str = None,
        max_tokens: int = None,
        temperature: float = None,
        config: Optional[Config] = None,
    ):
        """
        Initialize report generator.

        Args:
            api_key: OpenAI API key (or set OPENAI_API_KEY env var)
            model_id: Model to use (default from config)
            max_tokens: Max response tokens (default from config)
            temperature: Sampling temperature (default from config)
            config: Configuration supplying the defaults
        """
        config = config or default_config
        self.api_key = api_key
        self.model_id = model_id or config.report_model_id
        self.max_tokens = max_tokens or config.report_max_tokens
        self.temperature = config.report_temperature if temperature is None else temperature
        self._client = None

    def _get_client(self):
        """Lazy-load OpenAI client."""
        if self._client is None:
            from openai import OpenAI
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def generate(
        self,
        result: ReconciliationResult,
        suggestions: Optional[SuggestionSet] = None,
        part_number: str = "",
    ) -> ReviewReport:
        """
        Generate a review report.

        Args:
            result: Reconciliation result
            suggestions: Property suggestions generated from it
            part_number: Part number shown in the report header

        Returns:
            ReviewReport with generated content
        """
        status = review_status(result, suggestions)
        prompt = self._build_prompt(result, suggestions, part_number, status)

        try:
            client = self._get_client()
            response = client.chat.completions.create(
                model=self.model_id,
                messages=[
                    {"role": "system", "content": "You are a manufacturing engineer writing property review reports."},
                    {"role": "user", "content": prompt},
                ],
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
            report_text = response.choices[0].message.content
        except Exception as e:
            logger.warning("Review report generation failed: %s", e)
            raw = {
                "reconciliation": result.to_dict(),
                "suggestions": suggestions.to_dict() if suggestions is not None else None,
            }
            report_text = f"Error generating report: {str(e)}\n\nRaw data:\n{json.dumps(raw, indent=2)}"

        return ReviewReport(
            part_number=part_number,
            status=status,
            generated_at=datetime.now().isoformat() + "Z",
            report_text=report_text,
            summary=_summary_line(status, result),
            critical_issues=critical_issues_for(result, suggestions),
            model_used=self.model_id,
        )

    def _build_prompt(
        self,
        result: ReconciliationResult,
        suggestions: Optional[SuggestionSet],
        part_number: str,
        status: str,
    ) -> str:
        """Build the prompt for GPT-4o-mini."""
        conflicts = [
            f"- {c.field}: model={c.model_value}, drawing={c.drawing_value} "
            f"[{c.severity.value}, {c.recommendation.value}] {c.reason}"
            for c in result.conflicts
        ]
        gap_fills = [
            f"- {g.field}: {g.value} ({g.source}, {g.confidence:.0%})"
            for g in result.gap_fills
        ]
        routing = [
            f"- OP{r.suggested_op_number} {r.operation.value}: {r.note_text or ''} "
            f"(work center {r.work_center or 'none'}, {r.confidence:.0%})"
            for r in result.routing_suggestions
        ]

        suggestion_lines = []
        unassigned = []
        if suggestions is not None:
            for s in suggestions:
                change = "fill" if s.is_gap_fill else ("overwrite" if s.is_override else "unchanged")
                suggestion_lines.append(
                    f"- {s.property_name} = {s.value} [{change}, was {s.current_value or 'empty'}]"
                )
            unassigned = [f"- {u.routing.operation.value}: {u.reason}" for u in suggestions.unassigned]

        rename = "None"
        if result.rename is not None:
            rename = f"{result.rename.old_name} -> {result.rename.new_name}"

        return REVIEW_PROMPT_TEMPLATE.format(
            part_number=part_number or "(unknown)",
            status=status,
            confirmation_count=len(result.confirmations),
            conflict_count=len(result.conflicts),
            gap_fill_count=len(result.gap_fills),
            routing_count=len(result.routing_suggestions),
            rename=rename,
            conflicts="\n".join(conflicts) or "None",
            gap_fills="\n".join(gap_fills) or "None",
            routing="\n".join(routing) or "None",
            suggestions="\n".join(suggestion_lines) or "None",
            unassigned="\n".join(unassigned) or "None",
        )


def generate_review(
    result: ReconciliationResult,
    suggestions: Optional[SuggestionSet] = None,
    part_number: str = "",
    api_key: str = None,
) -> ReviewReport:
    """
    Convenience function to generate a review report.

    Example:
        result = reconcile(part, drawing)
        suggestions = generate_part_suggestions(result, properties)
        report = generate_review(result, suggestions, part.part_number)
        print(report.to_markdown())
    """
    generator = ReviewReportGenerator(api_key=api_key)
    return generator.generate(result, suggestions, part_number)


def generate_review_without_llm(
    result: ReconciliationResult,
    suggestions: Optional[SuggestionSet] = None,
    part_number: str = "",
) -> ReviewReport:
    """
    Generate a basic review without using LLM (for testing/fallback).

    Returns:
        ReviewReport with template-based content
    """
    status = review_status(result, suggestions)

    lines = ["## Summary", ""]
    if status == STATUS_READY:
        lines.append("**READY** - No conflicts; suggestions can be approved.")
    else:
        lines.append("**NEEDS REVIEW** - Resolve the items below before writing properties.")
    lines.append(result.summary)

    if result.conflicts:
        lines.extend(["", "## Conflicts", ""])
        for c in result.conflicts:
            lines.append(
                f"- {c.field}: model {c.model_value} vs drawing {c.drawing_value} "
                f"(recommend {c.recommendation.value})"
            )

    if result.gap_fills:
        lines.extend(["", "## Gap Fills", ""])
        for g in result.gap_fills:
            lines.append(f"- {g.field}: {g.value} ({g.source})")

    if result.confirmations:
        lines.extend(["", "## Confirmed", ""])
        for c in result.confirmations:
            lines.append(f"- {c.message}")

    if result.routing_suggestions:
        lines.extend(["", "## Routing", ""])
        for r in result.routing_suggestions:
            lines.append(f"- OP{r.suggested_op_number} {r.operation.value}: {r.note_text or ''}")

    if suggestions is not None and len(suggestions) > 0:
        lines.extend(["", "## Property Suggestions", ""])
        for s in suggestions:
            marker = "fill" if s.is_gap_fill else ("overwrite" if s.is_override else "unchanged")
            lines.append(f"- {s.property_name} = {s.value} ({marker})")

    if suggestions is not None and suggestions.has_unassigned:
        lines.extend(["", "## Unplaced Routing Notes", ""])
        for u in suggestions.unassigned:
            lines.append(f"- {u.routing.operation.value}: {u.routing.note_text or ''} - {u.reason}")

    if result.rename is not None:
        lines.extend(["", "## Rename", ""])
        lines.append(f"- {result.rename.old_name} -> {result.rename.new_name} (requires approval)")

    return ReviewReport(
        part_number=part_number,
        status=status,
        generated_at=datetime.now().isoformat() + "Z",
        report_text="\n".join(lines),
        summary=_summary_line(status, result),
        critical_issues=critical_issues_for(result, suggestions),
        model_used="template (no LLM)",
    )
