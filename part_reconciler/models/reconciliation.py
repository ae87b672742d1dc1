"""Reconciliation result structure.

The ReconciliationResult is the engine's only output, showing:
- What agreed (confirmations)
- What disagreed and needs a human (conflicts)
- What the drawing can fill in (gap fills)
- What operations the drawing notes imply (routing suggestions)
- Whether the file should be renamed (rename suggestion)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .routing import RoutingSuggestion


class ConflictSeverity(Enum):
    """Severity of a part/drawing disagreement."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"      # Completely different values, must review


class ConflictResolution(Enum):
    """Which side the engine recommends. Advisory only; conflicts never auto-resolve."""
    USE_PART = "UsePart"
    USE_DRAWING = "UseDrawing"
    HUMAN_REQUIRED = "HumanRequired"


@dataclass
class Confirmation:
    """Two independently sourced values that agree for one field."""

    field: str
    part_value: str
    drawing_value: str

    @property
    def message(self) -> str:
        if self.part_value.strip().upper() == self.drawing_value.strip().upper():
            return f"{self.field} matches: {self.part_value}"
        return f"{self.field} equivalent: {self.part_value} ~ {self.drawing_value}"

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "partValue": self.part_value,
            "drawingValue": self.drawing_value,
            "message": self.message,
        }


@dataclass
class DataConflict:
    """
    The part and the drawing disagree on a field.

    Attributes:
        field: Field name ("Material", "Thickness")
        model_value: Value from the 3D model
        drawing_value: Value from the drawing
        severity: Conflict severity
        recommendation: Which source to prefer
        reason: Why that source is preferred
    """

    field: str
    model_value: str
    drawing_value: str
    severity: ConflictSeverity = ConflictSeverity.HIGH
    recommendation: ConflictResolution = ConflictResolution.USE_PART
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "modelValue": self.model_value,
            "drawingValue": self.drawing_value,
            "severity": self.severity.value,
            "recommendation": self.recommendation.value,
            "reason": self.reason,
        }


@dataclass
class GapFill:
    """A field empty on the part side that the drawing can supply."""

    field: str
    value: str
    source: str
    confidence: float

    @property
    def auto_apply(self) -> bool:
        """High enough confidence to pre-select in the approval UI."""
        return self.confidence >= 0.85

    def to_dict(self) -> Dict[str, Any]:
        return {
            "field": self.field,
            "value": self.value,
            "source": self.source,
            "confidence": self.confidence,
            "autoApply": self.auto_apply,
        }


@dataclass
class RenameSuggestion:
    """
    A suggested canonical filename for the part document.

    Attributes:
        old_path: Current file path
        new_path: Suggested path (same directory and extension)
        old_name: Current filename without extension
        new_name: Canonical filename without extension
        reason: Why the rename is suggested
        confidence: Confidence (0.0-1.0)
    """

    old_path: str
    new_path: str
    old_name: str
    new_name: str
    reason: str = ""
    confidence: float = 0.0

    @property
    def requires_user_approval(self) -> bool:
        """Renames always need explicit confirmation."""
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "oldPath": self.old_path,
            "newPath": self.new_path,
            "oldName": self.old_name,
            "newName": self.new_name,
            "reason": self.reason,
            "confidence": self.confidence,
            "requiresUserApproval": self.requires_user_approval,
        }


@dataclass
class ReconciliationResult:
    """
    Complete result of reconciling one part record with one drawing record.

    Attributes:
        confirmations: Fields where part and drawing agree
        conflicts: Fields where they disagree (human review)
        gap_fills: Fields the drawing can fill
        routing_suggestions: Suggested operations, ascending by op number
        rename: Optional file rename suggestion
    """

    confirmations: List[Confirmation] = field(default_factory=list)
    conflicts: List[DataConflict] = field(default_factory=list)
    gap_fills: List[GapFill] = field(default_factory=list)
    routing_suggestions: List[RoutingSuggestion] = field(default_factory=list)
    rename: Optional[RenameSuggestion] = None

    @property
    def has_conflicts(self) -> bool:
        return len(self.conflicts) > 0

    @property
    def has_gap_fills(self) -> bool:
        return len(self.gap_fills) > 0

    @property
    def has_routing_suggestions(self) -> bool:
        return len(self.routing_suggestions) > 0

    @property
    def has_rename_suggestion(self) -> bool:
        return self.rename is not None

    @property
    def has_actions(self) -> bool:
        """True if anything needs review or can be applied."""
        return (
            self.has_conflicts
            or self.has_gap_fills
            or self.has_routing_suggestions
            or self.has_rename_suggestion
        )

    @property
    def summary(self) -> str:
        text = (
            f"{len(self.conflicts)} conflicts, {len(self.gap_fills)} gap fills, "
            f"{len(self.routing_suggestions)} routing suggestions, "
            f"{len(self.confirmations)} confirmations"
        )
        if self.has_rename_suggestion:
            text += ", 1 rename"
        return text

    def gap_fill_for(self, field_name: str) -> Optional[GapFill]:
        """First gap fill for a field, or None."""
        for gap in self.gap_fills:
            if gap.field == field_name:
                return gap
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": self.summary,
            "hasActions": self.has_actions,
            "confirmations": [c.to_dict() for c in self.confirmations],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "gapFills": [g.to_dict() for g in self.gap_fills],
            "routingSuggestions": [r.to_dict() for r in self.routing_suggestions],
            "rename": self.rename.to_dict() if self.rename else None,
        }
