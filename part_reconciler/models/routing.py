"""Routing models: operation categories, drawing hints, and suggestions."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .fields import optional_float, optional_text


class RoutingOp(Enum):
    """Closed set of operation categories a drawing note can map to."""

    DEBURR = "Deburr"
    FINISH = "Finish"
    HEAT_TREAT = "HeatTreat"
    WELD = "Weld"
    TAP = "Tap"
    DRILL = "Drill"
    MACHINE = "Machine"
    INSPECT = "Inspect"
    HARDWARE = "Hardware"
    PROCESS_OVERRIDE = "ProcessOverride"
    OUTSIDE_PROCESS = "OutsideProcess"

    @classmethod
    def parse(cls, value: Any) -> Optional["RoutingOp"]:
        """Look up an operation by value or member name, ignoring case. None if unknown."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().replace("_", "").replace(" ", "").lower()
        for op in cls:
            if key in (op.value.lower(), op.name.replace("_", "").lower()):
                return op
        return None


class SuggestionType(Enum):
    """How a routing suggestion changes the routing."""
    ADD_OPERATION = "AddOperation"
    MODIFY_OPERATION = "ModifyOperation"
    ADD_NOTE = "AddNote"


@dataclass(frozen=True)
class RoutingHint:
    """
    A manufacturing operation inferred from one drawing note.

    Produced by the drawing-analysis collaborator, which has already
    classified the note into a RoutingOp.

    Attributes:
        operation: Operation category
        work_center: Work center code (e.g., "F210", "F400"); None for outside process
        note_text: Routing note text for the ERP (e.g., "BREAK ALL EDGES")
        source_note: The original drawing sentence
        confidence: Classification confidence (0.0-1.0)
        setup_min: Setup minutes, if the note states them
        run_min: Run minutes, if the note states them
    """

    operation: RoutingOp
    work_center: Optional[str] = None
    note_text: Optional[str] = None
    source_note: Optional[str] = None
    confidence: float = 0.0
    setup_min: Optional[float] = None
    run_min: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Optional["RoutingHint"]:
        """Build a hint from collaborator JSON. Returns None for an unknown operation."""
        op = RoutingOp.parse(data.get("operation"))
        if op is None:
            return None
        return cls(
            operation=op,
            work_center=optional_text(data.get("workCenter")),
            note_text=optional_text(data.get("noteText")),
            source_note=optional_text(data.get("sourceNote")),
            confidence=optional_float(data.get("confidence")) or 0.0,
            setup_min=optional_float(data.get("setupMin")),
            run_min=optional_float(data.get("runMin")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = {
            "operation": self.operation.value,
            "workCenter": self.work_center,
            "noteText": self.note_text,
            "sourceNote": self.source_note,
            "confidence": self.confidence,
        }
        if self.setup_min is not None:
            d["setupMin"] = self.setup_min
        if self.run_min is not None:
            d["runMin"] = self.run_min
        return d


@dataclass
class RoutingSuggestion:
    """
    A routing hint after canonical ordering has been assigned.

    suggested_op_number orders suggestions for presentation only; it is
    not the schema slot the mapper eventually writes to.
    """

    operation: RoutingOp
    suggested_op_number: int
    work_center: Optional[str] = None
    note_text: Optional[str] = None
    source_note: Optional[str] = None
    confidence: float = 0.0
    setup_min: Optional[float] = None
    run_min: Optional[float] = None
    suggestion_type: SuggestionType = SuggestionType.ADD_NOTE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        d = {
            "operation": self.operation.value,
            "suggestedOpNumber": self.suggested_op_number,
            "workCenter": self.work_center,
            "noteText": self.note_text,
            "sourceNote": self.source_note,
            "confidence": self.confidence,
            "type": self.suggestion_type.value,
        }
        if self.setup_min is not None:
            d["setupMin"] = self.setup_min
        if self.run_min is not None:
            d["runMin"] = self.run_min
        return d
