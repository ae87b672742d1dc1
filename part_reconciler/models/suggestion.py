"""Property suggestion models consumed by the approval UI and property writer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from ..schema import assembly_op_keys
from .routing import RoutingSuggestion


class PropertyCategory(Enum):
    """Display grouping for a property suggestion."""
    IDENTITY = "Identity"
    ROUTING = "Routing"
    MATERIAL = "Material"
    OTHER = "Other"


class SuggestionSource(Enum):
    """Where a suggested value came from."""
    DRAWING_TITLE_BLOCK = "DrawingTitleBlock"
    DRAWING_NOTE = "DrawingNote"
    DEFAULT_TABLE = "DefaultTable"


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def same_value(a: Optional[str], b: Optional[str]) -> bool:
    """Property values compare trimmed and case-insensitively, blank == None."""
    if is_blank(a) and is_blank(b):
        return True
    if is_blank(a) or is_blank(b):
        return False
    return str(a).strip().upper() == str(b).strip().upper()


@dataclass
class PropertySuggestion:
    """
    One suggested custom property write.

    Attributes:
        property_name: Exact schema key (e.g., "F210_RN", "Other_OP2")
        value: Suggested value
        category: Display category
        current_value: Value currently on the document, if any
        confidence: Confidence (0.0-1.0)
        source: Where the value came from
        reason: Explanation for the approval UI
    """

    property_name: str
    value: str
    category: PropertyCategory = PropertyCategory.OTHER
    current_value: Optional[str] = None
    confidence: float = 0.0
    source: SuggestionSource = SuggestionSource.DRAWING_NOTE
    reason: str = ""

    @property
    def is_gap_fill(self) -> bool:
        """The property is currently empty."""
        return is_blank(self.current_value)

    @property
    def is_override(self) -> bool:
        """The property has a different value that would be replaced."""
        return not is_blank(self.current_value) and not same_value(self.current_value, self.value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "propertyName": self.property_name,
            "value": self.value,
            "currentValue": self.current_value,
            "category": self.category.value,
            "confidence": self.confidence,
            "source": self.source.value,
            "reason": self.reason,
            "isGapFill": self.is_gap_fill,
            "isOverride": self.is_override,
        }


@dataclass
class UnassignedSuggestion:
    """A routing suggestion that could not be placed in the schema."""

    routing: RoutingSuggestion
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "routing": self.routing.to_dict(),
            "reason": self.reason,
        }


@dataclass
class SuggestionSet:
    """
    Ordered property suggestions plus the routing suggestions left unplaced.

    Iterating yields the PropertySuggestions in order, so a SuggestionSet can
    be used wherever a sequence of suggestions is expected.

    Usage:
        suggestions = service.generate_part_suggestions(result, current)
        for s in suggestions:
            print(s.property_name, s.value)
        if suggestions.has_unassigned:
            warn(suggestions.unassigned)
    """

    suggestions: List[PropertySuggestion] = field(default_factory=list)
    unassigned: List[UnassignedSuggestion] = field(default_factory=list)

    def __iter__(self) -> Iterator[PropertySuggestion]:
        return iter(self.suggestions)

    def __len__(self) -> int:
        return len(self.suggestions)

    def __getitem__(self, index: int) -> PropertySuggestion:
        return self.suggestions[index]

    @property
    def has_unassigned(self) -> bool:
        return len(self.unassigned) > 0

    def get(self, property_name: str) -> Optional[PropertySuggestion]:
        """Suggestion for an exact property key, or None."""
        for s in self.suggestions:
            if s.property_name == property_name:
                return s
        return None

    def to_properties(self) -> Dict[str, str]:
        """Flatten to {key: suggested value}."""
        return {s.property_name: s.value for s in self.suggestions}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "suggestions": [s.to_dict() for s in self.suggestions],
            "unassigned": [u.to_dict() for u in self.unassigned],
        }


@dataclass
class AssemblyOperationSuggestion:
    """
    A free-form assembly operation slot OP{n}.

    Attributes:
        op_number: Operation number (20, 30, ...)
        work_center: Work center code, stored directly in OP{n}
        setup_min: Setup minutes
        run_min: Run minutes
        routing_note: Routing note text
        source_note: Drawing note that produced it
        confidence: Confidence (0.0-1.0)
    """

    op_number: int
    work_center: Optional[str] = None
    setup_min: float = 0.0
    run_min: float = 0.0
    routing_note: Optional[str] = None
    source_note: Optional[str] = None
    confidence: float = 0.0

    def to_properties(self) -> Dict[str, str]:
        """Map to the four OP{n} property keys."""
        keys = assembly_op_keys(self.op_number)
        return {
            keys.work_center: self.work_center or "",
            keys.setup: format_minutes(self.setup_min),
            keys.run: format_minutes(self.run_min),
            keys.note: self.routing_note or "",
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opNumber": self.op_number,
            "workCenter": self.work_center,
            "setupMin": self.setup_min,
            "runMin": self.run_min,
            "routingNote": self.routing_note,
            "sourceNote": self.source_note,
            "confidence": self.confidence,
        }


def format_minutes(value: float) -> str:
    """Format minutes without a trailing '.0' (15.0 -> "15", 2.5 -> "2.5")."""
    number = float(value or 0)
    if number.is_integer():
        return str(int(number))
    return f"{number:g}"
