"""Data models for the part reconciler."""

from .routing import RoutingOp, RoutingHint, RoutingSuggestion, SuggestionType
from .records import PartRecord, DrawingRecord, BomRow
from .reconciliation import (
    ConflictSeverity,
    ConflictResolution,
    Confirmation,
    DataConflict,
    GapFill,
    RenameSuggestion,
    ReconciliationResult,
)
from .suggestion import (
    PropertyCategory,
    SuggestionSource,
    PropertySuggestion,
    UnassignedSuggestion,
    SuggestionSet,
    AssemblyOperationSuggestion,
)

__all__ = [
    "RoutingOp",
    "RoutingHint",
    "RoutingSuggestion",
    "SuggestionType",
    "PartRecord",
    "DrawingRecord",
    "BomRow",
    "ConflictSeverity",
    "ConflictResolution",
    "Confirmation",
    "DataConflict",
    "GapFill",
    "RenameSuggestion",
    "ReconciliationResult",
    "PropertyCategory",
    "SuggestionSource",
    "PropertySuggestion",
    "UnassignedSuggestion",
    "SuggestionSet",
    "AssemblyOperationSuggestion",
]
