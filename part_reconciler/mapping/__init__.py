"""Mapping of reconciliation results onto the custom property schema."""

from .strategy import SlotStrategy, ROUTING_STRATEGY, FIXED_SLOTS, strategy_for
from .suggestions import (
    PropertySuggestionService,
    generate_part_suggestions,
    generate_assembly_suggestions,
)
from .writeback import (
    PropertyType,
    WritebackStatus,
    WritebackEntry,
    WritebackResult,
    apply_suggestions,
    apply_single,
    infer_property_type,
)

__all__ = [
    "SlotStrategy",
    "ROUTING_STRATEGY",
    "FIXED_SLOTS",
    "strategy_for",
    "PropertySuggestionService",
    "generate_part_suggestions",
    "generate_assembly_suggestions",
    "PropertyType",
    "WritebackStatus",
    "WritebackEntry",
    "WritebackResult",
    "apply_suggestions",
    "apply_single",
    "infer_property_type",
]
