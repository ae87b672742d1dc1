"""
Part Reconciler v1.0

Reconciles sheet metal part data measured from the 3D model with data read
off the 2D drawing, then maps the result onto the legacy ERP custom
property schema for user approval.

Stages:
- ReconciliationEngine: confirmations, conflicts, gap fills, routing, rename
- PropertySuggestionService: part slots (F210, F220, OP20, OS, Other 1-6)
  and assembly OP{n} slots
- apply_suggestions: approved suggestions -> updated property dictionary
- ReviewReportGenerator: GPT-4o-mini review narrative
"""

__version__ = "1.0.0"

from .config import Config, default_config
from .models import (
    PartRecord,
    DrawingRecord,
    RoutingHint,
    RoutingOp,
    ReconciliationResult,
    PropertySuggestion,
    SuggestionSet,
)
from .reconciliation import ReconciliationEngine, reconcile
from .mapping import (
    PropertySuggestionService,
    generate_part_suggestions,
    generate_assembly_suggestions,
    apply_suggestions,
)

__all__ = [
    "Config",
    "default_config",
    "PartRecord",
    "DrawingRecord",
    "RoutingHint",
    "RoutingOp",
    "ReconciliationResult",
    "PropertySuggestion",
    "SuggestionSet",
    "ReconciliationEngine",
    "reconcile",
    "PropertySuggestionService",
    "generate_part_suggestions",
    "generate_assembly_suggestions",
    "apply_suggestions",
]
