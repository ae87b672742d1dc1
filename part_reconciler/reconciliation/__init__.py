"""Reconciliation of solid-model part data against drawing data."""

from .engine import ReconciliationEngine, reconcile, canonical_filename
from .routing import RoutingNoteInterpreter
from .normalize import (
    normalize_material,
    materials_equivalent,
    parse_thickness_inches,
    sanitize_filename,
)

__all__ = [
    "ReconciliationEngine",
    "reconcile",
    "canonical_filename",
    "RoutingNoteInterpreter",
    "normalize_material",
    "materials_equivalent",
    "parse_thickness_inches",
    "sanitize_filename",
]
