"""Shared fixtures for part_reconciler tests."""

from typing import Callable

import pytest

from part_reconciler.mapping.suggestions import PropertySuggestionService
from part_reconciler.models import DrawingRecord, PartRecord, RoutingHint, RoutingOp
from part_reconciler.reconciliation.engine import ReconciliationEngine


@pytest.fixture()
def engine() -> ReconciliationEngine:
    return ReconciliationEngine()


@pytest.fixture()
def service() -> PropertySuggestionService:
    return PropertySuggestionService()


@pytest.fixture()
def hint() -> Callable[..., RoutingHint]:
    """Build a RoutingHint whose source sentence defaults to its note."""

    def _hint(op: RoutingOp, note: str = None, **kwargs) -> RoutingHint:
        kwargs.setdefault("source_note", note)
        kwargs.setdefault("confidence", 0.9)
        return RoutingHint(operation=op, note_text=note, **kwargs)

    return _hint


@pytest.fixture()
def routing_result(engine) -> Callable[..., object]:
    """Reconcile an empty part against a drawing carrying only routing hints."""

    def _result(*hints):
        return engine.reconcile(PartRecord(), DrawingRecord(routing_hints=list(hints)))

    return _result


@pytest.fixture()
def bracket_part() -> PartRecord:
    return PartRecord(
        material="304 SS",
        thickness_m=0.003175,  # 0.125 in
        file_path=r"C:\Vault\Parts\Part1.SLDPRT",
    )


@pytest.fixture()
def bracket_drawing() -> DrawingRecord:
    return DrawingRecord(
        part_number="12345",
        description="Mounting Bracket",
        revision="C",
        material="304 STAINLESS STEEL",
        thickness='.125"',
    )
