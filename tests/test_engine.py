"""Tests for the reconciliation engine."""

import pytest

from part_reconciler.config import Config
from part_reconciler.models import (
    ConflictResolution,
    ConflictSeverity,
    DrawingRecord,
    PartRecord,
    RoutingOp,
)
from part_reconciler.reconciliation.engine import canonical_filename, reconcile


def _fields(items):
    return [item.field for item in items]


# --- Scenarios ---

def test_material_mismatch_is_high_severity_conflict(engine) -> None:
    result = engine.reconcile(
        PartRecord(material="304 SS"),
        DrawingRecord(material="A36 CARBON STEEL"),
    )

    assert len(result.conflicts) == 1
    conflict = result.conflicts[0]
    assert conflict.field == "Material"
    assert conflict.model_value == "304 SS"
    assert conflict.drawing_value == "A36 CARBON STEEL"
    assert conflict.severity is ConflictSeverity.HIGH
    assert conflict.recommendation is ConflictResolution.USE_PART
    assert result.summary == "1 conflicts, 0 gap fills, 0 routing suggestions, 0 confirmations"


def test_empty_part_revision_gap_fill(engine) -> None:
    result = engine.reconcile(PartRecord(), DrawingRecord(revision="C"))

    assert len(result.gap_fills) == 1
    gap = result.gap_fills[0]
    assert gap.field == "Revision"
    assert gap.value == "C"
    assert gap.source == "drawing title block"
    assert gap.confidence >= 0.85
    assert gap.auto_apply


# --- Absent inputs ---

def test_no_drawing_gives_empty_result(engine, bracket_part) -> None:
    result = engine.reconcile(bracket_part, None)

    assert not result.has_conflicts
    assert not result.has_actions
    assert result.confirmations == []
    assert result.rename is None


def test_no_part_still_gap_fills(engine, bracket_drawing) -> None:
    result = engine.reconcile(None, bracket_drawing)

    assert _fields(result.gap_fills) == ["PartNumber", "Description", "Revision", "Material", "Thickness"]
    assert all(g.confidence >= 0.85 for g in result.gap_fills)
    assert result.gap_fill_for("Thickness").value == '0.1250"'
    assert not result.has_conflicts
    assert result.rename is None


def test_both_absent(engine) -> None:
    result = reconcile(None, None)
    assert not result.has_actions
    assert result.to_dict()["rename"] is None


def test_malformed_values_do_not_raise(engine) -> None:
    part = PartRecord(material="  ", thickness_m="abc", file_path="")
    drawing = DrawingRecord(material=None, thickness=object(), part_number="  ")

    result = engine.reconcile(part, drawing)

    assert not result.has_actions


# --- Field comparison ---

def test_equivalent_fields_are_confirmed(engine, bracket_part, bracket_drawing) -> None:
    result = engine.reconcile(bracket_part, bracket_drawing)

    assert _fields(result.confirmations) == ["Material", "Thickness"]
    assert "Material" not in _fields(result.conflicts)
    assert "Material" not in _fields(result.gap_fills)
    assert result.confirmations[0].message == "Material equivalent: 304 SS ~ 304 STAINLESS STEEL"


def test_family_only_material_confirms_specific_alloy(engine) -> None:
    result = engine.reconcile(
        PartRecord(material="STAINLESS STEEL"),
        DrawingRecord(material="304 STAINLESS STEEL"),
    )

    assert not result.has_conflicts
    assert _fields(result.confirmations) == ["Material"]


def test_part_only_values_need_no_action(engine) -> None:
    part = PartRecord(material="304 SS", thickness_m=0.003175, revision="B")
    result = engine.reconcile(part, DrawingRecord())

    assert not result.has_actions
    assert result.confirmations == []


def test_identity_disagreement_has_no_conflict_path(engine) -> None:
    part = PartRecord(part_number="12345", description="BRACKET", revision="A")
    drawing = DrawingRecord(part_number="12346", description="PLATE", revision="B")

    result = engine.reconcile(part, drawing)

    assert result.conflicts == []
    assert result.gap_fills == []
    assert result.confirmations == []


def test_identity_match_is_case_insensitive(engine) -> None:
    result = engine.reconcile(PartRecord(revision="c"), DrawingRecord(revision=" C "))
    assert _fields(result.confirmations) == ["Revision"]
    assert result.confirmations[0].message == "Revision matches: c"


@pytest.mark.parametrize("drawing_thickness", ['.125"', 0.128, "3.175 mm", "1/8"])
def test_thickness_within_tolerance(engine, drawing_thickness) -> None:
    result = engine.reconcile(
        PartRecord(thickness_m=0.003175),
        DrawingRecord(thickness=drawing_thickness),
    )
    assert _fields(result.confirmations) == ["Thickness"]
    assert result.conflicts == []


def test_thickness_outside_tolerance_conflicts(engine) -> None:
    result = engine.reconcile(PartRecord(thickness_m=0.003175), DrawingRecord(thickness=0.25))

    (conflict,) = result.conflicts
    assert conflict.field == "Thickness"
    assert conflict.model_value == '0.1250"'
    assert conflict.drawing_value == '0.2500"'
    assert conflict.severity is ConflictSeverity.HIGH
    assert conflict.recommendation is ConflictResolution.USE_PART


def test_thickness_tolerance_is_configurable() -> None:
    config = Config(thickness_tolerance_inches=0.2)
    result = reconcile(PartRecord(thickness_m=0.003175), DrawingRecord(thickness=0.25), config)
    assert _fields(result.confirmations) == ["Thickness"]


def test_gauge_thickness_is_ignored(engine) -> None:
    result = engine.reconcile(PartRecord(thickness_m=0.003175), DrawingRecord(thickness="14 GA"))
    assert not result.has_actions
    assert result.confirmations == []


# --- Routing ---

def test_routing_suggestions_sorted(engine, hint) -> None:
    drawing = DrawingRecord(routing_hints=[
        hint(RoutingOp.INSPECT, "INSPECT ALL WELDS"),
        hint(RoutingOp.WELD, "WELD PER DWG"),
        hint(RoutingOp.DEBURR, "BREAK ALL EDGES"),
    ])

    result = engine.reconcile(PartRecord(), drawing)

    numbers = [s.suggested_op_number for s in result.routing_suggestions]
    assert numbers == sorted(numbers)
    assert [s.operation for s in result.routing_suggestions] == [
        RoutingOp.DEBURR, RoutingOp.WELD, RoutingOp.INSPECT,
    ]
    assert result.has_routing_suggestions


def test_results_are_fresh_per_call(engine, bracket_part, bracket_drawing) -> None:
    first = engine.reconcile(bracket_part, bracket_drawing)
    second = engine.reconcile(bracket_part, bracket_drawing)

    assert first is not second
    assert first.gap_fills is not second.gap_fills
    assert first.to_dict() == second.to_dict()


# --- Rename ---

def test_rename_suggestion(engine, bracket_part, bracket_drawing) -> None:
    result = engine.reconcile(bracket_part, bracket_drawing)

    rename = result.rename
    assert rename is not None
    assert rename.old_name == "Part1"
    assert rename.new_name == "12345_MOUNTING_BRACKET"
    assert rename.old_path == r"C:\Vault\Parts\Part1.SLDPRT"
    assert rename.new_path == r"C:\Vault\Parts\12345_MOUNTING_BRACKET.SLDPRT"
    assert rename.requires_user_approval
    assert result.summary.endswith(", 1 rename")


def test_no_rename_when_name_already_canonical(engine, bracket_drawing) -> None:
    part = PartRecord(file_path="/vault/12345_mounting_bracket.sldprt")
    assert engine.reconcile(part, bracket_drawing).rename is None


def test_no_rename_without_part_number(engine) -> None:
    part = PartRecord(file_path="/vault/Part1.sldprt", description="BRACKET")
    drawing = DrawingRecord(description="BRACKET", revision="A")
    assert engine.reconcile(part, drawing).rename is None


def test_rename_uses_part_number_from_part(engine) -> None:
    part = PartRecord(file_path="/vault/Part1.sldprt", part_number="999", description="Plate")
    rename = engine.reconcile(part, DrawingRecord(revision="A")).rename
    assert rename.new_name == "999_PLATE"
    assert rename.new_path == "/vault/999_PLATE.sldprt"


def test_canonical_filename_drops_long_description() -> None:
    assert canonical_filename("12345", "Bracket") == "12345_BRACKET"
    assert canonical_filename("12345", "X" * 40, 30) == "12345"
    assert canonical_filename("12345", None) == "12345"
    assert canonical_filename("  ", "Bracket") == ""
