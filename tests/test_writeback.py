"""Tests for applying approved suggestions to a property dictionary."""

import pytest

from part_reconciler.mapping.writeback import (
    PropertyType,
    WritebackStatus,
    apply_single,
    apply_suggestions,
    infer_property_type,
)
from part_reconciler.models import PropertyCategory, PropertySuggestion


def test_apply_suggestions_returns_new_properties() -> None:
    current = {"Description": "bracket", "OtherOP": "60"}
    approved = [
        PropertySuggestion("F210", "1", PropertyCategory.ROUTING),
        PropertySuggestion("Description", "BRACKET", PropertyCategory.IDENTITY),
        PropertySuggestion("OtherOP", "70", PropertyCategory.ROUTING),
    ]

    result = apply_suggestions(approved, current)

    assert current == {"Description": "bracket", "OtherOP": "60"}
    assert result.properties == {"Description": "bracket", "OtherOP": "70", "F210": "1"}
    assert [e.property_name for e in result.applied] == ["F210", "OtherOP"]
    assert [e.property_name for e in result.skipped] == ["Description"]
    assert result.skipped[0].reason == "Value already matches"
    assert result.success
    assert result.total_processed == 3
    assert result.changed_count == 2
    assert result.summary == "2 applied, 1 skipped"


def test_applied_entry_records_old_value_and_type() -> None:
    result = apply_suggestions([PropertySuggestion("Other_S", "15")], {"Other_S": "10"})

    (entry,) = result.applied
    assert entry.old_value == "10"
    assert entry.new_value == "15"
    assert entry.status is WritebackStatus.APPLIED
    assert entry.property_type is PropertyType.NUMBER


def test_existing_key_keeps_its_spelling() -> None:
    result = apply_suggestions([PropertySuggestion("Print", "12345")], {"print": "OLD"})

    assert result.properties == {"print": "12345"}
    assert result.applied[0].old_value == "OLD"


def test_empty_property_name_is_skipped() -> None:
    result = apply_suggestions([PropertySuggestion("  ", "X")], {})

    assert result.applied == []
    assert result.skipped[0].status is WritebackStatus.SKIPPED
    assert result.skipped[0].reason == "Property name is empty"


def test_apply_nothing() -> None:
    result = apply_suggestions([], None)
    assert result.properties == {}
    assert result.total_processed == 0


def test_apply_single_writes_in_place() -> None:
    properties = {"OptiMaterial": "304 SS"}

    entry = apply_single("OptiMaterial", "A36", properties)

    assert properties == {"OptiMaterial": "A36"}
    assert (entry.old_value, entry.new_value) == ("304 SS", "A36")
    assert entry.property_type is PropertyType.TEXT


@pytest.mark.parametrize(
    "name, value, expected",
    [
        ("Other_S", "15", PropertyType.NUMBER),
        ("Other_R3", "2.5", PropertyType.NUMBER),
        ("OP20_S", "5", PropertyType.NUMBER),
        ("OP30_R", "10", PropertyType.NUMBER),
        ("OtherOP", "60", PropertyType.NUMBER),
        ("Other_OP2", "70", PropertyType.NUMBER),
        ("Other_S", "abc", PropertyType.TEXT),
        ("F210_RN", "BREAK ALL EDGES", PropertyType.TEXT),
        ("Description", "5", PropertyType.TEXT),
        ("", "5", PropertyType.TEXT),
    ],
)
def test_infer_property_type(name, value, expected) -> None:
    assert infer_property_type(name, value) is expected
