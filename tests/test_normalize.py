"""Tests for material, thickness and filename normalization."""

import pytest

from part_reconciler.reconciliation.normalize import (
    alloy_core,
    format_inches,
    material_key,
    materials_equivalent,
    normalize_material,
    parse_thickness_inches,
    part_thickness_inches,
    sanitize_filename,
    split_file_path,
)


def test_normalize_material_abbreviates_family_words() -> None:
    assert normalize_material("304  Stainless Steel") == "304 SS"
    assert normalize_material("a36 carbon steel") == "A36 CS"
    assert normalize_material("6061-T6 Aluminium") == "6061-T6 AL"
    assert normalize_material(None) == ""


def test_material_key_strips_family_suffix() -> None:
    assert material_key("304 SS") == "304"
    assert material_key("STAINLESS STEEL") == "SS"


def test_alloy_core() -> None:
    assert alloy_core("316L STAINLESS") == "316L"
    assert alloy_core("A36 CARBON STEEL") == "A36"
    assert alloy_core("5052-H32 ALUMINUM") == "5052"
    assert alloy_core("GALVANIZED") is None


@pytest.mark.parametrize(
    "part, drawing",
    [
        ("304 SS", "304 STAINLESS STEEL"),
        ("304 SS", "304"),
        ("6061-T6 ALUMINUM", "6061-T6"),
        ("AL 5052", "5052-H32"),
        ("a36", "A36 CARBON STEEL"),
        ("STAINLESS STEEL", "304 STAINLESS STEEL"),
        ("A36 CARBON STEEL", "CARBON STEEL"),
        ("ALUMINUM", "6061-T6 ALUMINUM"),
    ],
)
def test_materials_equivalent(part, drawing) -> None:
    assert materials_equivalent(part, drawing)


@pytest.mark.parametrize(
    "part, drawing",
    [
        ("304 SS", "A36 CARBON STEEL"),
        ("304 SS", "316 SS"),
        ("STAINLESS STEEL", "6061-T6 ALUMINUM"),
        ("CARBON STEEL", "304 SS"),
        ("", "304"),
        ("304", None),
    ],
)
def test_materials_not_equivalent(part, drawing) -> None:
    assert not materials_equivalent(part, drawing)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.125, 0.125),
        ('.125"', 0.125),
        ('.125" THK', 0.125),
        ("1/8 IN", 0.125),
        ('T=.060"', 0.060),
        ("0.25 inches", 0.25),
        ("1-1/2", 1.5),
    ],
)
def test_parse_thickness_inches(value, expected) -> None:
    assert parse_thickness_inches(value) == pytest.approx(expected)


def test_parse_thickness_millimeters() -> None:
    assert parse_thickness_inches("3 mm") == pytest.approx(3 / 25.4)
    assert parse_thickness_inches("3MM") == pytest.approx(3 / 25.4)


@pytest.mark.parametrize("value", ["14 GA", "abc", "", None, -1, 0, True, "1/0", float("nan")])
def test_parse_thickness_malformed_is_absent(value) -> None:
    assert parse_thickness_inches(value) is None


def test_part_thickness_inches() -> None:
    assert part_thickness_inches(0.003175) == pytest.approx(0.125)
    assert part_thickness_inches("0.003175") == pytest.approx(0.125)
    assert part_thickness_inches(None) is None
    assert part_thickness_inches("thin") is None
    assert part_thickness_inches(0) is None


def test_format_inches() -> None:
    assert format_inches(0.125) == '0.1250"'


def test_sanitize_filename() -> None:
    assert sanitize_filename("Mounting Bracket, L/H") == "MOUNTING_BRACKET,_L_H"
    assert sanitize_filename("  12345  ") == "12345"
    assert sanitize_filename('A<>B:"C') == "A_B_C"
    assert sanitize_filename(None) == ""


def test_split_file_path() -> None:
    assert split_file_path(r"C:\Parts\old name.SLDPRT") == ("C:\\Parts\\", "old name", ".SLDPRT")
    assert split_file_path("/vault/parts/p1.sldprt") == ("/vault/parts/", "p1", ".sldprt")
    assert split_file_path("p1") == ("", "p1", "")
