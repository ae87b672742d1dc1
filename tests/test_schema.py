"""Tests for the property key table and slot strategy table."""

from part_reconciler.mapping.strategy import (
    FIXED_SLOTS,
    ROUTING_STRATEGY,
    SlotStrategy,
    fixed_slot_for,
)
from part_reconciler.models import RoutingOp
from part_reconciler.schema import IDENTITY_PROPERTY_KEYS, OTHER_SLOTS, assembly_op_keys


def test_identity_keys() -> None:
    assert dict(IDENTITY_PROPERTY_KEYS) == {
        "Description": "Description",
        "Revision": "Revision",
        "PartNumber": "Print",
        "Material": "OptiMaterial",
    }


def test_other_slot_one_is_unnumbered() -> None:
    slot = OTHER_SLOTS[0]
    assert (slot.enabled, slot.op_number, slot.work_center, slot.setup, slot.run, slot.note) == (
        "OtherWC_CB", "OtherOP", "Other_WC", "Other_S", "Other_R", "Other_RN",
    )


def test_numbered_other_slots_use_underscore_op_key() -> None:
    assert len(OTHER_SLOTS) == 6
    for n, slot in enumerate(OTHER_SLOTS[1:], start=2):
        assert slot.index == n
        assert slot.enabled == f"OtherWC_CB{n}"
        assert slot.op_number == f"Other_OP{n}"
        assert slot.work_center == f"Other_WC{n}"
        assert slot.setup == f"Other_S{n}"
        assert slot.run == f"Other_R{n}"
        assert slot.note == f"Other_RN{n}"


def test_assembly_work_center_key_is_bare_op() -> None:
    keys = assembly_op_keys(30)
    assert keys.work_center == "OP30"
    assert (keys.setup, keys.run, keys.note) == ("OP30_S", "OP30_R", "OP30_RN")


def test_every_operation_has_a_strategy() -> None:
    assert set(ROUTING_STRATEGY) == set(RoutingOp)
    flexible = {op for op, s in ROUTING_STRATEGY.items() if s is SlotStrategy.FLEXIBLE}
    assert flexible == {RoutingOp.WELD, RoutingOp.INSPECT, RoutingOp.HARDWARE, RoutingOp.MACHINE}


def test_fixed_slot_keys() -> None:
    assert fixed_slot_for(RoutingOp.DEBURR).enable_flag == "F210"
    assert fixed_slot_for(RoutingOp.DEBURR).note == "F210_RN"
    assert fixed_slot_for(RoutingOp.DRILL) == fixed_slot_for(RoutingOp.TAP)
    assert fixed_slot_for(RoutingOp.TAP).note == "F220_RN"
    assert fixed_slot_for(RoutingOp.PROCESS_OVERRIDE).work_center == "OP20"
    assert fixed_slot_for(RoutingOp.FINISH).work_center == "OS_WC"
    assert fixed_slot_for(RoutingOp.OUTSIDE_PROCESS).work_center is None
    assert fixed_slot_for(RoutingOp.HEAT_TREAT).note == "OS_RN"
    assert set(FIXED_SLOTS) == {
        op for op, s in ROUTING_STRATEGY.items() if s is SlotStrategy.FIXED
    }
