"""Custom property key table for the legacy ERP import schema.

This is the SINGLE SOURCE OF TRUTH for property key strings. The keys are a
wire contract with the ERP import process: casing and underscore placement
must match exactly, irregularities included.

Schema irregularities:
- Other slot 1 is unnumbered; slots 2-6 carry the slot number.
- The op-number key is "OtherOP" in slot 1 but "Other_OP{N}" in slots 2-6.
- Work centers are stored directly in "OP{n}" (there is no "OP{n}_WC" key).
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple


# Reconciliation field name -> property key
IDENTITY_PROPERTY_KEYS = MappingProxyType({
    "Description": "Description",
    "Revision": "Revision",
    "PartNumber": "Print",
    "Material": "OptiMaterial",
})


@dataclass(frozen=True)
class FixedSlotKeys:
    """
    Keys of a slot dedicated to one operation category.

    Attributes:
        note: Routing note key (append semantics)
        enable_flag: Checkbox key set to "1" to enable the operation
        work_center: Key that receives the hint's work center
    """
    note: str
    enable_flag: Optional[str] = None
    work_center: Optional[str] = None


DEBURR_SLOT = FixedSlotKeys(note="F210_RN", enable_flag="F210")
TAP_SLOT = FixedSlotKeys(note="F220_RN", enable_flag="F220")
PROCESS_OVERRIDE_SLOT = FixedSlotKeys(note="OP20_RN", work_center="OP20")
FINISH_SLOT = FixedSlotKeys(note="OS_RN", work_center="OS_WC")
OUTSIDE_PROCESS_SLOT = FixedSlotKeys(note="OS_RN")


@dataclass(frozen=True)
class OtherSlotKeys:
    """Keys of one flexible "Other" work center slot."""
    index: int
    enabled: str
    op_number: str
    work_center: str
    setup: str
    run: str
    note: str


OTHER_SLOTS: Tuple[OtherSlotKeys, ...] = (
    OtherSlotKeys(1, "OtherWC_CB", "OtherOP", "Other_WC", "Other_S", "Other_R", "Other_RN"),
    OtherSlotKeys(2, "OtherWC_CB2", "Other_OP2", "Other_WC2", "Other_S2", "Other_R2", "Other_RN2"),
    OtherSlotKeys(3, "OtherWC_CB3", "Other_OP3", "Other_WC3", "Other_S3", "Other_R3", "Other_RN3"),
    OtherSlotKeys(4, "OtherWC_CB4", "Other_OP4", "Other_WC4", "Other_S4", "Other_R4", "Other_RN4"),
    OtherSlotKeys(5, "OtherWC_CB5", "Other_OP5", "Other_WC5", "Other_S5", "Other_R5", "Other_RN5"),
    OtherSlotKeys(6, "OtherWC_CB6", "Other_OP6", "Other_WC6", "Other_S6", "Other_R6", "Other_RN6"),
)


@dataclass(frozen=True)
class AssemblyOpKeys:
    """Keys of one free-form assembly operation OP{n}."""
    work_center: str
    setup: str
    run: str
    note: str


def assembly_op_keys(op_number: int) -> AssemblyOpKeys:
    """Keys for assembly operation OP{op_number}. The work center goes in OP{n} itself."""
    base = f"OP{op_number}"
    return AssemblyOpKeys(
        work_center=base,
        setup=f"{base}_S",
        run=f"{base}_R",
        note=f"{base}_RN",
    )
