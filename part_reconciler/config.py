"""
Configuration for the part/drawing reconciler.

All tables and thresholds are centralized here. The config is frozen so a
single instance can be shared by concurrent callers; create a new instance
to override any setting.

Usage:
    from part_reconciler.config import Config, default_config

    # Use defaults
    print(default_config.thickness_tolerance_inches)  # 0.005

    # Override for a run
    my_config = Config(thickness_tolerance_inches=0.01)
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

from .models.routing import RoutingOp


def _frozen(table):
    return field(default_factory=lambda: MappingProxyType(dict(table)))


@dataclass(frozen=True)
class Config:
    """
    Central configuration for reconciliation and property mapping.

    Tables are read-only mappings; pass a new Config to change them.
    """

    # === Field comparison ===
    thickness_tolerance_inches: float = 0.005  # Absolute, after unit conversion

    # === Gap fills ===
    gap_fill_source: str = "drawing title block"
    gap_fill_confidences: Mapping[str, float] = _frozen({
        "PartNumber": 0.85,
        "Description": 0.85,
        "Revision": 0.90,
        "Material": 0.85,
        "Thickness": 0.85,
    })
    default_gap_fill_confidence: float = 0.85

    # === Routing order (presentation only, not schema slots) ===
    op_numbers: Mapping[RoutingOp, int] = _frozen({
        RoutingOp.PROCESS_OVERRIDE: 20,  # Cutting (laser/waterjet/plasma)
        RoutingOp.DEBURR: 30,
        RoutingOp.TAP: 35,
        RoutingOp.DRILL: 35,
        RoutingOp.MACHINE: 35,
        RoutingOp.HARDWARE: 40,          # Hardware insertion
        RoutingOp.WELD: 50,
        RoutingOp.INSPECT: 55,
        RoutingOp.HEAT_TREAT: 60,        # Outside process
        RoutingOp.FINISH: 60,            # Outside process
        RoutingOp.OUTSIDE_PROCESS: 60,
    })

    # === Work centers / timing used when a hint leaves them blank ===
    default_work_centers: Mapping[RoutingOp, str] = _frozen({
        RoutingOp.DEBURR: "F210",
        RoutingOp.WELD: "F400",
        RoutingOp.TAP: "F220",
        RoutingOp.DRILL: "F220",
        RoutingOp.MACHINE: "F220",
        RoutingOp.HARDWARE: "F220",
    })
    # (setup_min, run_min)
    default_minutes: Mapping[RoutingOp, Tuple[float, float]] = _frozen({
        RoutingOp.WELD: (15, 10),
        RoutingOp.DEBURR: (5, 2),
        RoutingOp.TAP: (10, 5),
        RoutingOp.DRILL: (10, 5),
        RoutingOp.MACHINE: (15, 10),
        RoutingOp.INSPECT: (5, 5),
    })

    # === Property schema values ===
    enable_flag_value: str = "1"
    note_separator: str = "; "
    other_slot_op_numbers: Tuple[int, ...] = (60, 70, 80, 90, 100, 110)

    # === Assembly operations ===
    assembly_start_op_number: int = 20  # OP10 is reserved for KIT
    assembly_op_step: int = 10

    # === Rename ===
    rename_max_description_length: int = 30
    rename_confidence: float = 0.85

    # === Review report (OpenAI) ===
    report_model_id: str = "gpt-4o-mini"
    report_max_tokens: int = 1500
    report_temperature: float = 0.2

    # === Output Files ===
    result_output_file: str = "ReconciliationResult.json"
    suggestions_output_file: str = "PropertySuggestions.json"
    report_output_file: str = "ReviewReport.md"

    def gap_fill_confidence(self, field_name: str) -> float:
        return self.gap_fill_confidences.get(field_name, self.default_gap_fill_confidence)

    def minutes_for(self, op: RoutingOp) -> Tuple[float, float]:
        return self.default_minutes.get(op, (0, 0))


# Default configuration instance
default_config = Config()
