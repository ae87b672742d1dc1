"""How each routing operation category is placed in the property schema.

Every RoutingOp is handled by exactly one strategy:
- FIXED: the category owns a dedicated slot (F210, F220, OP20, OS)
- FLEXIBLE: the category takes the next free "Other" work center slot

The tables are checked at import so a new RoutingOp member without a
strategy fails loudly instead of being silently ignored by the mapper.
"""

from enum import Enum
from types import MappingProxyType

from ..models.routing import RoutingOp
from ..schema import (
    DEBURR_SLOT,
    FINISH_SLOT,
    OUTSIDE_PROCESS_SLOT,
    PROCESS_OVERRIDE_SLOT,
    TAP_SLOT,
    FixedSlotKeys,
)


class SlotStrategy(Enum):
    FIXED = "Fixed"
    FLEXIBLE = "Flexible"


ROUTING_STRATEGY = MappingProxyType({
    RoutingOp.DEBURR: SlotStrategy.FIXED,
    RoutingOp.TAP: SlotStrategy.FIXED,
    RoutingOp.DRILL: SlotStrategy.FIXED,
    RoutingOp.PROCESS_OVERRIDE: SlotStrategy.FIXED,
    RoutingOp.FINISH: SlotStrategy.FIXED,
    RoutingOp.HEAT_TREAT: SlotStrategy.FIXED,
    RoutingOp.OUTSIDE_PROCESS: SlotStrategy.FIXED,
    RoutingOp.WELD: SlotStrategy.FLEXIBLE,
    RoutingOp.INSPECT: SlotStrategy.FLEXIBLE,
    RoutingOp.HARDWARE: SlotStrategy.FLEXIBLE,
    RoutingOp.MACHINE: SlotStrategy.FLEXIBLE,
})

FIXED_SLOTS = MappingProxyType({
    RoutingOp.DEBURR: DEBURR_SLOT,
    RoutingOp.TAP: TAP_SLOT,
    RoutingOp.DRILL: TAP_SLOT,
    RoutingOp.PROCESS_OVERRIDE: PROCESS_OVERRIDE_SLOT,
    RoutingOp.FINISH: FINISH_SLOT,
    RoutingOp.HEAT_TREAT: OUTSIDE_PROCESS_SLOT,
    RoutingOp.OUTSIDE_PROCESS: OUTSIDE_PROCESS_SLOT,
})


def _validate_tables() -> None:
    missing = [op.value for op in RoutingOp if op not in ROUTING_STRATEGY]
    if missing:
        raise RuntimeError(f"No slot strategy for routing operations: {', '.join(missing)}")

    no_slot = [
        op.value for op, strategy in ROUTING_STRATEGY.items()
        if strategy is SlotStrategy.FIXED and op not in FIXED_SLOTS
    ]
    if no_slot:
        raise RuntimeError(f"Fixed-slot operations without slot keys: {', '.join(no_slot)}")


_validate_tables()


def strategy_for(op: RoutingOp) -> SlotStrategy:
    return ROUTING_STRATEGY[op]


def fixed_slot_for(op: RoutingOp) -> FixedSlotKeys:
    """Slot keys for a FIXED operation. Raises KeyError for FLEXIBLE ones."""
    return FIXED_SLOTS[op]
