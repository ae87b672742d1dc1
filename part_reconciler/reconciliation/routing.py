"""Convert drawing routing hints into ordered routing suggestions.

Each hint gets a suggested operation number from the shop's standard routing
template (OP20 cutting, OP30 deburr, OP35 tap/drill/machine, OP40 hardware,
OP50 weld, OP55 inspect, OP60 outside process). The number orders the
suggestions for review; it does not decide which property slot is written.
"""

from typing import Iterable, List, Optional

from ..config import Config, default_config
from ..models.routing import RoutingHint, RoutingOp, RoutingSuggestion, SuggestionType

# Used only if a config table omits an operation
FALLBACK_OP_NUMBER = 60

OUTSIDE_OPS = {RoutingOp.HEAT_TREAT, RoutingOp.FINISH, RoutingOp.OUTSIDE_PROCESS}


class RoutingNoteInterpreter:
    """
    Turn routing hints into suggestions sorted by operation number.

    Usage:
        interpreter = RoutingNoteInterpreter()
        suggestions = interpreter.interpret(drawing.routing_hints)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def op_number_for(self, op: RoutingOp) -> int:
        return self.config.op_numbers.get(op, FALLBACK_OP_NUMBER)

    def interpret(self, hints: Optional[Iterable[RoutingHint]]) -> List[RoutingSuggestion]:
        """
        Convert hints to suggestions.

        Args:
            hints: Routing hints from the drawing (may be None)

        Returns:
            New list sorted ascending by suggested_op_number; hints with the
            same number keep their input order
        """
        suggestions = [self._to_suggestion(h) for h in (hints or ()) if h is not None]
        # Stable sort: equal op numbers keep input order
        return sorted(suggestions, key=lambda s: s.suggested_op_number)

    def _to_suggestion(self, hint: RoutingHint) -> RoutingSuggestion:
        return RoutingSuggestion(
            operation=hint.operation,
            suggested_op_number=self.op_number_for(hint.operation),
            work_center=hint.work_center,
            note_text=hint.note_text or hint.source_note,
            source_note=hint.source_note,
            confidence=_clamp(hint.confidence),
            setup_min=hint.setup_min,
            run_min=hint.run_min,
            suggestion_type=determine_type(hint),
        )


def determine_type(hint: RoutingHint) -> SuggestionType:
    """Classify how a hint changes the routing."""
    if hint.operation is RoutingOp.PROCESS_OVERRIDE:
        return SuggestionType.MODIFY_OPERATION
    if hint.operation in OUTSIDE_OPS:
        return SuggestionType.ADD_OPERATION if hint.work_center else SuggestionType.ADD_NOTE
    return SuggestionType.ADD_OPERATION


def _clamp(confidence: float) -> float:
    try:
        value = float(confidence)
    except (TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return min(1.0, max(0.0, value))
