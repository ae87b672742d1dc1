"""Map a ReconciliationResult onto the legacy custom property schema.

For parts:
- Gap fills -> identity keys (Print, Description, Revision, OptiMaterial)
- Routing suggestions -> fixed slots (F210, F220, OP20, OS) or the six
  flexible "Other" work center slots
For assemblies:
- Routing suggestions -> sequential free-form OP{n} slots

Suggestions are accumulated per property key, so several hints that land
on the same note produce one suggestion carrying every note. Nothing here
writes to a document; the output goes to an approval UI first.
"""

import logging
from typing import Dict, List, Mapping, Optional

from ..config import Config, default_config
from ..models.fields import optional_text
from ..models.reconciliation import ReconciliationResult
from ..models.routing import RoutingSuggestion
from ..models.suggestion import (
    AssemblyOperationSuggestion,
    PropertyCategory,
    PropertySuggestion,
    SuggestionSet,
    SuggestionSource,
    UnassignedSuggestion,
    format_minutes,
    is_blank,
    same_value,
)
from ..schema import IDENTITY_PROPERTY_KEYS, OTHER_SLOTS, OtherSlotKeys
from .strategy import SlotStrategy, fixed_slot_for, strategy_for

logger = logging.getLogger(__name__)

FIELD_CATEGORIES = {
    "PartNumber": PropertyCategory.IDENTITY,
    "Description": PropertyCategory.IDENTITY,
    "Revision": PropertyCategory.IDENTITY,
    "Material": PropertyCategory.MATERIAL,
}

NOTE_KEY_SUFFIX = "_RN"


def is_note_key(property_name: str) -> bool:
    """Routing note keys take append semantics; every other key is a scalar."""
    return property_name.upper().endswith(NOTE_KEY_SUFFIX)


def _note_reason(suggestion: RoutingSuggestion) -> str:
    source = suggestion.source_note or suggestion.note_text or ""
    return f'Drawing note: "{source}"'


class _PropertyAccumulator:
    """
    Ordered per-key collection of suggestions for one mapping call.

    Scalar keys keep the first value suggested. Note keys append each new
    note after the current text unless that note is already a segment of it.
    """

    def __init__(self, current: Optional[Mapping[str, str]], separator: str):
        # Case-insensitive view; the caller's mapping is never modified
        self._current: Dict[str, str] = {}
        for key, value in (current or {}).items():
            if key is None:
                continue
            self._current.setdefault(str(key).casefold(), value)
        self._separator = separator
        self._by_key: Dict[str, PropertySuggestion] = {}

    def current_value(self, property_name: str) -> Optional[str]:
        value = self._current.get(property_name.casefold())
        return None if value is None else str(value)

    def set(
        self,
        property_name: str,
        value: str,
        category: PropertyCategory,
        confidence: float,
        source: SuggestionSource,
        reason: str,
    ) -> None:
        if property_name in self._by_key:
            logger.debug("Keeping first value for %s; ignoring %r", property_name, value)
            return
        self._by_key[property_name] = PropertySuggestion(
            property_name=property_name,
            value=value,
            category=category,
            current_value=self.current_value(property_name),
            confidence=confidence,
            source=source,
            reason=reason,
        )

    def append_note(self, property_name: str, note: str, confidence: float, reason: str) -> None:
        existing = self._by_key.get(property_name)
        base = existing.value if existing else self.current_value(property_name)
        value = self._append(base, note)

        if existing is None:
            self._by_key[property_name] = PropertySuggestion(
                property_name=property_name,
                value=value,
                category=PropertyCategory.ROUTING,
                current_value=self.current_value(property_name),
                confidence=confidence,
                source=SuggestionSource.DRAWING_NOTE,
                reason=reason,
            )
            return

        existing.value = value
        existing.confidence = min(existing.confidence, confidence)
        if reason not in existing.reason:
            existing.reason = f"{existing.reason}; {reason}"

    def _append(self, base: Optional[str], note: str) -> str:
        if is_blank(base):
            return note
        base = base.strip()
        present = set(self._segments(base))
        if all(s in present for s in self._segments(note)):
            return base
        return f"{base}{self._separator}{note}"

    def _segments(self, text: str) -> List[str]:
        # A note may itself hold several separated segments
        parts = (s.strip().upper() for s in text.split(self._separator.strip()))
        return [p for p in parts if p]

    def build(self, unassigned: Optional[List[UnassignedSuggestion]] = None) -> SuggestionSet:
        return SuggestionSet(
            suggestions=list(self._by_key.values()),
            unassigned=list(unassigned or []),
        )


class PropertySuggestionService:
    """
    Generate custom property suggestions from reconciliation results.

    Usage:
        service = PropertySuggestionService()
        suggestions = service.generate_part_suggestions(result, current_properties)

        for s in suggestions:
            print(s.property_name, s.value, s.is_override)
        for u in suggestions.unassigned:
            print("No slot for", u.routing.operation.value)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    # --- Parts ---

    def generate_part_suggestions(
        self,
        result: Optional[ReconciliationResult],
        current_properties: Optional[Mapping[str, str]] = None,
    ) -> SuggestionSet:
        """
        Suggestions for a part document.

        Args:
            result: Reconciliation result (None is treated as empty)
            current_properties: Properties currently on the document

        Returns:
            SuggestionSet in emission order, with any routing suggestions
            that had no free slot listed under unassigned
        """
        result = result or ReconciliationResult()
        acc = _PropertyAccumulator(current_properties, self.config.note_separator)

        self._add_identity(acc, result)

        unassigned: List[UnassignedSuggestion] = []
        next_slot = 0
        for suggestion in result.routing_suggestions:
            if strategy_for(suggestion.operation) is SlotStrategy.FIXED:
                self._add_fixed(acc, suggestion)
                continue

            if next_slot >= len(OTHER_SLOTS):
                reason = (
                    f"All {len(OTHER_SLOTS)} Other work center slots are in use; "
                    f"{suggestion.operation.value} must be routed manually"
                )
                logger.warning("Unassigned %s suggestion: %s", suggestion.operation.value, reason)
                unassigned.append(UnassignedSuggestion(routing=suggestion, reason=reason))
                continue

            self._add_flexible(acc, suggestion, next_slot)
            next_slot += 1

        suggestion_set = acc.build(unassigned)
        logger.debug(
            "Generated %d part suggestions (%d unassigned)",
            len(suggestion_set), len(suggestion_set.unassigned),
        )
        return suggestion_set

    def _add_identity(self, acc: _PropertyAccumulator, result: ReconciliationResult) -> None:
        for gap in result.gap_fills:
            property_name = IDENTITY_PROPERTY_KEYS.get(gap.field)
            if property_name is None:
                logger.debug("Gap fill for %s has no property target", gap.field)
                continue
            acc.set(
                property_name,
                gap.value,
                category=FIELD_CATEGORIES.get(gap.field, PropertyCategory.OTHER),
                confidence=gap.confidence,
                source=SuggestionSource.DRAWING_TITLE_BLOCK,
                reason=f"Extracted from drawing ({gap.source})",
            )

    def _add_fixed(self, acc: _PropertyAccumulator, suggestion: RoutingSuggestion) -> None:
        slot = fixed_slot_for(suggestion.operation)
        reason = _note_reason(suggestion)

        if slot.enable_flag:
            acc.set(
                slot.enable_flag, self.config.enable_flag_value,
                category=PropertyCategory.ROUTING,
                confidence=suggestion.confidence,
                source=SuggestionSource.DRAWING_NOTE,
                reason=f"{suggestion.operation.value} operation required. {reason}",
            )

        work_center = optional_text(suggestion.work_center)
        if slot.work_center and work_center:
            acc.set(
                slot.work_center, work_center,
                category=PropertyCategory.ROUTING,
                confidence=suggestion.confidence,
                source=SuggestionSource.DRAWING_NOTE,
                reason=reason,
            )

        note = optional_text(suggestion.note_text)
        if note:
            acc.append_note(slot.note, note, suggestion.confidence, reason)

    def _add_flexible(
        self,
        acc: _PropertyAccumulator,
        suggestion: RoutingSuggestion,
        slot_index: int,
    ) -> None:
        slot: OtherSlotKeys = OTHER_SLOTS[slot_index]
        op = suggestion.operation
        reason = _note_reason(suggestion)
        confidence = suggestion.confidence

        work_center = optional_text(suggestion.work_center)
        wc_source = SuggestionSource.DRAWING_NOTE
        if not work_center:
            work_center = self.config.default_work_centers.get(op)
            wc_source = SuggestionSource.DEFAULT_TABLE

        # Slots fill in order even when one already holds another op
        occupied = ""
        current_wc = acc.current_value(slot.work_center)
        if not is_blank(current_wc) and not same_value(current_wc, work_center):
            occupied = f" Other slot {slot.index} currently holds work center {current_wc.strip()}."
            logger.info(
                "%s suggestion overwrites Other slot %d work center %s",
                op.value, slot.index, current_wc.strip(),
            )

        acc.set(
            slot.enabled, self.config.enable_flag_value,
            category=PropertyCategory.ROUTING, confidence=confidence,
            source=SuggestionSource.DRAWING_NOTE,
            reason=f"{op.value} operation in Other slot {slot.index}. {reason}{occupied}",
        )
        acc.set(
            slot.op_number, str(self.config.other_slot_op_numbers[slot_index]),
            category=PropertyCategory.ROUTING, confidence=confidence,
            source=SuggestionSource.DEFAULT_TABLE,
            reason=f"Default operation number for Other slot {slot.index}",
        )

        if work_center:
            acc.set(
                slot.work_center, work_center,
                category=PropertyCategory.ROUTING, confidence=confidence,
                source=wc_source, reason=f"{reason}{occupied}",
            )

        default_setup, default_run = self.config.minutes_for(op)
        for key, stated, default, label in (
            (slot.setup, suggestion.setup_min, default_setup, "setup"),
            (slot.run, suggestion.run_min, default_run, "run"),
        ):
            if stated is not None:
                acc.set(
                    key, format_minutes(stated),
                    category=PropertyCategory.ROUTING, confidence=confidence,
                    source=SuggestionSource.DRAWING_NOTE, reason=reason,
                )
            else:
                acc.set(
                    key, format_minutes(default),
                    category=PropertyCategory.ROUTING, confidence=confidence,
                    source=SuggestionSource.DEFAULT_TABLE,
                    reason=f"Default {label} minutes for {op.value}",
                )

        note = optional_text(suggestion.note_text)
        if note:
            acc.append_note(slot.note, note, confidence, reason)

    # --- Assemblies ---

    def generate_assembly_operations(
        self,
        result: Optional[ReconciliationResult],
        starting_op_number: Optional[int] = None,
    ) -> List[AssemblyOperationSuggestion]:
        """
        Number routing suggestions as free-form assembly operations.

        OP10 is reserved for KIT, so numbering starts at OP20 by default and
        steps by 10 in the result's routing order.
        """
        if result is None or not result.has_routing_suggestions:
            return []

        op_number = (
            self.config.assembly_start_op_number
            if starting_op_number is None else starting_op_number
        )
        operations = []
        for suggestion in result.routing_suggestions:
            default_setup, default_run = self.config.minutes_for(suggestion.operation)
            operations.append(AssemblyOperationSuggestion(
                op_number=op_number,
                work_center=(
                    optional_text(suggestion.work_center)
                    or self.config.default_work_centers.get(suggestion.operation)
                ),
                setup_min=suggestion.setup_min if suggestion.setup_min is not None else default_setup,
                run_min=suggestion.run_min if suggestion.run_min is not None else default_run,
                routing_note=suggestion.note_text,
                source_note=suggestion.source_note,
                confidence=suggestion.confidence,
            ))
            op_number += self.config.assembly_op_step
        return operations

    def generate_assembly_suggestions(
        self,
        result: Optional[ReconciliationResult],
        current_properties: Optional[Mapping[str, str]] = None,
        starting_op_number: Optional[int] = None,
    ) -> SuggestionSet:
        """Identity gap fills plus one OP{n} group per routing suggestion."""
        result = result or ReconciliationResult()
        acc = _PropertyAccumulator(current_properties, self.config.note_separator)

        self._add_identity(acc, result)

        for operation in self.generate_assembly_operations(result, starting_op_number):
            reason = f'Drawing note: "{operation.source_note or operation.routing_note or ""}"'
            self._add_operation(acc, operation.to_properties(), operation.confidence, reason)

        return acc.build()

    def _add_operation(
        self,
        acc: _PropertyAccumulator,
        properties: Dict[str, str],
        confidence: float,
        reason: str,
    ) -> None:
        for key, value in properties.items():
            if is_blank(value):
                continue
            if is_note_key(key):
                acc.append_note(key, value, confidence, reason)
            else:
                acc.set(
                    key, value,
                    category=PropertyCategory.ROUTING,
                    confidence=confidence,
                    source=SuggestionSource.DRAWING_NOTE,
                    reason=reason,
                )


def generate_part_suggestions(
    result: Optional[ReconciliationResult],
    current_properties: Optional[Mapping[str, str]] = None,
    config: Optional[Config] = None,
) -> SuggestionSet:
    """Convenience wrapper around PropertySuggestionService.generate_part_suggestions."""
    return PropertySuggestionService(config).generate_part_suggestions(result, current_properties)


def generate_assembly_suggestions(
    result: Optional[ReconciliationResult],
    current_properties: Optional[Mapping[str, str]] = None,
    starting_op_number: Optional[int] = None,
    config: Optional[Config] = None,
) -> SuggestionSet:
    return PropertySuggestionService(config).generate_assembly_suggestions(
        result, current_properties, starting_op_number,
    )
