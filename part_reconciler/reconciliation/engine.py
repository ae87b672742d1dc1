"""Reconcile 3D model part data with 2D drawing data.

Reconciliation strategy:
1. Compare each overlapping field (part number, description, revision,
   material, thickness)
2. Part value only -> keep it, nothing to do
3. Drawing value only -> gap fill from the title block
4. Both, equivalent -> confirmation
5. Both, different -> conflict for material/thickness (the model is
   measured geometry, so the part value is recommended); identity fields
   have no conflict path
6. Turn drawing routing hints into ordered routing suggestions
7. Suggest a canonical filename when it differs from the current one
"""

import logging
from typing import Callable, Optional

from ..config import Config, default_config
from ..models.fields import optional_text
from ..models.reconciliation import (
    Confirmation,
    ConflictResolution,
    ConflictSeverity,
    DataConflict,
    GapFill,
    ReconciliationResult,
    RenameSuggestion,
)
from ..models.records import DrawingRecord, PartRecord
from .normalize import (
    format_inches,
    materials_equivalent,
    parse_thickness_inches,
    part_thickness_inches,
    sanitize_filename,
    split_file_path,
)
from .routing import RoutingNoteInterpreter

logger = logging.getLogger(__name__)

EMPTY_PART = PartRecord()

MATERIAL_CONFLICT_REASON = (
    "3D model material does not match drawing material; "
    "model material is taken from the solid body"
)
THICKNESS_CONFLICT_REASON = (
    "3D model geometry is measured; drawing value may be nominal. "
    "Recommend using model value."
)


def _same_text(a: str, b: str) -> bool:
    return a.strip().upper() == b.strip().upper()


class ReconciliationEngine:
    """
    Merge a PartRecord with a DrawingRecord into a ReconciliationResult.

    Either input may be None. The engine is stateless: one instance can be
    shared across threads, and every call builds a fresh result.

    Usage:
        engine = ReconciliationEngine()
        result = engine.reconcile(part, drawing)

        if result.has_conflicts:
            for c in result.conflicts:
                print(f"{c.field}: {c.model_value} vs {c.drawing_value}")
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize engine.

        Args:
            config: Tolerances and tables (default: default_config)
        """
        self.config = config or default_config
        self._interpreter = RoutingNoteInterpreter(self.config)

    def reconcile(
        self,
        part: Optional[PartRecord],
        drawing: Optional[DrawingRecord],
    ) -> ReconciliationResult:
        """
        Reconcile model data with drawing data.

        Args:
            part: Data measured from the solid model (None if unavailable)
            drawing: Data extracted from the drawing (None if unavailable)

        Returns:
            ReconciliationResult; empty when there is no drawing
        """
        result = ReconciliationResult()

        if drawing is None:
            logger.debug("No drawing record; returning empty reconciliation")
            return result

        model = part if part is not None else EMPTY_PART

        # Identity fields: gap fill or confirm only
        self._reconcile_field(result, "PartNumber", model.part_number, drawing.part_number)
        self._reconcile_field(result, "Description", model.description, drawing.description)
        self._reconcile_field(result, "Revision", model.revision, drawing.revision)

        self._reconcile_field(
            result, "Material", model.material, drawing.material,
            equivalent=materials_equivalent,
            conflict_reason=MATERIAL_CONFLICT_REASON,
        )
        self._reconcile_thickness(result, model, drawing)

        result.routing_suggestions = self._interpreter.interpret(drawing.routing_hints)
        result.rename = self._suggest_rename(part, drawing)

        logger.debug("Reconciled %s: %s", drawing.part_number or "<no part number>", result.summary)
        return result

    # --- Field comparison ---

    def _reconcile_field(
        self,
        result: ReconciliationResult,
        field_name: str,
        part_value,
        drawing_value,
        equivalent: Callable[[str, str], bool] = _same_text,
        conflict_reason: Optional[str] = None,
    ) -> None:
        """
        Apply the present/absent rules to one field.

        A conflict is only recorded when conflict_reason is given; fields
        without one just produce no action on disagreement.
        """
        part_text = optional_text(part_value)
        drawing_text = optional_text(drawing_value)

        if drawing_text is None:
            return

        if part_text is None:
            self._add_gap_fill(result, field_name, drawing_text)
            return

        if equivalent(part_text, drawing_text):
            result.confirmations.append(Confirmation(field_name, part_text, drawing_text))
            return

        if conflict_reason is None:
            logger.debug(
                "%s differs (part=%r, drawing=%r); no conflict path for this field",
                field_name, part_text, drawing_text,
            )
            return

        result.conflicts.append(DataConflict(
            field=field_name,
            model_value=part_text,
            drawing_value=drawing_text,
            severity=ConflictSeverity.HIGH,
            recommendation=ConflictResolution.USE_PART,
            reason=conflict_reason,
        ))

    def _reconcile_thickness(
        self,
        result: ReconciliationResult,
        model: PartRecord,
        drawing: DrawingRecord,
    ) -> None:
        """Thickness compares in inches within an absolute tolerance."""
        part_in = part_thickness_inches(model.thickness_m)
        drawing_in = parse_thickness_inches(drawing.thickness)

        if drawing_in is None:
            if drawing.thickness is not None:
                logger.debug("Ignoring unparseable drawing thickness %r", drawing.thickness)
            return

        if part_in is None:
            self._add_gap_fill(result, "Thickness", format_inches(drawing_in))
            return

        if abs(part_in - drawing_in) <= self.config.thickness_tolerance_inches:
            result.confirmations.append(
                Confirmation("Thickness", format_inches(part_in), format_inches(drawing_in))
            )
            return

        result.conflicts.append(DataConflict(
            field="Thickness",
            model_value=format_inches(part_in),
            drawing_value=format_inches(drawing_in),
            severity=ConflictSeverity.HIGH,
            recommendation=ConflictResolution.USE_PART,
            reason=THICKNESS_CONFLICT_REASON,
        ))

    def _add_gap_fill(self, result: ReconciliationResult, field_name: str, value: str) -> None:
        result.gap_fills.append(GapFill(
            field=field_name,
            value=value,
            source=self.config.gap_fill_source,
            confidence=self.config.gap_fill_confidence(field_name),
        ))

    # --- Rename ---

    def _suggest_rename(
        self,
        part: Optional[PartRecord],
        drawing: DrawingRecord,
    ) -> Optional[RenameSuggestion]:
        """Suggest {PARTNUMBER}_{DESCRIPTION} when it differs from the current filename."""
        if part is None or not optional_text(part.file_path):
            return None

        part_number = optional_text(drawing.part_number) or optional_text(part.part_number)
        if not part_number:
            return None
        description = optional_text(drawing.description) or optional_text(part.description)

        new_name = canonical_filename(
            part_number, description, self.config.rename_max_description_length,
        )
        if not new_name:
            return None

        file_path = optional_text(part.file_path)
        prefix, stem, ext = split_file_path(file_path)
        if stem.upper() == new_name.upper():
            return None

        return RenameSuggestion(
            old_path=file_path,
            new_path=prefix + new_name + ext,
            old_name=stem,
            new_name=new_name,
            reason=f"Canonical name '{new_name}' differs from filename '{stem}'",
            confidence=self.config.rename_confidence,
        )


def canonical_filename(
    part_number: str,
    description: Optional[str],
    max_description_length: Optional[int] = None,
) -> str:
    """
    Build the canonical filename stem "{PARTNUMBER}_{DESCRIPTION}".

    The description is left off when missing, or when it is longer than
    max_description_length (if set) after sanitizing.
    """
    name = sanitize_filename(part_number)
    if not name:
        return ""
    safe_desc = sanitize_filename(description)
    if safe_desc and (max_description_length is None or len(safe_desc) <= max_description_length):
        name = f"{name}_{safe_desc}"
    return name


def reconcile(
    part: Optional[PartRecord],
    drawing: Optional[DrawingRecord],
    config: Optional[Config] = None,
) -> ReconciliationResult:
    """
    Convenience function to reconcile one part with one drawing.

    Example:
        result = reconcile(PartRecord(material="304 SS"), DrawingRecord(material="304 SS"))
        print(result.summary)
    """
    return ReconciliationEngine(config).reconcile(part, drawing)
