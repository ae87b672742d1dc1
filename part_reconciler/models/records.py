"""Input records: what the solid model and the drawing each say about a part."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .fields import optional_float, optional_text
from .routing import RoutingHint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PartRecord:
    """
    Part data measured from the 3D solid model.

    Material and thickness are geometry-measured ground truth. The identity
    fields are whatever the model's existing custom properties hold.

    Attributes:
        material: Material identifier (e.g., "304 SS")
        thickness_m: Sheet/wall thickness in meters (CAD API native units)
        file_path: Current path of the part document
        part_number: Part number property, if set
        description: Description property, if set
        revision: Revision property, if set
    """

    material: Optional[str] = None
    thickness_m: Optional[float] = None
    file_path: Optional[str] = None
    part_number: Optional[str] = None
    description: Optional[str] = None
    revision: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PartRecord":
        """
        Build from collaborator JSON.

        Thickness may be given as "thicknessM" (meters) or "thicknessIn"
        (inches); meters wins when both are present.
        """
        thickness_m = optional_float(data.get("thicknessM"))
        if thickness_m is None:
            thickness_in = optional_float(data.get("thicknessIn"))
            if thickness_in is not None:
                thickness_m = thickness_in * 0.0254
        return cls(
            material=optional_text(data.get("material")),
            thickness_m=thickness_m,
            file_path=optional_text(data.get("filePath")),
            part_number=optional_text(data.get("partNumber")),
            description=optional_text(data.get("description")),
            revision=optional_text(data.get("revision")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "material": self.material,
            "thicknessM": self.thickness_m,
            "filePath": self.file_path,
            "partNumber": self.part_number,
            "description": self.description,
            "revision": self.revision,
        }


@dataclass(frozen=True)
class BomRow:
    """A single row from a drawing's bill of materials."""

    item_number: Optional[str] = None
    part_number: Optional[str] = None
    description: Optional[str] = None
    quantity: int = 0
    material: Optional[str] = None
    confidence: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BomRow":
        qty = optional_float(data.get("quantity"))
        return cls(
            item_number=optional_text(data.get("itemNumber")),
            part_number=optional_text(data.get("partNumber")),
            description=optional_text(data.get("description")),
            quantity=int(qty) if qty is not None and qty > 0 else 0,
            material=optional_text(data.get("material")),
            confidence=optional_float(data.get("confidence")) or 0.0,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "itemNumber": self.item_number,
            "partNumber": self.part_number,
            "description": self.description,
            "quantity": self.quantity,
            "material": self.material,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class DrawingRecord:
    """
    Data extracted from the 2D engineering drawing.

    Attributes:
        part_number: Title block part number
        description: Title block description
        revision: Title block revision
        material: Title block material callout
        thickness: Thickness as read; a bare number is inches, a string may
            carry a unit ('.125"', "3 mm"). Malformed values are ignored.
        routing_hints: Notes already classified into routing operations
        bom_rows: Bill of materials rows (assembly drawings)
    """

    part_number: Optional[str] = None
    description: Optional[str] = None
    revision: Optional[str] = None
    material: Optional[str] = None
    thickness: Optional[Union[float, str]] = None
    routing_hints: Tuple[RoutingHint, ...] = field(default_factory=tuple)
    bom_rows: Tuple[BomRow, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Accept lists from callers but store tuples so the record stays immutable
        object.__setattr__(self, "routing_hints", tuple(self.routing_hints or ()))
        object.__setattr__(self, "bom_rows", tuple(self.bom_rows or ()))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrawingRecord":
        """Build from collaborator JSON. Hints with an unknown operation are skipped."""
        hints = []
        for raw in data.get("routingHints") or []:
            if not isinstance(raw, dict):
                logger.warning("Skipping malformed routing hint: %r", raw)
                continue
            hint = RoutingHint.from_dict(raw)
            if hint is None:
                logger.warning("Skipping routing hint with unknown operation: %r", raw.get("operation"))
                continue
            hints.append(hint)

        rows = [BomRow.from_dict(r) for r in data.get("bomRows") or [] if isinstance(r, dict)]

        for key in ("thicknessIn", "thickness"):
            thickness = data.get(key)
            if isinstance(thickness, str):
                thickness = thickness.strip() or None
            if thickness is not None:
                break

        return cls(
            part_number=optional_text(data.get("partNumber")),
            description=optional_text(data.get("description")),
            revision=optional_text(data.get("revision")),
            material=optional_text(data.get("material")),
            thickness=thickness,
            routing_hints=tuple(hints),
            bom_rows=tuple(rows),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "partNumber": self.part_number,
            "description": self.description,
            "revision": self.revision,
            "material": self.material,
            "thickness": self.thickness,
            "routingHints": [h.to_dict() for h in self.routing_hints],
            "bomRows": [r.to_dict() for r in self.bom_rows],
        }
