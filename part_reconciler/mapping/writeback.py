"""Apply approved property suggestions to a property dictionary.

The document writer is an external collaborator. This module only decides
what changes: it takes the user-approved suggestions and the document's
current properties and returns a new dictionary plus a record of what was
applied and what was skipped. infer_property_type tells the writer which
properties should be stored as numbers.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..models.fields import optional_float
from ..models.suggestion import PropertyCategory, PropertySuggestion, same_value

# Setup/run minutes: OP20_S, Other_R, Other_S2
NUMERIC_TIME_KEY = re.compile(r"_[SR]\d*$")


class PropertyType(Enum):
    TEXT = "Text"
    NUMBER = "Number"


class WritebackStatus(Enum):
    APPLIED = "Applied"
    SKIPPED = "Skipped"


@dataclass
class WritebackEntry:
    """One property write, or the reason it was not made."""

    property_name: str
    old_value: str = ""
    new_value: str = ""
    status: WritebackStatus = WritebackStatus.APPLIED
    property_type: PropertyType = PropertyType.TEXT
    category: Optional[PropertyCategory] = None
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "propertyName": self.property_name,
            "oldValue": self.old_value,
            "newValue": self.new_value,
            "status": self.status.value,
            "propertyType": self.property_type.value,
            "category": self.category.value if self.category else None,
            "reason": self.reason,
        }


@dataclass
class WritebackResult:
    """
    Outcome of applying a batch of approved suggestions.

    Attributes:
        properties: New property dictionary with the changes applied
        applied: Entries that changed a value
        skipped: Entries left alone, with the reason
    """

    properties: Dict[str, str] = field(default_factory=dict)
    applied: List[WritebackEntry] = field(default_factory=list)
    skipped: List[WritebackEntry] = field(default_factory=list)

    @property
    def success(self) -> bool:
        # Nothing in this module can fail a write; skips are not failures
        return True

    @property
    def total_processed(self) -> int:
        return len(self.applied) + len(self.skipped)

    @property
    def changed_count(self) -> int:
        return len(self.applied)

    @property
    def summary(self) -> str:
        return f"{len(self.applied)} applied, {len(self.skipped)} skipped"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary,
            "applied": [e.to_dict() for e in self.applied],
            "skipped": [e.to_dict() for e in self.skipped],
            "properties": dict(self.properties),
        }


def infer_property_type(property_name: Optional[str], value: Optional[str]) -> PropertyType:
    """
    Setup/run times and Other-slot operation numbers are numeric when the
    value parses as a number; everything else is text.
    """
    if not property_name:
        return PropertyType.TEXT

    name = property_name.upper()
    numeric_key = (
        NUMERIC_TIME_KEY.search(name) is not None
        or name == "OTHEROP"
        or name.startswith("OTHER_OP")
    )
    if numeric_key and optional_float(value) is not None:
        return PropertyType.NUMBER
    return PropertyType.TEXT


def _find_key(properties: Mapping[str, str], property_name: str) -> Optional[str]:
    """Existing key matching property_name case-insensitively."""
    if property_name in properties:
        return property_name
    folded = property_name.casefold()
    for key in properties:
        if str(key).casefold() == folded:
            return key
    return None


def apply_single(
    property_name: str,
    value: Optional[str],
    properties: Dict[str, str],
) -> WritebackEntry:
    """
    Set one property in place, for interactive conflict resolution.

    Unlike apply_suggestions this always writes, even when the value is
    unchanged.
    """
    new_value = value or ""
    key = _find_key(properties, property_name) or property_name
    old_value = properties.get(key)
    properties[key] = new_value
    return WritebackEntry(
        property_name=key,
        old_value="" if old_value is None else str(old_value),
        new_value=new_value,
        status=WritebackStatus.APPLIED,
        property_type=infer_property_type(key, new_value),
    )


def apply_suggestions(
    approved: Iterable[PropertySuggestion],
    properties: Optional[Mapping[str, str]] = None,
) -> WritebackResult:
    """
    Apply user-approved suggestions to a copy of the current properties.

    Suggestions with an empty property name and values that already match
    (case-insensitively) are skipped. An existing key is updated under its
    current spelling.

    Args:
        approved: Suggestions the user accepted
        properties: Current document properties (not modified)

    Returns:
        WritebackResult whose properties dict holds the updated values
    """
    result = WritebackResult(properties=dict(properties or {}))

    for suggestion in approved or ():
        name = (suggestion.property_name or "").strip()
        new_value = suggestion.value or ""

        if not name:
            result.skipped.append(WritebackEntry(
                property_name=suggestion.property_name or "(none)",
                new_value=new_value,
                status=WritebackStatus.SKIPPED,
                category=suggestion.category,
                reason="Property name is empty",
            ))
            continue

        key = _find_key(result.properties, name) or name
        current = result.properties.get(key)
        old_value = "" if current is None else str(current)

        if same_value(old_value, new_value):
            result.skipped.append(WritebackEntry(
                property_name=key,
                old_value=old_value,
                new_value=new_value,
                status=WritebackStatus.SKIPPED,
                property_type=infer_property_type(key, new_value),
                category=suggestion.category,
                reason="Value already matches",
            ))
            continue

        entry = apply_single(key, new_value, result.properties)
        entry.category = suggestion.category
        result.applied.append(entry)

    return result
