"""Coercion helpers shared by the record models.

Collaborator JSON is loosely typed: numbers arrive as strings, blanks as
empty strings. These helpers turn malformed values into None so callers
can treat them as absent.
"""

import math
from typing import Any, Optional


def optional_text(value: Any) -> Optional[str]:
    """Strip a value to text; None for missing or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def optional_float(value: Any) -> Optional[float]:
    """Parse a float, treating malformed or non-finite input as absent."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number
