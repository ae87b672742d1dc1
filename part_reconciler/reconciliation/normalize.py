"""Normalization for comparing part and drawing values.

Material callouts are written many ways for the same stock ("304 SS",
"304 STAINLESS STEEL", "304"); thickness comes in as meters from the model
and as free text from the title block. Everything here is pure and treats
unparseable input as absent (None) rather than raising.
"""

import os
import re
from typing import Any, List, Optional

from ..models.fields import optional_float

MM_TO_INCH = 1.0 / 25.4
METERS_TO_INCH = 1.0 / 0.0254

# Long material family words -> short form, applied after upper-casing
FAMILY_ABBREVIATIONS = [
    (re.compile(r"\bSTAINLESS(?:\s+STEEL)?\b"), "SS"),
    (re.compile(r"\b(?:CARBON|MILD)\s+STEEL\b"), "CS"),
    (re.compile(r"\bALUMIN(?:UM|IUM)\b"), "AL"),
]

# Family / filler words dropped when building the comparison key
FAMILY_WORDS = {"SS", "CS", "AL", "STEEL", "ALLOY", "STL", "CRS", "HRS"}

ALLOY_CORE = re.compile(r"^(A\d{2,4}|\d{3,5})L?$")

THICKNESS_WORDS = re.compile(r"\b(?:THK|THICK(?:NESS)?|MATL|MAT'L|T)\b\.?\s*[=:]?", re.IGNORECASE)
THICKNESS_VALUE = re.compile(
    r'^(?P<num>\d+-\d+/\d+|\d+/\d+|\d*\.?\d+)\s*(?P<unit>MM|IN(?:CH(?:ES)?)?\.?|")?$',
    re.IGNORECASE,
)

INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


# --- Material ---

def normalize_material(material: Optional[str]) -> str:
    """
    Canonical upper-case form of a material callout.

    Example:
        normalize_material("304  Stainless Steel")  # "304 SS"
    """
    if not material:
        return ""
    text = " ".join(str(material).upper().split())
    for pattern, short in FAMILY_ABBREVIATIONS:
        text = pattern.sub(short, text)
    return " ".join(text.split())


def _tokens(normalized: str) -> List[str]:
    return [t for t in re.split(r"[\s\-/,]+", normalized) if t]


def material_key(material: Optional[str]) -> str:
    """Normalized material with family suffix words stripped ("304 SS" -> "304")."""
    normalized = normalize_material(material)
    kept = [t for t in normalized.split() if t not in FAMILY_WORDS]
    return " ".join(kept) if kept else normalized


def _family_only(normalized: str) -> bool:
    words = normalized.split()
    return bool(words) and all(w in FAMILY_WORDS for w in words)


def alloy_core(material: Optional[str]) -> Optional[str]:
    """
    Extract the alloy designation ("304", "316L", "A36", "6061").

    Returns:
        The first token that looks like an alloy number, or None
    """
    for token in _tokens(normalize_material(material)):
        if ALLOY_CORE.match(token):
            return token
    return None


def materials_equivalent(part_material: Optional[str], drawing_material: Optional[str]) -> bool:
    """
    Decide whether two material callouts describe the same stock.

    Order:
    1. Normalized forms equal
    2. Keys equal after stripping family words
    3. Both carry an alloy number -> alloy numbers decide
    4. A family-only callout ("STAINLESS STEEL") matches any callout of
       that family ("304 STAINLESS STEEL")
    5. One key's words are a subset of the other's
    """
    a = normalize_material(part_material)
    b = normalize_material(drawing_material)
    if not a or not b:
        return False
    if a == b:
        return True

    key_a, key_b = material_key(a), material_key(b)
    if key_a == key_b:
        return True

    core_a, core_b = alloy_core(a), alloy_core(b)
    if core_a and core_b:
        return core_a == core_b

    if _family_only(a) or _family_only(b):
        family_a, family_b = set(_tokens(a)), set(_tokens(b))
        return family_a <= family_b or family_b <= family_a

    words_a, words_b = set(_tokens(key_a)), set(_tokens(key_b))
    if not words_a or not words_b:
        return False
    return words_a <= words_b or words_b <= words_a


# --- Thickness ---

def _parse_numeric(value: str) -> Optional[float]:
    """Parse '0.125', '.125', '1/8' or '1-1/8'."""
    mixed = re.match(r"^(\d+)-(\d+)/(\d+)$", value)
    if mixed:
        den = int(mixed.group(3))
        return int(mixed.group(1)) + int(mixed.group(2)) / den if den else None
    frac = re.match(r"^(\d+)/(\d+)$", value)
    if frac:
        den = int(frac.group(2))
        return int(frac.group(1)) / den if den else None
    return optional_float(value)


def parse_thickness_inches(value: Any) -> Optional[float]:
    """
    Convert a drawing thickness to inches.

    Bare numbers are inches. Strings may carry "mm", "in" or an inch mark
    and thickness words ('.125" THK', "T=3 mm"). Gauge callouts and other
    unparseable text return None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = optional_float(value)
        return number if number is not None and number > 0 else None
    if not isinstance(value, str):
        return None

    text = THICKNESS_WORDS.sub(" ", value).strip()
    text = " ".join(text.split())
    match = THICKNESS_VALUE.match(text)
    if not match:
        return None

    number = _parse_numeric(match.group("num"))
    if number is None or number <= 0:
        return None
    unit = (match.group("unit") or "").upper()
    if unit == "MM":
        return number * MM_TO_INCH
    return number


def part_thickness_inches(thickness_m: Any) -> Optional[float]:
    """Model thickness (meters) in inches; None when missing or not positive."""
    number = optional_float(thickness_m)
    if number is None or number <= 0:
        return None
    return number * METERS_TO_INCH


def format_inches(value: float) -> str:
    return f'{value:.4f}"'


# --- Filenames ---

def sanitize_filename(name: Optional[str]) -> str:
    """
    Make a value safe for use as a filename stem.

    Invalid characters and spaces become underscores, runs of underscores
    collapse, and the result is upper-cased.

    Example:
        sanitize_filename("Mounting Bracket, L/H")  # "MOUNTING_BRACKET,_L_H"
    """
    if not name:
        return ""
    result = INVALID_FILENAME_CHARS.sub("_", str(name).strip())
    result = result.replace(" ", "_")
    result = re.sub(r"_+", "_", result)
    return result.strip("_.").upper()


def split_file_path(path: str):
    """
    Split a Windows or POSIX path into (directory prefix, stem, extension).

    The prefix keeps its trailing separator so prefix + stem + ext == path.
    """
    name = re.split(r"[\\/]", path)[-1]
    prefix = path[: len(path) - len(name)]
    stem, ext = os.path.splitext(name)
    return prefix, stem, ext
