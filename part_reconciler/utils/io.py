"""File I/O utilities."""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..models.records import DrawingRecord, PartRecord


def load_json_robust(filepath: Union[str, Path]) -> Tuple[Optional[Any], Optional[str]]:
    """
    Load JSON with BOM (Byte Order Mark) handling.

    SolidWorks and other tools sometimes export JSON with encoding issues.
    This function tries multiple encodings to handle these cases.

    Encoding order:
    1. utf-8-sig: UTF-8 with BOM (handles Windows exports)
    2. utf-8: Standard UTF-8
    3. latin-1: Fallback for legacy files

    Args:
        filepath: Path to JSON file

    Returns:
        Tuple of (data, error):
        - On success: (data, None)
        - On failure: (None, error_message)

    Example:
        data, err = load_json_robust("part.json")
        if err:
            print(f"Failed to load: {err}")
        else:
            print(data["partNumber"])
    """
    filepath = Path(filepath)

    if not filepath.exists():
        return None, f"File not found: {filepath}"

    for encoding in ["utf-8-sig", "utf-8", "latin-1"]:
        try:
            with open(filepath, "r", encoding=encoding) as f:
                return json.load(f), None
        except UnicodeDecodeError:
            continue
        except json.JSONDecodeError as e:
            return None, f"JSON error: {str(e)[:100]}"
        except OSError as e:
            return None, f"Error: {str(e)[:100]}"

    return None, f"Failed all encodings for: {filepath}"


def _load_object(filepath: Union[str, Path]) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    data, err = load_json_robust(filepath)
    if err:
        return None, err
    if not isinstance(data, dict):
        return None, f"Expected a JSON object in {filepath}, got {type(data).__name__}"
    return data, None


def load_part_record(filepath: Union[str, Path]) -> Tuple[Optional[PartRecord], Optional[str]]:
    """Load a PartRecord exported by the CAD property reader."""
    data, err = _load_object(filepath)
    if err:
        return None, err
    return PartRecord.from_dict(data), None


def load_drawing_record(filepath: Union[str, Path]) -> Tuple[Optional[DrawingRecord], Optional[str]]:
    """Load a DrawingRecord exported by the drawing analyzer."""
    data, err = _load_object(filepath)
    if err:
        return None, err
    return DrawingRecord.from_dict(data), None


def load_properties(filepath: Union[str, Path]) -> Tuple[Optional[Dict[str, str]], Optional[str]]:
    """
    Load a flat {property name: value} dictionary.

    Values are converted to text; JSON null becomes an empty string.
    """
    data, err = _load_object(filepath)
    if err:
        return None, err
    return {str(k): "" if v is None else str(v) for k, v in data.items()}, None


def save_json(data: Any, path: Union[str, Path], indent: int = 2) -> Path:
    """Write data as UTF-8 JSON, creating parent directories."""
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    with open(out_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, ensure_ascii=False)
    return out_path
