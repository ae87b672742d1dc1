"""Utility modules (JSON loading and saving)."""

from .io import (
    load_json_robust,
    load_part_record,
    load_drawing_record,
    load_properties,
    save_json,
)

__all__ = [
    "load_json_robust",
    "load_part_record",
    "load_drawing_record",
    "load_properties",
    "save_json",
]
