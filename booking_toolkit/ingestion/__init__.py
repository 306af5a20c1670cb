"""Utilities for importing, normalising, and exporting appointment data."""
from __future__ import annotations

from .exporters import appointments_to_dataframe, export_appointments
from .importer import DEFAULT_PREVIEW_LIMIT, AppointmentImporter, convert_rows, generate_preview
from .loaders import UnsupportedFileTypeError, load_rows
from .mapping import (
    FIELD_SYNONYMS,
    MissingColumnError,
    apply_column_overrides,
    build_synonym_table,
    detect_field_mappings,
    normalise_header,
)
from .normalise import normalize_date, normalize_time, parse_duration, parse_price
from .parser import parse_line, parse_rows

__all__ = [
    "AppointmentImporter",
    "DEFAULT_PREVIEW_LIMIT",
    "FIELD_SYNONYMS",
    "MissingColumnError",
    "UnsupportedFileTypeError",
    "appointments_to_dataframe",
    "apply_column_overrides",
    "build_synonym_table",
    "convert_rows",
    "detect_field_mappings",
    "export_appointments",
    "generate_preview",
    "load_rows",
    "normalise_header",
    "normalize_date",
    "normalize_time",
    "parse_duration",
    "parse_line",
    "parse_price",
    "parse_rows",
]
