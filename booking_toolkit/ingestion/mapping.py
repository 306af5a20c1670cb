"""Header detection for appointment exports coming from arbitrary scheduling tools."""
from __future__ import annotations

import logging
import re
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from ..config import ConfigurationError
from ..models import APPOINTMENT_FIELDS, FieldMapping, RawRow

LOGGER = logging.getLogger(__name__)

SynonymTable = Tuple[Tuple[str, Tuple[str, ...]], ...]

# Ordered on purpose: when one header matches several fields every field
# records the column, and later columns overwrite earlier ones per field.
FIELD_SYNONYMS: SynonymTable = (
    ("client_name", ("client_name", "customer_name", "name", "client", "customer", "first_name", "last_name", "full_name")),
    ("client_email", ("email", "client_email", "customer_email", "e_mail", "email_address")),
    ("client_phone", ("phone", "phone_number", "client_phone", "customer_phone", "mobile", "cell")),
    ("service_name", ("service", "service_name", "treatment", "appointment_type", "service_type")),
    ("date", ("date", "appointment_date", "start_date", "booking_date", "scheduled_date")),
    ("time", ("time", "start_time", "appointment_time", "scheduled_time", "booking_time")),
    ("duration", ("duration", "length", "appointment_length", "service_duration", "minutes")),
    ("price", ("price", "cost", "amount", "total", "service_price", "charge")),
    ("notes", ("notes", "comments", "description", "special_requests", "remarks")),
    ("status", ("status", "appointment_status", "booking_status", "state")),
)

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class MissingColumnError(KeyError):
    """Raised when an explicit column override names a header that is not present."""


def normalise_header(header: str) -> str:
    return _NON_ALNUM.sub("_", header.lower())


def build_synonym_table(extra: Optional[Mapping[str, Iterable[str]]] = None) -> SynonymTable:
    """Return :data:`FIELD_SYNONYMS` extended with configured synonyms.

    Extra synonyms are normalised like headers and appended to the built-in
    ones, so the canonical field order is preserved.
    """

    if not extra:
        return FIELD_SYNONYMS

    unknown = sorted(set(extra) - set(APPOINTMENT_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown appointment fields in synonym configuration: {unknown}")

    table: List[Tuple[str, Tuple[str, ...]]] = []
    for field_name, synonyms in FIELD_SYNONYMS:
        additions = tuple(
            normalise_header(str(value))
            for value in _as_sequence(extra.get(field_name, ()))
            if str(value).strip()
        )
        table.append((field_name, synonyms + tuple(s for s in additions if s not in synonyms)))
    return tuple(table)


def detect_field_mappings(header: RawRow, synonyms: SynonymTable = FIELD_SYNONYMS) -> FieldMapping:
    """Guess which column holds which appointment field."""

    mapping: FieldMapping = {}
    for index, cell in enumerate(header):
        normalised = normalise_header(cell)
        for field_name, variations in synonyms:
            if any(variation in normalised for variation in variations):
                mapping[field_name] = index

    LOGGER.debug("Detected field mapping %s for header %s", mapping, header)
    return mapping


def apply_column_overrides(
    header: RawRow,
    mapping: FieldMapping,
    overrides: Optional[Mapping[str, str]] = None,
) -> FieldMapping:
    """Replace detected columns with explicitly chosen header names."""

    if not overrides:
        return dict(mapping)

    unknown = sorted(set(overrides) - set(APPOINTMENT_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown appointment fields in column overrides: {unknown}")

    positions = {cell.strip().lower(): index for index, cell in enumerate(header)}
    resolved = dict(mapping)
    for field_name, column in overrides.items():
        index = positions.get(str(column).strip().lower())
        if index is None:
            raise MissingColumnError(f"Column '{column}' mapped to '{field_name}' is not in the upload header")
        resolved[field_name] = index
    return resolved


def _as_sequence(value: object) -> Sequence[object]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


__all__ = [
    "FIELD_SYNONYMS",
    "MissingColumnError",
    "apply_column_overrides",
    "build_synonym_table",
    "detect_field_mappings",
    "normalise_header",
]
