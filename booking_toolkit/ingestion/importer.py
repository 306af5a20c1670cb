"""Conversion of parsed upload rows into normalized appointments."""
from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence

from ..models import FieldMapping, ImportedAppointment, ImportOutcome, ImportPreview, RawRow
from .loaders import PathLike, load_rows
from .mapping import (
    FIELD_SYNONYMS,
    SynonymTable,
    apply_column_overrides,
    build_synonym_table,
    detect_field_mappings,
)
from .normalise import normalize_date, normalize_time, parse_duration, parse_price
from .parser import parse_rows

LOGGER = logging.getLogger(__name__)

DEFAULT_PREVIEW_LIMIT = 5

_CONVERTERS: Dict[str, Callable[[str], object]] = {
    "date": normalize_date,
    "time": normalize_time,
    "duration": parse_duration,
    "price": parse_price,
}


def convert_rows(rows: Iterable[RawRow], mapping: FieldMapping) -> List[ImportedAppointment]:
    """Build appointments from data rows, dropping rows without name, date or time."""

    appointments: List[ImportedAppointment] = []
    for position, row in enumerate(rows):
        appointment = _row_to_appointment(row, mapping)
        if appointment.is_valid:
            appointments.append(appointment)
        else:
            LOGGER.debug("Skipping data row %s: missing client name, date or time", position + 2)
    return appointments


def generate_preview(
    appointments: Sequence[ImportedAppointment],
    limit: int = DEFAULT_PREVIEW_LIMIT,
) -> ImportPreview:
    """Summarise converted appointments for confirmation by the user."""

    issues: List[str] = []
    for index, appointment in enumerate(appointments):
        row_number = index + 2
        if not appointment.client_name:
            issues.append(f"Row {row_number}: Missing client name")
        if not appointment.date:
            issues.append(f"Row {row_number}: Missing or invalid date")
        if not appointment.time:
            issues.append(f"Row {row_number}: Missing or invalid time")

    return ImportPreview(
        total=len(appointments),
        preview=tuple(appointments[:limit]),
        issues=tuple(issues),
    )


def _row_to_appointment(row: RawRow, mapping: FieldMapping) -> ImportedAppointment:
    values: Dict[str, object] = {}
    for field_name, column in mapping.items():
        if column >= len(row):
            continue
        text = row[column].strip()
        if not text:
            continue
        converter = _CONVERTERS.get(field_name)
        value = converter(text) if converter else text
        if value is not None:
            values[field_name] = value
    return ImportedAppointment(**values)


class AppointmentImporter:
    """Runs the parse, detect, convert and preview steps for one upload at a time."""

    def __init__(
        self,
        *,
        field_synonyms: Optional[Mapping[str, Iterable[str]]] = None,
        column_overrides: Optional[Mapping[str, str]] = None,
        preview_limit: int = DEFAULT_PREVIEW_LIMIT,
    ) -> None:
        self._synonyms: SynonymTable = build_synonym_table(field_synonyms) if field_synonyms else FIELD_SYNONYMS
        self._column_overrides = dict(column_overrides or {})
        self._preview_limit = preview_limit

    @property
    def preview_limit(self) -> int:
        return self._preview_limit

    def parse_rows(self, content: str) -> List[RawRow]:
        return parse_rows(content)

    def detect_field_mappings(self, header: RawRow) -> FieldMapping:
        mapping = detect_field_mappings(header, self._synonyms)
        return apply_column_overrides(header, mapping, self._column_overrides)

    def convert_rows(self, rows: Iterable[RawRow], mapping: FieldMapping) -> List[ImportedAppointment]:
        return convert_rows(rows, mapping)

    def generate_preview(
        self,
        appointments: Sequence[ImportedAppointment],
        limit: Optional[int] = None,
    ) -> ImportPreview:
        return generate_preview(appointments, self._preview_limit if limit is None else limit)

    def import_rows(self, rows: Sequence[RawRow]) -> ImportOutcome:
        """Treat the first row as the header and convert the remaining ones."""

        if not rows:
            return ImportOutcome(appointments=[], mapping={})

        header, data_rows = list(rows[0]), rows[1:]
        mapping = self.detect_field_mappings(header)
        appointments = self.convert_rows(data_rows, mapping)
        skipped = len(data_rows) - len(appointments)
        LOGGER.info(
            "Converted %s of %s rows using columns %s",
            len(appointments),
            len(data_rows),
            sorted(mapping),
        )
        return ImportOutcome(appointments=appointments, mapping=mapping, header=header, skipped_rows=skipped)

    def import_text(self, content: str) -> ImportOutcome:
        return self.import_rows(self.parse_rows(content))

    def import_file(self, path: PathLike) -> ImportOutcome:
        return self.import_rows(load_rows(path))

    def preview_text(self, content: str, limit: Optional[int] = None) -> ImportPreview:
        return self.generate_preview(self.import_text(content).appointments, limit)


__all__ = ["AppointmentImporter", "convert_rows", "generate_preview", "DEFAULT_PREVIEW_LIMIT"]
