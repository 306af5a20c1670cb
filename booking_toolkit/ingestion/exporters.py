"""Export utilities for normalized appointment data."""
from __future__ import annotations

from pathlib import Path
from typing import MutableMapping, Optional, Sequence

import pandas as pd

from ..models import APPOINTMENT_FIELDS, ImportedAppointment
from .loaders import PathLike


def export_appointments(
    appointments: Sequence[ImportedAppointment],
    path: PathLike,
    *,
    sheet_name: str = "Appointments",
    exporter_kwargs: Optional[MutableMapping[str, object]] = None,
) -> Path:
    """Write normalized appointments to a CSV or Excel file."""

    dataframe = appointments_to_dataframe(appointments)
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(dataframe, output_path, sheet_name=sheet_name, exporter_kwargs=exporter_kwargs)
    return output_path


def appointments_to_dataframe(appointments: Sequence[ImportedAppointment]) -> pd.DataFrame:
    """Convert appointments into a :class:`pandas.DataFrame` with canonical columns."""

    records = [appointment.as_row() for appointment in appointments]
    dataframe = pd.DataFrame.from_records(records, columns=list(APPOINTMENT_FIELDS))
    return dataframe.astype({"duration": "Int64", "price": "Float64"})


def _write_dataframe(
    dataframe: pd.DataFrame,
    path: Path,
    *,
    sheet_name: str,
    exporter_kwargs: Optional[MutableMapping[str, object]],
) -> None:
    exporter_kwargs = dict(exporter_kwargs or {})
    suffix = path.suffix.lower()

    if suffix in {".csv", ".tsv"}:
        if suffix == ".tsv":
            exporter_kwargs.setdefault("sep", "\t")
        dataframe.to_csv(path, index=False, **exporter_kwargs)
        return

    if suffix in {".xlsx", ".xlsm"}:
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        dataframe.to_excel(path, index=False, sheet_name=sheet_name, engine=engine, **exporter_kwargs)
        return

    raise ValueError(f"Unsupported export file extension: {suffix}")


__all__ = ["export_appointments", "appointments_to_dataframe"]
