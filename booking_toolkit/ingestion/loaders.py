"""Utilities for loading appointment exports from CSV and spreadsheet files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd

from ..models import RawRow
from .parser import parse_rows

PathLike = Union[str, Path]

_TEXT_SUFFIXES = {".csv", ".txt"}
_TAB_SUFFIXES = {".tsv"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


def load_rows(path: PathLike, *, sheet_name: Union[str, int] = 0) -> List[RawRow]:
    """Read an uploaded export into raw rows, header first.

    Parameters
    ----------
    path:
        Path to the CSV/TSV/XLSX/XLSM file to be loaded.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel` when loading an Excel
        file. Ignored for text files.
    """

    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix in _TEXT_SUFFIXES:
        return parse_rows(_read_text(path_obj))

    if suffix in _TAB_SUFFIXES:
        return _read_tsv_rows(path_obj)

    if suffix in _EXCEL_SUFFIXES:
        return _read_excel_rows(path_obj, sheet_name=sheet_name)

    raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8-sig", errors="replace")


def _read_tsv_rows(path: Path) -> List[RawRow]:
    try:
        dataframe = pd.read_csv(
            path,
            sep="\t",
            header=None,
            dtype=str,
            keep_default_na=False,
            encoding="utf-8-sig",
            encoding_errors="replace",
        )
    except pd.errors.EmptyDataError:
        return []
    return _dataframe_rows(dataframe)


def _read_excel_rows(path: Path, *, sheet_name: Union[str, int]) -> List[RawRow]:
    dataframe = pd.read_excel(path, sheet_name=sheet_name, header=None, dtype=str, engine="openpyxl")
    return _dataframe_rows(dataframe)


def _dataframe_rows(dataframe: pd.DataFrame) -> List[RawRow]:
    rows: List[RawRow] = []
    for _, series in dataframe.iterrows():
        cells = [_clean_text(value) or "" for value in series.tolist()]
        if any(cells):
            rows.append(cells)
    return rows


def _clean_text(value: Any) -> Optional[str]:
    if pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


__all__ = ["load_rows", "UnsupportedFileTypeError", "PathLike"]
