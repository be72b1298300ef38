"""Loading of test data dictionaries from Excel or CSV datasheets."""

from __future__ import annotations

import logging
import re
import zipfile
from pathlib import Path
from typing import Dict, Optional

import pandas as pd
from openpyxl import load_workbook

from ..core.errors import ProjectLoadError

logger = logging.getLogger(__name__)

VARIABLE_COLUMNS = ("variable", "name", "key")
VALUE_COLUMNS = ("value", "data")
EXCEL_SUFFIXES = {".xlsx", ".xls"}


def _read_first_sheet(path: Path) -> pd.DataFrame:
    """Read the first worksheet cell by cell with openpyxl."""
    wb = load_workbook(path, data_only=True, read_only=True)
    try:
        rows = [list(row) for row in wb.worksheets[0].iter_rows(values_only=True)]
    finally:
        wb.close()

    if not rows:
        return pd.DataFrame()
    header = ["" if cell is None else str(cell) for cell in rows[0]]
    width = len(header)
    # read-only rows can be ragged
    body = [(row + [None] * width)[:width] for row in rows[1:]]
    return pd.DataFrame(body, columns=header)


def read_datasheet(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    if suffix not in EXCEL_SUFFIXES:
        raise ProjectLoadError(f"Unsupported datasheet type: {path.name}")

    try:
        return pd.read_excel(path, dtype=str)
    except ValueError as exc:
        logger.warning(f"[Datasheet] pandas could not read {path.name} ({exc}); retrying with openpyxl")
        return _read_first_sheet(path)


def _normalize_header(header: object) -> str:
    return re.sub(r"[^a-z]", "", str(header).lower())


def _find_column(df: pd.DataFrame, candidates) -> Optional[str]:
    for column in df.columns:
        if _normalize_header(column) in candidates:
            return column
    return None


def _cell_text(value: object) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def dataframe_to_dictionary(df: pd.DataFrame, source: str = "") -> Dict[str, str]:
    """Turn a Variable/Value sheet into a variable -> value dictionary."""
    variable_col = _find_column(df, VARIABLE_COLUMNS)
    value_col = _find_column(df, VALUE_COLUMNS)
    if variable_col is None or value_col is None:
        raise ProjectLoadError(
            f"Datasheet {source or '<memory>'} needs a variable column ({', '.join(VARIABLE_COLUMNS)}) "
            f"and a value column ({', '.join(VALUE_COLUMNS)})"
        )

    data: Dict[str, str] = {}
    for variable, value in zip(df[variable_col], df[value_col]):
        name = _cell_text(variable).strip()
        if not name:
            continue
        data[name] = _cell_text(value)
    return data


def load_data_dictionary(path: Path) -> Dict[str, str]:
    path = Path(path)
    if not path.exists():
        raise ProjectLoadError(f"Datasheet not found: {path}")
    try:
        df = read_datasheet(path)
    except (OSError, zipfile.BadZipFile) as exc:
        raise ProjectLoadError(f"Unreadable datasheet {path}: {exc}") from exc
    data = dataframe_to_dictionary(df, source=path.name)
    logger.info(f"[Datasheet] Loaded {len(data)} variables from {path.name}")
    return data
