from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

"""Data source reading.

Reads a .csv or .xlsx file with pandas and returns its rows as a list of
records (column name -> value). Missing cells become None.
"""

__all__ = [
    "DataSourceError",
    "SUPPORTED_SUFFIXES",
    "read_records",
]

SUPPORTED_SUFFIXES = {".csv", ".xlsx"}


class DataSourceError(Exception):
    """Raised when the data source cannot be read."""


def _to_records(df: pd.DataFrame) -> list[dict[str, Any]]:
    df.columns = [str(c).strip() for c in df.columns]
    normalized = df.astype(object).where(df.notna(), None)
    return normalized.to_dict(orient="records")


def read_records(path: Path, sheet: str | None = None) -> list[dict[str, Any]]:
    """Read ``path`` into records.

    Parameters
    ----------
    path: .csv or .xlsx file; the first row is the header
    sheet: sheet name for .xlsx sources (None = first sheet)
    """
    if not path.exists():
        raise DataSourceError(f"data source not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DataSourceError(f"unsupported data source type: {path.name}")

    try:
        if suffix == ".csv":
            df = pd.read_csv(path)
        else:
            df = pd.read_excel(path, sheet_name=sheet if sheet is not None else 0)
    except (ValueError, OSError, pd.errors.ParserError) as e:
        raise DataSourceError(f"failed to read {path.name}: {e}") from e

    return _to_records(df)
