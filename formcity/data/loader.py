"""
Property listing discovery and loading (workbook or CSV).
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from formcity.config import PROPERTY_FILE_PATH, PROPERTY_CSV_FALLBACK
from formcity.data.errors import DataLoadError
from formcity.data.normalize import normalize_header, parse_csv_line, split_lines
from formcity.data.schemas import PropertyRecord


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------

def resolve_property_path(
    path: str | Path | None = None,
    default: Path = PROPERTY_FILE_PATH,
    csv_fallback: Path = PROPERTY_CSV_FALLBACK,
) -> Path:
    """Explicit path, else the configured one; a missing file falls back to the CSV default."""
    resolved = Path(path) if path is not None else Path(default)
    if not resolved.exists() and csv_fallback.exists():
        return csv_fallback
    return resolved


# ---------------------------------------------------------------------------
# Raw grids
# ---------------------------------------------------------------------------

def read_csv_rows(filepath: Path) -> list[list[str]]:
    """Non-blank lines of a CSV file, split with quote awareness."""
    text = filepath.read_text(encoding="utf-8-sig")
    return [parse_csv_line(line) for line in split_lines(text) if line.strip()]


def read_workbook_rows(filepath: Path) -> list[list[Any]]:
    """First sheet of a workbook as a list of rows; empty cells become None."""
    df = pd.read_excel(filepath, sheet_name=0, header=None, dtype=object)
    df = df.astype(object).where(pd.notna(df), None)
    return df.values.tolist()


def read_property_rows(filepath: Path) -> list[list[Any]]:
    """Read a workbook, or a CSV when the suffix says so or the workbook read fails."""
    if filepath.suffix.lower() == ".csv":
        return read_csv_rows(filepath)
    try:
        return read_workbook_rows(filepath)
    except Exception as exc:
        print(f"  Warning: failed to read {filepath.name} as a workbook, trying CSV: {exc}")
        return read_csv_rows(filepath)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and pd.isna(value):
        return True
    # CSV has no null, an empty field is the absent cell
    return isinstance(value, str) and not value.strip()


def rows_to_records(rows: list[list[Any]]) -> list[PropertyRecord]:
    """Row 0 is the header; each later row with any value becomes a record.

    Ids follow the data-row number (``prop_1`` is the first row under the
    header), so dropped empty rows leave gaps instead of shifting ids.
    """
    if not rows:
        return []

    keys = [normalize_header(h) for h in rows[0]]
    records: list[PropertyRecord] = []
    for index, row in enumerate(rows[1:], start=1):
        fields: dict[str, Any] = {}
        for key, value in zip(keys, row):
            if not key or _is_empty(value):
                continue
            fields[key] = value
        if fields:
            records.append(PropertyRecord(record_id=f"prop_{index}", fields=fields))
    return records


def load_property_file(filepath: Path) -> list[PropertyRecord]:
    """Load one property listing, raising DataLoadError on any failure."""
    if not filepath.exists():
        raise DataLoadError(f"Failed to load data: file not found: {filepath}", filepath)
    try:
        rows = read_property_rows(filepath)
    except Exception as exc:
        raise DataLoadError(f"Failed to load data: {exc}", filepath) from exc

    if not rows:
        print(f"  Warning: {filepath.name} is empty")
        return []
    return rows_to_records(rows)
