"""
PropertyStore / FinancialStore — in-memory caches over the two source files.

Each cache is held in a single attribute and replaced by one assignment, so a
reader never sees a half-built record set.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from formcity.config import FINANCIAL_FILE_PATH, PROPERTY_CSV_FALLBACK, PROPERTY_FILE_PATH, PROPERTY_FIELDS
from formcity.data.errors import DataLoadError
from formcity.data.financial import load_financial_file
from formcity.data.loader import load_property_file, resolve_property_path
from formcity.data.normalize import ParseStats
from formcity.data.schemas import FinancialMetricRecord, PropertyRecord


class PropertyStore:
    """Property listing cached until the source file's mtime moves forward."""

    def __init__(
        self,
        path: str | Path | None = None,
        csv_fallback: Path = PROPERTY_CSV_FALLBACK,
    ) -> None:
        self.path = Path(path) if path is not None else PROPERTY_FILE_PATH
        self.csv_fallback = csv_fallback
        self.source_path: Optional[Path] = None
        # (path, mtime, records)
        self._cache: Optional[tuple[Path, float, tuple[PropertyRecord, ...]]] = None

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, path: str | Path | None = None) -> tuple[PropertyRecord, ...]:
        """Return the cached records, re-reading the file if it changed."""
        filepath = resolve_property_path(path if path is not None else self.path,
                                         csv_fallback=self.csv_fallback)
        try:
            mtime = filepath.stat().st_mtime
        except OSError as exc:
            raise DataLoadError(f"Failed to load data: {exc}", filepath) from exc

        cache = self._cache
        if cache is not None and cache[0] == filepath and mtime <= cache[1]:
            return cache[2]

        print(f"Loading property data from: {filepath}")
        records = tuple(load_property_file(filepath))
        self._cache = (filepath, mtime, records)
        self.source_path = filepath
        print(f"  Loaded {len(records):,} properties from {filepath.name}")
        return records

    def refresh(self) -> tuple[PropertyRecord, ...]:
        """Drop the cache and reload."""
        self._cache = None
        return self.load()

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    # ------------------------------------------------------------------
    # Metadata queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.load())

    def available_columns(self) -> list[str]:
        """Every key seen across records, in first-seen order, ``id`` first."""
        records = self.load()
        if not records:
            return []
        seen: dict[str, None] = {"id": None}
        for rec in records:
            for key in rec.fields:
                seen.setdefault(key, None)
        return list(seen)

    def property_types(self) -> list[str]:
        """Distinct property types, first-seen order."""
        seen: dict[str, None] = {}
        for rec in self.load():
            if rec.type:
                seen.setdefault(rec.type, None)
        return list(seen)

    def distinct(self, attr: str) -> list[Any]:
        """Distinct values of a well-known column (``phase``, ``status`` ...)."""
        key = PROPERTY_FIELDS.get(attr, attr)
        seen: dict[Any, None] = {}
        for rec in self.load():
            value = rec.get(key)
            if value is not None:
                seen.setdefault(value, None)
        return list(seen)


class FinancialStore:
    """Financial metrics parsed once and kept until cleared."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else FINANCIAL_FILE_PATH
        # (records, stats)
        self._cache: Optional[tuple[tuple[FinancialMetricRecord, ...], ParseStats]] = None

    def load(self) -> tuple[FinancialMetricRecord, ...]:
        cache = self._cache
        if cache is not None:
            return cache[0]

        print(f"Loading financial data from: {self.path}")
        records, stats = load_financial_file(self.path)
        self._cache = (tuple(records), stats)
        print(f"  Parsed {stats.records:,} metrics in {stats.categories} categories "
              f"from {stats.lines:,} lines")
        if stats.coerced_cells:
            print(f"  Warning: {stats.coerced_cells:,} non-numeric cells read as 0")
        return self._cache[0]

    def clear(self) -> None:
        self._cache = None
        print("  Financial cache cleared")

    def refresh(self) -> tuple[FinancialMetricRecord, ...]:
        self.clear()
        return self.load()

    @property
    def is_loaded(self) -> bool:
        return self._cache is not None

    @property
    def stats(self) -> ParseStats:
        """Diagnostics of the last successful parse (empty before the first)."""
        return self._cache[1] if self._cache is not None else ParseStats()

    def categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for rec in self.load():
            seen.setdefault(rec.category, None)
        return list(seen)
