"""
Financial table parsing — category headers interleaved with metric rows,
followed by fixed-position year / quarter / month columns.

Lines are split on bare commas; the upstream export never quotes a
delimiter inside a cell. Column positions come from ``FINANCIAL_LAYOUT``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Union

from formcity.config import (
    FINANCIAL_LAYOUT, FinancialLayout,
    UNIT_MARKERS, TOTAL_HEADER, SOLD_HEADER, TITLE_MARKER,
)
from formcity.data.errors import DataLoadError
from formcity.data.normalize import ParseStats, parse_number, split_lines, strip_quotes
from formcity.data.schemas import FinancialMetricRecord


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------

class LineKind(str, Enum):
    CATEGORY_HEADER = "category_header"   # ,ЖИЛЬЕ,ИТОГО,ПРОДАНО,ОСТАТОК
    TABLE_TITLE = "table_title"           # header-shaped row naming the project
    METRIC = "metric"                     # label carries a unit marker
    OTHER = "other"


def _column(columns: list[str], idx: int) -> str:
    return columns[idx] if idx < len(columns) else ""


def classify_line(columns: list[str], layout: FinancialLayout = FINANCIAL_LAYOUT) -> LineKind:
    raw_name = _column(columns, layout.name_col)
    if not raw_name:
        return LineKind.OTHER

    name = strip_quotes(raw_name)
    if _column(columns, layout.total_col) == TOTAL_HEADER and _column(columns, layout.sold_col) == SOLD_HEADER:
        if not name or TITLE_MARKER in name:
            return LineKind.TABLE_TITLE
        return LineKind.CATEGORY_HEADER

    if any(marker in name for marker in UNIT_MARKERS):
        return LineKind.METRIC
    return LineKind.OTHER


# ---------------------------------------------------------------------------
# Scan state: NoCategory → InCategory(name) → InCategory(other) ...
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NoCategory:
    pass


@dataclass(frozen=True)
class InCategory:
    name: str


ScanState = Union[NoCategory, InCategory]


def next_state(state: ScanState, kind: LineKind, columns: list[str],
               layout: FinancialLayout = FINANCIAL_LAYOUT) -> ScanState:
    """Only a category header moves the machine; a table title never does."""
    if kind == LineKind.CATEGORY_HEADER:
        return InCategory(strip_quotes(columns[layout.name_col]))
    return state


# ---------------------------------------------------------------------------
# Metric rows
# ---------------------------------------------------------------------------

def parse_metric_row(
    columns: list[str],
    category: str,
    layout: FinancialLayout = FINANCIAL_LAYOUT,
    stats: ParseStats | None = None,
) -> FinancialMetricRecord:
    def cell(idx: int) -> float:
        return parse_number(_column(columns, idx), stats)

    return FinancialMetricRecord(
        category=category,
        metric=strip_quotes(columns[layout.name_col]),
        total=cell(layout.total_col),
        sold=cell(layout.sold_col),
        remaining=cell(layout.remaining_col),
        yearly={label: cell(idx) for label, idx in layout.year_columns()},
        quarterly={label: cell(idx) for label, idx in layout.quarter_columns()},
        monthly={label: cell(idx) for label, idx in layout.month_columns()},
    )


def parse_financial_lines(
    lines: Iterable[str],
    layout: FinancialLayout = FINANCIAL_LAYOUT,
) -> tuple[list[FinancialMetricRecord], ParseStats]:
    """Scan lines in file order and emit one record per metric row under a category."""
    stats = ParseStats()
    records: list[FinancialMetricRecord] = []
    state: ScanState = NoCategory()

    for line in lines:
        stats.lines += 1
        if not line.strip():
            continue
        columns = line.split(",")
        kind = classify_line(columns, layout)

        state = next_state(state, kind, columns, layout)
        if kind == LineKind.CATEGORY_HEADER:
            stats.categories += 1
            print(f"  Found category: {state.name}")

        if kind == LineKind.METRIC and isinstance(state, InCategory):
            records.append(parse_metric_row(columns, state.name, layout, stats))

    stats.records = len(records)
    return records, stats


def load_financial_file(
    filepath: Path,
    layout: FinancialLayout = FINANCIAL_LAYOUT,
) -> tuple[list[FinancialMetricRecord], ParseStats]:
    """Read and parse the financial CSV, raising DataLoadError when it cannot be read."""
    try:
        text = Path(filepath).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Failed to load financial data: {exc}", filepath) from exc
    return parse_financial_lines(split_lines(text), layout)
