"""
Free-text query → time scope.

Precedence, first match wins:
  1. "с 25 по 27"           → RANGE 2025..2027 (two-digit years only)
  2. "2026" + "2 кв"        → QUARTER
  3. "2026"                 → YEAR
  4. nothing temporal       → ALL (totals)

The range and quarter patterns ignore case, so "С 25 ПО 27" and "2 КВ"
also match. A reversed range ("с 27 по 25") is read as 2025..2027.
"""
from __future__ import annotations

import re

from formcity.data.schemas import PeriodFilter, PeriodType

_RANGE_RE = re.compile(r"с\s*(\d{2})\s*по\s*(\d{2})", re.IGNORECASE)
# ASCII word boundaries so "2025г." still counts as a year
_YEAR_RE = re.compile(r"\b(202[5-9]|203[0-3])\b", re.ASCII)
_QUARTER_RE = re.compile(r"([1-4])\s*кв", re.IGNORECASE)


def detect_scope(query: str) -> PeriodFilter:
    query = query or ""

    m = _RANGE_RE.search(query)
    if m:
        return PeriodFilter(
            PeriodType.RANGE,
            start_year=int(f"20{m.group(1)}"),
            end_year=int(f"20{m.group(2)}"),
        )

    year = _YEAR_RE.search(query)
    quarter = _QUARTER_RE.search(query)
    if year and quarter:
        return PeriodFilter(PeriodType.QUARTER, year=int(year.group(1)), quarter=int(quarter.group(1)))
    if year:
        return PeriodFilter(PeriodType.YEAR, year=int(year.group(1)))

    return PeriodFilter(PeriodType.ALL)
