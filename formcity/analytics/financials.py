"""
Financial metric frame and period slicing.

One row per metric record (file order kept), identity columns plus one
column per year / quarter / month label.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from formcity.config import FINANCIAL_LAYOUT, FinancialLayout
from formcity.data.schemas import FinancialMetricRecord, PeriodFilter, PeriodType

ID_COLS = ["category", "metric", "total", "sold", "remaining"]


def metric_frame(
    records: Sequence[FinancialMetricRecord],
    layout: FinancialLayout = FINANCIAL_LAYOUT,
) -> pd.DataFrame:
    """Flatten records into a wide DataFrame."""
    series_cols = (
        [label for label, _ in layout.year_columns()]
        + [label for label, _ in layout.quarter_columns()]
        + [label for label, _ in layout.month_columns()]
    )
    if not records:
        return pd.DataFrame(columns=ID_COLS + series_cols)

    rows = []
    for rec in records:
        row = {
            "category": rec.category,
            "metric": rec.metric,
            "total": rec.total,
            "sold": rec.sold,
            "remaining": rec.remaining,
        }
        row.update(rec.yearly)
        row.update(rec.quarterly)
        row.update(rec.monthly)
        rows.append(row)

    df = pd.DataFrame(rows)
    df = df.reindex(columns=ID_COLS + series_cols)
    df[series_cols] = df[series_cols].fillna(0.0).astype(float)
    return df


def period_columns(period: PeriodFilter) -> list[str]:
    """Series labels a period covers; empty for ALL or an incomplete period."""
    if not period.is_complete():
        return []
    if period.period_type in (PeriodType.YEAR, PeriodType.RANGE):
        return [str(y) for y in period.years()]
    if period.period_type in (PeriodType.QUARTER, PeriodType.MONTH):
        return [period.label]
    return []


def period_values(df: pd.DataFrame, period: PeriodFilter) -> pd.Series:
    """Per-metric value for the period.

    A single label is looked up; a range is summed over its years. Labels
    outside the table's horizon contribute 0.
    """
    cols = period_columns(period)
    if df.empty or not cols:
        return pd.Series(0.0, index=df.index, dtype=float)
    present = [c for c in cols if c in df.columns]
    if not present:
        return pd.Series(0.0, index=df.index, dtype=float)
    return df[present].sum(axis=1).astype(float)


def categories_in_order(df: pd.DataFrame) -> list[str]:
    """Categories in first-seen order."""
    if df.empty:
        return []
    return df["category"].drop_duplicates().tolist()
