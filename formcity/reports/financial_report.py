"""
Financial report — free-text analysis, per-period and total breakdowns, full dump.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from formcity.config import FINANCIAL_NOT_LOADED, FINANCIAL_DUMP_NOT_LOADED
from formcity.data.errors import DataLoadError
from formcity.data.schemas import FinancialMetricRecord, PeriodFilter, PeriodType
from formcity.data.store import FinancialStore
from formcity.analytics.common import sanitize_for_json
from formcity.analytics.financials import (
    ID_COLS, metric_frame, period_values, categories_in_order, period_columns,
)
from formcity.analytics.scope import detect_scope
from formcity.reports.formatting import format_amount


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _render_period(df: pd.DataFrame, period: PeriodFilter) -> str:
    values = period_values(df, period)
    lines = [f"📊 {period.title}", ""]
    for category in categories_in_order(df):
        lines.append(category)
        mask = df["category"] == category
        for metric, value in zip(df.loc[mask, "metric"], values[mask]):
            if value != 0:
                lines.append(f"• {metric}: {format_amount(value)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def _render_totals(df: pd.DataFrame) -> str:
    lines = [f"📊 {PeriodFilter(PeriodType.ALL).title}", ""]
    for category in categories_in_order(df):
        lines.append(category)
        for row in df.loc[df["category"] == category, ID_COLS].itertuples(index=False):
            lines.append(f"• {row.metric}")
            lines.append(f"  Всего: {format_amount(row.total)}")
            lines.append(f"  Продано: {format_amount(row.sold)}")
            lines.append(f"  Остаток: {format_amount(row.remaining)}")
        lines.append("")
    return "\n".join(lines) + "\n"


def render_report(records: Sequence[FinancialMetricRecord], period: PeriodFilter) -> str:
    """Grouped report for a period; ALL (or an incomplete period) gives the totals view."""
    df = metric_frame(records)
    if not period_columns(period):
        return _render_totals(df)
    return _render_period(df, period)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def analyze(query: str, store: FinancialStore) -> str:
    """Answer a free-text question with the report for the scope it implies."""
    try:
        records = store.load()
    except DataLoadError as exc:
        print(f"  Warning: {exc}")
        return FINANCIAL_NOT_LOADED
    if not records:
        return FINANCIAL_NOT_LOADED

    period = detect_scope(query)
    print(f"  Financial query scope: {period.period_type.value} ({period.label})")
    return render_report(records, period)


def all_data_as_text(store: FinancialStore) -> str:
    """Everything, by category → metric → totals + per-year values."""
    try:
        records = store.load()
    except DataLoadError as exc:
        print(f"  Warning: {exc}")
        return FINANCIAL_DUMP_NOT_LOADED
    if not records:
        return FINANCIAL_DUMP_NOT_LOADED

    df = metric_frame(records)
    out = "ФИНАНСОВЫЕ ДАННЫЕ ПРОЕКТА\n\n"
    for category in categories_in_order(df):
        out += f"{category}:\n"
        for rec in (r for r in records if r.category == category):
            out += f"\n{rec.metric}\n"
            out += (f"Всего: {format_amount(rec.total)}, "
                    f"Продано: {format_amount(rec.sold)}, "
                    f"Остаток: {format_amount(rec.remaining)}\n")
            years = ", ".join(f"{y}: {format_amount(rec.yearly[y])}" for y in sorted(rec.yearly))
            out += f"По годам: {years}\n"
        out += "\n"
    return out


def generate_json(store: FinancialStore, period: PeriodFilter | None = None) -> dict:
    """Structured report: per-category metric values for the period."""
    period = period or PeriodFilter(PeriodType.ALL)
    records = store.load()
    df = metric_frame(records)
    values = period_values(df, period)
    by_category = []
    for category in categories_in_order(df):
        mask = df["category"] == category
        metrics = []
        for row, value in zip(df.loc[mask, ID_COLS].itertuples(index=False), values[mask]):
            metrics.append({
                "metric": row.metric,
                "total": row.total,
                "sold": row.sold,
                "remaining": row.remaining,
                "value": value if period_columns(period) else None,
            })
        by_category.append({"category": category, "metrics": metrics})

    return sanitize_for_json({
        "period": period.label,
        "period_type": period.period_type.value,
        "categories": by_category,
        "text": render_report(records, period),
    })
