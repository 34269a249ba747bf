"""
FastAPI dependencies — store singletons, period parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from formcity.data.store import FinancialStore, PropertyStore
from formcity.data.schemas import PeriodFilter, PeriodType

# ---------------------------------------------------------------------------
# Global store singletons (set during startup)
# ---------------------------------------------------------------------------
_property_store: PropertyStore | None = None
_financial_store: FinancialStore | None = None


def set_stores(properties: PropertyStore, financial: FinancialStore) -> None:
    global _property_store, _financial_store
    _property_store = properties
    _financial_store = financial


def get_property_store() -> PropertyStore:
    if _property_store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _property_store


def get_financial_store() -> FinancialStore:
    if _financial_store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _financial_store


# ---------------------------------------------------------------------------
# Period parsing from query params
# ---------------------------------------------------------------------------

def parse_period(
    period_type: Optional[str] = Query(None, description="year|quarter|month|range|all"),
    year: Optional[int] = Query(None),
    quarter: Optional[int] = Query(None, ge=1, le=4),
    month: Optional[int] = Query(None, ge=1, le=12),
    start_year: Optional[int] = Query(None),
    end_year: Optional[int] = Query(None),
) -> PeriodFilter:
    """Parse period query parameters into a PeriodFilter."""
    if period_type is None:
        return PeriodFilter(PeriodType.ALL)

    try:
        pt = PeriodType(period_type)
    except ValueError:
        raise HTTPException(400, f"Invalid period_type: {period_type}")

    period = PeriodFilter(
        period_type=pt,
        year=year,
        quarter=quarter,
        month=month,
        start_year=start_year,
        end_year=end_year,
    )
    if not period.is_complete():
        raise HTTPException(400, f"Incomplete parameters for period_type={period_type}")
    return period
