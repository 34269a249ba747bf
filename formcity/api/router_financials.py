"""
Financial endpoints: free-text analysis, explicit period reports, context dump, raw metrics.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from formcity.data.errors import DataLoadError
from formcity.data.schemas import PeriodFilter
from formcity.data.store import FinancialStore, PropertyStore
from formcity.analytics.common import sanitize_for_json
from formcity.analytics.scope import detect_scope
from formcity.api.dependencies import get_financial_store, get_property_store, parse_period
from formcity.api.response_models import AnalyzeResponse, TextResponse
from formcity.reports import financial_report
from formcity.reports.context import build_context

router = APIRouter(prefix="/api", tags=["financials"])


@router.get("/financials/analyze", response_model=AnalyzeResponse)
def analyze(
    q: str = Query("", description="Free-text question"),
    store: FinancialStore = Depends(get_financial_store),
):
    period = detect_scope(q)
    return AnalyzeResponse(
        query=q,
        period_type=period.period_type.value,
        period=period.label,
        text=financial_report.analyze(q, store),
    )


@router.get("/financials/report")
def report(
    period: PeriodFilter = Depends(parse_period),
    store: FinancialStore = Depends(get_financial_store),
):
    try:
        return financial_report.generate_json(store, period)
    except DataLoadError as exc:
        raise HTTPException(503, str(exc))


@router.get("/financials/context", response_model=TextResponse)
def financial_context(store: FinancialStore = Depends(get_financial_store)):
    return TextResponse(text=financial_report.all_data_as_text(store))


@router.get("/financials/metrics")
def metrics(store: FinancialStore = Depends(get_financial_store)):
    try:
        records = store.load()
    except DataLoadError as exc:
        raise HTTPException(503, str(exc))
    return sanitize_for_json({
        "count": len(records),
        "categories": store.categories(),
        "metrics": [rec.as_dict() for rec in records],
    })


@router.get("/context", response_model=TextResponse)
def combined_context(
    q: str = Query("", description="Question the context is built for"),
    financial: FinancialStore = Depends(get_financial_store),
    properties: PropertyStore = Depends(get_property_store),
):
    """Financial dump plus the properties the question matches."""
    return TextResponse(text=build_context(q, financial, properties))
