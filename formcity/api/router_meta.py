"""
Meta endpoints: health, reload.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from formcity.data.errors import DataLoadError
from formcity.data.store import FinancialStore, PropertyStore
from formcity.api.dependencies import get_financial_store, get_property_store
from formcity.api.response_models import HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


def _status(properties: PropertyStore, financial: FinancialStore) -> HealthResponse:
    errors = []
    property_count = 0
    metric_count = 0
    categories: list[str] = []
    try:
        property_count = properties.row_count()
    except DataLoadError as exc:
        errors.append(str(exc))
    try:
        metric_count = len(financial.load())
        categories = financial.categories()
    except DataLoadError as exc:
        errors.append(str(exc))

    return HealthResponse(
        status="ok" if not errors else "degraded",
        properties=property_count,
        property_source=str(properties.source_path) if properties.source_path else None,
        metrics=metric_count,
        categories=categories,
        coerced_cells=financial.stats.coerced_cells,
        errors=errors,
    )


@router.get("/health", response_model=HealthResponse)
def health(
    properties: PropertyStore = Depends(get_property_store),
    financial: FinancialStore = Depends(get_financial_store),
):
    return _status(properties, financial)


@router.post("/reload", response_model=HealthResponse)
def reload_data(
    properties: PropertyStore = Depends(get_property_store),
    financial: FinancialStore = Depends(get_financial_store),
):
    """Drop both caches and re-read the source files."""
    financial.clear()
    try:
        properties.refresh()
    except DataLoadError as exc:
        print(f"  Warning: {exc}")
    return _status(properties, financial)
