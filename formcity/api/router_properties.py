"""
Property endpoints: search, types, columns, phase and range filters.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from formcity.data.errors import DataLoadError
from formcity.data.schemas import PropertyRecord
from formcity.data.store import PropertyStore
from formcity.analytics import properties as prop_filters
from formcity.analytics.common import sanitize_for_json
from formcity.api.dependencies import get_property_store
from formcity.api.response_models import PropertiesResponse, ValuesResponse
from formcity.reports.property_report import format_listing

router = APIRouter(prefix="/api/properties", tags=["properties"])


def _records(store: PropertyStore) -> tuple[PropertyRecord, ...]:
    try:
        return store.load()
    except DataLoadError as exc:
        raise HTTPException(503, str(exc))


def _respond(records: list[PropertyRecord], title: str, limit: int) -> PropertiesResponse:
    return PropertiesResponse(
        count=len(records),
        properties=sanitize_for_json([rec.as_dict() for rec in records]),
        text=format_listing(records, title, limit),
    )


@router.get("/search", response_model=PropertiesResponse)
def search(
    q: str = Query("", description="Substring matched against every field"),
    limit: int = Query(10, ge=1),
    store: PropertyStore = Depends(get_property_store),
):
    found = prop_filters.search_properties(_records(store), q)
    return _respond(found, f"🔍 Поиск: {q}" if q else "🔍 Все объекты", limit)


@router.get("/types", response_model=ValuesResponse)
def types(store: PropertyStore = Depends(get_property_store)):
    _records(store)
    return ValuesResponse(values=store.property_types())


@router.get("/columns", response_model=ValuesResponse)
def columns(store: PropertyStore = Depends(get_property_store)):
    _records(store)
    return ValuesResponse(values=store.available_columns())


@router.get("/phase/{phase}", response_model=PropertiesResponse)
def phase(
    phase: str,
    limit: int = Query(10, ge=1),
    store: PropertyStore = Depends(get_property_store),
):
    found = prop_filters.by_phase(_records(store), phase)
    return _respond(found, f"Недвижимость - {phase}", limit)


@router.get("/filter", response_model=PropertiesResponse)
def filter_properties(
    kind: Optional[str] = Query(None, description="Property type, e.g. Квартира"),
    rooms: Optional[int] = Query(None, ge=1, description="Apartments; 4 means 4+"),
    min_price: Optional[float] = Query(None, ge=0),
    max_price: Optional[float] = Query(None, ge=0),
    min_area: Optional[float] = Query(None, ge=0),
    max_area: Optional[float] = Query(None, ge=0),
    limit: int = Query(10, ge=1),
    store: PropertyStore = Depends(get_property_store),
):
    """Filters combine with AND; omitted ones are not applied."""
    found = list(_records(store))
    labels = []
    if kind:
        found = prop_filters.by_type(found, kind)
        labels.append(kind)
    if rooms is not None:
        found = prop_filters.by_rooms(found, rooms)
        labels.append(f"{rooms}+ комн." if rooms >= 4 else f"{rooms} комн.")
    if min_price is not None or max_price is not None:
        found = prop_filters.by_price(found, min_price or 0, max_price)
        labels.append("цена")
    if min_area is not None or max_area is not None:
        found = prop_filters.by_area(found, min_area or 0, max_area)
        labels.append("площадь")
    title = "Недвижимость" + (f" ({', '.join(labels)})" if labels else "")
    return _respond(found, title, limit)
