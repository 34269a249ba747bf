"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    properties: int
    property_source: Optional[str] = None
    metrics: int
    categories: list[str]
    coerced_cells: int
    errors: list[str] = []


class TextResponse(BaseModel):
    text: str


class AnalyzeResponse(BaseModel):
    query: str
    period_type: str
    period: str
    text: str


class PropertiesResponse(BaseModel):
    count: int
    properties: list[dict[str, Any]]
    text: str


class ValuesResponse(BaseModel):
    values: list[Any]
