"""
Property filters — free-text search, phase, type, rooms, price and area ranges.
"""
from __future__ import annotations

from typing import Optional, Sequence

from formcity.config import APARTMENT_TYPE
from formcity.data.schemas import PropertyRecord


def search_properties(records: Sequence[PropertyRecord], query: str) -> list[PropertyRecord]:
    """Records where any value contains the query (case-insensitive); blank query → all."""
    if not query or not query.strip():
        return list(records)
    term = query.lower()
    return [
        rec for rec in records
        if any(term in str(v).lower() for v in rec.values() if v is not None)
    ]


def by_phase(records: Sequence[PropertyRecord], phase: str) -> list[PropertyRecord]:
    """Construction phase (очередь), compared case-insensitively."""
    wanted = str(phase).lower()
    return [rec for rec in records if rec.phase and rec.phase.lower() == wanted]


def by_type(records: Sequence[PropertyRecord], kind: str) -> list[PropertyRecord]:
    return [rec for rec in records if rec.type == kind]


def by_rooms(records: Sequence[PropertyRecord], rooms: int) -> list[PropertyRecord]:
    """Apartments with exactly ``rooms`` rooms; 4 and above means "4+"."""
    apartments = by_type(records, APARTMENT_TYPE)
    if rooms >= 4:
        return [rec for rec in apartments if rec.rooms is not None and rec.rooms >= 4]
    return [rec for rec in apartments if rec.rooms is not None and rec.rooms == rooms]


def _in_range(value: Optional[float], low: float, high: Optional[float]) -> bool:
    if value is None:
        return False
    return value >= low and (high is None or value <= high)


def by_price(records: Sequence[PropertyRecord], low: float = 0, high: Optional[float] = None) -> list[PropertyRecord]:
    """Price within [low, high]; no upper bound when high is None."""
    return [rec for rec in records if _in_range(rec.price, low, high)]


def by_area(records: Sequence[PropertyRecord], low: float = 0, high: Optional[float] = None) -> list[PropertyRecord]:
    """Area (кв.м) within [low, high]; no upper bound when high is None."""
    return [rec for rec in records if _in_range(rec.area, low, high)]
