"""
Property listings — chat-facing lines, search result blocks, and the
statistics block handed to the language model as context.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from formcity.config import PROPERTY_FIELDS, PROPERTIES_NOT_LOADED
from formcity.data.normalize import to_number
from formcity.data.schemas import PropertyRecord
from formcity.analytics.common import safe_divide, sum_or_zero
from formcity.reports.formatting import format_grouped, format_plain


def _price_text(value) -> str:
    price = to_number(value)
    return format_grouped(price) if price is not None else str(value)


def _details(rec: PropertyRecord, subtype_label: bool, currency: str) -> list[str]:
    f = rec.fields
    details = []
    if f.get(PROPERTY_FIELDS["type"]):
        details.append(f"Тип: {rec.type}")
    if f.get(PROPERTY_FIELDS["subtype"]):
        details.append(f"Подтип: {rec.subtype}" if subtype_label else rec.subtype)
    if f.get(PROPERTY_FIELDS["area"]):
        details.append(f"Площадь: {format_plain(f[PROPERTY_FIELDS['area']])} кв.м")
    if f.get(PROPERTY_FIELDS["price"]):
        details.append(f"Цена: {_price_text(f[PROPERTY_FIELDS['price']])} {currency}")
    if f.get(PROPERTY_FIELDS["floor"]):
        details.append(f"Этаж: {format_plain(f[PROPERTY_FIELDS['floor']])}")
    if f.get(PROPERTY_FIELDS["rooms"]):
        details.append(f"Комнат: {format_plain(f[PROPERTY_FIELDS['rooms']])}")
    if f.get(PROPERTY_FIELDS["phase"]):
        details.append(f"Очередь: {rec.phase}")
    if f.get(PROPERTY_FIELDS["status"]):
        details.append(f"Статус: {rec.status}")
    return details


def format_for_user(records: Sequence[PropertyRecord]) -> str:
    """Numbered listing, one blank line between objects."""
    return "\n\n".join(
        f"{i}. {', '.join(_details(rec, subtype_label=False, currency='₽'))}"
        for i, rec in enumerate(records, start=1)
    )


def format_listing(records: Sequence[PropertyRecord], title: str, limit: int = 10) -> str:
    """Search result block: title, match count, the first ``limit`` objects."""
    if not records:
        return f"{title}\n\n❌ По вашему запросу ничего не найдено."
    shown = records[:limit]
    header = f"{title}\n\n✅ Найдено {len(records)} объектов"
    if len(records) > len(shown):
        header += f" (показано {len(shown)})"
    return f"{header}:\n\n{format_for_user(shown)}"


def summarize(records: Sequence[PropertyRecord]) -> dict:
    """Count, average / total price, average area, and price / area ranges."""
    if not records:
        return {"count": 0}
    prices = [rec.price for rec in records]
    areas = [rec.area for rec in records]
    price_s = pd.Series([p for p in prices if p is not None], dtype=float)
    area_s = pd.Series([a for a in areas if a is not None], dtype=float)
    total_price = sum_or_zero(prices)

    types = pd.Series([rec.type for rec in records if rec.type], dtype=object)
    return {
        "count": len(records),
        "total_price": total_price,
        # Missing prices and areas count as zero, matching the listing totals
        "avg_price": safe_divide(total_price, len(records)),
        "avg_area": safe_divide(sum_or_zero(areas), len(records)),
        "min_price": float(price_s.min()) if not price_s.empty else None,
        "max_price": float(price_s.max()) if not price_s.empty else None,
        "min_area": float(area_s.min()) if not area_s.empty else None,
        "max_area": float(area_s.max()) if not area_s.empty else None,
        "by_type": types.value_counts(sort=False).to_dict() if not types.empty else {},
    }


def format_for_context(records: Sequence[PropertyRecord], source: Optional[Path | str] = None) -> str:
    """Listing plus statistics, worded for the language model."""
    if not records:
        return PROPERTIES_NOT_LOADED

    lines = "\n".join(
        f"{i}. {', '.join(_details(rec, subtype_label=True, currency='руб'))}"
        for i, rec in enumerate(records, start=1)
    )
    s = summarize(records)
    text = (
        f"📊 ДАННЫЕ ПО ОБЪЕКТАМ НЕДВИЖИМОСТИ ({s['count']} объектов):\n\n"
        f"{lines}\n\n"
        "📈 СТАТИСТИКА:\n"
        f"• Средняя цена: {format_grouped(s['avg_price'])} руб\n"
        f"• Средняя площадь: {s['avg_area']:.1f} кв.м\n"
        f"• Общая стоимость: {format_grouped(s['total_price'])} руб"
    )
    if source is not None:
        text += f"\n\nИсточник данных: {source}"
    return text
