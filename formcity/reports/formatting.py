"""
Number formatting for chat text.
"""
from __future__ import annotations

from typing import Any

from formcity.data.normalize import to_number

NBSP = "\u00a0"


def format_amount(value: float) -> str:
    """Human-scaled amount: "1.50 млн", "2.35 тыс", "300.00".

    Thresholds apply to the signed value, so negative amounts are never scaled.
    """
    if value >= 1_000_000:
        return f"{value / 1_000_000:.2f} млн"
    if value >= 1_000:
        return f"{value / 1_000:.2f} тыс"
    return f"{value:.2f}"


def format_grouped(value: float) -> str:
    """ru-RU style grouping: 5500000 → "5 500 000", 1234.5 → "1 234,5"."""
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return text.replace(",", NBSP).replace(".", ",")


def format_plain(value: Any) -> str:
    """Cell value as typed in the sheet; whole floats lose their ".0"."""
    number = to_number(value) if not isinstance(value, str) else None
    if number is not None and number.is_integer():
        return str(int(number))
    return str(value)
