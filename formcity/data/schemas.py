"""
Record and period schemas shared by loaders, analytics and reports.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Optional

from formcity.config import PROPERTY_FIELDS, quarter_label, month_label
from formcity.data.normalize import to_number


# ---------------------------------------------------------------------------
# Property listing
# ---------------------------------------------------------------------------

@dataclass
class PropertyRecord:
    """One row of the property listing.

    ``fields`` is keyed by normalized header and only holds cells that had a
    value. Well-known columns are exposed as attributes; anything else the
    spreadsheet carries stays reachable through ``get``.
    """
    record_id: str
    fields: dict[str, Any] = field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        if key == "id":
            return self.record_id
        return self.fields.get(key, default)

    def values(self) -> Iterator[Any]:
        yield self.record_id
        yield from self.fields.values()

    def as_dict(self) -> dict[str, Any]:
        return {"id": self.record_id, **self.fields}

    # Text attributes
    @property
    def type(self) -> Optional[str]:
        return self._text("type")

    @property
    def subtype(self) -> Optional[str]:
        return self._text("subtype")

    @property
    def phase(self) -> Optional[str]:
        return self._text("phase")

    @property
    def status(self) -> Optional[str]:
        return self._text("status")

    # Numeric attributes (None when the cell is absent or not a number)
    @property
    def area(self) -> Optional[float]:
        return to_number(self.fields.get(PROPERTY_FIELDS["area"]))

    @property
    def price(self) -> Optional[float]:
        return to_number(self.fields.get(PROPERTY_FIELDS["price"]))

    @property
    def floor(self) -> Optional[float]:
        return to_number(self.fields.get(PROPERTY_FIELDS["floor"]))

    @property
    def rooms(self) -> Optional[float]:
        return to_number(self.fields.get(PROPERTY_FIELDS["rooms"]))

    def _text(self, attr: str) -> Optional[str]:
        value = self.fields.get(PROPERTY_FIELDS[attr])
        if value is None or value == "":
            return None
        return str(value)


# ---------------------------------------------------------------------------
# Financial table
# ---------------------------------------------------------------------------

@dataclass
class FinancialMetricRecord:
    """One metric line (revenue, area, unit count) under a category."""
    category: str
    metric: str
    total: float = 0.0
    sold: float = 0.0
    remaining: float = 0.0
    yearly: dict[str, float] = field(default_factory=dict)     # "2025" → value
    quarterly: dict[str, float] = field(default_factory=dict)  # "1 кв. 2025" → value
    monthly: dict[str, float] = field(default_factory=dict)    # "янв-25" → value

    def as_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "metric": self.metric,
            "total": self.total,
            "sold": self.sold,
            "remaining": self.remaining,
            "yearly": dict(self.yearly),
            "quarterly": dict(self.quarterly),
            "monthly": dict(self.monthly),
        }


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------

class PeriodType(str, Enum):
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    RANGE = "range"
    ALL = "all"


@dataclass
class PeriodFilter:
    """A time slice of the financial series."""
    period_type: PeriodType = PeriodType.ALL
    year: Optional[int] = None
    quarter: Optional[int] = None        # 1-4
    month: Optional[int] = None          # 1-12
    start_year: Optional[int] = None     # RANGE, inclusive
    end_year: Optional[int] = None       # RANGE, inclusive

    def __post_init__(self) -> None:
        if (
            self.period_type == PeriodType.RANGE
            and self.start_year is not None
            and self.end_year is not None
            and self.start_year > self.end_year
        ):
            self.start_year, self.end_year = self.end_year, self.start_year

    def is_complete(self) -> bool:
        """True when every field the period type needs is set."""
        if self.period_type == PeriodType.ALL:
            return True
        if self.period_type == PeriodType.RANGE:
            return self.start_year is not None and self.end_year is not None
        if self.year is None:
            return False
        if self.period_type == PeriodType.QUARTER:
            return self.quarter is not None and 1 <= self.quarter <= 4
        if self.period_type == PeriodType.MONTH:
            return self.month is not None and 1 <= self.month <= 12
        return True

    def years(self) -> list[int]:
        """Calendar years covered by a RANGE or YEAR period."""
        if self.period_type == PeriodType.RANGE and self.is_complete():
            return list(range(self.start_year, self.end_year + 1))
        if self.period_type == PeriodType.YEAR and self.year is not None:
            return [self.year]
        return []

    @property
    def label(self) -> str:
        """Series key or span this period selects."""
        if self.period_type == PeriodType.QUARTER and self.is_complete():
            return quarter_label(self.year, self.quarter)
        if self.period_type == PeriodType.MONTH and self.is_complete():
            return month_label(self.year, self.month)
        if self.period_type == PeriodType.YEAR and self.year is not None:
            return str(self.year)
        if self.period_type == PeriodType.RANGE and self.is_complete():
            return f"{self.start_year}-{self.end_year}"
        return "Итого"

    @property
    def title(self) -> str:
        """Report heading for the period."""
        if self.period_type == PeriodType.ALL or not self.is_complete():
            return "ОБЩАЯ СТАТИСТИКА ПРОЕКТА"
        if self.period_type == PeriodType.YEAR:
            return f"ДАННЫЕ ЗА {self.year} ГОД"
        if self.period_type == PeriodType.RANGE:
            return f"ДАННЫЕ ЗА ПЕРИОД {self.label}"
        return f"ДАННЫЕ ЗА {self.label}"
