"""
Formula City assistant — Configuration: source paths, markers, column layout.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths: override with EXCEL_FILE_PATH / CSV_FILE_PATH env vars
# ---------------------------------------------------------------------------
PROPERTY_FILE_PATH = Path(os.environ.get("EXCEL_FILE_PATH", "./data.xlsx"))
PROPERTY_CSV_FALLBACK = Path("./data.csv")
FINANCIAL_FILE_PATH = Path(os.environ.get("CSV_FILE_PATH", "./data.csv"))

API_PORT = int(os.environ.get("PORT", "8000"))

# ---------------------------------------------------------------------------
# Property listing: well-known columns (normalized header → attribute)
# ---------------------------------------------------------------------------
PROPERTY_FIELDS = {
    "type": "тип",
    "subtype": "подтип",
    "phase": "очередь",
    "area": "площадь",
    "price": "цена",
    "floor": "этаж",
    "rooms": "комнаты",
    "status": "статус",
}

APARTMENT_TYPE = "Квартира"
COMMERCIAL_TYPE = "Коммерческое"

# ---------------------------------------------------------------------------
# Financial table markers
# ---------------------------------------------------------------------------
UNIT_MARKERS = ("руб", "м2", "шт")
TOTAL_HEADER = "ИТОГО"
SOLD_HEADER = "ПРОДАНО"
TITLE_MARKER = "ПРОЕКТ"

YEARS = tuple(range(2025, 2034))
QUARTERS = (1, 2, 3, 4)
MONTH_ABBREVIATIONS = (
    "янв", "февр", "мар", "апр", "мая", "июн",
    "июл", "авг", "сент", "окт", "нояб", "дек",
)


# ---------------------------------------------------------------------------
# Financial table column layout (0-indexed)
# The upstream export is positional: if its columns move, only this changes.
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FinancialLayout:
    name_col: int = 1
    total_col: int = 2
    sold_col: int = 3
    remaining_col: int = 4
    year_start: int = 6
    quarter_start: int = 16
    month_start: int = 52
    years: tuple[int, ...] = YEARS
    months: tuple[str, ...] = MONTH_ABBREVIATIONS

    def year_columns(self) -> list[tuple[str, int]]:
        """(label, column) for each yearly cell: "2025" → 6 … "2033" → 14."""
        return [(str(y), self.year_start + i) for i, y in enumerate(self.years)]

    def quarter_columns(self) -> list[tuple[str, int]]:
        """(label, column) for quarterly cells, year-major: "1 кв. 2025" → 16."""
        cols = []
        idx = self.quarter_start
        for y in self.years:
            for q in QUARTERS:
                cols.append((quarter_label(y, q), idx))
                idx += 1
        return cols

    def month_columns(self) -> list[tuple[str, int]]:
        """(label, column) for monthly cells, month-minor: "янв-25" → 52."""
        cols = []
        idx = self.month_start
        for y in self.years:
            for m in range(1, len(self.months) + 1):
                cols.append((month_label(y, m, self.months), idx))
                idx += 1
        return cols


def quarter_label(year: int, quarter: int) -> str:
    return f"{quarter} кв. {year}"


def month_label(year: int, month: int, months: tuple[str, ...] = MONTH_ABBREVIATIONS) -> str:
    return f"{months[month - 1]}-{year % 100:02d}"


FINANCIAL_LAYOUT = FinancialLayout()

# ---------------------------------------------------------------------------
# User-facing messages
# ---------------------------------------------------------------------------
FINANCIAL_NOT_LOADED = "Данные из CSV не загружены. Проверьте файл data.csv"
FINANCIAL_DUMP_NOT_LOADED = "Данные CSV не загружены"
PROPERTIES_NOT_LOADED = "Данные CSV не загружены"
