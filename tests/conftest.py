"""Pytest configuration and fixtures."""

from pathlib import Path
from typing import Callable

import pytest
from openpyxl import Workbook

from formcity.data.store import FinancialStore, PropertyStore

ROW_WIDTH = 52 + 9 * 12  # name/total block + years + quarters, then 108 months


def _metric_line(
    name: str,
    total: str = "",
    sold: str = "",
    remaining: str = "",
    years: dict[int, str] | None = None,
    quarters: dict[tuple[int, int], str] | None = None,
    months: dict[tuple[int, int], str] | None = None,
) -> str:
    """Build one positional metric row of the financial export."""
    cols = [""] * ROW_WIDTH
    cols[1] = name
    cols[2], cols[3], cols[4] = total, sold, remaining
    for year, value in (years or {}).items():
        cols[6 + year - 2025] = value
    for (year, quarter), value in (quarters or {}).items():
        cols[16 + (year - 2025) * 4 + quarter - 1] = value
    for (year, month), value in (months or {}).items():
        cols[52 + (year - 2025) * 12 + month - 1] = value
    return ",".join(cols)


@pytest.fixture
def metric_line() -> Callable[..., str]:
    """Factory for positional metric rows."""
    return _metric_line


@pytest.fixture
def financial_lines() -> list[str]:
    """A small export: title row, two categories, noise rows."""
    return [
        ',"ПРОЕКТ ЕВГЕНЬЕВСКИЙ",ИТОГО,ПРОДАНО,ОСТАТОК',
        _metric_line("Выручка руб", "5", "5", "5", years={2025: "999"}),
        ",ЖИЛЬЕ,ИТОГО,ПРОДАНО,ОСТАТОК",
        _metric_line(
            "Выручка руб", "1000", "600", "400",
            years={2025: '"300"', 2026: "1500", 2027: "2500000", 2028: "7"},
            quarters={(2026, 2): "700"},
            months={(2026, 3): "250"},
        ),
        _metric_line("Площадь м2", "5000", "5000", "0", years={2026: "1200"}),
        ",Комментарий,abc,,,",
        "",
        ",КОММЕРЦИЯ,ИТОГО,ПРОДАНО,ОСТАТОК",
        _metric_line(
            "Количество шт", "10", "4", "7",
            years={2025: "2", 2026: "н/д", 2027: "3", 2028: "100"},
        ),
    ]


@pytest.fixture
def financial_csv(tmp_path: Path, financial_lines: list[str]) -> Path:
    path = tmp_path / "finance.csv"
    path.write_text("\n".join(financial_lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def financial_store(financial_csv: Path) -> FinancialStore:
    return FinancialStore(financial_csv)


PROPERTY_CSV = """Тип,Подтип,Очередь,Площадь,Цена,Этаж,Комнаты,Статус,,Комментарий
Квартира,Евро-2,1 очередь,45.5,5500000,3,2,Свободна,lost,"Вид на парк, тихий двор"
Квартира,Студия,2 очередь,25,3200000,7,1,Продана,,
,,,,,,,,,
Коммерческое,Офис,1 очередь,120,15000000,1,,Свободна,,
Квартира,Евро-4,2 ОЧЕРЕДЬ,98,14500000,12,4,Бронь,,
"""


@pytest.fixture
def property_csv(tmp_path: Path) -> Path:
    path = tmp_path / "data.csv"
    path.write_text(PROPERTY_CSV, encoding="utf-8")
    return path


@pytest.fixture
def property_xlsx(tmp_path: Path) -> Path:
    """Workbook whose first sheet holds the listing; the second sheet is ignored."""
    wb = Workbook()
    ws = wb.active
    ws.title = "Объекты"
    ws.append(["Тип", "Очередь", "Площадь, м²", "Цена", "Комнаты", None])
    ws.append(["Квартира", "1 очередь", 45.5, 5500000, 2, "lost"])
    ws.append([None, None, None, None, None, None])
    ws.append(["Коммерческое", "2 очередь", 120, 15000000, None, None])
    other = wb.create_sheet("Архив")
    other.append(["Тип"])
    other.append(["Склад"])
    path = tmp_path / "data.xlsx"
    wb.save(path)
    return path


@pytest.fixture
def property_store(property_csv: Path, tmp_path: Path) -> PropertyStore:
    return PropertyStore(property_csv, csv_fallback=tmp_path / "absent.csv")
