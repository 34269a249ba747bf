"""Tests for financial reports, the full dump and the FinancialStore."""

from pathlib import Path

import pytest

from formcity.config import FINANCIAL_DUMP_NOT_LOADED, FINANCIAL_NOT_LOADED
from formcity.data.schemas import PeriodFilter, PeriodType
from formcity.data.store import FinancialStore
from formcity.reports.financial_report import (
    all_data_as_text,
    analyze,
    generate_json,
    render_report,
)
from formcity.reports.formatting import format_amount, format_grouped, format_plain


class TestFormatting:
    """Tests for number formatting."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (300, "300.00"),
            (0, "0.00"),
            (999.999, "1000.00"),
            (1000, "1.00 тыс"),
            (1500, "1.50 тыс"),
            (2501800, "2.50 млн"),
            (-2500, "-2500.00"),
            (-2500000, "-2500000.00"),
        ],
    )
    def test_format_amount(self, value: float, expected: str) -> None:
        assert format_amount(value) == expected

    def test_format_grouped(self) -> None:
        assert format_grouped(5500000) == "5\u00a0500\u00a0000"
        assert format_grouped(1234.5) == "1\u00a0234,5"
        assert format_grouped(0) == "0"

    def test_format_plain(self) -> None:
        assert format_plain(45.0) == "45"
        assert format_plain(45.5) == "45.5"
        assert format_plain("45.0") == "45.0"


class TestAnalyze:
    """Tests for free-text financial reports."""

    def test_year_report(self, financial_store: FinancialStore) -> None:
        assert analyze("выручка за 2025", financial_store) == (
            "📊 ДАННЫЕ ЗА 2025 ГОД\n\n"
            "ЖИЛЬЕ\n"
            "• Выручка руб: 300.00\n\n"
            "КОММЕРЦИЯ\n"
            "• Количество шт: 2.00\n\n"
        )

    def test_range_sums_only_its_years(self, financial_store: FinancialStore) -> None:
        text = analyze("продажи с 25 по 27", financial_store)
        assert text.startswith("📊 ДАННЫЕ ЗА ПЕРИОД 2025-2027\n\n")
        assert "• Выручка руб: 2.50 млн" in text
        assert "• Площадь м2: 1.20 тыс" in text
        assert "• Количество шт: 5.00" in text

    def test_quarter_report(self, financial_store: FinancialStore) -> None:
        text = analyze("2026 2 кв", financial_store)
        assert text.startswith("📊 ДАННЫЕ ЗА 2 кв. 2026\n\n")
        assert "• Выручка руб: 700.00" in text
        assert "Площадь м2:" not in text

    def test_category_with_no_values_keeps_its_heading(self, financial_store: FinancialStore) -> None:
        text = analyze("2026 2 кв", financial_store)
        assert "КОММЕРЦИЯ\n\n" in text

    def test_totals_without_a_period(self, financial_store: FinancialStore) -> None:
        text = analyze("как дела у проекта", financial_store)
        assert text.startswith("📊 ОБЩАЯ СТАТИСТИКА ПРОЕКТА\n\n")
        assert "• Выручка руб\n  Всего: 1.00 тыс\n  Продано: 600.00\n  Остаток: 400.00" in text
        assert "  Остаток: 0.00" in text
        assert "  Всего: 10.00\n  Продано: 4.00\n  Остаток: 7.00" in text

    def test_year_outside_the_data(self, financial_store: FinancialStore) -> None:
        text = analyze("2033", financial_store)
        assert text == "📊 ДАННЫЕ ЗА 2033 ГОД\n\nЖИЛЬЕ\n\nКОММЕРЦИЯ\n\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        store = FinancialStore(tmp_path / "absent.csv")
        assert analyze("2025", store) == FINANCIAL_NOT_LOADED

    def test_file_without_metrics(self, tmp_path: Path) -> None:
        path = tmp_path / "data.csv"
        path.write_text("just,some,text\n", encoding="utf-8")
        assert analyze("2025", FinancialStore(path)) == FINANCIAL_NOT_LOADED


class TestRenderReport:
    """Tests for explicit periods."""

    def test_month(self, financial_store: FinancialStore) -> None:
        period = PeriodFilter(PeriodType.MONTH, year=2026, month=3)
        text = render_report(financial_store.load(), period)
        assert text.startswith("📊 ДАННЫЕ ЗА мар-26\n\n")
        assert "• Выручка руб: 250.00" in text

    def test_incomplete_period_gives_totals(self, financial_store: FinancialStore) -> None:
        text = render_report(financial_store.load(), PeriodFilter(PeriodType.YEAR))
        assert text.startswith("📊 ОБЩАЯ СТАТИСТИКА ПРОЕКТА")

    def test_no_records(self) -> None:
        assert render_report([], PeriodFilter(PeriodType.YEAR, year=2025)) == "📊 ДАННЫЕ ЗА 2025 ГОД\n\n"


class TestAllDataAsText:
    """Tests for the full dump handed over as context."""

    def test_layout(self, financial_store: FinancialStore) -> None:
        text = all_data_as_text(financial_store)
        assert text.startswith("ФИНАНСОВЫЕ ДАННЫЕ ПРОЕКТА\n\nЖИЛЬЕ:\n\nВыручка руб\n")
        assert "Всего: 1.00 тыс, Продано: 600.00, Остаток: 400.00\n" in text
        assert "По годам: 2025: 300.00, 2026: 1.50 тыс, 2027: 2.50 млн, 2028: 7.00, 2029: 0.00" in text
        assert "\nКОММЕРЦИЯ:\n" in text
        assert text.endswith("2033: 0.00\n\n")

    def test_missing_file(self, tmp_path: Path) -> None:
        assert all_data_as_text(FinancialStore(tmp_path / "absent.csv")) == FINANCIAL_DUMP_NOT_LOADED


class TestGenerateJson:
    """Tests for the structured report."""

    def test_year(self, financial_store: FinancialStore) -> None:
        report = generate_json(financial_store, PeriodFilter(PeriodType.YEAR, year=2026))
        assert report["period"] == "2026"
        assert report["period_type"] == "year"
        assert [c["category"] for c in report["categories"]] == ["ЖИЛЬЕ", "КОММЕРЦИЯ"]
        revenue = report["categories"][0]["metrics"][0]
        assert revenue["metric"] == "Выручка руб"
        assert revenue["value"] == 1500.0
        assert isinstance(revenue["value"], float)

    def test_totals_have_no_value(self, financial_store: FinancialStore) -> None:
        report = generate_json(financial_store)
        assert report["period"] == "Итого"
        assert report["categories"][1]["metrics"][0]["value"] is None
        assert report["categories"][1]["metrics"][0]["remaining"] == 7.0


class TestFinancialStore:
    """Tests for the parsed-once cache."""

    def test_cached(self, financial_store: FinancialStore) -> None:
        first = financial_store.load()
        assert financial_store.load() is first
        assert financial_store.stats.coerced_cells == 1

    def test_clear_rereads(self, financial_store: FinancialStore) -> None:
        first = financial_store.load()
        financial_store.clear()
        assert not financial_store.is_loaded
        assert financial_store.load() is not first

    def test_categories(self, financial_store: FinancialStore) -> None:
        assert financial_store.categories() == ["ЖИЛЬЕ", "КОММЕРЦИЯ"]

    def test_stats_before_load(self, financial_store: FinancialStore) -> None:
        assert financial_store.stats.records == 0
