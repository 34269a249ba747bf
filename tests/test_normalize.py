"""Tests for header normalization, CSV splitting and number parsing."""

import pytest

from formcity.data.normalize import (
    ParseStats,
    normalize_header,
    parse_csv_line,
    parse_number,
    split_lines,
    strip_quotes,
    to_number,
)


class TestNormalizeHeader:
    """Tests for normalize_header."""

    def test_area_header_with_superscript(self) -> None:
        assert normalize_header("Площадь, м²") == "площадь_м"

    def test_whitespace_runs_collapse(self) -> None:
        assert normalize_header("Номер   квартиры") == "номер_квартиры"

    def test_leading_and_trailing_underscores_trimmed(self) -> None:
        assert normalize_header("  Цена  ") == "цена"
        assert normalize_header("_id_") == "id"

    def test_punctuation_removed(self) -> None:
        assert normalize_header("Кол-во комнат") == "колво_комнат"
        assert normalize_header("Цена (руб.)") == "цена_руб"

    def test_digits_kept(self) -> None:
        assert normalize_header("Этаж 2") == "этаж_2"

    @pytest.mark.parametrize("header", ["", None, "   ", "---", float("nan")])
    def test_empty_results(self, header) -> None:
        assert normalize_header(header) == ""

    def test_non_string_header(self) -> None:
        assert normalize_header(2025) == "2025"


class TestParseCsvLine:
    """Tests for the quote-aware line splitter."""

    @pytest.mark.parametrize(
        "fields",
        [
            ["a", "b", "c"],
            ["Квартира", "45.5", "", "Свободна"],
            ["", "", ""],
            ["single"],
        ],
    )
    def test_round_trip_without_quotes(self, fields: list[str]) -> None:
        assert parse_csv_line(",".join(fields)) == fields

    def test_quoted_comma_is_kept(self) -> None:
        line = 'Квартира,"Вид на парк, тихий двор",5'
        assert parse_csv_line(line) == ["Квартира", "Вид на парк, тихий двор", "5"]

    def test_quotes_are_dropped_and_fields_trimmed(self) -> None:
        assert parse_csv_line(' "a" , b ,c') == ["a", "b", "c"]

    def test_empty_line_gives_one_empty_field(self) -> None:
        assert parse_csv_line("") == [""]

    def test_custom_delimiter(self) -> None:
        assert parse_csv_line("a;b;c", delimiter=";") == ["a", "b", "c"]


class TestParseNumber:
    """Tests for lenient numeric cells."""

    def test_comma_decimal_separator(self) -> None:
        assert parse_number("1,5") == float("1,5".replace(",", ".")) == 1.5

    def test_quoted_value(self) -> None:
        assert parse_number('"300"') == 300.0
        assert parse_number('"2,25"') == 2.25

    def test_negative_and_exponent(self) -> None:
        assert parse_number("-12.5") == -12.5
        assert parse_number("1e3") == 1000.0

    @pytest.mark.parametrize("value", ["", None, '""', "   "])
    def test_empty_is_zero_and_not_counted(self, value) -> None:
        stats = ParseStats()
        assert parse_number(value, stats) == 0.0
        assert stats.coerced_cells == 0

    @pytest.mark.parametrize("value", ["abc", "н/д", "-", "#DIV/0!"])
    def test_unreadable_is_zero_and_counted(self, value: str) -> None:
        stats = ParseStats()
        assert parse_number(value, stats) == 0.0
        assert stats.coerced_cells == 1

    def test_leading_number_prefix_is_used(self) -> None:
        stats = ParseStats()
        assert parse_number("12abc", stats) == 12.0
        assert stats.coerced_cells == 0

    def test_without_stats(self) -> None:
        assert parse_number("abc") == 0.0


class TestToNumber:
    """Tests for the property-cell numeric view."""

    def test_numbers_pass_through(self) -> None:
        assert to_number(5) == 5.0
        assert to_number(45.5) == 45.5

    def test_strings(self) -> None:
        assert to_number("45.5") == 45.5
        assert to_number("45,5") == 45.5
        assert to_number("5 500 000") == 5500000.0
        assert to_number("5\u00a0500\u00a0000") == 5500000.0

    @pytest.mark.parametrize("value", [None, "", "abc", True, float("nan")])
    def test_not_a_number(self, value) -> None:
        assert to_number(value) is None


class TestStripQuotes:
    def test_strip(self) -> None:
        assert strip_quotes('  "ЖИЛЬЕ" ') == "ЖИЛЬЕ"
        assert strip_quotes(None) == ""


class TestSplitLines:
    """Tests for splitting file text into rows."""

    def test_only_line_feed_ends_a_row(self) -> None:
        text = "a,b c,d\x0ce\x85f\nnext\n"
        assert split_lines(text) == ["a,b c,d\x0ce\x85f", "next"]

    def test_carriage_returns_are_dropped(self) -> None:
        assert split_lines("a,b\r\nc,d\r\n") == ["a,b", "c,d"]

    def test_blank_lines_are_kept(self) -> None:
        assert split_lines("a\n\nb") == ["a", "", "b"]

    def test_empty_text(self) -> None:
        assert split_lines("") == []
