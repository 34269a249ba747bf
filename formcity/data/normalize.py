"""
Header normalization, CSV line splitting, lenient number parsing.
"""
from __future__ import annotations

import numbers
import re
from dataclasses import dataclass
from typing import Any, Optional

import pandas as pd


# ---------------------------------------------------------------------------
# Header normalisation
# ---------------------------------------------------------------------------

_WHITESPACE_RE = re.compile(r"\s+")


def _is_word_char(ch: str) -> bool:
    # Superscripts such as "²" count as digits for str.isdigit and re's \w,
    # but not as decimals.
    return ch == "_" or ch.isalpha() or ch.isdecimal()


def normalize_header(header: Any) -> str:
    """Turn a spreadsheet header into a stable key.

    "Площадь, м²" → "площадь_м". Returns "" for headers that carry no word
    characters; callers skip those columns.
    """
    if header is None or (not isinstance(header, str) and pd.isna(header)):
        return ""
    key = _WHITESPACE_RE.sub("_", str(header).lower())
    key = "".join(ch for ch in key if _is_word_char(ch))
    return key.strip("_")


# ---------------------------------------------------------------------------
# CSV line splitting
# ---------------------------------------------------------------------------

def parse_csv_line(line: str, delimiter: str = ",") -> list[str]:
    """Split one CSV line; double quotes toggle a mode where delimiters are kept.

    Quote characters are dropped and every field is trimmed.
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    fields.append("".join(current).strip())
    return fields


def split_lines(text: str) -> list[str]:
    """Split file text on line feeds only; a trailing carriage return is dropped from each line.

    Separators such as U+2028 or form feeds can sit inside a cell and do not
    end a row.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def strip_quotes(value: str | None) -> str:
    if not value:
        return ""
    return value.replace('"', "").strip()


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

_LEADING_FLOAT_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class ParseStats:
    """Diagnostics from one financial-table scan."""
    lines: int = 0
    records: int = 0
    categories: int = 0
    coerced_cells: int = 0   # non-empty cells that could not be read as numbers


def parse_number(value: str | None, stats: ParseStats | None = None) -> float:
    """Lenient cell parser: quotes dropped, "," read as decimal point.

    Empty and unreadable cells give 0.0; unreadable ones are counted on
    ``stats`` when given.
    """
    if not value:
        return 0.0
    cleaned = value.replace('"', "").replace(",", ".").strip()
    if not cleaned:
        return 0.0
    m = _LEADING_FLOAT_RE.match(cleaned)
    if m is None:
        if stats is not None:
            stats.coerced_cells += 1
        return 0.0
    return float(m.group(0))


def to_number(value: Any) -> Optional[float]:
    """Best-effort numeric view of a property cell; None when not a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Number):
        return None if pd.isna(value) else float(value)
    text = str(value).replace("\u00a0", "").replace(" ", "").replace(",", ".")
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return None
