"""Property and financial data loading, normalization, and in-memory stores."""
from .errors import DataLoadError
from .schemas import PropertyRecord, FinancialMetricRecord, PeriodFilter, PeriodType
from .normalize import normalize_header, parse_csv_line, parse_number, split_lines, ParseStats
from .loader import load_property_file, resolve_property_path
from .financial import parse_financial_lines, load_financial_file
from .store import PropertyStore, FinancialStore
