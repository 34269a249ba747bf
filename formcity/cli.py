#!/usr/bin/env python3
"""
Formula City assistant CLI — query the financial table and property listing, or start the API.

USAGE:
  python -m formcity.cli analyze "выручка за 2026"              # Report for the scope a question implies
  python -m formcity.cli analyze "продажи с 25 по 27"
  python -m formcity.cli report --period quarter --year 2026 --quarter 2
  python -m formcity.cli dump                                     # Full financial dump
  python -m formcity.cli search "Квартира"                        # Property search
  python -m formcity.cli types                                    # Property types
  python -m formcity.cli context "квартира 2 очередь"             # Context block for the model
  python -m formcity.cli serve --port 8000                        # Start API server
"""
from __future__ import annotations

import argparse
import sys

from formcity.config import API_PORT
from formcity.data.errors import DataLoadError
from formcity.data.schemas import PeriodFilter, PeriodType
from formcity.data.store import FinancialStore, PropertyStore


def _financial(args) -> FinancialStore:
    return FinancialStore(args.csv) if args.csv else FinancialStore()


def _properties(args) -> PropertyStore:
    return PropertyStore(args.properties) if args.properties else PropertyStore()


def _build_period(args) -> PeriodFilter:
    """Build a PeriodFilter from CLI args."""
    if args.period is None:
        return PeriodFilter(PeriodType.ALL)
    return PeriodFilter(
        period_type=PeriodType(args.period),
        year=args.year,
        quarter=args.quarter,
        month=args.month,
        start_year=args.start_year,
        end_year=args.end_year,
    )


def cmd_analyze(args):
    from formcity.reports.financial_report import analyze
    print(analyze(" ".join(args.query), _financial(args)))


def cmd_report(args):
    from formcity.reports.financial_report import render_report
    period = _build_period(args)
    if not period.is_complete():
        print(f"  Incomplete parameters for --period {args.period}")
        return 2
    try:
        records = _financial(args).load()
    except DataLoadError as exc:
        print(f"  {exc}")
        return 1
    print(render_report(records, period))


def cmd_dump(args):
    from formcity.reports.financial_report import all_data_as_text
    print(all_data_as_text(_financial(args)))


def cmd_search(args):
    from formcity.analytics.properties import search_properties
    from formcity.reports.property_report import format_listing
    query = " ".join(args.query)
    try:
        records = _properties(args).load()
    except DataLoadError as exc:
        print(f"  {exc}")
        return 1
    found = search_properties(records, query)
    print(format_listing(found, f"🔍 Поиск: {query}" if query else "🔍 Все объекты", args.limit))


def cmd_types(args):
    store = _properties(args)
    try:
        types = store.property_types()
    except DataLoadError as exc:
        print(f"  {exc}")
        return 1
    print(f"\nPROPERTY TYPES ({len(types)}):\n")
    for i, t in enumerate(types, 1):
        print(f"{i:<4}{t}")
    print(f"\nColumns: {', '.join(store.available_columns())}")


def cmd_context(args):
    from formcity.reports.context import build_context
    print(build_context(" ".join(args.query), _financial(args), _properties(args)))


def cmd_serve(args):
    """Start the API server."""
    import uvicorn
    print(f"\nStarting Formula City data API on port {args.port}...")
    uvicorn.run("formcity.main:app", host="0.0.0.0", port=args.port, reload=args.reload)


def _add_period_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--period", choices=[t.value for t in PeriodType], help="Period type")
    p.add_argument("--year", type=int, help="Year")
    p.add_argument("--quarter", type=int, help="Quarter (1-4)")
    p.add_argument("--month", type=int, help="Month (1-12)")
    p.add_argument("--start-year", type=int, help="Range start year")
    p.add_argument("--end-year", type=int, help="Range end year")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Formula City assistant — property and financial data queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--csv", help="Financial table CSV (default: CSV_FILE_PATH or ./data.csv)")
    parser.add_argument("--properties", help="Property listing (default: EXCEL_FILE_PATH or ./data.xlsx)")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    analyze_parser = subparsers.add_parser("analyze", help="Financial report for a free-text question")
    analyze_parser.add_argument("query", nargs="*", help="Question text")
    analyze_parser.set_defaults(func=cmd_analyze)

    report_parser = subparsers.add_parser("report", help="Financial report for an explicit period")
    _add_period_args(report_parser)
    report_parser.set_defaults(func=cmd_report)

    dump_parser = subparsers.add_parser("dump", help="Full financial dump")
    dump_parser.set_defaults(func=cmd_dump)

    search_parser = subparsers.add_parser("search", help="Search the property listing")
    search_parser.add_argument("query", nargs="*", help="Search text")
    search_parser.add_argument("--limit", type=int, default=10, help="Objects to show (default 10)")
    search_parser.set_defaults(func=cmd_search)

    types_parser = subparsers.add_parser("types", help="List property types and columns")
    types_parser.set_defaults(func=cmd_types)

    context_parser = subparsers.add_parser("context", help="Context block for the completion service")
    context_parser.add_argument("query", nargs="*", help="Question text")
    context_parser.set_defaults(func=cmd_context)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=API_PORT, help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 0

    return args.func(args) or 0


if __name__ == "__main__":
    sys.exit(main())
