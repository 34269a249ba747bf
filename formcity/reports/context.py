"""
Context block for the completion service: the financial dump, always, plus
the properties a query matches.
"""
from __future__ import annotations

from formcity.data.errors import DataLoadError
from formcity.data.store import FinancialStore, PropertyStore
from formcity.analytics.properties import search_properties
from formcity.reports.financial_report import all_data_as_text
from formcity.reports.property_report import format_for_context


def build_context(query: str, financial: FinancialStore, properties: PropertyStore) -> str:
    context = all_data_as_text(financial)

    try:
        records = properties.load()
    except DataLoadError as exc:
        print(f"  Warning: {exc}")
        return context

    matches = search_properties(records, query)
    if matches:
        context += "\n\n" + format_for_context(matches, properties.source_path)
    return context
