"""Aggregation and export utilities for transaction reports."""

from backend.reporting.aggregation import group_by_category, sum_amounts, summarize_by_category
from backend.reporting.csv_export import CSV_HEADER, escape_csv_field, export_filename, format_transactions_csv
from backend.reporting.export import prepare_export, sort_incomes_first, to_export_row

__all__ = [
    "CSV_HEADER",
    "escape_csv_field",
    "export_filename",
    "format_transactions_csv",
    "group_by_category",
    "prepare_export",
    "sort_incomes_first",
    "sum_amounts",
    "summarize_by_category",
    "to_export_row",
]
