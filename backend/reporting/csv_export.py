"""Render export rows as CSV text."""

from __future__ import annotations

from shared.models import TransactionExportResponse, TransactionExportRow


CSV_HEADER = "Transaction ID,Transaction Date,Amount,Category Description,Category Type,Comment"
CSV_MEDIA_TYPE = "text/csv"

_SPECIAL_CHARACTERS = (",", '"', "\n")


def escape_csv_field(value: object | None) -> str:
    """Quote a field containing a comma, quote or newline; None renders empty."""

    if value is None:
        return ""
    text = str(value)
    if any(character in text for character in _SPECIAL_CHARACTERS):
        return '"' + text.replace('"', '""') + '"'
    return text


def _format_row(row: TransactionExportRow) -> str:
    fields = (
        row.id,
        row.transaction_date,
        row.amount,
        row.category_description,
        row.category_type,
        row.comment,
    )
    return ",".join(escape_csv_field(field) for field in fields)


def format_transactions_csv(export_data: TransactionExportResponse) -> str:
    lines = [CSV_HEADER, *(_format_row(row) for row in export_data.transactions)]
    return "".join(f"{line}\n" for line in lines)


def export_filename(date_from: object, date_to: object) -> str:
    return f"transactions_{date_from}_{date_to}.csv"
