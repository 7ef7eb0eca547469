"""Input guards run before any repository access."""

from __future__ import annotations

from datetime import date

from backend.errors import InvalidInputError, InvalidRangeError
from shared.models import CategoryType, CreateTransactionRequest, TransactionExportResponse


def _require(value: object, message: str) -> None:
    if value is None:
        raise InvalidInputError(message)


def validate_create_transaction_request(request: CreateTransactionRequest | None) -> None:
    """Reject creation requests missing amount, date or category id.

    Amount sign and magnitude are not checked.
    """

    _require(request, "Transaction request cannot be null")
    _require(request.amount, "Amount cannot be null")
    _require(request.transaction_date, "Transaction date cannot be null")
    _require(request.category_id, "Category cannot be null")


def validate_date_range(date_from: date | None, date_to: date | None) -> None:
    """Reject absent bounds and ranges where `date_from` is after `date_to`."""

    _require(date_from, "Date from cannot be null")
    _require(date_to, "Date to cannot be null")

    if date_from > date_to:
        raise InvalidRangeError("Date from must be before or equal to date to")


def validate_category_type(category_type: CategoryType | None) -> None:
    _require(category_type, "Category type cannot be null")


def validate_type_and_date_range(
    category_type: CategoryType | None,
    date_from: date | None,
    date_to: date | None,
) -> None:
    validate_category_type(category_type)
    validate_date_range(date_from, date_to)


def validate_export_data(export_data: TransactionExportResponse | None) -> None:
    _require(export_data, "Export data cannot be null")
