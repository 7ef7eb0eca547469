"""Flatten and order transactions for CSV export."""

from __future__ import annotations

from shared.models import CategoryType, Transaction, TransactionExportResponse, TransactionExportRow


def _export_type(transaction: Transaction) -> CategoryType:
    # Uncategorized rows sort with expenses.
    if transaction.category is None:
        return CategoryType.EXPENSES
    return transaction.category.type


def sort_incomes_first(transactions: list[Transaction]) -> list[Transaction]:
    """Return incomes then expenses, each bucket in its original order."""

    incomes = [transaction for transaction in transactions if _export_type(transaction) == CategoryType.INCOMES]
    expenses = [transaction for transaction in transactions if _export_type(transaction) != CategoryType.INCOMES]
    return incomes + expenses


def to_export_row(transaction: Transaction) -> TransactionExportRow:
    category = transaction.category
    return TransactionExportRow(
        id=transaction.id,
        transaction_date=transaction.transaction_date.isoformat(),
        amount=transaction.amount,
        category_description=category.description if category is not None else "",
        category_type=category.type.value if category is not None else "",
        comment=transaction.comment if transaction.comment is not None else "",
    )


def prepare_export(transactions: list[Transaction]) -> TransactionExportResponse:
    return TransactionExportResponse(
        transactions=[to_export_row(transaction) for transaction in sort_incomes_first(transactions)]
    )
