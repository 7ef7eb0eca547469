"""Group transactions by category and compute exact decimal totals."""

from __future__ import annotations

from decimal import Decimal

from shared.models import Category, CategoryTransactionSummary, Transaction, TransactionsByTypeResponse


ZERO = Decimal("0.00")


def sum_amounts(transactions: list[Transaction]) -> Decimal:
    return sum((transaction.amount for transaction in transactions), ZERO)


def group_by_category(transactions: list[Transaction]) -> dict[int, tuple[Category, list[Transaction]]]:
    """Group transactions by category id, keeping first-seen order.

    Two categories sharing a description stay in separate groups. Transactions
    without a category are left out of every group.
    """

    groups: dict[int, tuple[Category, list[Transaction]]] = {}
    for transaction in transactions:
        category = transaction.category
        if category is None:
            continue
        if category.id not in groups:
            groups[category.id] = (category, [])
        groups[category.id][1].append(transaction)
    return groups


def summarize_by_category(transactions: list[Transaction]) -> TransactionsByTypeResponse:
    summaries = [
        CategoryTransactionSummary(
            category=category,
            transactions=grouped,
            category_total=sum_amounts(grouped),
        )
        for category, grouped in group_by_category(transactions).values()
    ]
    return TransactionsByTypeResponse(
        category_summaries=summaries,
        total_amount=sum_amounts(transactions),
    )
