"""Transactions repository adapters.

Every adapter returns transactions ordered by date then id, with date ranges
inclusive on both ends.
"""

from __future__ import annotations

import sqlite3
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Protocol

from backend.db.sqlite_client import SqliteClient
from backend.db.supabase_client import SupabaseClient
from backend.errors import CategoryNotFoundError
from backend.repositories.categories_repository import CategoriesRepository
from shared.models import Category, CategoryType, Transaction, quantize_amount


_SUPABASE_SELECT = "id,amount,transaction_date,comment,category(id,description,type)"
_SUPABASE_SELECT_INNER = "id,amount,transaction_date,comment,category!inner(id,description,type)"

_SQLITE_SELECT = """
    SELECT t.id, t.amount, t.transaction_date, t.comment,
           c.id AS category_id, c.description AS category_description, c.type AS category_type
    FROM transactions t
    LEFT JOIN category c ON t.category_id = c.id
"""


def _parse_date(raw_date: object) -> date:
    if isinstance(raw_date, datetime):
        return raw_date.date()
    if isinstance(raw_date, date):
        return raw_date
    return date.fromisoformat(str(raw_date))


class TransactionsRepository(Protocol):
    def insert_transaction(
        self,
        *,
        amount: Decimal,
        transaction_date: date,
        category_id: int,
        comment: str | None,
    ) -> Transaction:
        """Persist a transaction and return it with its assigned id and category."""

    def find_transactions_by_date_range(self, date_from: date, date_to: date) -> list[Transaction]:
        """Return all transactions dated within the inclusive range."""

    def find_transactions_by_type_and_date_range(
        self, category_type: CategoryType, date_from: date, date_to: date
    ) -> list[Transaction]:
        """Return transactions of one category type dated within the inclusive range."""


class InMemoryTransactionsRepository:
    """In-memory transactions repository used by tests/dev."""

    def __init__(self, categories_repository: CategoriesRepository) -> None:
        self._categories_repository = categories_repository
        self._transactions: list[Transaction] = []
        self._next_id = 1

    def insert_transaction(
        self,
        *,
        amount: Decimal,
        transaction_date: date,
        category_id: int,
        comment: str | None,
    ) -> Transaction:
        transaction = Transaction(
            id=self._next_id,
            amount=amount,
            transaction_date=transaction_date,
            category=self._categories_repository.find_category_by_id(category_id),
            comment=comment,
        )
        self._next_id += 1
        self._transactions.append(transaction)
        return transaction

    def _in_range(self, date_from: date, date_to: date) -> list[Transaction]:
        rows = [
            transaction
            for transaction in self._transactions
            if date_from <= transaction.transaction_date <= date_to
        ]
        return sorted(rows, key=lambda transaction: (transaction.transaction_date, transaction.id))

    def find_transactions_by_date_range(self, date_from: date, date_to: date) -> list[Transaction]:
        return self._in_range(date_from, date_to)

    def find_transactions_by_type_and_date_range(
        self, category_type: CategoryType, date_from: date, date_to: date
    ) -> list[Transaction]:
        return [
            transaction
            for transaction in self._in_range(date_from, date_to)
            if transaction.category is not None and transaction.category.type == category_type
        ]


class SqliteTransactionsRepository:
    """SQLite-backed transactions repository over the `transactions` table."""

    def __init__(self, client: SqliteClient) -> None:
        self._client = client

    @staticmethod
    def _parse_row(row: Any) -> Transaction:
        category: Category | None = None
        if row["category_id"] is not None:
            category = Category(
                id=row["category_id"],
                description=row["category_description"],
                type=CategoryType(row["category_type"]),
            )
        return Transaction(
            id=row["id"],
            amount=Decimal(str(row["amount"])),
            transaction_date=_parse_date(row["transaction_date"]),
            category=category,
            comment=row["comment"],
        )

    def insert_transaction(
        self,
        *,
        amount: Decimal,
        transaction_date: date,
        category_id: int,
        comment: str | None,
    ) -> Transaction:
        try:
            with self._client.transaction() as conn:
                cursor = conn.execute(
                    "INSERT INTO transactions (amount, transaction_date, category_id, comment) VALUES (?, ?, ?, ?)",
                    (str(quantize_amount(amount)), transaction_date.isoformat(), category_id, comment),
                )
                row = conn.execute(_SQLITE_SELECT + " WHERE t.id = ?", (cursor.lastrowid,)).fetchone()
        except sqlite3.IntegrityError as exc:
            if "FOREIGN KEY" in str(exc):
                raise CategoryNotFoundError(category_id) from exc
            raise
        return self._parse_row(row)

    def find_transactions_by_date_range(self, date_from: date, date_to: date) -> list[Transaction]:
        with self._client.transaction() as conn:
            rows = conn.execute(
                _SQLITE_SELECT
                + " WHERE t.transaction_date BETWEEN ? AND ? ORDER BY t.transaction_date, t.id",
                (date_from.isoformat(), date_to.isoformat()),
            ).fetchall()
        return [self._parse_row(row) for row in rows]

    def find_transactions_by_type_and_date_range(
        self, category_type: CategoryType, date_from: date, date_to: date
    ) -> list[Transaction]:
        with self._client.transaction() as conn:
            rows = conn.execute(
                _SQLITE_SELECT
                + " WHERE c.type = ? AND t.transaction_date BETWEEN ? AND ?"
                + " ORDER BY t.transaction_date, t.id",
                (category_type.value, date_from.isoformat(), date_to.isoformat()),
            ).fetchall()
        return [self._parse_row(row) for row in rows]


class SupabaseTransactionsRepository:
    """Supabase repository reading `transactions` with the embedded `category` row."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    @staticmethod
    def _parse_row(row: dict[str, Any]) -> Transaction:
        raw_category = row.get("category")
        return Transaction(
            id=row.get("id"),
            amount=Decimal(str(row.get("amount"))),
            transaction_date=_parse_date(row.get("transaction_date")),
            category=Category.model_validate(raw_category) if isinstance(raw_category, dict) else None,
            comment=row.get("comment"),
        )

    @staticmethod
    def _range_query(date_from: date, date_to: date) -> list[tuple[str, str | int]]:
        return [
            ("transaction_date", f"gte.{date_from.isoformat()}"),
            ("transaction_date", f"lte.{date_to.isoformat()}"),
            ("order", "transaction_date.asc,id.asc"),
        ]

    def insert_transaction(
        self,
        *,
        amount: Decimal,
        transaction_date: date,
        category_id: int,
        comment: str | None,
    ) -> Transaction:
        rows = self._client.post_rows(
            table="transactions",
            payload={
                "amount": str(quantize_amount(amount)),
                "transaction_date": transaction_date.isoformat(),
                "category_id": category_id,
                "comment": comment,
            },
            query={"select": _SUPABASE_SELECT},
        )
        if not rows:
            raise RuntimeError("Supabase did not return created transaction")
        return self._parse_row(rows[0])

    def find_transactions_by_date_range(self, date_from: date, date_to: date) -> list[Transaction]:
        rows = self._client.get_rows(
            table="transactions",
            query=[
                ("select", _SUPABASE_SELECT),
                *self._range_query(date_from, date_to),
            ],
        )
        return [self._parse_row(row) for row in rows]

    def find_transactions_by_type_and_date_range(
        self, category_type: CategoryType, date_from: date, date_to: date
    ) -> list[Transaction]:
        rows = self._client.get_rows(
            table="transactions",
            query=[
                ("select", _SUPABASE_SELECT_INNER),
                ("category.type", f"eq.{category_type.value}"),
                *self._range_query(date_from, date_to),
            ],
        )
        return [self._parse_row(row) for row in rows]
