"""Repository interfaces and adapters for transaction categories."""

from __future__ import annotations

from typing import Any, Protocol

from backend.db.sqlite_client import SqliteClient
from backend.db.supabase_client import SupabaseClient
from shared.models import Category, CategoryType


_CATEGORY_COLUMNS = "id,description,type"

# Mirrors db/migrations/002_seed_categories.sql.
DEFAULT_CATEGORIES: tuple[tuple[int, str, CategoryType], ...] = (
    (1, "Salary", CategoryType.INCOMES),
    (2, "Food & Groceries", CategoryType.EXPENSES),
    (3, "Transportation", CategoryType.EXPENSES),
    (4, "Entertainment", CategoryType.EXPENSES),
    (5, "Healthcare", CategoryType.EXPENSES),
    (6, "Utilities", CategoryType.EXPENSES),
    (7, "Shopping", CategoryType.EXPENSES),
    (8, "Freelance", CategoryType.INCOMES),
    (9, "Investment", CategoryType.INCOMES),
    (10, "Other Income", CategoryType.INCOMES),
)


class CategoriesRepository(Protocol):
    def find_category_by_id(self, category_id: int) -> Category | None:
        """Return the category with this id, or None."""

    def find_categories_by_type(self, category_type: CategoryType) -> list[Category]:
        """Return all categories of a type ordered by id."""


class InMemoryCategoriesRepository:
    """In-memory categories repository used by tests/dev."""

    def __init__(self, categories: list[Category] | None = None) -> None:
        if categories is None:
            categories = [
                Category(id=category_id, description=description, type=category_type)
                for category_id, description, category_type in DEFAULT_CATEGORIES
            ]
        self._categories: dict[int, Category] = {category.id: category for category in categories}

    def find_category_by_id(self, category_id: int) -> Category | None:
        return self._categories.get(category_id)

    def find_categories_by_type(self, category_type: CategoryType) -> list[Category]:
        return sorted(
            [category for category in self._categories.values() if category.type == category_type],
            key=lambda category: category.id,
        )


class SqliteCategoriesRepository:
    """SQLite-backed categories repository over the `category` table."""

    def __init__(self, client: SqliteClient) -> None:
        self._client = client

    @staticmethod
    def _parse_row(row: Any) -> Category:
        return Category(id=row["id"], description=row["description"], type=CategoryType(row["type"]))

    def find_category_by_id(self, category_id: int) -> Category | None:
        with self._client.transaction() as conn:
            row = conn.execute(
                "SELECT id, description, type FROM category WHERE id = ?", (category_id,)
            ).fetchone()
        return self._parse_row(row) if row else None

    def find_categories_by_type(self, category_type: CategoryType) -> list[Category]:
        with self._client.transaction() as conn:
            rows = conn.execute(
                "SELECT id, description, type FROM category WHERE type = ? ORDER BY id",
                (category_type.value,),
            ).fetchall()
        return [self._parse_row(row) for row in rows]


class SupabaseCategoriesRepository:
    """Supabase-backed categories repository."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    def find_category_by_id(self, category_id: int) -> Category | None:
        rows = self._client.get_rows(
            table="category",
            query={"id": f"eq.{category_id}", "select": _CATEGORY_COLUMNS, "limit": 1},
        )
        if not rows:
            return None
        return Category.model_validate(rows[0])

    def find_categories_by_type(self, category_type: CategoryType) -> list[Category]:
        rows = self._client.get_rows(
            table="category",
            query=[
                ("type", f"eq.{category_type.value}"),
                ("select", _CATEGORY_COLUMNS),
                ("order", "id.asc"),
            ],
        )
        return [Category.model_validate(row) for row in rows]
