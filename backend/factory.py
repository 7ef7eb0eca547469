"""Composition root for backend services."""

from __future__ import annotations

import logging

from backend.db.sqlite_client import SqliteClient, SqliteSettings
from backend.db.supabase_client import SupabaseClient, SupabaseSettings
from backend.repositories.categories_repository import (
    CategoriesRepository,
    InMemoryCategoriesRepository,
    SqliteCategoriesRepository,
    SupabaseCategoriesRepository,
)
from backend.repositories.transactions_repository import (
    InMemoryTransactionsRepository,
    SqliteTransactionsRepository,
    SupabaseTransactionsRepository,
    TransactionsRepository,
)
from backend.services.transaction_service import TransactionService
from shared import config


logger = logging.getLogger(__name__)


def _build_repositories(store: str) -> tuple[TransactionsRepository, CategoriesRepository]:
    if store == "supabase":
        supabase_url = config.supabase_url()
        supabase_key = config.supabase_service_role_key()
        if not supabase_url or not supabase_key:
            raise RuntimeError("Supabase backend is not configured")
        client = SupabaseClient(
            settings=SupabaseSettings(
                url=supabase_url,
                service_role_key=supabase_key,
            )
        )
        return SupabaseTransactionsRepository(client), SupabaseCategoriesRepository(client)

    if store == "sqlite":
        sqlite_client = SqliteClient(settings=SqliteSettings(path=config.sqlite_path()))
        sqlite_client.migrate()
        return SqliteTransactionsRepository(sqlite_client), SqliteCategoriesRepository(sqlite_client)

    categories_repository = InMemoryCategoriesRepository()
    return InMemoryTransactionsRepository(categories_repository), categories_repository


def build_transaction_service(store: str | None = None) -> TransactionService:
    """Build the transaction service over the configured store.

    `store` overrides `FINANCE_STORE`; one of memory, sqlite or supabase.
    """

    selected_store = store or config.finance_store()
    transactions_repository, categories_repository = _build_repositories(selected_store)
    logger.info("transaction_service_built store=%s", selected_store)
    return TransactionService(
        transactions_repository=transactions_repository,
        categories_repository=categories_repository,
    )
