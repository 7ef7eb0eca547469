"""Transaction use cases: creation, grouped queries, category listing and export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date

from backend.errors import CategoryNotFoundError
from backend.reporting import format_transactions_csv, prepare_export, summarize_by_category
from backend.repositories.categories_repository import CategoriesRepository
from backend.repositories.transactions_repository import TransactionsRepository
from backend.validation import (
    validate_category_type,
    validate_create_transaction_request,
    validate_date_range,
    validate_export_data,
    validate_type_and_date_range,
)
from shared.models import (
    Category,
    CategoryType,
    CreateTransactionRequest,
    Transaction,
    TransactionExportResponse,
    TransactionsByTypeResponse,
)


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TransactionService:
    transactions_repository: TransactionsRepository
    categories_repository: CategoriesRepository

    def add_transaction(self, request: CreateTransactionRequest) -> Transaction:
        """Create a transaction against an existing category.

        Raises `InvalidInputError` for missing fields and `CategoryNotFoundError`
        when the category id is unknown; nothing is written in either case.
        """

        validate_create_transaction_request(request)
        logger.info(
            "transaction_add_requested category_id=%s amount=%s",
            request.category_id,
            request.amount,
        )

        category = self.categories_repository.find_category_by_id(request.category_id)
        if category is None:
            raise CategoryNotFoundError(request.category_id)

        transaction = self.transactions_repository.insert_transaction(
            amount=request.amount,
            transaction_date=request.transaction_date,
            category_id=category.id,
            comment=request.comment,
        )
        if transaction.category is None:
            transaction = transaction.model_copy(update={"category": category})

        logger.info("transaction_added transaction_id=%s", transaction.id)
        return transaction

    def get_transactions_by_type_and_date_range(
        self,
        category_type: CategoryType,
        date_from: date,
        date_to: date,
    ) -> TransactionsByTypeResponse:
        validate_type_and_date_range(category_type, date_from, date_to)
        logger.info(
            "transactions_by_type_requested type=%s date_from=%s date_to=%s",
            category_type.value,
            date_from,
            date_to,
        )

        transactions = self.transactions_repository.find_transactions_by_type_and_date_range(
            category_type, date_from, date_to
        )
        response = summarize_by_category(transactions)

        logger.info(
            "transactions_by_type_grouped count=%s categories=%s total=%s",
            len(transactions),
            len(response.category_summaries),
            response.total_amount,
        )
        return response

    def get_all_categories(self, category_type: CategoryType) -> list[Category]:
        validate_category_type(category_type)
        categories = self.categories_repository.find_categories_by_type(category_type)
        logger.info("categories_listed type=%s count=%s", category_type.value, len(categories))
        return categories

    def export_transactions(self, date_from: date, date_to: date) -> TransactionExportResponse:
        """Return every transaction in the range, incomes first, flattened for CSV."""

        validate_date_range(date_from, date_to)
        logger.info("transactions_export_requested date_from=%s date_to=%s", date_from, date_to)

        transactions = self.transactions_repository.find_transactions_by_date_range(date_from, date_to)
        export_data = prepare_export(transactions)

        logger.info("transactions_export_prepared count=%s", len(export_data.transactions))
        return export_data

    def export_transactions_to_csv(self, export_data: TransactionExportResponse) -> str:
        validate_export_data(export_data)
        logger.info("transactions_csv_render count=%s", len(export_data.transactions))
        return format_transactions_csv(export_data)
