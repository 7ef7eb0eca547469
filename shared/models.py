"""Pydantic contracts shared across the backend layers and the HTTP API."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer


CENTS = Decimal("0.01")


def quantize_amount(value: Decimal) -> Decimal:
    """Return `value` as a fixed-point amount with 2 fractional digits, rounding half up."""

    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount out of range: {value}") from exc


# Amounts are held at 2 fractional digits and written as JSON numbers.
Money = Annotated[
    Decimal,
    AfterValidator(quantize_amount),
    PlainSerializer(float, return_type=float, when_used="json"),
]


class ErrorCode(str, Enum):
    """Stable error codes surfaced to API clients."""

    INVALID_INPUT = "INVALID_INPUT"
    INVALID_RANGE = "INVALID_RANGE"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"


class CategoryType(str, Enum):
    """Two-valued category classification."""

    INCOMES = "INCOMES"
    EXPENSES = "EXPENSES"


class Category(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: int = Field(alias="idCategory")
    description: str
    type: CategoryType


class Transaction(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: int = Field(alias="idTransaction")
    amount: Money
    transaction_date: date = Field(alias="transactionDate")
    category: Category | None = None
    comment: str | None = None


class CreateTransactionRequest(BaseModel):
    """Payload for transaction creation.

    Every field is optional here; missing required values are reported by
    `backend.validation` so that callers get a single error taxonomy.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    amount: Money | None = None
    transaction_date: date | None = Field(default=None, alias="transactionDate")
    category_id: int | None = Field(default=None, alias="categoryId")
    comment: str | None = None


class CategoryTransactionSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    category: Category
    transactions: list[Transaction]
    category_total: Money = Field(alias="categoryTotal")


class TransactionsByTypeResponse(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    category_summaries: list[CategoryTransactionSummary] = Field(alias="categorySummaries")
    total_amount: Money = Field(alias="totalAmount")


class TransactionExportRow(BaseModel):
    """Flattened transaction with its category fields, ready for CSV rendering."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    id: int | None = Field(default=None, alias="idTransaction")
    transaction_date: str | None = Field(default=None, alias="transactionDate")
    amount: Money | None = None
    category_description: str | None = Field(default=None, alias="categoryDescription")
    category_type: str | None = Field(default=None, alias="categoryType")
    comment: str | None = None


class TransactionExportResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transactions: list[TransactionExportRow] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: ErrorCode
    detail: str
