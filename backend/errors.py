"""Domain errors raised by validation and the transaction service."""

from __future__ import annotations

from shared.models import ErrorCode


class FinanceError(Exception):
    """Base class for client-facing finance errors."""

    code: ErrorCode = ErrorCode.INVALID_INPUT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidInputError(FinanceError):
    """Raised when a required input value is missing."""

    code = ErrorCode.INVALID_INPUT


class InvalidRangeError(FinanceError):
    """Raised when a date range starts after it ends."""

    code = ErrorCode.INVALID_RANGE


class CategoryNotFoundError(FinanceError):
    """Raised when a transaction references an unknown category."""

    code = ErrorCode.CATEGORY_NOT_FOUND

    def __init__(self, category_id: int) -> None:
        super().__init__(f"Category not found with id: {category_id}")
        self.category_id = category_id
