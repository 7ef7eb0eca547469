"""Tests for finance endpoints exposed by backend.api."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import backend.api as finance_api
from backend.api import app
from backend.repositories.categories_repository import InMemoryCategoriesRepository
from backend.repositories.transactions_repository import InMemoryTransactionsRepository
from backend.services.transaction_service import TransactionService


client = TestClient(app)


@pytest.fixture
def service(monkeypatch) -> TransactionService:
    categories_repository = InMemoryCategoriesRepository()
    in_memory_service = TransactionService(
        transactions_repository=InMemoryTransactionsRepository(categories_repository),
        categories_repository=categories_repository,
    )
    monkeypatch.setattr(finance_api, "get_transaction_service", lambda: in_memory_service)
    return in_memory_service


def _post_transaction(amount: str | float, transaction_date: str, category_id: int, comment: str | None = None):
    return client.post(
        "/api/v1/finance/transactions",
        json={
            "amount": amount,
            "transactionDate": transaction_date,
            "categoryId": category_id,
            "comment": comment,
        },
    )


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_add_transaction_returns_201_with_created_transaction(service) -> None:
    response = _post_transaction("100.00", "2026-01-15", 2, comment="Test transaction")

    assert response.status_code == 201
    payload = response.json()
    assert payload["idTransaction"] == 1
    assert payload["amount"] == 100.0
    assert payload["transactionDate"] == "2026-01-15"
    assert payload["comment"] == "Test transaction"
    assert payload["category"] == {"idCategory": 2, "description": "Food & Groceries", "type": "EXPENSES"}


def test_add_transaction_unknown_category_maps_to_400(service) -> None:
    response = _post_transaction("100.00", "2026-01-15", 999)

    assert response.status_code == 400
    assert response.json() == {"code": "CATEGORY_NOT_FOUND", "detail": "Category not found with id: 999"}


def test_add_transaction_missing_amount_maps_to_400(service) -> None:
    response = client.post(
        "/api/v1/finance/transactions",
        json={"transactionDate": "2026-01-15", "categoryId": 2},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"
    assert response.json()["detail"] == "Amount cannot be null"


def test_add_transaction_malformed_date_is_rejected(service) -> None:
    response = _post_transaction("100.00", "15/01/2026", 2)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"


def test_get_transactions_groups_by_category(service) -> None:
    _post_transaction("5000.00", "2026-01-01", 1)
    _post_transaction("800.00", "2026-01-05", 8)
    _post_transaction("150.50", "2026-01-10", 2)

    response = client.get(
        "/api/v1/finance/transactions",
        params={"type": "INCOMES", "dateFrom": "2026-01-01", "dateTo": "2026-01-31"},
    )

    assert response.status_code == 200
    payload = response.json()
    totals = {
        summary["category"]["idCategory"]: summary["categoryTotal"] for summary in payload["categorySummaries"]
    }
    assert totals == {1: 5000.0, 8: 800.0}
    assert payload["totalAmount"] == 5800.0
    assert isinstance(payload["totalAmount"], float)
    assert isinstance(payload["categorySummaries"][0]["transactions"][0]["amount"], float)


def test_get_transactions_empty_result_has_zero_total(service) -> None:
    response = client.get(
        "/api/v1/finance/transactions",
        params={"type": "EXPENSES", "dateFrom": "2026-01-01", "dateTo": "2026-01-31"},
    )

    assert response.status_code == 200
    assert response.json() == {"categorySummaries": [], "totalAmount": 0.0}


def test_get_transactions_inverted_range_maps_to_400(service) -> None:
    response = client.get(
        "/api/v1/finance/transactions",
        params={"type": "EXPENSES", "dateFrom": "2026-01-31", "dateTo": "2026-01-01"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_RANGE"


def test_get_transactions_missing_parameter_is_rejected(service) -> None:
    response = client.get("/api/v1/finance/transactions", params={"type": "EXPENSES", "dateFrom": "2026-01-01"})

    assert response.status_code == 400


def test_get_transactions_unknown_type_is_rejected(service) -> None:
    response = client.get(
        "/api/v1/finance/transactions",
        params={"type": "SAVINGS", "dateFrom": "2026-01-01", "dateTo": "2026-01-31"},
    )

    assert response.status_code == 400


def test_get_categories_by_type(service) -> None:
    response = client.get("/api/v1/finance/categories", params={"type": "EXPENSES"})

    assert response.status_code == 200
    descriptions = [category["description"] for category in response.json()]
    assert descriptions == [
        "Food & Groceries",
        "Transportation",
        "Entertainment",
        "Healthcare",
        "Utilities",
        "Shopping",
    ]


def test_export_returns_csv_attachment(service) -> None:
    _post_transaction("150.50", "2026-01-20", 2, comment='Book "Clean Code"')
    _post_transaction("5000.00", "2026-01-15", 1, comment="Gifts, Donations")

    response = client.get(
        "/api/v1/finance/transactions/export",
        params={"dateFrom": "2026-01-01", "dateTo": "2026-01-31"},
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="transactions_2026-01-01_2026-01-31.csv"'
    )
    assert response.text == (
        "Transaction ID,Transaction Date,Amount,Category Description,Category Type,Comment\n"
        '2,2026-01-15,5000.00,Salary,INCOMES,"Gifts, Donations"\n'
        '1,2026-01-20,150.50,Food & Groceries,EXPENSES,"Book ""Clean Code"""\n'
    )


def test_export_without_transactions_is_header_only(service) -> None:
    response = client.get(
        "/api/v1/finance/transactions/export",
        params={"dateFrom": "2026-03-01", "dateTo": "2026-03-01"},
    )

    assert response.status_code == 200
    assert response.text == "Transaction ID,Transaction Date,Amount,Category Description,Category Type,Comment\n"


def test_export_inverted_range_maps_to_400(service) -> None:
    response = client.get(
        "/api/v1/finance/transactions/export",
        params={"dateFrom": "2026-02-01", "dateTo": "2026-01-01"},
    )

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_RANGE"


def test_unexpected_error_maps_to_json_500(monkeypatch) -> None:
    class _BrokenService:
        def get_all_categories(self, _category_type):
            raise RuntimeError("database unavailable")

    monkeypatch.setattr(finance_api, "get_transaction_service", lambda: _BrokenService())
    safe_client = TestClient(app, raise_server_exceptions=False)

    response = safe_client.get("/api/v1/finance/categories", params={"type": "INCOMES"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal Server Error"}


@pytest.mark.parametrize(
    ("raw_amount", "json_amount", "csv_amount"),
    [("5.5", 5.5, "5.50"), ("1E+2", 100.0, "100.00"), (12.345, 12.35, "12.35"), ("100", 100.0, "100.00")],
)
def test_amounts_are_normalized_to_cents(service, raw_amount, json_amount: float, csv_amount: str) -> None:
    created = _post_transaction(raw_amount, "2026-01-15", 2)

    assert created.status_code == 201
    assert created.json()["amount"] == json_amount

    grouped = client.get(
        "/api/v1/finance/transactions",
        params={"type": "EXPENSES", "dateFrom": "2026-01-01", "dateTo": "2026-01-31"},
    )
    assert grouped.json()["totalAmount"] == json_amount

    exported = client.get(
        "/api/v1/finance/transactions/export",
        params={"dateFrom": "2026-01-01", "dateTo": "2026-01-31"},
    )
    assert exported.text.splitlines()[1] == f"1,2026-01-15,{csv_amount},Food & Groceries,EXPENSES,"


def test_amount_beyond_decimal_precision_is_rejected(service) -> None:
    response = _post_transaction("1E+40", "2026-01-15", 2)

    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_INPUT"
