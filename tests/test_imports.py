from backend.api import app
from backend.factory import build_transaction_service
from backend.services.transaction_service import TransactionService
from shared.models import CategoryType, CreateTransactionRequest


def test_imports_succeed() -> None:
    service = build_transaction_service(store="memory")

    assert isinstance(service, TransactionService)
    assert app.title == "Finance Tracker API"
    assert CategoryType("INCOMES") is CategoryType.INCOMES
    assert CreateTransactionRequest(categoryId=3).category_id == 3
