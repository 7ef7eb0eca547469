"""FastAPI entrypoint for finance HTTP endpoints."""

from __future__ import annotations

import logging
from datetime import date
from functools import lru_cache

from fastapi import FastAPI, Query
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.requests import Request
from fastapi.responses import JSONResponse, Response

from backend.errors import FinanceError
from backend.factory import build_transaction_service
from backend.reporting.csv_export import CSV_MEDIA_TYPE, export_filename
from backend.services.transaction_service import TransactionService
from shared import config as _config
from shared.models import (
    Category,
    CategoryType,
    CreateTransactionRequest,
    ErrorCode,
    ErrorResponse,
    Transaction,
    TransactionsByTypeResponse,
)


logger = logging.getLogger(__name__)


API_PREFIX = "/api/v1/finance"


@lru_cache(maxsize=1)
def get_transaction_service() -> TransactionService:
    """Create and cache the transaction service once per process."""

    return build_transaction_service()


app = FastAPI(title="Finance Tracker API")

ALLOW_ORIGINS = _config.cors_allow_origins()


@app.middleware("http")
async def log_http_requests(request: Request, call_next):
    """Log incoming requests, HTTP status codes and unexpected errors."""

    logger.info("http_request_received method=%s path=%s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception(
            "http_request_failed method=%s path=%s",
            request.method,
            request.url.path,
        )
        raise

    logger.info(
        "http_response_sent method=%s path=%s status_code=%s",
        request.method,
        request.url.path,
        response.status_code,
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info("cors_allow_origins=%s", ALLOW_ORIGINS)


@app.exception_handler(FinanceError)
async def handle_finance_error(request: Request, exc: FinanceError) -> JSONResponse:
    """Map domain errors to a 400 response carrying their error code."""

    logger.warning(
        "finance_error method=%s path=%s code=%s message=%s",
        request.method,
        request.url.path,
        exc.code.value,
        exc.message,
    )
    payload = ErrorResponse(code=exc.code, detail=exc.message)
    return JSONResponse(status_code=400, content=payload.model_dump(mode="json"))


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Reject malformed or missing parameters before they reach the service."""

    logger.info("request_validation_failed method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={
            "code": ErrorCode.INVALID_INPUT.value,
            "detail": "Invalid request parameters",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def handle_unexpected_exception(request: Request, exc: Exception) -> JSONResponse:
    """Return a JSON 500 response for unhandled exceptions."""

    logger.exception(
        "unhandled_exception method=%s path=%s exception_type=%s message=%s",
        request.method,
        request.url.path,
        type(exc).__name__,
        str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})


@app.get("/health")
def health() -> dict[str, str]:
    """Healthcheck endpoint."""

    return {"status": "ok"}


@app.post(f"{API_PREFIX}/transactions", response_model=Transaction, status_code=201)
def add_transaction(payload: CreateTransactionRequest) -> Transaction:
    """Record a new transaction against an existing category."""

    logger.info("add_transaction_received category_id=%s", payload.category_id)
    return get_transaction_service().add_transaction(payload)


@app.get(f"{API_PREFIX}/transactions", response_model=TransactionsByTypeResponse)
def get_transactions(
    category_type: CategoryType = Query(alias="type"),
    date_from: date = Query(alias="dateFrom"),
    date_to: date = Query(alias="dateTo"),
) -> TransactionsByTypeResponse:
    """Return transactions of one type grouped by category."""

    return get_transaction_service().get_transactions_by_type_and_date_range(category_type, date_from, date_to)


@app.get(f"{API_PREFIX}/categories", response_model=list[Category])
def get_categories(category_type: CategoryType = Query(alias="type")) -> list[Category]:
    return get_transaction_service().get_all_categories(category_type)


@app.get(f"{API_PREFIX}/transactions/export")
def export_transactions_csv(
    date_from: date = Query(alias="dateFrom"),
    date_to: date = Query(alias="dateTo"),
) -> Response:
    """Download transactions in the range as a CSV attachment, incomes first."""

    service = get_transaction_service()
    export_data = service.export_transactions(date_from, date_to)
    csv_content = service.export_transactions_to_csv(export_data)

    filename = export_filename(date_from.isoformat(), date_to.isoformat())
    logger.info("transactions_csv_exported filename=%s", filename)
    return Response(
        content=csv_content,
        media_type=CSV_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"',
            "Cache-Control": "must-revalidate, post-check=0, pre-check=0",
        },
    )
