"""Transactions router — push and retrieve key-scoped transaction sets."""

from fastapi import APIRouter, Depends

from apps.api.core.auth import require_api_key
from apps.api.deps import get_transaction_service
from apps.api.domains.keys.registry import ApiKeyRecord
from apps.api.domains.transactions.schemas import (
    StoreTransactionsRequest,
    StoreTransactionsResponse,
    TransactionResponse,
    TransactionsResponse,
)
from apps.api.domains.transactions.service import TransactionService

router = APIRouter(tags=["transactions"])


@router.post("/store-transactions", response_model=StoreTransactionsResponse)
def store_transactions(
    body: StoreTransactionsRequest,
    key: ApiKeyRecord = Depends(require_api_key),
    service: TransactionService = Depends(get_transaction_service),
):
    """Replace the caller's stored transactions with the pushed list.

    A non-list ``transactions`` field is rejected with 400 before anything
    is stored.
    """
    stored = service.push(key, body.transactions)
    return StoreTransactionsResponse(
        message="Transactions stored successfully",
        storedCount=stored,
        apiKey=key.secret,
    )


@router.get("/transactions", response_model=TransactionsResponse)
def get_transactions(
    key: ApiKeyRecord = Depends(require_api_key),
    service: TransactionService = Depends(get_transaction_service),
):
    """All transactions currently stored for the caller's key."""
    return service.fetch(key)


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    key: ApiKeyRecord = Depends(require_api_key),
    service: TransactionService = Depends(get_transaction_service),
):
    """A single stored transaction by its id."""
    return service.fetch_one(key, transaction_id)
