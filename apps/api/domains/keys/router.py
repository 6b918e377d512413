"""Keys router — key generation and key administration.

The admin endpoints are unauthenticated, exactly like key generation.
Anyone who can reach the service can list and delete keys, so deploy it
behind a gateway that restricts /admin.
"""

from typing import Optional

from fastapi import APIRouter, Body, Depends

from apps.api.core.auth import get_registry
from apps.api.core.errors import NotFoundError
from apps.api.deps import get_store
from apps.api.domains.keys.registry import KeyRegistry
from apps.api.domains.keys.schemas import (
    DeleteKeyResponse,
    GenerateKeyRequest,
    GenerateKeyResponse,
    KeyInfo,
    KeyListResponse,
    KeySummary,
)
from apps.api.core.timestamps import isoformat
from apps.api.domains.transactions.store import TransactionStore

router = APIRouter(tags=["keys"])


@router.post("/generate-key", response_model=GenerateKeyResponse)
async def generate_key(
    payload: Optional[GenerateKeyRequest] = Body(default=None),
    registry: KeyRegistry = Depends(get_registry),
):
    """Issue a new API key. The body and its name are optional."""
    record = registry.create_key(payload.name if payload else None)
    return GenerateKeyResponse(
        apiKey=record.secret,
        message="API key generated successfully",
        keyInfo=KeyInfo(
            name=record.name,
            isActive=record.is_active,
            createdAt=isoformat(record.created_at),
            lastUsed=None,
        ),
    )


@router.get("/admin/keys", response_model=KeyListResponse)
async def list_keys(
    registry: KeyRegistry = Depends(get_registry),
    store: TransactionStore = Depends(get_store),
):
    """List every registered key with its stored transaction count."""
    keys = [
        KeySummary(
            apiKey=record.secret,
            name=record.name,
            isActive=record.is_active,
            createdAt=isoformat(record.created_at),
            lastUsed=isoformat(record.last_used_at),
            transactionCount=store.count(record.secret),
        )
        for record in registry.list()
    ]
    return KeyListResponse(totalKeys=len(keys), keys=keys)


@router.delete("/admin/keys/{api_key}", response_model=DeleteKeyResponse)
async def delete_key(api_key: str, registry: KeyRegistry = Depends(get_registry)):
    """Delete a key and every transaction stored under it."""
    if not registry.delete(api_key):
        raise NotFoundError("API key not found", "No API key matches the given value")
    return DeleteKeyResponse(message="API key and associated transactions deleted successfully")
