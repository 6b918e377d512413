"""FastAPI dependencies for the app-owned state.

The registry, the store and the settings are created by create_app()
and hung off ``app.state``; endpoints reach them only through these
providers, so tests can build isolated apps or override any of them.
"""
from fastapi import Depends, Request

from apps.api.core.auth import get_registry
from apps.api.core.config import Settings
from apps.api.domains.keys.registry import KeyRegistry
from apps.api.domains.transactions.service import TransactionService
from apps.api.domains.transactions.store import TransactionStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> TransactionStore:
    return request.app.state.store


def get_transaction_service(
    registry: KeyRegistry = Depends(get_registry),
    store: TransactionStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> TransactionService:
    return TransactionService(registry=registry, store=store, settings=settings)
