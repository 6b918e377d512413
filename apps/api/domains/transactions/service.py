"""Transactions service — shaping pushed records and building envelopes.

This module is the single owner of the stored record shape: ids,
currency, category, type and status defaults, and amount normalization
all happen here, never on the client.
"""

from typing import Iterable

import structlog

from apps.api.core.auth import INVALID_KEY_MESSAGE
from apps.api.core.config import Settings
from apps.api.core.errors import AuthenticationError, NotFoundError
from apps.api.core.logging import mask_key
from apps.api.core.timestamps import isoformat, utc_now_iso
from apps.api.domains.keys.registry import ApiKeyRecord, KeyRegistry
from apps.api.domains.transactions.schemas import (
    EnvelopeMetadata,
    StoredTransaction,
    TransactionIn,
    TransactionResponse,
    TransactionsResponse,
    UserSummary,
)
from apps.api.domains.transactions.store import TransactionStore

logger = structlog.get_logger()


def shape_transactions(
    records: Iterable[TransactionIn], default_currency: str = "INR"
) -> list[StoredTransaction]:
    """Turn pushed records into stored records.

    Records without an id get their 1-based position in the push.
    """
    shaped = []
    for position, record in enumerate(records, start=1):
        shaped.append(
            StoredTransaction(
                id=record.id if record.id is not None else position,
                amount=record.parsed_amount,
                currency=record.currency or default_currency,
                date=record.date,
                vpa=record.vpa,
                reference=record.resolved_reference,
                type=record.type or "debit",
                category=record.category or "bank_transfer",
                status=record.status or "completed",
            )
        )
    return shaped


class TransactionService:
    """Push and fetch operations for an authenticated API key."""

    def __init__(self, registry: KeyRegistry, store: TransactionStore, settings: Settings):
        self.registry = registry
        self.store = store
        self.settings = settings

    def _metadata(self) -> EnvelopeMetadata:
        return EnvelopeMetadata(
            source=self.settings.SOURCE_TAG,
            version=self.settings.APP_VERSION,
            generatedAt=utc_now_iso(),
        )

    def push(self, record: ApiKeyRecord, records: list[TransactionIn]) -> int:
        """Replace the key's whole set with the pushed records."""
        shaped = shape_transactions(records, self.settings.DEFAULT_CURRENCY)
        try:
            stored = self.store.replace(record.secret, shaped)
        except KeyError:
            # Key deleted between authentication and the write
            raise AuthenticationError("Invalid API key", INVALID_KEY_MESSAGE) from None
        self.registry.touch(record.secret)
        logger.info("transactions_stored", api_key=mask_key(record.secret), count=stored)
        return stored

    def fetch(self, record: ApiKeyRecord) -> TransactionsResponse:
        """Current set for the key wrapped in the response envelope."""
        transactions = self.store.get(record.secret)
        touched = self.registry.touch(record.secret) or record
        logger.info(
            "transactions_fetched",
            api_key=mask_key(record.secret),
            count=len(transactions),
        )
        return TransactionsResponse(
            user=UserSummary(
                apiKey=record.secret,
                totalTransactions=len(transactions),
                lastUpdated=isoformat(touched.last_used_at) or utc_now_iso(),
                keyCreated=isoformat(record.created_at),
            ),
            transactions=list(transactions),
            metadata=self._metadata(),
        )

    def fetch_one(self, record: ApiKeyRecord, transaction_id: int) -> TransactionResponse:
        transaction = self.store.get_one(record.secret, transaction_id)
        if transaction is None:
            raise NotFoundError(
                "Transaction not found",
                f"No transaction with id {transaction_id} for this API key",
            )
        self.registry.touch(record.secret)
        return TransactionResponse(transaction=transaction, metadata=self._metadata())
