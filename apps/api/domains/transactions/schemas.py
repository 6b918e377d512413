"""Pydantic schemas for the transactions domain.

StoredTransaction is the one canonical shape for server-side records;
clients push only the raw extracted fields and the defaults below fill
in the rest.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from packages.sms_parser.amounts import parse_amount
from packages.sms_parser.extractor import REFERENCE_SENTINEL


class StoredTransaction(BaseModel):
    """A transaction as held by the store and served to consumers."""

    model_config = ConfigDict(frozen=True)

    id: int
    amount: float = 0.0
    currency: str = "INR"
    date: str = ""
    vpa: str = ""
    reference: str = REFERENCE_SENTINEL
    type: str = "debit"
    category: str = "bank_transfer"
    status: str = "completed"


class TransactionIn(BaseModel):
    """One pushed record. Only the extracted fields are expected.

    Any server-owned field the client does send is honoured; unknown
    fields are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    amount: Union[float, str, None] = None
    currency: Optional[str] = None
    date: str = ""
    vpa: str = ""
    reference: Optional[str] = None
    ref: Optional[str] = None  # field name used by the extraction client
    type: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None

    @field_validator("amount", mode="before")
    @classmethod
    def _keep_amount_text(cls, value: Any) -> Any:
        # bool is an int subclass; treat it as unparsable text
        if isinstance(value, bool):
            return str(value)
        return value

    @property
    def parsed_amount(self) -> float:
        return parse_amount(self.amount)

    @property
    def resolved_reference(self) -> str:
        return self.reference or self.ref or REFERENCE_SENTINEL


class StoreTransactionsRequest(BaseModel):
    """Body of POST /store-transactions."""

    transactions: list[TransactionIn]


class StoreTransactionsResponse(BaseModel):
    success: bool = True
    message: str
    storedCount: int
    apiKey: str


class UserSummary(BaseModel):
    apiKey: str
    totalTransactions: int
    lastUpdated: str
    keyCreated: str


class EnvelopeMetadata(BaseModel):
    source: str
    version: str
    generatedAt: str


class TransactionsResponse(BaseModel):
    """Body of GET /transactions."""

    user: UserSummary
    transactions: list[StoredTransaction]
    metadata: EnvelopeMetadata


class TransactionResponse(BaseModel):
    """Body of GET /transactions/{id}."""

    transaction: StoredTransaction
    metadata: EnvelopeMetadata
