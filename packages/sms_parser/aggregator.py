"""
Extraction Aggregator - folds a batch of SMS into transactions + balance.

The batch is walked once in the order the source delivered it. Every
complete fragment is kept (repeats included, since message history can
legitimately repeat), and only the first balance seen is reported
(FIRST_BALANCE_WINS). A single malformed message contributes nothing;
only an undecodable container fails the batch.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Union

import structlog

from .errors import DecodeError
from .extractor import FieldExtractor, Transaction

logger = structlog.get_logger()


@dataclass(frozen=True)
class RawMessage:
    """One message as delivered by the device inbox."""

    body: str
    received_at: Optional[datetime] = None


@dataclass
class ExtractionResult:
    """Ordered transactions and the first balance seen in a batch."""

    transactions: List[Transaction] = field(default_factory=list)
    balance: Optional[str] = None
    scanned: int = 0
    skipped: int = 0


def coerce_message(item: Any) -> Optional[RawMessage]:
    """Accept RawMessage, {"body": ...} mappings or bare strings."""
    if isinstance(item, RawMessage):
        return item
    if isinstance(item, str):
        return RawMessage(body=item)
    if isinstance(item, dict):
        body = item.get("body", "")
        if body is None:
            body = ""
        if not isinstance(body, str):
            return None
        return RawMessage(body=body, received_at=_parse_epoch_ms(item.get("date")))
    return None


def _parse_epoch_ms(value: Any) -> Optional[datetime]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def aggregate(
    messages: Iterable[Any], extractor: Optional[FieldExtractor] = None
) -> ExtractionResult:
    """Run the field extractor over a batch, keeping input order."""
    extractor = extractor or FieldExtractor()
    result = ExtractionResult()

    for index, item in enumerate(messages):
        result.scanned += 1
        message = coerce_message(item)
        if message is None:
            result.skipped += 1
            logger.warning("sms_message_malformed", index=index)
            continue

        fragment = extractor.extract(message.body)
        if fragment.balance and result.balance is None:
            result.balance = fragment.balance
        if fragment.transaction is not None:
            result.transactions.append(fragment.transaction)

    logger.info(
        "sms_batch_extracted",
        scanned=result.scanned,
        transactions=len(result.transactions),
        skipped=result.skipped,
        has_balance=result.balance is not None,
    )
    return result


def decode_batch(payload: Union[str, bytes]) -> List[Any]:
    """Decode a JSON array container into its raw items.

    Items are returned undecoded so that a bad item only costs itself
    during aggregation.
    """
    try:
        items = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Error parsing SMS content: {e}") from e

    if not isinstance(items, list):
        raise DecodeError(
            f"Error parsing SMS content: expected a list, got {type(items).__name__}"
        )
    return items


def extract_from_container(payload: Union[str, bytes]) -> ExtractionResult:
    """Decode a JSON batch container and aggregate it."""
    return aggregate(decode_batch(payload))


def to_push_payload(transactions: Iterable[Transaction]) -> List[dict]:
    """Raw extracted fields for POST /store-transactions.

    Server-side shaping assigns ids, currency, category, type and status.
    """
    return [tx.to_dict() for tx in transactions]
