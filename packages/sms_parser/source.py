"""Message sources: where SMS batches come from.

The on-device inbox is an external collaborator; this module only pins
down its contract (a bounded batch filtered by minimum date) and ships a
file-backed source for exported inboxes.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import List, Protocol, Union

import structlog

from .aggregator import RawMessage, coerce_message, decode_batch
from .errors import RetrievalError

logger = structlog.get_logger()

DEFAULT_WINDOW_DAYS = 30


def _default_min_date() -> datetime:
    return datetime.now(timezone.utc) - timedelta(days=DEFAULT_WINDOW_DAYS)


@dataclass(frozen=True)
class InboxFilter:
    """Batch filter applied by the message source."""

    box: str = "inbox"
    min_date: datetime = field(default_factory=_default_min_date)

    @classmethod
    def last_days(cls, days: int, box: str = "inbox") -> "InboxFilter":
        return cls(box=box, min_date=datetime.now(timezone.utc) - timedelta(days=days))

    def to_json(self) -> str:
        """Filter as the device bridge expects it (epoch milliseconds)."""
        return json.dumps(
            {"box": self.box, "minDate": int(self.min_date.timestamp() * 1000)}
        )


class MessageSource(Protocol):
    def list_messages(self, inbox_filter: InboxFilter) -> List[RawMessage]:
        """Return a finite, ordered batch or raise RetrievalError."""
        ...


class JsonFileMessageSource:
    """Reads an exported inbox: a JSON array of {"body", "date"?} items.

    Items carrying an epoch-millisecond date older than the filter bound
    are dropped; undated items are kept.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def read_container(self) -> bytes:
        try:
            return self.path.read_bytes()
        except PermissionError as e:
            raise RetrievalError(RetrievalError.PERMISSION_DENIED, str(e)) from e
        except OSError as e:
            raise RetrievalError(RetrievalError.READ_FAILED, str(e)) from e

    def list_messages(self, inbox_filter: InboxFilter) -> List[RawMessage]:
        items = decode_batch(self.read_container())

        messages = []
        for item in items:
            message = coerce_message(item)
            if message is None:
                logger.warning("sms_message_malformed", path=str(self.path))
                continue
            if message.received_at and message.received_at < inbox_filter.min_date:
                continue
            messages.append(message)

        logger.info(
            "sms_source_read",
            path=str(self.path),
            total=len(items),
            kept=len(messages),
        )
        return messages
