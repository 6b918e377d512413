"""
SMS Bank Reader Extraction Engine

UPI debit extraction from bank SMS bodies.
"""

__version__ = "1.0.0"

from .aggregator import (
    ExtractionResult,
    RawMessage,
    aggregate,
    decode_batch,
    extract_from_container,
    to_push_payload,
)
from .amounts import parse_amount
from .errors import DecodeError, ExtractionError, RetrievalError
from .extractor import (
    REFERENCE_SENTINEL,
    FieldExtractor,
    MessageFragment,
    Transaction,
    extract_fields,
)
from .source import InboxFilter, JsonFileMessageSource, MessageSource

__all__ = [
    "DecodeError",
    "ExtractionError",
    "ExtractionResult",
    "FieldExtractor",
    "InboxFilter",
    "JsonFileMessageSource",
    "MessageFragment",
    "MessageSource",
    "RawMessage",
    "REFERENCE_SENTINEL",
    "RetrievalError",
    "Transaction",
    "aggregate",
    "decode_batch",
    "extract_fields",
    "extract_from_container",
    "parse_amount",
    "to_push_payload",
]
