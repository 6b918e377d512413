"""Exceptions raised by the SMS extraction pipeline.

A field that simply does not match is never an exception; only failures
that prevent a whole batch from being read or decoded are raised.
"""


class ExtractionError(Exception):
    """Base class for batch-level extraction failures."""


class RetrievalError(ExtractionError):
    """The message source could not be read."""

    PERMISSION_DENIED = "permission denied"
    READ_FAILED = "read failed"

    def __init__(self, reason: str = READ_FAILED, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = f"{reason}: {detail}" if detail else reason
        super().__init__(message)


class DecodeError(ExtractionError):
    """The batch container could not be decoded into messages."""
