"""API key registry — issuing, validating and retiring keys.

Keys are 32-character secrets over a 62-symbol alphabet. The secret is
also the partition key of the TransactionStore, so creating a key opens
an empty transaction set and deleting one drops it.

Validation only checks that a key exists. ``is_active`` is recorded and
reported but never consulted when authenticating.
"""

import secrets
import string
import threading
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Callable, Optional

import structlog

from apps.api.core.logging import mask_key
from apps.api.domains.transactions.store import TransactionStore

logger = structlog.get_logger()

KEY_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
KEY_LENGTH = 32
DEFAULT_KEY_NAME = "Unnamed Key"
MAX_GENERATION_ATTEMPTS = 10


def generate_secret(length: int = KEY_LENGTH) -> str:
    return "".join(secrets.choice(KEY_ALPHABET) for _ in range(length))


@dataclass(frozen=True)
class ApiKeyRecord:
    id: str
    secret: str
    name: str
    created_at: datetime
    last_used_at: Optional[datetime] = None
    is_active: bool = True


class KeyCollisionError(RuntimeError):
    """Secret generation kept hitting existing keys."""


class KeyRegistry:
    """Thread-safe registry of API keys, in creation order."""

    def __init__(
        self,
        store: TransactionStore,
        secret_factory: Callable[[], str] = generate_secret,
    ):
        self.store = store
        self._secret_factory = secret_factory
        self._keys: dict[str, ApiKeyRecord] = {}
        self._lock = threading.Lock()

    def create_key(self, name: Optional[str] = None) -> ApiKeyRecord:
        """Issue a new key with a secret no other registered key holds."""
        name = (name or "").strip() or DEFAULT_KEY_NAME
        with self._lock:
            for _ in range(MAX_GENERATION_ATTEMPTS):
                secret = self._secret_factory()
                if secret not in self._keys:
                    break
                logger.warning("api_key_collision", api_key=mask_key(secret))
            else:
                raise KeyCollisionError("Could not generate a unique API key")

            record = ApiKeyRecord(
                id=str(uuid.uuid4()),
                secret=secret,
                name=name,
                created_at=datetime.now(timezone.utc),
            )
            self._keys[secret] = record
            self.store.initialize(secret)

        logger.info("api_key_created", api_key=mask_key(secret), name=name)
        return record

    def register(self, secret: str, name: str = DEFAULT_KEY_NAME) -> ApiKeyRecord:
        """Register a fixed secret, e.g. a demo key from configuration."""
        with self._lock:
            existing = self._keys.get(secret)
            if existing is not None:
                return existing
            record = ApiKeyRecord(
                id=str(uuid.uuid4()),
                secret=secret,
                name=name,
                created_at=datetime.now(timezone.utc),
            )
            self._keys[secret] = record
            self.store.initialize(secret)
        logger.info("api_key_registered", api_key=mask_key(secret), name=name)
        return record

    def validate(self, secret: Optional[str]) -> Optional[ApiKeyRecord]:
        """Look a key up by secret; None when it was never issued or is gone."""
        if not secret:
            return None
        return self._keys.get(secret)

    def touch(self, secret: str) -> Optional[ApiKeyRecord]:
        """Stamp last_used_at on a key; returns the updated record."""
        with self._lock:
            record = self._keys.get(secret)
            if record is None:
                return None
            record = replace(record, last_used_at=datetime.now(timezone.utc))
            self._keys[secret] = record
            return record

    def deactivate(self, secret: str) -> bool:
        with self._lock:
            record = self._keys.get(secret)
            if record is None:
                return False
            self._keys[secret] = replace(record, is_active=False)
        logger.info("api_key_deactivated", api_key=mask_key(secret))
        return True

    def list(self) -> list[ApiKeyRecord]:
        with self._lock:
            return list(self._keys.values())

    def delete(self, secret: str) -> bool:
        """Remove a key and, with it, its stored transactions."""
        with self._lock:
            record = self._keys.pop(secret, None)
            if record is None:
                return False
            self.store.drop(secret)
        logger.info("api_key_deleted", api_key=mask_key(secret))
        return True

    def __len__(self) -> int:
        return len(self._keys)
