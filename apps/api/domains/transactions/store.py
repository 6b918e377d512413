"""Key-scoped transaction store.

Each API key owns at most one transaction set. A push replaces the whole
set; nothing is merged or appended. Sets are stored as tuples and swapped
by reference under a lock, so a reader holding a set never sees a
half-written overwrite.

Per-key lifecycle:
    absent -> initialized (empty, key created) -> populated (push)
           -> populated (next push overwrites) -> absent (key deleted)
"""

import threading
from typing import Iterable, Optional

from apps.api.domains.transactions.schemas import StoredTransaction

TransactionSet = tuple[StoredTransaction, ...]


class TransactionStore:
    """In-memory map from API key secret to its current transaction set."""

    def __init__(self):
        self._sets: dict[str, TransactionSet] = {}
        self._lock = threading.Lock()

    def initialize(self, api_key: str) -> None:
        """Create the empty set for a freshly registered key."""
        with self._lock:
            self._sets.setdefault(api_key, ())

    def replace(self, api_key: str, records: Iterable[StoredTransaction]) -> int:
        """Overwrite the key's set with ``records`` and return the new size.

        Raises KeyError when the key has no set, i.e. it was never
        initialized or has been deleted in the meantime.
        """
        new_set = tuple(records)
        with self._lock:
            if api_key not in self._sets:
                raise KeyError(api_key)
            self._sets[api_key] = new_set
        return len(new_set)

    def get(self, api_key: str) -> TransactionSet:
        """Current set for the key; empty when none has been pushed."""
        return self._sets.get(api_key, ())

    def get_one(self, api_key: str, transaction_id: int) -> Optional[StoredTransaction]:
        for record in self.get(api_key):
            if record.id == transaction_id:
                return record
        return None

    def count(self, api_key: str) -> int:
        return len(self.get(api_key))

    def drop(self, api_key: str) -> bool:
        """Remove the key's set entirely (cascade from key deletion)."""
        with self._lock:
            return self._sets.pop(api_key, None) is not None

    def __contains__(self, api_key: str) -> bool:
        return api_key in self._sets
