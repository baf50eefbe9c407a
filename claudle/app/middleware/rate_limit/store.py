"""Storage backends for rate limit counters."""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

from claudle.app.middleware.rate_limit.models import RateLimitRecord


class RateLimitStore(ABC):
    """Abstract key/record store used by the fixed-window limiter.

    ``transaction()`` must make a get-then-put sequence atomic with respect
    to other callers of the same store.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[RateLimitRecord]:
        pass

    @abstractmethod
    def put(self, key: str, record: RateLimitRecord) -> None:
        pass

    @abstractmethod
    def sweep(self, now: float) -> int:
        """Delete every record whose reset time has passed.

        Returns:
            Number of records removed
        """
        pass

    @abstractmethod
    def transaction(self):
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class InMemoryRateLimitStore(RateLimitStore):
    """Process-local store guarded by a re-entrant lock.

    Counters live only as long as the process; each instance of a scaled-out
    deployment keeps its own.
    """

    def __init__(self) -> None:
        self._records: Dict[str, RateLimitRecord] = {}
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield

    def get(self, key: str) -> Optional[RateLimitRecord]:
        with self._lock:
            return self._records.get(key)

    def put(self, key: str, record: RateLimitRecord) -> None:
        with self._lock:
            self._records[key] = record

    def sweep(self, now: float) -> int:
        with self._lock:
            expired = [key for key, record in self._records.items() if record.is_expired(now)]
            for key in expired:
                del self._records[key]
            return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records
