"""Attempt-count rate limiting keyed by an arbitrary string (e.g. "auth_<email>").

Each hit within the window bumps the count and moves the window forward to the
latest attempt. A key whose last attempt is older than the window starts over at
one, and such stale keys are purged on every attempt. Counters live in an
AttemptStore; the in-memory store is per process, so a multi-instance
deployment needs a shared store behind the same interface.
"""
from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional, Protocol

from catering.domain.errors import SecurityTokenError
from catering.utilities.config import RATE_LIMIT_MAX_ATTEMPTS, RATE_LIMIT_WINDOW_SECONDS

logger = logging.getLogger(__name__)

__all__ = ["AttemptRecord", "AttemptStore", "InMemoryAttemptStore", "RateLimiter"]


@dataclass
class AttemptRecord:
    count: int
    last_attempt: float


class AttemptStore(Protocol):
    def get(self, key: str) -> Optional[AttemptRecord]: ...
    def set(self, key: str, record: AttemptRecord) -> None: ...
    def delete(self, key: str) -> None: ...
    def purge(self, older_than: float) -> None: ...


class InMemoryAttemptStore:
    def __init__(self):
        self._data: Dict[str, AttemptRecord] = {}

    def get(self, key: str) -> Optional[AttemptRecord]:
        return self._data.get(key)

    def set(self, key: str, record: AttemptRecord) -> None:
        self._data[key] = record

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def purge(self, older_than: float) -> None:
        """Forget keys whose last attempt happened before older_than."""
        for key in [k for k, r in self._data.items() if r.last_attempt < older_than]:
            del self._data[key]

    def __len__(self) -> int:
        return len(self._data)


class RateLimiter:
    def __init__(self, store: Optional[AttemptStore] = None, clock: Callable[[], float] = time.monotonic,
                 max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS, window_seconds: float = RATE_LIMIT_WINDOW_SECONDS):
        self.store = store if store is not None else InMemoryAttemptStore()
        self.clock = clock
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._lock = Lock()

    def is_rate_limited(self, key: str) -> bool:
        """Record an attempt for key and report whether it exceeds the limit."""
        now = self.clock()
        with self._lock:
            self.store.purge(now - self.window_seconds)
            record = self.store.get(key)
            if record is None or now - record.last_attempt > self.window_seconds:
                self.store.set(key, AttemptRecord(count=1, last_attempt=now))
                return False
            record = AttemptRecord(count=record.count + 1, last_attempt=now)
            self.store.set(key, record)
            return record.count > self.max_attempts

    def hit(self, key: str) -> None:
        """Record an attempt, raising SecurityTokenError when the key is over its limit."""
        if self.is_rate_limited(key):
            logger.warning("Rate limit exceeded for key %s", key)
            raise SecurityTokenError(retry_after=int(self.window_seconds))

    def clear(self, key: str) -> None:
        with self._lock:
            self.store.delete(key)
