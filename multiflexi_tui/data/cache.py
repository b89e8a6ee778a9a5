"""TTL fetch cache in front of the Data Source Adapter.

Entries are keyed by the canonical request signature. Hits hand out deep
copies so callers can never mutate what the cache stores. The entry map is
the one structure shared across concurrent fetch threads and is guarded by a
reader/writer lock.
"""

from __future__ import annotations

import copy
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol

from ..log import get_logger
from .adapter import FetchRequest
from .rwlock import ReadWriteLock

DEFAULT_TTL_SECONDS = 30.0

logger = get_logger(__name__)


class DataSource(Protocol):
    def fetch(self, request: FetchRequest, target: type | tuple[type], timeout: float | None = None): ...


@dataclass(frozen=True)
class CacheEntry:
    value: object
    created: float
    ttl: float

    def is_live(self, now: float) -> bool:
        return now - self.created < self.ttl


@dataclass(frozen=True)
class FetchResult:
    data: object
    cached: bool
    fetch_seconds: float
    total_count: int = 0


@dataclass(frozen=True)
class BatchRequest:
    key: str
    request: FetchRequest
    target: type | tuple[type]
    ttl: float | None = None
    timeout: float | None = None


@dataclass(frozen=True)
class BatchResult:
    key: str
    result: FetchResult | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class CacheStats:
    total_entries: int
    expired_entries: int
    active_entries: int


class FetchCache:
    """Time-bounded cache wrapping ``DataSource.fetch``."""

    def __init__(
        self,
        source: DataSource,
        *,
        default_ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.default_ttl = default_ttl
        self._clock = clock
        self._lock = ReadWriteLock()
        self._entries: dict[str, CacheEntry] = {}

    def _lookup(self, signature: str) -> CacheEntry | None:
        with self._lock.read():
            entry = self._entries.get(signature)
        if entry is None or not entry.is_live(self._clock()):
            return None
        return entry

    def _store(self, signature: str, value: object, ttl: float) -> None:
        entry = CacheEntry(value=copy.deepcopy(value), created=self._clock(), ttl=ttl)
        with self._lock.write():
            self._entries[signature] = entry

    def fetch(
        self,
        request: FetchRequest,
        target: type | tuple[type],
        *,
        ttl: float | None = None,
        timeout: float | None = None,
    ) -> FetchResult:
        """Return cached data for ``request`` or fetch it from the source.

        Adapter errors propagate unchanged and nothing is cached for them.
        """
        started = self._clock()
        signature = request.signature()

        entry = self._lookup(signature)
        if entry is not None:
            logger.debug("cache hit %s", signature)
            data = copy.deepcopy(entry.value)
            return FetchResult(
                data=data,
                cached=True,
                fetch_seconds=self._clock() - started,
                total_count=len(data) if isinstance(data, list) else 0,
            )

        logger.debug("cache miss %s", signature)
        data = self.source.fetch(request, target, timeout)
        self._store(signature, data, self.default_ttl if ttl is None else ttl)
        return FetchResult(
            data=data,
            cached=False,
            fetch_seconds=self._clock() - started,
            total_count=len(data) if isinstance(data, list) else 0,
        )

    def fetch_batch(self, requests: Sequence[BatchRequest]) -> dict[str, BatchResult]:
        """Run independent fetches concurrently and report each outcome by key."""
        if not requests:
            return {}

        def run_one(batch_request: BatchRequest) -> BatchResult:
            try:
                result = self.fetch(
                    batch_request.request,
                    batch_request.target,
                    ttl=batch_request.ttl,
                    timeout=batch_request.timeout,
                )
            except Exception as exc:
                return BatchResult(key=batch_request.key, error=exc)
            return BatchResult(key=batch_request.key, result=result)

        with ThreadPoolExecutor(max_workers=len(requests), thread_name_prefix="multiflexi-fetch") as executor:
            outcomes = list(executor.map(run_one, requests))
        return {outcome.key: outcome for outcome in outcomes}

    def clear(self) -> None:
        with self._lock.write():
            self._entries = {}

    def sweep_expired(self) -> int:
        """Drop entries whose TTL elapsed and return how many were removed."""
        now = self._clock()
        with self._lock.write():
            expired = [key for key, entry in self._entries.items() if not entry.is_live(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def stats(self) -> CacheStats:
        now = self._clock()
        with self._lock.read():
            total = len(self._entries)
            expired = sum(1 for entry in self._entries.values() if not entry.is_live(now))
        return CacheStats(total_entries=total, expired_entries=expired, active_entries=total - expired)
