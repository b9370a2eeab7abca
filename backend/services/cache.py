"""Simple in-memory TTL store for augmented metadata. No Redis needed.

Entries are checked for freshness on read and only deleted by the periodic
sweep, so an unread expired entry can linger for up to one sweep interval
past its TTL.

Note: Each uvicorn worker has its own store. With --workers 2 the same
series may be fetched once per worker, and each worker keeps its own
random pick.
"""

import asyncio
import copy
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

CACHE_TTL = 30 * 60  # seconds
CACHE_SWEEP_INTERVAL = 60 * 60  # seconds


@dataclass(frozen=True)
class CacheKey:
    content_type: str
    meta_id: str


@dataclass(frozen=True)
class CacheEntry:
    document: dict
    created_at: float


class MetaStore:
    """Key -> CacheEntry map with read-time expiry and an explicit sweep.

    All methods are synchronous; under a single event loop each call is atomic
    with respect to other coroutines.
    """

    def __init__(self, ttl: float = CACHE_TTL, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self.clock = clock
        self._entries: dict[CacheKey, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, key: CacheKey, now: float | None = None) -> dict | None:
        """Return a copy of the fresh document under *key*, or None. Never deletes."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        now = self.clock() if now is None else now
        if now - entry.created_at < self.ttl:
            return copy.deepcopy(entry.document)
        return None

    def put(self, key: CacheKey, document: dict, now: float | None = None) -> None:
        created_at = self.clock() if now is None else now
        self._entries[key] = CacheEntry(document=document, created_at=created_at)

    def sweep(self, now: float | None = None) -> int:
        """Remove entries older than the TTL. Returns how many were removed."""
        now = self.clock() if now is None else now
        expired = [k for k, e in self._entries.items() if now - e.created_at > self.ttl]
        for key in expired:
            del self._entries[key]
        return len(expired)


class CacheSweeper:
    """Background task that sweeps a MetaStore on a fixed interval."""

    def __init__(self, store: MetaStore, interval: float = CACHE_SWEEP_INTERVAL):
        self.store = store
        self.interval = interval
        self._task: asyncio.Task | None = None

    def run_once(self) -> int:
        cleaned = self.store.sweep()
        if cleaned:
            logger.info("Cleaned %d expired cache entries", cleaned)
        return cleaned

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.run_once()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run(), name="cache-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()
