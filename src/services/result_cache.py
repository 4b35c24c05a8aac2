"""
In-memory result cache for generated text.

Bounded LRU with a TTL, plus single-flight: concurrent misses for the same
key wait on one computation instead of each calling the provider. Entries
are best-effort and vanish on restart; nothing relies on them for
correctness.
"""

import asyncio
import time
from collections import OrderedDict
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from src.config import get_service_logger

logger = get_service_logger(__name__)


class ResultCache:
    """Bounded LRU + TTL cache with per-key single-flight."""

    def __init__(
        self,
        max_entries: int = 256,
        ttl_seconds: Optional[float] = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._locks: Dict[str, asyncio.Lock] = {}
        self._waiters: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, value = entry
        if self.ttl_seconds is not None and self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = (self._clock(), value)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted cache entry {evicted}")

    def clear(self) -> None:
        self._entries.clear()

    async def get_or_compute(
        self, key: str, factory: Callable[[], Awaitable[Any]]
    ) -> Tuple[Any, bool]:
        """
        Return (value, cached). Computes via factory on a miss; concurrent
        callers for the same key share that one computation.
        """
        value = self.get(key)
        if value is not None:
            return value, True

        lock = self._locks.setdefault(key, asyncio.Lock())
        # lock is dropped only once its last waiter leaves
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                value = self.get(key)
                if value is not None:
                    return value, True
                value = await factory()
                self.set(key, value)
                return value, False
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                if self._locks.get(key) is lock:
                    del self._locks[key]


class NullCache(ResultCache):
    """Cache that never stores anything."""

    def __init__(self):
        super().__init__(max_entries=0, ttl_seconds=None)

    def get(self, key: str) -> Optional[Any]:
        return None

    def set(self, key: str, value: Any) -> None:
        return None

    async def get_or_compute(
        self, key: str, factory: Callable[[], Awaitable[Any]]
    ) -> Tuple[Any, bool]:
        return await factory(), False
