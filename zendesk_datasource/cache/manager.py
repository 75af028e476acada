"""CacheManager - in-memory TTL cache for Zendesk query results.

Thread-safe key/value store with per-entry expiration, prefix-based bulk
invalidation, stats and a background expiry sweep. The store is guarded by a
single threading.Lock; expired entries always read as absent whether or not
the sweep has removed them yet.

Lifecycle:
    >>> manager = CacheManager(CacheConfig())
    >>> await manager.start()    # begin periodic sweep
    >>> manager.set("zendesk:tickets:status=open", payload)
    >>> value, found = manager.get("zendesk:tickets:status=open")
    >>> await manager.stop()     # cancel the sweep on shutdown
"""

from __future__ import annotations

import asyncio
import contextlib
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from zendesk_datasource.cache.strategies import CacheConfig, CacheStrategy
from zendesk_datasource.core.logging import get_logger


logger = get_logger(__name__)


@dataclass
class CacheEntry:
    """Stored value with its absolute expiration time.

    Attributes:
        key: Cache key
        value: Opaque cached payload
        expires_at: Clock reading after which the entry is expired,
            or None if it never expires
    """

    key: str
    value: Any
    expires_at: float | None = None

    def is_expired(self, now: float) -> bool:
        """Check if entry has expired at clock reading ``now``."""
        if self.expires_at is None:
            return False
        return now >= self.expires_at


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time cache statistics.

    Attributes:
        size: Number of stored entries (may include expired, unswept ones)
        max_size: Configured capacity
        hits: Successful lookups since creation
        misses: Failed lookups since creation
        evictions: Entries dropped for capacity (LRU only)
        strategy: Active eviction strategy
    """

    size: int
    max_size: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    strategy: CacheStrategy = CacheStrategy.TTL

    @property
    def hit_rate(self) -> float:
        """Fraction of lookups that were hits (0.0 when none were made)."""
        total = self.hits + self.misses
        if total == 0:
            return 0.0
        return self.hits / total

    def to_dict(self) -> dict[str, Any]:
        """Serialize stats for health and diagnostic payloads."""
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": round(self.hit_rate, 4),
            "strategy": self.strategy.value,
        }


class CacheManager:
    """Namespaced TTL cache shared by the query layer.

    No operation raises: a miss is reported through the ``found`` flag of
    get(). One instance is created per application and injected where it is
    needed; start() and stop() bracket the background sweep.

    Args:
        config: Cache configuration. Defaults to CacheConfig().
        clock: Monotonic time source in seconds. Injectable for tests.
    """

    def __init__(
        self,
        config: CacheConfig | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or CacheConfig()
        self._clock = clock
        self._store: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._sweep_task: asyncio.Task[None] | None = None

    @property
    def config(self) -> CacheConfig:
        """Return the (immutable) configuration of this manager."""
        return self._config

    @property
    def is_running(self) -> bool:
        """True while the background sweep task is active."""
        return self._sweep_task is not None and not self._sweep_task.done()

    # -------------------------------------------------------------------------
    # Store operations
    # -------------------------------------------------------------------------

    def get(self, key: str) -> tuple[Any, bool]:
        """Look up a live entry.

        Args:
            key: Cache key

        Returns:
            (value, True) for a live entry, (None, False) if the key was never
            set, was deleted or has expired.
        """
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._misses += 1
                return None, False

            if entry.is_expired(self._clock()):
                del self._store[key]
                self._misses += 1
                return None, False

            if self._config.strategy is CacheStrategy.LRU:
                self._store.move_to_end(key)
            self._hits += 1
            return entry.value, True

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Insert or overwrite an entry.

        Args:
            key: Cache key
            value: Payload to store
            ttl: Lifetime in seconds. None uses config.default_ttl;
                zero or negative stores the entry without expiration.
        """
        if ttl is None:
            ttl = self._config.default_ttl
        expires_at = self._clock() + ttl if ttl > 0 else None
        entry = CacheEntry(key=key, value=value, expires_at=expires_at)

        with self._lock:
            self._store[key] = entry
            if self._config.strategy is CacheStrategy.LRU:
                self._store.move_to_end(key)
                self._evict_overflow()

    def delete(self, key: str) -> None:
        """Remove an entry if present. No-op for unknown keys."""
        with self._lock:
            self._store.pop(key, None)

    def delete_by_pattern(self, pattern: str) -> int:
        """Remove every stored key starting with ``pattern``.

        Matching is a literal prefix comparison, not a wildcard or regex.
        An empty pattern matches nothing.

        Args:
            pattern: Key prefix, e.g. "zendesk:tickets:"

        Returns:
            Number of entries removed
        """
        if not pattern:
            return 0

        with self._lock:
            matched = [key for key in self._store if key.startswith(pattern)]
            for key in matched:
                del self._store[key]

        if matched:
            logger.debug("Cache entries invalidated", pattern=pattern, count=len(matched))
        return len(matched)

    def clear(self) -> int:
        """Remove all entries unconditionally.

        Returns:
            Number of entries removed
        """
        with self._lock:
            removed = len(self._store)
            self._store.clear()
        return removed

    def get_stats(self) -> CacheStats:
        """Return a snapshot of cache statistics.

        ``size`` counts stored entries without purging expired ones first.
        """
        with self._lock:
            return CacheStats(
                size=len(self._store),
                max_size=self._config.max_size,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                strategy=self._config.strategy,
            )

    def purge_expired(self) -> int:
        """Physically remove every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [key for key, entry in self._store.items() if entry.is_expired(now)]
            for key in expired:
                del self._store[key]
        return len(expired)

    def _evict_overflow(self) -> None:
        """Drop least-recently-used entries beyond max_size. Caller holds the lock."""
        while len(self._store) > self._config.max_size:
            evicted_key, _ = self._store.popitem(last=False)
            self._evictions += 1
            logger.debug("Cache entry evicted", key=evicted_key)

    # -------------------------------------------------------------------------
    # Background sweep
    # -------------------------------------------------------------------------

    async def start(self) -> None:
        """Start the periodic expiry sweep on the running event loop.

        Calling start() on a running manager does nothing.
        """
        if self.is_running:
            return
        self._sweep_task = asyncio.create_task(self._sweep_loop(), name="cache-sweep")
        logger.info(
            "Cache sweep started",
            interval_seconds=self._config.cleanup_interval,
            strategy=self._config.strategy.value,
        )

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish.

        Safe to call when the sweep was never started.
        """
        task = self._sweep_task
        if task is None:
            return
        self._sweep_task = None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Cache sweep stopped")

    async def _sweep_loop(self) -> None:
        while True:
            await asyncio.sleep(self._config.cleanup_interval)
            removed = self.purge_expired()
            if removed:
                logger.debug("Expired cache entries purged", count=removed)

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __repr__(self) -> str:
        """Return string representation of cache."""
        return (
            f"CacheManager(strategy={self._config.strategy.value!r}, "
            f"entries={len(self)}, max_size={self._config.max_size})"
        )
