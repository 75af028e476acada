"""Unit tests for zendesk_datasource.cache.manager.

Covers store operations, TTL expiry with an injected clock, prefix
invalidation, stats, LRU eviction, concurrent access and the background
sweep lifecycle.
"""

import asyncio
import threading

import pytest

from tests.fakes.fake_clock import FakeClock
from zendesk_datasource.cache import (
    CacheConfig,
    CacheEntry,
    CacheManager,
    CacheStats,
    CacheStrategy,
)


# =============================================================================
# Get / Set
# =============================================================================

class TestGetSet:
    """Tests for CacheManager.get and CacheManager.set."""

    def test_get_returns_stored_value(self, cache: CacheManager) -> None:
        """A freshly set key reads back with found=True."""
        cache.set("tickets:status=open", {"tickets": [1, 2]})

        assert cache.get("tickets:status=open") == ({"tickets": [1, 2]}, True)

    def test_get_unknown_key_is_miss(self, cache: CacheManager) -> None:
        """A key never set reads as (None, False)."""
        assert cache.get("never-set") == (None, False)

    def test_set_overwrites_existing_value(self, cache: CacheManager) -> None:
        cache.set("k", "first")
        cache.set("k", "second")

        assert cache.get("k") == ("second", True)
        assert len(cache) == 1

    def test_falsy_values_are_found(self, cache: CacheManager) -> None:
        """Stored None/empty values are distinguished from misses by the flag."""
        cache.set("empty", [])
        cache.set("none", None)

        assert cache.get("empty") == ([], True)
        assert cache.get("none") == (None, True)


class TestExpiry:
    """Tests for TTL expiry driven by the injected clock."""

    def test_entry_live_before_ttl_and_gone_after(
        self, cache: CacheManager, clock: FakeClock
    ) -> None:
        """Set with a 5 minute TTL; hit immediately, miss once 5 minutes pass."""
        payload = {"tickets": [{"id": 1}]}
        cache.set("tickets:status=open", payload, ttl=300)

        assert cache.get("tickets:status=open") == (payload, True)

        clock.advance(299.9)
        assert cache.get("tickets:status=open") == (payload, True)

        clock.advance(0.2)
        assert cache.get("tickets:status=open") == (None, False)

    def test_expired_at_exact_deadline(self, cache: CacheManager, clock: FakeClock) -> None:
        cache.set("k", "v", ttl=10)
        clock.advance(10)

        assert cache.get("k") == (None, False)

    def test_default_ttl_used_when_none(self, clock: FakeClock) -> None:
        """ttl=None falls back to config.default_ttl."""
        cache = CacheManager(CacheConfig(default_ttl=60), clock=clock)
        cache.set("k", "v")

        clock.advance(59)
        assert cache.get("k")[1] is True
        clock.advance(2)
        assert cache.get("k")[1] is False

    @pytest.mark.parametrize("ttl", [0, -5])
    def test_non_positive_ttl_never_expires(
        self, cache: CacheManager, clock: FakeClock, ttl: float
    ) -> None:
        cache.set("k", "v", ttl=ttl)
        clock.advance(10**9)

        assert cache.get("k") == ("v", True)

    def test_expired_read_removes_entry(self, cache: CacheManager, clock: FakeClock) -> None:
        """Reading an expired entry physically drops it."""
        cache.set("k", "v", ttl=1)
        clock.advance(2)
        assert len(cache) == 1

        cache.get("k")

        assert len(cache) == 0

    def test_purge_expired_counts_removed(self, cache: CacheManager, clock: FakeClock) -> None:
        cache.set("short", 1, ttl=5)
        cache.set("long", 2, ttl=500)
        cache.set("forever", 3, ttl=0)
        clock.advance(10)

        assert cache.purge_expired() == 1
        assert len(cache) == 2
        assert cache.get("long") == (2, True)

    def test_cache_entry_is_expired(self) -> None:
        entry = CacheEntry(key="k", value="v", expires_at=100.0)

        assert entry.is_expired(99.9) is False
        assert entry.is_expired(100.0) is True
        assert CacheEntry(key="k", value="v").is_expired(10**9) is False


# =============================================================================
# Delete / DeleteByPattern / Clear
# =============================================================================

class TestDelete:
    """Tests for explicit removal."""

    def test_delete_then_get_is_miss(self, cache: CacheManager) -> None:
        cache.set("k", "v")
        cache.delete("k")

        assert cache.get("k") == (None, False)

    def test_delete_unknown_key_is_noop(self, cache: CacheManager) -> None:
        cache.set("other", "v")
        cache.delete("never-set")

        assert cache.get("never-set") == (None, False)
        assert len(cache) == 1

    def test_clear_empties_store(self, cache: CacheManager) -> None:
        for i in range(5):
            cache.set(f"k{i}", i)

        removed = cache.clear()

        assert removed == 5
        assert cache.get_stats().size == 0

    def test_clear_empty_cache_returns_zero(self, cache: CacheManager) -> None:
        assert cache.clear() == 0


class TestDeleteByPattern:
    """Tests for prefix-based invalidation."""

    @pytest.fixture
    def populated(self, cache: CacheManager) -> CacheManager:
        cache.set("zendesk:tickets:status=open", 1)
        cache.set("zendesk:tickets:", 2)
        cache.set("zendesk:users:", 3)
        cache.set("other:tickets:", 4)
        return cache

    def test_removes_exactly_prefixed_keys(self, populated: CacheManager) -> None:
        removed = populated.delete_by_pattern("zendesk:tickets:")

        assert removed == 2
        assert populated.get("zendesk:tickets:status=open")[1] is False
        assert populated.get("zendesk:tickets:")[1] is False
        assert populated.get("zendesk:users:") == (3, True)
        assert populated.get("other:tickets:") == (4, True)

    def test_empty_pattern_removes_nothing(self, populated: CacheManager) -> None:
        assert populated.delete_by_pattern("") == 0
        assert len(populated) == 4

    def test_pattern_is_literal_not_wildcard(self, populated: CacheManager) -> None:
        """Glob characters are matched literally."""
        assert populated.delete_by_pattern("zendesk:*") == 0
        assert len(populated) == 4

    def test_no_match_returns_zero(self, populated: CacheManager) -> None:
        assert populated.delete_by_pattern("zendesk:organizations:") == 0


# =============================================================================
# Stats
# =============================================================================

class TestStats:
    """Tests for CacheManager.get_stats."""

    def test_empty_cache_stats(self, cache: CacheManager) -> None:
        stats = cache.get_stats()

        assert stats.size == 0
        assert stats.max_size == 1000
        assert stats.strategy is CacheStrategy.TTL
        assert stats.hit_rate == 0.0

    def test_counts_hits_and_misses(self, cache: CacheManager) -> None:
        cache.set("k", "v")
        cache.get("k")
        cache.get("k")
        cache.get("missing")
        cache.get("missing")

        stats = cache.get_stats()
        assert stats.hits == 2
        assert stats.misses == 2
        assert stats.hit_rate == 0.5

    def test_size_includes_expired_unswept_entries(
        self, cache: CacheManager, clock: FakeClock
    ) -> None:
        cache.set("k", "v", ttl=1)
        clock.advance(5)

        assert cache.get_stats().size == 1

    def test_to_dict(self) -> None:
        stats = CacheStats(size=3, max_size=10, hits=1, misses=2, strategy=CacheStrategy.LRU)

        assert stats.to_dict() == {
            "size": 3,
            "max_size": 10,
            "hits": 1,
            "misses": 2,
            "evictions": 0,
            "hit_rate": 0.3333,
            "strategy": "lru",
        }


# =============================================================================
# Strategies
# =============================================================================

class TestEviction:
    """Tests for max_size handling per strategy."""

    def test_ttl_strategy_never_evicts(self, clock: FakeClock) -> None:
        cache = CacheManager(CacheConfig(max_size=2), clock=clock)
        for i in range(5):
            cache.set(f"k{i}", i)

        assert len(cache) == 5
        assert cache.get_stats().evictions == 0

    def test_lru_evicts_least_recently_set(self, clock: FakeClock) -> None:
        cache = CacheManager(CacheConfig(strategy="lru", max_size=2), clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)

        assert cache.get("a") == (None, False)
        assert cache.get("b") == (2, True)
        assert cache.get("c") == (3, True)
        assert cache.get_stats().evictions == 1

    def test_lru_get_refreshes_recency(self, clock: FakeClock) -> None:
        cache = CacheManager(CacheConfig(strategy=CacheStrategy.LRU, max_size=2), clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.get("a")
        cache.set("c", 3)

        assert cache.get("a") == (1, True)
        assert cache.get("b") == (None, False)


# =============================================================================
# Background Sweep
# =============================================================================

class TestSweepLifecycle:
    """Tests for start()/stop() of the background sweep."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, clock: FakeClock) -> None:
        cache = CacheManager(CacheConfig(cleanup_interval=0.01), clock=clock)

        await cache.start()
        assert cache.is_running is True

        await cache.stop()
        assert cache.is_running is False

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, clock: FakeClock) -> None:
        cache = CacheManager(CacheConfig(cleanup_interval=0.01), clock=clock)

        await cache.start()
        task = cache._sweep_task
        await cache.start()

        assert cache._sweep_task is task
        await cache.stop()

    @pytest.mark.asyncio
    async def test_stop_without_start_is_noop(self, cache: CacheManager) -> None:
        await cache.stop()
        await cache.stop()

        assert cache.is_running is False

    @pytest.mark.asyncio
    async def test_sweep_purges_expired_entries(self, clock: FakeClock) -> None:
        cache = CacheManager(CacheConfig(cleanup_interval=0.01), clock=clock)
        cache.set("expired", 1, ttl=1)
        cache.set("live", 2, ttl=100)
        clock.advance(5)

        await cache.start()
        await asyncio.sleep(0.05)
        await cache.stop()

        assert len(cache) == 1
        assert cache.get("live") == (2, True)

    @pytest.mark.asyncio
    async def test_sweep_keeps_live_entries(self, clock: FakeClock) -> None:
        """The sweep never removes an entry before its deadline."""
        cache = CacheManager(CacheConfig(cleanup_interval=0.01), clock=clock)
        cache.set("live", "v", ttl=60)

        await cache.start()
        await asyncio.sleep(0.05)
        await cache.stop()

        assert cache.get("live") == ("v", True)


# =============================================================================
# Concurrency
# =============================================================================

class TestConcurrency:
    """Tests for concurrent access from several threads."""

    WORKERS = 8
    OPS_PER_WORKER = 2000

    def _run_workers(self, cache: CacheManager) -> list[BaseException]:
        errors: list[BaseException] = []
        start = threading.Barrier(self.WORKERS)

        def worker(worker_id: int) -> None:
            try:
                start.wait()
                for i in range(self.OPS_PER_WORKER):
                    key = f"zendesk:w{worker_id % 3}:{i % 120}"
                    op = i % 5
                    if op < 2:
                        cache.set(key, (worker_id, i))
                    elif op < 4:
                        cache.get(key)
                    elif i % 50 == 4:
                        cache.delete_by_pattern(f"zendesk:w{i % 3}:")
                    else:
                        cache.delete(key)
            except Exception as e:
                errors.append(e)

        threads = [
            threading.Thread(target=worker, args=(worker_id,))
            for worker_id in range(self.WORKERS)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        return errors

    def test_lru_mixed_operations_respect_max_size(self) -> None:
        cache = CacheManager(CacheConfig(strategy=CacheStrategy.LRU, max_size=50))

        errors = self._run_workers(cache)

        assert errors == []
        stats = cache.get_stats()
        assert stats.size <= 50
        assert len(cache) == stats.size

    def test_lookup_counters_are_exact(self) -> None:
        """Every get is counted exactly once as a hit or a miss."""
        cache = CacheManager(CacheConfig(strategy=CacheStrategy.LRU, max_size=50))

        errors = self._run_workers(cache)

        assert errors == []
        gets_per_worker = sum(1 for i in range(self.OPS_PER_WORKER) if i % 5 in (2, 3))
        stats = cache.get_stats()
        assert stats.hits + stats.misses == self.WORKERS * gets_per_worker

    def test_concurrent_clear_counts_each_entry_once(self) -> None:
        cache = CacheManager(CacheConfig())
        for i in range(1000):
            cache.set(f"k{i}", i)
        removed: list[int] = []
        lock = threading.Lock()

        def clear() -> None:
            count = cache.clear()
            with lock:
                removed.append(count)

        threads = [threading.Thread(target=clear) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert sum(removed) == 1000
        assert len(cache) == 0


class TestRepr:
    def test_repr_reports_entries(self, cache: CacheManager) -> None:
        cache.set("a", 1)
        cache.set("b", 2)

        assert repr(cache) == "CacheManager(strategy='ttl', entries=2, max_size=1000)"
