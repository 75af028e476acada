"""Cache Management Package.

In-memory TTL cache for Zendesk query results:
- CacheManager: thread-safe store with prefix invalidation and stats
- CacheConfig / CacheStrategy: immutable configuration
- build_cache_key: deterministic keys from query type and parameters
"""

from zendesk_datasource.cache.keys import build_cache_key, query_type_pattern
from zendesk_datasource.cache.manager import CacheEntry, CacheManager, CacheStats
from zendesk_datasource.cache.strategies import CacheConfig, CacheStrategy


__all__ = [
    "CacheConfig",
    "CacheEntry",
    "CacheManager",
    "CacheStats",
    "CacheStrategy",
    "build_cache_key",
    "query_type_pattern",
]
