"""Cache strategy and configuration.

Defines CacheStrategy and the frozen CacheConfig consumed by CacheManager.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from zendesk_datasource.core.constants import (
    DEFAULT_CACHE_KEY_PREFIX,
    DEFAULT_CACHE_MAX_SIZE,
    Timeouts,
)


if TYPE_CHECKING:
    from zendesk_datasource.core.config import Settings


class CacheStrategy(str, Enum):
    """Eviction strategy of a CacheManager.

    TTL: entries leave only by expiry or explicit invalidation; max_size is
        advisory and never triggers eviction.
    LRU: TTL expiry plus least-recently-used eviction once max_size is
        exceeded.
    """

    TTL = "ttl"
    LRU = "lru"


@dataclass(frozen=True)
class CacheConfig:
    """Immutable cache configuration.

    Attributes:
        strategy: Eviction strategy.
        default_ttl: Lifetime in seconds used when set() gets no ttl.
            Zero or negative means entries never expire.
        max_size: Capacity (enforced only by the LRU strategy).
        cleanup_interval: Seconds between background expiry sweeps.
        key_prefix: Namespace prepended by build_cache_key().
    """

    strategy: CacheStrategy = field(default=CacheStrategy.TTL)
    default_ttl: float = field(default=Timeouts.CACHE_DEFAULT_TTL)
    max_size: int = field(default=DEFAULT_CACHE_MAX_SIZE)
    cleanup_interval: float = field(default=Timeouts.CACHE_CLEANUP_INTERVAL)
    key_prefix: str = field(default=DEFAULT_CACHE_KEY_PREFIX)

    def __post_init__(self) -> None:
        # Accept plain strings ("ttl", "lru") from settings and JSON
        object.__setattr__(self, "strategy", CacheStrategy(self.strategy))
        if self.max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {self.max_size}")
        if self.cleanup_interval <= 0:
            raise ValueError(
                f"cleanup_interval must be positive, got {self.cleanup_interval}"
            )

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheConfig:
        """Build a CacheConfig from application settings.

        Args:
            settings: Application settings.

        Returns:
            CacheConfig with the cache_* values from settings.

        Raises:
            ValueError: If the configured strategy is not a CacheStrategy.
        """
        return cls(
            strategy=CacheStrategy(settings.cache_strategy.lower()),
            default_ttl=settings.cache_default_ttl_seconds,
            max_size=settings.cache_max_size,
            cleanup_interval=settings.cache_cleanup_interval_seconds,
            key_prefix=settings.cache_key_prefix,
        )
