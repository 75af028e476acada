"""Datasource health check.

Tests the Zendesk connection, measures its latency and reports cache stats.
"""

from __future__ import annotations

import time
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from zendesk_datasource.cache.manager import CacheManager
from zendesk_datasource.clients.protocols import ZendeskFetchProtocol
from zendesk_datasource.core.exceptions import ZendeskClientError
from zendesk_datasource.core.logging import get_logger


logger = get_logger(__name__)


class HealthState(str, Enum):
    """Overall datasource status."""

    OK = "ok"
    ERROR = "error"


class HealthReport(BaseModel):
    """Outcome of a health check.

    Attributes:
        status: ok or error
        message: Human-readable summary
        timestamp: Check timestamp (ISO format)
        cache_stats: Cache statistics, when a cache is available
        api_latency_ms: Round trip of the connection test, when it succeeded
    """

    status: HealthState = Field(..., description="ok or error")
    message: str = Field(..., description="Human-readable summary")
    timestamp: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(),
        description="Check timestamp",
    )
    cache_stats: dict[str, Any] | None = Field(default=None)
    api_latency_ms: float | None = Field(default=None)

    @property
    def ok(self) -> bool:
        return self.status is HealthState.OK


async def check_health(
    client: ZendeskFetchProtocol,
    cache: CacheManager,
) -> HealthReport:
    """Run the connection test and collect cache stats.

    A failed connection test is reported in the returned HealthReport, never
    raised.

    Args:
        client: Upstream client to test
        cache: Cache whose stats are reported

    Returns:
        HealthReport with status ok or error
    """
    start = time.perf_counter()
    try:
        await client.test_connection()
    except ZendeskClientError as e:
        logger.warning("Health check failed", error=str(e))
        return HealthReport(
            status=HealthState.ERROR,
            message=f"Zendesk API connection failed: {e}",
            cache_stats=cache.get_stats().to_dict(),
        )
    latency_ms = (time.perf_counter() - start) * 1000

    return HealthReport(
        status=HealthState.OK,
        message="All systems operational",
        cache_stats=cache.get_stats().to_dict(),
        api_latency_ms=round(latency_ms, 2),
    )
