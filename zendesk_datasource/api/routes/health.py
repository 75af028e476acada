"""Health check API routes.

GET /health runs the full datasource check: Zendesk connection test, API
latency and cache statistics. GET /health/live only reports that the
process is up.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from zendesk_datasource import __version__
from zendesk_datasource.api.dependencies import get_cache, get_optional_datasource
from zendesk_datasource.cache.manager import CacheManager
from zendesk_datasource.core.constants import HEALTH_CHECK_PATH
from zendesk_datasource.plugin.datasource import Datasource
from zendesk_datasource.plugin.health import HealthReport, HealthState


logger = logging.getLogger(__name__)


# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix=HEALTH_CHECK_PATH,
    tags=["Health"],
)


# =============================================================================
# Response Models
# =============================================================================

class LivenessResponse(BaseModel):
    """Response model for liveness check.

    Attributes:
        alive: Whether service is alive
        version: Service version
        timestamp: Check timestamp
    """

    alive: bool = Field(
        default=True,
        description="Whether service is alive",
    )
    version: str = Field(
        default=__version__,
        description="Service version",
    )
    timestamp: str = Field(
        default_factory=lambda: datetime.now(UTC).isoformat(),
        description="Check timestamp",
    )


def _unconfigured_report(cache: CacheManager | None) -> HealthReport:
    return HealthReport(
        status=HealthState.ERROR,
        message="Datasource not configured",
        cache_stats=cache.get_stats().to_dict() if cache is not None else None,
    )


# =============================================================================
# API Endpoints
# =============================================================================

@router.get(
    "",
    response_model=HealthReport,
    summary="Health check",
    description="Tests the Zendesk connection and reports cache statistics.",
    responses={503: {"model": HealthReport}},
)
async def health_check(
    datasource: Datasource | None = Depends(get_optional_datasource),
    cache: CacheManager | None = Depends(get_cache),
) -> HealthReport | JSONResponse:
    """Comprehensive health check endpoint.

    Returns:
        HealthReport; answered with 503 when the check fails
    """
    if datasource is None:
        report = _unconfigured_report(cache)
    else:
        report = await datasource.check_health()

    if not report.ok:
        logger.warning("Health check failed: %s", report.message)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=report.model_dump(mode="json"),
        )
    return report


@router.get(
    "/live",
    response_model=LivenessResponse,
    summary="Liveness check",
    description="Returns whether the service is alive.",
)
async def liveness_check() -> LivenessResponse:
    """Kubernetes-style liveness probe."""
    return LivenessResponse()


__all__ = [
    "LivenessResponse",
    "router",
]
