"""Resource API routes.

Service Endpoints:
- POST   /api/resources/batch-query - Run sub-queries concurrently
- POST   /api/resources/export      - Download records as CSV or JSON
- GET    /api/resources/fields      - Field names per query type
- GET    /api/resources/health      - Zendesk connection test
- DELETE /api/resources/cache       - Invalidate cached query results

Any other path under /api/resources answers 404.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, ConfigDict, Field

from zendesk_datasource.api.dependencies import get_datasource
from zendesk_datasource.core.constants import RESOURCES_PREFIX
from zendesk_datasource.core.exceptions import UnknownResourceError
from zendesk_datasource.core.logging import get_logger
from zendesk_datasource.plugin.datasource import Datasource
from zendesk_datasource.plugin.export import parse_export_format
from zendesk_datasource.schemas.query import BatchQueryRequest, BatchQueryResponse


logger = get_logger(__name__)


# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix=RESOURCES_PREFIX,
    tags=["Resources"],
)


# =============================================================================
# Request/Response Models
# =============================================================================

class ExportRequest(BaseModel):
    """Body of an export request.

    Attributes:
        query_type: tickets, users or organizations
        params: Upstream query parameters
    """

    model_config = ConfigDict(populate_by_name=True)

    query_type: str | None = Field(default=None, alias="queryType")
    params: dict[str, str] = Field(default_factory=dict)


class ConnectionStatus(BaseModel):
    """Outcome of the resource-level connection test."""

    status: str = Field(..., description="ok or error")
    message: str


class CacheInvalidationResponse(BaseModel):
    """Result of a cache invalidation."""

    pattern: str | None = Field(default=None, description="Prefix that was invalidated")
    removed: int = Field(..., description="Number of entries removed")


# =============================================================================
# API Endpoints
# =============================================================================

@router.post(
    "/batch-query",
    response_model=BatchQueryResponse,
    summary="Run a batch of sub-queries concurrently",
)
async def batch_query(
    request: BatchQueryRequest,
    datasource: Datasource = Depends(get_datasource),
) -> BatchQueryResponse:
    """Execute every sub-query and aggregate results and errors."""
    return await datasource.execute_batch_query(request)


@router.post(
    "/export",
    summary="Export records",
    response_class=Response,
)
async def export(
    request: ExportRequest,
    export_format: str | None = Query(default=None, alias="format"),
    datasource: Datasource = Depends(get_datasource),
) -> Response:
    """Fetch records and return them as a downloadable file.

    Raises:
        HTTPException: 400 if queryType is missing
        ExportFormatError: If the format is not csv or json
        UnknownQueryTypeError: If queryType is not supported
        ZendeskClientError: If the upstream fetch fails
    """
    if not request.query_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="queryType is required",
        )

    fmt = parse_export_format(export_format)
    body, content_type = await datasource.export(request.query_type, fmt, request.params)

    logger.info("Export served", query_type=request.query_type, format=fmt.value, bytes=len(body))
    filename = f"{request.query_type}.{fmt.value}"
    return Response(
        content=body,
        media_type=content_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    "/fields",
    response_model=dict[str, list[str]],
    summary="List available fields per query type",
)
async def fields() -> dict[str, list[str]]:
    """Return the field names of each query type."""
    return Datasource.fields()


@router.get(
    "/health",
    response_model=ConnectionStatus,
    summary="Test the Zendesk connection",
    responses={503: {"model": ConnectionStatus}},
)
async def resource_health(
    datasource: Datasource = Depends(get_datasource),
) -> ConnectionStatus | JSONResponse:
    """Answer 200 when Zendesk accepts the credentials, 503 otherwise."""
    report = await datasource.check_health()
    if not report.ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=ConnectionStatus(status="error", message=report.message).model_dump(),
        )
    return ConnectionStatus(status="ok", message="Connection successful")


@router.delete(
    "/cache",
    response_model=CacheInvalidationResponse,
    summary="Invalidate cached query results",
)
async def invalidate_cache(
    pattern: str | None = Query(default=None, description="Key prefix; omit to clear all"),
    datasource: Datasource = Depends(get_datasource),
) -> CacheInvalidationResponse:
    """Remove cached entries by key prefix, or all of them."""
    removed = datasource.invalidate_cache(pattern)
    return CacheInvalidationResponse(pattern=pattern, removed=removed)


# Registered last so it only sees paths no route above matched
@router.api_route(
    "/{path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def unknown_resource(path: str) -> None:
    """Reject unknown resource paths."""
    raise UnknownResourceError(path)


__all__ = [
    "CacheInvalidationResponse",
    "ConnectionStatus",
    "ExportRequest",
    "router",
]
