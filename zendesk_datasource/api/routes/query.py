"""Panel query route.

POST /api/query resolves a set of panel queries into data frames. Per-query
failures (missing or unknown queryType, upstream errors) are embedded in the
response for that refId; the request itself succeeds.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from zendesk_datasource.api.dependencies import get_datasource
from zendesk_datasource.core.constants import API_PREFIX
from zendesk_datasource.plugin.datasource import Datasource
from zendesk_datasource.schemas.query import QueryDataRequest, QueryDataResponse


router = APIRouter(
    prefix=API_PREFIX,
    tags=["Query"],
)


@router.post(
    "/query",
    response_model=QueryDataResponse,
    summary="Run panel queries",
)
async def query_data(
    request: QueryDataRequest,
    datasource: Datasource = Depends(get_datasource),
) -> QueryDataResponse:
    """Resolve panel queries to frames, keyed by refId."""
    return await datasource.query_data(request)


__all__ = ["router"]
