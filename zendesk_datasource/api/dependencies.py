"""FastAPI dependencies for route handlers.

The datasource and cache live on ``app.state``; they are created in the
application lifespan (see zendesk_datasource.main) or set directly by tests.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from zendesk_datasource.cache.manager import CacheManager
from zendesk_datasource.plugin.datasource import Datasource


def get_datasource(request: Request) -> Datasource:
    """Return the configured datasource.

    Raises:
        HTTPException: 503 if no datasource was configured at startup
    """
    datasource = get_optional_datasource(request)
    if datasource is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Datasource not configured",
        )
    return datasource


def get_cache(request: Request) -> CacheManager | None:
    """Return the application cache manager, if one was created."""
    return getattr(request.app.state, "cache", None)


def get_optional_datasource(request: Request) -> Datasource | None:
    """Return the datasource, or None when it was not configured."""
    return getattr(request.app.state, "datasource", None)
