"""API routes module for the Zendesk data-source service.

This module exports all API routers for registration in main.py.
"""

from zendesk_datasource.api.routes.health import router as health_router
from zendesk_datasource.api.routes.query import router as query_router
from zendesk_datasource.api.routes.resources import router as resources_router


__all__ = [
    "health_router",
    "query_router",
    "resources_router",
]
