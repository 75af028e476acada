"""Shared constants for the Zendesk data-source service."""

from enum import Enum


# =============================================================================
# Query Types
# =============================================================================

class QueryType(str, Enum):
    """Record collections that can be queried from Zendesk."""

    TICKETS = "tickets"
    USERS = "users"
    ORGANIZATIONS = "organizations"


# Field names exposed per query type (resource path "fields")
AVAILABLE_FIELDS: dict[str, list[str]] = {
    QueryType.TICKETS.value: ["id", "subject", "status", "priority", "created_at", "updated_at"],
    QueryType.USERS.value: ["id", "name", "email", "role", "active", "created_at"],
    QueryType.ORGANIZATIONS.value: ["id", "name", "domain_names", "created_at"],
}


# =============================================================================
# Zendesk API
# =============================================================================

ZENDESK_BASE_URL_TEMPLATE = "https://{subdomain}.zendesk.com/api/v2"

ENDPOINT_TICKETS = "/tickets.json"
ENDPOINT_USERS = "/users.json"
ENDPOINT_ORGANIZATIONS = "/organizations.json"
ENDPOINT_CURRENT_USER = "/users/me.json"


# =============================================================================
# Timeouts and Cache Defaults (seconds)
# =============================================================================

class Timeouts:
    """Default timeout values in seconds."""

    HTTP_DEFAULT: float = 30.0

    CACHE_DEFAULT_TTL: float = 300.0  # 5 minutes
    CACHE_CLEANUP_INTERVAL: float = 600.0  # 10 minutes


DEFAULT_CACHE_MAX_SIZE = 1000
DEFAULT_CACHE_KEY_PREFIX = "zendesk:"


# =============================================================================
# API Paths
# =============================================================================

API_PREFIX = "/api"
RESOURCES_PREFIX = f"{API_PREFIX}/resources"
HEALTH_CHECK_PATH = "/health"
