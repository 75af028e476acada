"""Zendesk datasource.

Ties the upstream client, the cache and the batch executor together:
- instance creation from connection settings
- panel query dispatch with cache-aside lookup
- batch queries, exports, field listing, health and cache invalidation
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field, SecretStr

from zendesk_datasource.cache.keys import build_cache_key
from zendesk_datasource.cache.manager import CacheManager
from zendesk_datasource.clients.protocols import ZendeskFetchProtocol
from zendesk_datasource.clients.zendesk import ZendeskClient
from zendesk_datasource.core.config import Settings
from zendesk_datasource.core.constants import AVAILABLE_FIELDS, QueryType, Timeouts
from zendesk_datasource.core.exceptions import (
    DatasourceConfigError,
    ZendeskClientError,
)
from zendesk_datasource.core.logging import get_logger
from zendesk_datasource.plugin.batch import BatchExecutor, resolve_fetcher
from zendesk_datasource.plugin.export import ExportFormat, export_records
from zendesk_datasource.plugin.frames import (
    organizations_to_frame,
    tickets_to_frame,
    users_to_frame,
)
from zendesk_datasource.plugin.health import HealthReport, check_health
from zendesk_datasource.schemas.query import (
    BatchQueryRequest,
    BatchQueryResponse,
    DataFrame,
    DataQuery,
    DataResponse,
    QueryDataRequest,
    QueryDataResponse,
)


logger = get_logger(__name__)

FRAME_BUILDERS: dict[QueryType, Callable[[Any], DataFrame]] = {
    QueryType.TICKETS: tickets_to_frame,
    QueryType.USERS: users_to_frame,
    QueryType.ORGANIZATIONS: organizations_to_frame,
}

# Panel query attributes forwarded upstream, per query type
FORWARDED_PARAMS: dict[QueryType, tuple[str, ...]] = {
    QueryType.TICKETS: ("status", "priority"),
    QueryType.USERS: (),
    QueryType.ORGANIZATIONS: (),
}


class DatasourceSettings(BaseModel):
    """Connection settings of one datasource instance."""

    subdomain: str = Field(default="", description="Zendesk subdomain")
    email: str = Field(default="", description="Agent email")
    api_token: SecretStr = Field(default=SecretStr(""), description="Zendesk API token")

    @classmethod
    def from_settings(cls, settings: Settings) -> DatasourceSettings:
        """Extract connection settings from application settings."""
        return cls(
            subdomain=settings.zendesk_subdomain,
            email=settings.zendesk_email,
            api_token=settings.zendesk_api_token,
        )


def _error_response(status: int, message: str) -> DataResponse:
    return DataResponse(error=message, status=status)


class Datasource:
    """A configured Zendesk datasource instance.

    The cache manager is injected, not owned: its sweep lifecycle belongs to
    whoever created it.
    """

    def __init__(
        self,
        client: ZendeskFetchProtocol,
        cache: CacheManager,
        batch_executor: BatchExecutor | None = None,
    ) -> None:
        """Initialize datasource.

        Args:
            client: Upstream fetch client
            cache: Shared cache manager
            batch_executor: Executor for batch queries (built from client if omitted)
        """
        self._client = client
        self._cache = cache
        self._batch_executor = batch_executor or BatchExecutor(client)

    @classmethod
    def from_settings(
        cls,
        settings: DatasourceSettings,
        cache: CacheManager,
        timeout: float = Timeouts.HTTP_DEFAULT,
        batch_task_timeout: float | None = None,
    ) -> Datasource:
        """Create a datasource backed by a real ZendeskClient.

        Args:
            settings: Connection settings
            cache: Shared cache manager
            timeout: Upstream request timeout in seconds
            batch_task_timeout: Per sub-query deadline for batch queries

        Returns:
            Configured Datasource

        Raises:
            DatasourceConfigError: If subdomain or API token is missing
        """
        api_token = settings.api_token.get_secret_value()
        if not settings.subdomain or not api_token:
            raise DatasourceConfigError("subdomain and API token are required")

        client = ZendeskClient(
            subdomain=settings.subdomain,
            email=settings.email,
            api_token=api_token,
            timeout=timeout,
        )
        logger.info("Datasource created", subdomain=settings.subdomain)
        return cls(
            client=client,
            cache=cache,
            batch_executor=BatchExecutor(client, task_timeout=batch_task_timeout),
        )

    @property
    def client(self) -> ZendeskFetchProtocol:
        return self._client

    @property
    def cache(self) -> CacheManager:
        return self._cache

    async def close(self) -> None:
        """Release the upstream client."""
        await self._client.close()

    # -------------------------------------------------------------------------
    # Panel queries
    # -------------------------------------------------------------------------

    async def query_data(self, request: QueryDataRequest) -> QueryDataResponse:
        """Run panel queries one after another.

        Args:
            request: Panel queries

        Returns:
            Responses keyed by refId; failures are embedded per query
        """
        response = QueryDataResponse()
        for query in request.queries:
            response.responses[query.ref_id] = await self.handle_query(query)
        return response

    async def handle_query(self, query: DataQuery) -> DataResponse:
        """Resolve one panel query, serving from cache when possible."""
        if not query.query_type:
            return _error_response(400, "queryType is required")
        try:
            query_type = QueryType(query.query_type)
        except ValueError:
            return _error_response(400, f"unknown query type: {query.query_type}")

        params = self._query_params(query_type, query)
        cache_key = build_cache_key(query_type.value, params, self._cache.config.key_prefix)

        records, found = self._cache.get(cache_key)
        if not found:
            fetch = resolve_fetcher(self._client, query_type.value)
            try:
                records = await fetch(params)
            except ZendeskClientError as e:
                logger.warning("Query fetch failed", query_type=query_type.value, error=str(e))
                return _error_response(500, f"failed to fetch {query_type.value}: {e}")
            self._cache.set(cache_key, records)

        logger.debug("Query served", query_type=query_type.value, cached=found)
        return DataResponse(frames=[FRAME_BUILDERS[query_type](records)])

    @staticmethod
    def _query_params(query_type: QueryType, query: DataQuery) -> dict[str, str]:
        params: dict[str, str] = {}
        for name in FORWARDED_PARAMS[query_type]:
            value = getattr(query, name, None)
            if value:
                params[name] = value
        return params

    # -------------------------------------------------------------------------
    # Resources
    # -------------------------------------------------------------------------

    async def execute_batch_query(self, request: BatchQueryRequest) -> BatchQueryResponse:
        """Run a batch of sub-queries concurrently (uncached)."""
        return await self._batch_executor.execute(request)

    async def export(
        self,
        query_type: str,
        export_format: ExportFormat | str,
        params: dict[str, str] | None = None,
    ) -> tuple[bytes, str]:
        """Fetch records and serialize them for download.

        Args:
            query_type: tickets, users or organizations
            export_format: csv or json
            params: Upstream query parameters

        Returns:
            (body, content_type)

        Raises:
            UnknownQueryTypeError: If query_type is not supported
            ZendeskClientError: If the fetch fails
            ExportFormatError: If the format is not supported
        """
        fetch = resolve_fetcher(self._client, query_type)
        try:
            records = await fetch(params or {})
        except ZendeskClientError as e:
            raise ZendeskClientError(
                f"Failed to fetch {query_type}: {e}",
                status_code=e.status_code,
                cause=e,
            ) from e

        return export_records(records, export_format)

    @staticmethod
    def fields() -> dict[str, list[str]]:
        """Return the field names available per query type."""
        return {name: list(columns) for name, columns in AVAILABLE_FIELDS.items()}

    async def check_health(self) -> HealthReport:
        """Test the upstream connection and report cache stats."""
        return await check_health(self._client, self._cache)

    def invalidate_cache(self, pattern: str | None = None) -> int:
        """Drop cached query results.

        Args:
            pattern: Key prefix to invalidate; None clears everything

        Returns:
            Number of entries removed
        """
        if pattern is None:
            removed = self._cache.clear()
        else:
            removed = self._cache.delete_by_pattern(pattern)
        logger.info("Cache invalidated", pattern=pattern, removed=removed)
        return removed
