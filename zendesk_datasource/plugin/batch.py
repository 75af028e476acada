"""Batch query executor.

Runs every sub-query of a batch concurrently with asyncio.gather() and
isolates failures: an unknown query type, an upstream error or a missed
deadline becomes an error string for that sub-query only.

Each task writes its outcome into the slot reserved for its request index
under one shared lock. After all tasks have finished, absent results and
empty errors are dropped, so the response keeps relative input order within
each list but is not index-aligned with the request.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel

from zendesk_datasource.clients.protocols import ZendeskFetchProtocol
from zendesk_datasource.core.constants import QueryType
from zendesk_datasource.core.exceptions import (
    SubQueryTimeoutError,
    UnknownQueryTypeError,
)
from zendesk_datasource.core.logging import get_logger
from zendesk_datasource.schemas.query import (
    BatchQueryRequest,
    BatchQueryResponse,
    QueryRequest,
)


logger = get_logger(__name__)

Fetcher = Callable[[Mapping[str, str]], Awaitable[BaseModel]]


def resolve_fetcher(client: ZendeskFetchProtocol, query_type: str) -> Fetcher:
    """Return the client method serving ``query_type``.

    Args:
        client: Upstream fetch client
        query_type: tickets, users or organizations

    Returns:
        Bound async fetch method

    Raises:
        UnknownQueryTypeError: If query_type is not a QueryType value
    """
    fetchers: dict[str, Fetcher] = {
        QueryType.TICKETS.value: client.get_tickets,
        QueryType.USERS.value: client.get_users,
        QueryType.ORGANIZATIONS.value: client.get_organizations,
    }
    try:
        return fetchers[query_type]
    except KeyError:
        raise UnknownQueryTypeError(query_type) from None


class _BatchSlots:
    """Per-index result and error slots shared by the tasks of one batch."""

    def __init__(self, size: int) -> None:
        self.results: list[Any | None] = [None] * size
        self.errors: list[str] = [""] * size
        self.lock = asyncio.Lock()

    async def succeed(self, index: int, result: Any) -> None:
        async with self.lock:
            self.results[index] = result

    async def fail(self, index: int, message: str) -> None:
        async with self.lock:
            self.errors[index] = message

    def to_response(self) -> BatchQueryResponse:
        return BatchQueryResponse(
            results=[result for result in self.results if result is not None],
            errors=[error for error in self.errors if error],
        )


class BatchExecutor:
    """Concurrent fan-out of heterogeneous sub-queries.

    The batch path talks to the upstream client directly and does not
    consult the cache.

    Example:
        >>> executor = BatchExecutor(client, task_timeout=10.0)
        >>> response = await executor.execute(
        ...     BatchQueryRequest(queries=[
        ...         QueryRequest(query_type="tickets", params={"status": "open"}),
        ...         QueryRequest(query_type="users"),
        ...     ])
        ... )
    """

    def __init__(
        self,
        client: ZendeskFetchProtocol,
        task_timeout: float | None = None,
    ) -> None:
        """Initialize the executor.

        Args:
            client: Upstream fetch client
            task_timeout: Per sub-query deadline in seconds; None waits
                indefinitely
        """
        self._client = client
        self._task_timeout = task_timeout

    @property
    def task_timeout(self) -> float | None:
        """Per sub-query deadline in seconds, or None."""
        return self._task_timeout

    async def execute(self, request: BatchQueryRequest) -> BatchQueryResponse:
        """Run all sub-queries concurrently and wait for every one of them.

        Sub-query failures never fail the call; they are returned in
        ``errors``. Cancelling the caller cancels all in-flight sub-queries.

        Args:
            request: Ordered sub-queries

        Returns:
            BatchQueryResponse with filtered results and errors
        """
        slots = _BatchSlots(len(request.queries))

        tasks = [
            asyncio.create_task(self._run_query(index, query, slots))
            for index, query in enumerate(request.queries)
        ]
        # gather cancels the children if the caller is cancelled
        await asyncio.gather(*tasks)

        response = slots.to_response()
        logger.info(
            "Batch query completed",
            queries=len(request.queries),
            succeeded=len(response.results),
            failed=len(response.errors),
        )
        return response

    async def _run_query(
        self,
        index: int,
        query: QueryRequest,
        slots: _BatchSlots,
    ) -> None:
        """Execute one sub-query and record its outcome in its slot."""
        try:
            result = await self._fetch(query)
        except Exception as e:
            logger.warning(
                "Batch sub-query failed",
                index=index,
                query_type=query.query_type,
                error=str(e),
            )
            await slots.fail(index, str(e) or type(e).__name__)
        else:
            await slots.succeed(index, result)

    async def _fetch(self, query: QueryRequest) -> dict[str, Any]:
        fetcher = resolve_fetcher(self._client, query.query_type)
        if self._task_timeout is None:
            records = await fetcher(query.params)
        else:
            try:
                records = await asyncio.wait_for(
                    fetcher(query.params), timeout=self._task_timeout
                )
            except asyncio.TimeoutError:
                raise SubQueryTimeoutError(query.query_type, self._task_timeout) from None
        return records.model_dump(mode="json")
