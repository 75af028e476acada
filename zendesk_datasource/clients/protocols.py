"""Upstream fetch protocol.

Duck typing protocol for the Zendesk client - enables FakeZendeskClient
substitution in tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from zendesk_datasource.schemas.zendesk import (
        OrganizationsResponse,
        TicketsResponse,
        UsersResponse,
    )


@runtime_checkable
class ZendeskFetchProtocol(Protocol):
    """Protocol for clients fetching Zendesk records.

    Methods:
        get_tickets: List tickets matching params
        get_users: List users matching params
        get_organizations: List organizations matching params
        test_connection: Verify credentials and reachability
        close: Release HTTP client resources
    """

    async def get_tickets(self, params: Mapping[str, str]) -> TicketsResponse:
        """Fetch tickets.

        Raises:
            ZendeskClientError: On transport or API failure
        """
        ...

    async def get_users(self, params: Mapping[str, str]) -> UsersResponse:
        """Fetch users.

        Raises:
            ZendeskClientError: On transport or API failure
        """
        ...

    async def get_organizations(
        self, params: Mapping[str, str]
    ) -> OrganizationsResponse:
        """Fetch organizations.

        Raises:
            ZendeskClientError: On transport or API failure
        """
        ...

    async def test_connection(self) -> None:
        """Raise ZendeskClientError unless the API answers for the current user."""
        ...

    async def close(self) -> None:
        """Release HTTP client resources."""
        ...
