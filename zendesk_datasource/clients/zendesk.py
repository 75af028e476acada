"""Zendesk Support API HTTP client.

Async client for the Zendesk REST API v2 using API-token authentication.
Uses a single pooled httpx.AsyncClient, created lazily and released by
close().

Example:
    >>> client = ZendeskClient("acme", "agent@acme.com", "token")
    >>> tickets = await client.get_tickets({"status": "open"})
    >>> await client.close()
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from typing import TypeVar

import httpx
from pydantic import BaseModel

from zendesk_datasource.core.constants import (
    ENDPOINT_CURRENT_USER,
    ENDPOINT_ORGANIZATIONS,
    ENDPOINT_TICKETS,
    ENDPOINT_USERS,
    ZENDESK_BASE_URL_TEMPLATE,
    Timeouts,
)
from zendesk_datasource.core.exceptions import (
    ZendeskAPIError,
    ZendeskConnectionError,
)
from zendesk_datasource.schemas.zendesk import (
    OrganizationsResponse,
    TicketsResponse,
    UsersResponse,
    ZendeskErrorResponse,
)


logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class ZendeskClient:
    """HTTP client for the Zendesk Support API.

    Implements ZendeskFetchProtocol.

    Attributes:
        base_url: API root, e.g. https://acme.zendesk.com/api/v2
        email: Agent email used for token authentication
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        subdomain: str,
        email: str,
        api_token: str,
        timeout: float = Timeouts.HTTP_DEFAULT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Zendesk client.

        Args:
            subdomain: Zendesk subdomain ("acme" for acme.zendesk.com)
            email: Agent email address
            api_token: Zendesk API token
            timeout: Request timeout in seconds (default: 30.0)
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = ZENDESK_BASE_URL_TEMPLATE.format(subdomain=subdomain)
        self.email = email
        self.timeout = timeout
        self._api_token = api_token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def auth_header(self) -> str:
        """Return the Authorization header value for token authentication."""
        credentials = f"{self.email}/token:{self._api_token}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create the pooled HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": self.auth_header(),
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        endpoint: str,
        params: Mapping[str, str] | None = None,
    ) -> httpx.Response:
        """Perform a GET request and map failures to client errors.

        Raises:
            ZendeskConnectionError: When no response was received
            ZendeskAPIError: When Zendesk answered with status >= 400
        """
        client = self._get_client()
        try:
            response = await client.get(endpoint, params=dict(params) if params else None)
        except httpx.RequestError as e:
            logger.warning("Zendesk request failed: %s %s", endpoint, str(e))
            raise ZendeskConnectionError(f"failed to execute request: {e}", cause=e) from e

        if response.status_code >= 400:
            raise self._api_error(response)
        return response

    @staticmethod
    def _api_error(response: httpx.Response) -> ZendeskAPIError:
        """Build an error from a failed response, preferring Zendesk's error body."""
        try:
            body = ZendeskErrorResponse.model_validate(response.json())
        except ValueError:
            message = f"HTTP error: {response.status_code} {response.reason_phrase}"
        else:
            message = f"API error: {body.error}"
        logger.warning("Zendesk API error: %s", message)
        return ZendeskAPIError(message, status_code=response.status_code)

    async def _fetch(
        self,
        endpoint: str,
        params: Mapping[str, str] | None,
        model: type[ResponseT],
    ) -> ResponseT:
        response = await self._request(endpoint, params)
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            raise ZendeskAPIError(
                f"failed to decode response: {e}",
                status_code=response.status_code,
                cause=e,
            ) from e

    async def get_tickets(self, params: Mapping[str, str]) -> TicketsResponse:
        """Retrieve tickets (GET /tickets.json).

        Args:
            params: Query string parameters

        Returns:
            Decoded tickets page
        """
        return await self._fetch(ENDPOINT_TICKETS, params, TicketsResponse)

    async def get_users(self, params: Mapping[str, str]) -> UsersResponse:
        """Retrieve users (GET /users.json)."""
        return await self._fetch(ENDPOINT_USERS, params, UsersResponse)

    async def get_organizations(
        self, params: Mapping[str, str]
    ) -> OrganizationsResponse:
        """Retrieve organizations (GET /organizations.json)."""
        return await self._fetch(ENDPOINT_ORGANIZATIONS, params, OrganizationsResponse)

    async def test_connection(self) -> None:
        """Verify connectivity and credentials (GET /users/me.json).

        Raises:
            ZendeskClientError: When the API cannot be reached or rejects the call
        """
        await self._request(ENDPOINT_CURRENT_USER)
