"""Upstream service clients."""

from zendesk_datasource.clients.protocols import ZendeskFetchProtocol
from zendesk_datasource.clients.zendesk import ZendeskClient


__all__ = [
    "ZendeskClient",
    "ZendeskFetchProtocol",
]
