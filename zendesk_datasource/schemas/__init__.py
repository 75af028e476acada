"""Pydantic schemas for Zendesk records and host-facing queries."""

from zendesk_datasource.schemas.query import (
    BatchQueryRequest,
    BatchQueryResponse,
    DataFrame,
    DataQuery,
    DataResponse,
    FrameField,
    QueryDataRequest,
    QueryDataResponse,
    QueryRequest,
)
from zendesk_datasource.schemas.zendesk import (
    Organization,
    OrganizationsResponse,
    Ticket,
    TicketsResponse,
    User,
    UsersResponse,
    ZendeskErrorResponse,
)


__all__ = [
    "BatchQueryRequest",
    "BatchQueryResponse",
    "DataFrame",
    "DataQuery",
    "DataResponse",
    "FrameField",
    "Organization",
    "OrganizationsResponse",
    "QueryDataRequest",
    "QueryDataResponse",
    "QueryRequest",
    "Ticket",
    "TicketsResponse",
    "User",
    "UsersResponse",
    "ZendeskErrorResponse",
]
