"""Zendesk record models.

Pydantic models for the subset of the Zendesk Support API v2 payloads the
data source reads. Unknown fields returned by Zendesk are ignored.
"""

from pydantic import BaseModel, Field


class Ticket(BaseModel):
    """A Zendesk ticket."""

    id: int = Field(..., description="Ticket ID")
    url: str = Field(default="", description="API URL of the ticket")
    external_id: str | None = Field(default=None)
    created_at: str = Field(default="", description="ISO 8601 creation time")
    updated_at: str = Field(default="", description="ISO 8601 last update time")
    type: str | None = Field(default=None, description="problem, incident, question or task")
    subject: str | None = Field(default=None)
    description: str | None = Field(default=None)
    priority: str | None = Field(default=None, description="low, normal, high or urgent")
    status: str = Field(default="", description="new, open, pending, hold, solved or closed")
    requester_id: int = Field(default=0)
    assignee_id: int | None = Field(default=None)
    tags: list[str] = Field(default_factory=list)


class User(BaseModel):
    """A Zendesk user."""

    id: int = Field(..., description="User ID")
    url: str = Field(default="")
    name: str = Field(default="")
    email: str = Field(default="")
    created_at: str = Field(default="")
    updated_at: str = Field(default="")
    role: str = Field(default="", description="end-user, agent or admin")
    active: bool = Field(default=False)


class Organization(BaseModel):
    """A Zendesk organization."""

    id: int = Field(..., description="Organization ID")
    url: str = Field(default="")
    name: str = Field(default="")
    created_at: str = Field(default="")
    updated_at: str = Field(default="")
    domain_names: list[str] = Field(default_factory=list)


class _PagedResponse(BaseModel):
    """Pagination envelope shared by Zendesk list endpoints."""

    count: int | None = Field(default=None, description="Total matching records")
    next_page: str | None = Field(default=None)
    previous_page: str | None = Field(default=None)


class TicketsResponse(_PagedResponse):
    """Response of GET /tickets.json."""

    tickets: list[Ticket] = Field(default_factory=list)


class UsersResponse(_PagedResponse):
    """Response of GET /users.json."""

    users: list[User] = Field(default_factory=list)


class OrganizationsResponse(_PagedResponse):
    """Response of GET /organizations.json."""

    organizations: list[Organization] = Field(default_factory=list)


class ZendeskErrorResponse(BaseModel):
    """Error body returned by Zendesk on 4xx/5xx responses."""

    error: str = Field(..., description="Error title")
    description: str | None = Field(default=None)
