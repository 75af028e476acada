"""Conversion of Zendesk list responses to column-oriented frames."""

from zendesk_datasource.schemas.query import DataFrame, FrameField
from zendesk_datasource.schemas.zendesk import (
    OrganizationsResponse,
    TicketsResponse,
    UsersResponse,
)


def tickets_to_frame(response: TicketsResponse) -> DataFrame:
    """Build the "tickets" frame (id, subject, status, priority, created_at)."""
    tickets = response.tickets
    return DataFrame(
        name="tickets",
        fields=[
            FrameField(name="id", type="number", values=[t.id for t in tickets]),
            FrameField(name="subject", type="string", values=[t.subject or "" for t in tickets]),
            FrameField(name="status", type="string", values=[t.status for t in tickets]),
            FrameField(name="priority", type="string", values=[t.priority or "" for t in tickets]),
            FrameField(name="created_at", type="string", values=[t.created_at for t in tickets]),
        ],
    )


def users_to_frame(response: UsersResponse) -> DataFrame:
    """Build the "users" frame (id, name, email, role, active)."""
    users = response.users
    return DataFrame(
        name="users",
        fields=[
            FrameField(name="id", type="number", values=[u.id for u in users]),
            FrameField(name="name", type="string", values=[u.name for u in users]),
            FrameField(name="email", type="string", values=[u.email for u in users]),
            FrameField(name="role", type="string", values=[u.role for u in users]),
            FrameField(name="active", type="boolean", values=[u.active for u in users]),
        ],
    )


def organizations_to_frame(response: OrganizationsResponse) -> DataFrame:
    """Build the "organizations" frame.

    Only the first domain name of each organization is shown; the CSV export
    carries the full list.
    """
    orgs = response.organizations
    return DataFrame(
        name="organizations",
        fields=[
            FrameField(name="id", type="number", values=[o.id for o in orgs]),
            FrameField(name="name", type="string", values=[o.name for o in orgs]),
            FrameField(
                name="domain_names",
                type="string",
                values=[o.domain_names[0] if o.domain_names else "" for o in orgs],
            ),
            FrameField(name="created_at", type="string", values=[o.created_at for o in orgs]),
        ],
    )
