"""CSV and JSON export of Zendesk records."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable
from enum import Enum

from zendesk_datasource.core.exceptions import ExportFormatError
from zendesk_datasource.schemas.zendesk import (
    OrganizationsResponse,
    TicketsResponse,
    UsersResponse,
)


ExportableResponse = TicketsResponse | UsersResponse | OrganizationsResponse


class ExportFormat(str, Enum):
    """Supported export formats."""

    CSV = "csv"
    JSON = "json"


CONTENT_TYPES: dict[ExportFormat, str] = {
    ExportFormat.CSV: "text/csv",
    ExportFormat.JSON: "application/json",
}

TICKET_CSV_HEADER = [
    "ID", "Subject", "Status", "Priority", "Created At", "Updated At",
    "Requester ID", "Assignee ID",
]
USER_CSV_HEADER = ["ID", "Name", "Email", "Role", "Active", "Created At", "Updated At"]
ORGANIZATION_CSV_HEADER = ["ID", "Name", "Domain Names", "Created At", "Updated At"]


def parse_export_format(value: str | None) -> ExportFormat:
    """Parse a format query parameter, defaulting to CSV.

    Raises:
        ExportFormatError: If the value is not a supported format
    """
    if not value:
        return ExportFormat.CSV
    try:
        return ExportFormat(value.lower())
    except ValueError:
        raise ExportFormatError(value) from None


def export_records(
    response: ExportableResponse,
    export_format: ExportFormat | str,
) -> tuple[bytes, str]:
    """Serialize a list response.

    Args:
        response: Tickets, users or organizations page
        export_format: csv or json

    Returns:
        (body, content_type)

    Raises:
        ExportFormatError: If the format is not supported
    """
    if isinstance(export_format, ExportFormat):
        fmt = export_format
    else:
        fmt = parse_export_format(export_format)

    if fmt is ExportFormat.JSON:
        body = response.model_dump_json(indent=2).encode("utf-8")
    else:
        body = _to_csv(response)
    return body, CONTENT_TYPES[fmt]


def _to_csv(response: ExportableResponse) -> bytes:
    if isinstance(response, TicketsResponse):
        return _write_csv(TICKET_CSV_HEADER, _ticket_rows(response))
    if isinstance(response, UsersResponse):
        return _write_csv(USER_CSV_HEADER, _user_rows(response))
    return _write_csv(ORGANIZATION_CSV_HEADER, _organization_rows(response))


def _write_csv(header: list[str], rows: Iterable[list[str]]) -> bytes:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue().encode("utf-8")


def _ticket_rows(response: TicketsResponse) -> Iterable[list[str]]:
    for ticket in response.tickets:
        yield [
            str(ticket.id),
            ticket.subject or "",
            ticket.status,
            ticket.priority or "",
            ticket.created_at,
            ticket.updated_at,
            str(ticket.requester_id),
            "" if ticket.assignee_id is None else str(ticket.assignee_id),
        ]


def _user_rows(response: UsersResponse) -> Iterable[list[str]]:
    for user in response.users:
        yield [
            str(user.id),
            user.name,
            user.email,
            user.role,
            # "true" / "false"
            str(user.active).lower(),
            user.created_at,
            user.updated_at,
        ]


def _organization_rows(response: OrganizationsResponse) -> Iterable[list[str]]:
    for org in response.organizations:
        yield [
            str(org.id),
            org.name,
            "; ".join(org.domain_names),
            org.created_at,
            org.updated_at,
        ]
