"""Unit tests for CSV and JSON export."""

import csv
import io
import json

import pytest

from tests.fakes.fake_clients import sample_organizations, sample_tickets, sample_users
from zendesk_datasource.core.exceptions import ExportFormatError
from zendesk_datasource.plugin.export import (
    ExportFormat,
    export_records,
    parse_export_format,
)


def _rows(body: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(body.decode("utf-8"))))


class TestParseExportFormat:
    """Tests for parse_export_format."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_defaults_to_csv(self, value: str | None) -> None:
        assert parse_export_format(value) is ExportFormat.CSV

    def test_case_insensitive(self) -> None:
        assert parse_export_format("JSON") is ExportFormat.JSON

    def test_unsupported(self) -> None:
        with pytest.raises(ExportFormatError) as exc_info:
            parse_export_format("xlsx")

        assert exc_info.value.message == "unsupported format: xlsx"
        assert exc_info.value.export_format == "xlsx"


class TestCsvExport:
    """Tests for CSV output per record type."""

    def test_tickets(self) -> None:
        body, content_type = export_records(sample_tickets(), ExportFormat.CSV)
        rows = _rows(body)

        assert content_type == "text/csv"
        assert rows[0] == [
            "ID", "Subject", "Status", "Priority", "Created At", "Updated At",
            "Requester ID", "Assignee ID",
        ]
        assert rows[1] == [
            "1", "Printer on fire", "open", "urgent",
            "2024-01-02T10:00:00Z", "2024-01-02T11:00:00Z", "100", "200",
        ]
        # unassigned ticket, no priority
        assert rows[2][3] == ""
        assert rows[2][7] == ""

    def test_users_active_is_lowercase(self) -> None:
        rows = _rows(export_records(sample_users(), "csv")[0])

        assert rows[0] == ["ID", "Name", "Email", "Role", "Active", "Created At", "Updated At"]
        assert rows[1][4] == "true"
        assert rows[2][4] == "false"

    def test_organizations_join_domains(self) -> None:
        rows = _rows(export_records(sample_organizations(), "csv")[0])

        assert rows[0] == ["ID", "Name", "Domain Names", "Created At", "Updated At"]
        assert rows[1][2] == "acme.com; acme.org"
        assert rows[2][2] == ""

    def test_row_count(self) -> None:
        body, _ = export_records(sample_users(), ExportFormat.CSV)

        assert body.decode("utf-8").count("\n") == 3


class TestJsonExport:
    def test_json_is_full_response(self) -> None:
        body, content_type = export_records(sample_tickets(), "json")
        data = json.loads(body)

        assert content_type == "application/json"
        assert data["count"] == 2
        assert data["tickets"][1]["assignee_id"] is None

    def test_unsupported_format(self) -> None:
        with pytest.raises(ExportFormatError):
            export_records(sample_tickets(), "pdf")
