"""Unit tests for the exception hierarchy."""

import pytest

from zendesk_datasource.core.exceptions import (
    DatasourceConfigError,
    DatasourceError,
    ExportFormatError,
    SubQueryTimeoutError,
    UnknownQueryTypeError,
    UnknownResourceError,
    ZendeskAPIError,
    ZendeskClientError,
    ZendeskConnectionError,
)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [
            DatasourceConfigError("missing"),
            ZendeskAPIError("API error: boom"),
            ZendeskConnectionError("refused"),
            ExportFormatError("xml"),
            UnknownResourceError("foo"),
            UnknownQueryTypeError("bogus"),
            SubQueryTimeoutError("users", 1.5),
        ],
    )
    def test_all_derive_from_datasource_error(self, exc: DatasourceError) -> None:
        assert isinstance(exc, DatasourceError)
        assert str(exc) == exc.message

    def test_names_do_not_shadow_builtins(self) -> None:
        assert not issubclass(ZendeskConnectionError, ConnectionError)
        assert not issubclass(SubQueryTimeoutError, TimeoutError)


class TestMessages:
    def test_unknown_query_type(self) -> None:
        assert UnknownQueryTypeError("bogus").message == "unknown query type: bogus"

    def test_sub_query_timeout(self) -> None:
        assert SubQueryTimeoutError("tickets", 10.0).message == (
            "tickets query timed out after 10.0s"
        )

    def test_client_error_keeps_cause(self) -> None:
        cause = OSError("reset by peer")
        error = ZendeskClientError("failed", status_code=502, cause=cause)

        assert error.__cause__ is cause
        assert error.status_code == 502
