"""Custom exceptions for the Zendesk data-source service.

All exceptions are namespaced to avoid shadowing Python builtins
(no bare ConnectionError / TimeoutError subclasses).
"""


class DatasourceError(Exception):
    """Base exception for all data-source errors.

    All service exceptions inherit from this class to enable
    catching any of them with a single except clause.
    """

    def __init__(self, message: str) -> None:
        """Initialize data-source error.

        Args:
            message: Error description
        """
        self.message = message
        super().__init__(message)


class DatasourceConfigError(DatasourceError):
    """Raised when a datasource instance cannot be built from its settings."""


class ZendeskClientError(DatasourceError):
    """Raised when a call to the Zendesk API fails.

    This is the base class for upstream client errors.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize client error.

        Args:
            message: Error description
            status_code: HTTP status code if applicable
            cause: Original exception that caused this error
        """
        self.status_code = status_code
        self.cause = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause


class ZendeskAPIError(ZendeskClientError):
    """Raised when Zendesk answers with an error status or an unreadable body."""


class ZendeskConnectionError(ZendeskClientError):
    """Raised when the request never produced a response.

    Distinct from Python's built-in ConnectionError to avoid
    exception shadowing.
    """


class ExportFormatError(DatasourceError):
    """Raised when an export is requested in an unsupported format.

    Attributes:
        export_format: The rejected format string
    """

    def __init__(self, export_format: str) -> None:
        self.export_format = export_format
        super().__init__(f"unsupported format: {export_format}")


class UnknownResourceError(DatasourceError):
    """Raised when a resource path has no handler.

    Attributes:
        path: The requested resource path
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Unknown resource path: {path}")


class UnknownQueryTypeError(DatasourceError):
    """Raised when a query names a type that has no upstream fetch.

    Attributes:
        query_type: The rejected query type
    """

    def __init__(self, query_type: str) -> None:
        self.query_type = query_type
        super().__init__(f"unknown query type: {query_type}")


class SubQueryTimeoutError(DatasourceError):
    """Raised when a batch sub-query misses its deadline.

    NOT named TimeoutError to avoid shadowing builtins.TimeoutError.

    Attributes:
        query_type: Type of the sub-query that timed out
        timeout_seconds: The deadline that was exceeded
    """

    def __init__(self, query_type: str, timeout_seconds: float) -> None:
        self.query_type = query_type
        self.timeout_seconds = timeout_seconds
        super().__init__(f"{query_type} query timed out after {timeout_seconds}s")
