"""Core module - Configuration, logging, constants and exceptions.

Exports:
    - Settings, get_settings: Pydantic Settings configuration
    - configure_logging, get_logger: Structured logging (structlog)
    - QueryType, AVAILABLE_FIELDS, Timeouts: shared constants
    - Exception classes: DatasourceError, ZendeskClientError, etc.
"""

from zendesk_datasource.core.config import Settings, get_settings
from zendesk_datasource.core.constants import (
    API_PREFIX,
    AVAILABLE_FIELDS,
    RESOURCES_PREFIX,
    QueryType,
    Timeouts,
)
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
from zendesk_datasource.core.logging import configure_logging, get_logger


__all__ = [
    "API_PREFIX",
    "AVAILABLE_FIELDS",
    "RESOURCES_PREFIX",
    # Exceptions
    "DatasourceConfigError",
    "DatasourceError",
    "ExportFormatError",
    # Constants
    "QueryType",
    # Configuration
    "Settings",
    "SubQueryTimeoutError",
    "Timeouts",
    "UnknownQueryTypeError",
    "UnknownResourceError",
    "ZendeskAPIError",
    "ZendeskClientError",
    "ZendeskConnectionError",
    # Logging
    "configure_logging",
    "get_logger",
    "get_settings",
]
