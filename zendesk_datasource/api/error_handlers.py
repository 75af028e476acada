"""Error handlers for API routes.

Provides one error envelope (ErrorResponse) for every failure the API can
report, from FastAPI's own HTTPException and validation errors to the
service's DatasourceError hierarchy.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from zendesk_datasource.core.exceptions import (
    DatasourceConfigError,
    ExportFormatError,
    UnknownQueryTypeError,
    UnknownResourceError,
    ZendeskClientError,
)


logger = logging.getLogger(__name__)


# =============================================================================
# Error Response Model
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Error type/category
        detail: Human-readable error description
        code: Optional machine-readable error code
        path: Optional request path that caused the error
    """

    error: str = Field(
        ...,
        description="Error type or category",
    )
    detail: str = Field(
        ...,
        description="Human-readable error description",
    )
    code: str | None = Field(
        default=None,
        description="Machine-readable error code",
    )
    path: str | None = Field(
        default=None,
        description="Request path that caused the error",
    )


def _error_json(
    request: Request,
    status_code: int,
    error: str,
    detail: str,
    code: str | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            detail=detail,
            code=code,
            path=str(request.url.path),
        ).model_dump(),
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def http_exception_handler(
    request: Request,
    exc: HTTPException,
) -> JSONResponse:
    """Handle HTTPException with ErrorResponse schema."""
    error_type = {
        400: "BadRequest",
        404: "NotFound",
        422: "ValidationError",
        500: "InternalServerError",
        503: "ServiceUnavailable",
    }.get(exc.status_code, "Error")

    return _error_json(request, exc.status_code, error_type, str(exc.detail))


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle Pydantic validation errors.

    Returns:
        JSONResponse with ErrorResponse format and field details
    """
    field_errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []))
        msg = error.get("msg", "Invalid value")
        field_errors.append(f"{loc}: {msg}")

    detail = "; ".join(field_errors) if field_errors else "Validation error"
    return _error_json(request, 422, "ValidationError", detail, "VALIDATION_ERROR")


async def unknown_resource_handler(
    request: Request,
    exc: UnknownResourceError,
) -> JSONResponse:
    """Handle UnknownResourceError with 404."""
    return _error_json(request, 404, "NotFound", exc.message, "UNKNOWN_RESOURCE")


async def unknown_query_type_handler(
    request: Request,
    exc: UnknownQueryTypeError,
) -> JSONResponse:
    """Handle UnknownQueryTypeError with 400."""
    return _error_json(
        request, 400, "BadRequest",
        f"Unsupported query type: {exc.query_type}",
        "UNSUPPORTED_QUERY_TYPE",
    )


async def export_format_handler(
    request: Request,
    exc: ExportFormatError,
) -> JSONResponse:
    """Handle ExportFormatError with 400."""
    return _error_json(request, 400, "BadRequest", exc.message, "UNSUPPORTED_FORMAT")


async def datasource_config_handler(
    request: Request,
    exc: DatasourceConfigError,
) -> JSONResponse:
    """Handle DatasourceConfigError with 503."""
    return _error_json(
        request, 503, "ServiceUnavailable", exc.message, "DATASOURCE_NOT_CONFIGURED"
    )


async def zendesk_client_handler(
    request: Request,
    exc: ZendeskClientError,
) -> JSONResponse:
    """Handle upstream failures with 500."""
    logger.error(
        "Zendesk request failed",
        extra={
            "path": str(request.url.path),
            "status_code": exc.status_code,
            "error": exc.message,
        },
    )
    return _error_json(request, 500, "UpstreamError", exc.message, "ZENDESK_API_ERROR")


async def generic_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle uncaught exceptions."""
    logger.exception(
        "Unhandled exception",
        extra={
            "path": str(request.url.path),
            "error_type": type(exc).__name__,
        },
    )
    return _error_json(
        request, 500, "InternalServerError",
        "An unexpected error occurred",
        "INTERNAL_ERROR",
    )


# =============================================================================
# Registration Function
# =============================================================================

def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers with the FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(
        HTTPException,
        http_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        RequestValidationError,
        validation_exception_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        UnknownResourceError,
        unknown_resource_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        UnknownQueryTypeError,
        unknown_query_type_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        ExportFormatError,
        export_format_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        DatasourceConfigError,
        datasource_config_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        ZendeskClientError,
        zendesk_client_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        Exception,
        generic_exception_handler,
    )


__all__ = [
    "ErrorResponse",
    "register_error_handlers",
]
