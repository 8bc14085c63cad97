"""Error handlers for API routes.

Every error leaves the service in the same envelope as the discuss
operation itself: ``{"error": {"code", "message", "details"}}``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from council_session.core.exceptions import (
    CouncilError,
    CouncilValidationError,
    ErrorCode,
    SessionNotFoundError,
    to_error,
)
from council_session.core.logging import get_logger


logger = get_logger(__name__)


# Type alias for exception handler
ExceptionHandler = Callable[[Request, Exception], Awaitable[JSONResponse]]


# =============================================================================
# Error Response Model
# =============================================================================

class ErrorDetail(BaseModel):
    """Body of an error envelope.

    Attributes:
        code: Machine-readable error code (see ErrorCode)
        message: Human-readable error description
        details: Optional structured context
        path: Request path that caused the error
    """

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    details: Any | None = Field(default=None, description="Additional context")
    path: str | None = Field(default=None, description="Request path that caused the error")


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: ErrorDetail


def _error_response(
    request: Request,
    status_code: int,
    code: ErrorCode,
    message: str | None = None,
    details: Any | None = None,
) -> JSONResponse:
    payload = to_error(code, message, details)["error"]
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=ErrorDetail(**payload, path=str(request.url.path)),
        ).model_dump(),
    )


# =============================================================================
# Exception Handlers
# =============================================================================

async def http_exception_handler(
    request: Request,
    exc: HTTPException,
) -> JSONResponse:
    """Handle HTTPException with the standard envelope."""
    code = {
        400: ErrorCode.VALIDATION,
        403: ErrorCode.PERMISSION,
        404: ErrorCode.SESSION_NOT_FOUND,
    }.get(exc.status_code, ErrorCode.SERVER_ERROR)
    return _error_response(request, exc.status_code, code, str(exc.detail))


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle request body validation errors.

    Args:
        request: FastAPI request object
        exc: RequestValidationError raised

    Returns:
        JSONResponse with 400 status and per-field details
    """
    field_errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error.get("loc", []))
        field_errors.append({"field": loc, "message": error.get("msg", "Invalid value")})

    return _error_response(
        request,
        400,
        ErrorCode.VALIDATION,
        "Invalid input",
        field_errors,
    )


async def council_validation_handler(
    request: Request,
    exc: CouncilValidationError,
) -> JSONResponse:
    """Handle CouncilValidationError raised by the controller."""
    return _error_response(
        request,
        400,
        ErrorCode.VALIDATION,
        str(exc),
        {"field": exc.field, "errors": exc.errors},
    )


async def session_not_found_handler(
    request: Request,
    exc: SessionNotFoundError,
) -> JSONResponse:
    """Handle SessionNotFoundError.

    Returns:
        JSONResponse with 404 status
    """
    return _error_response(
        request,
        404,
        ErrorCode.SESSION_NOT_FOUND,
        details={"sessionId": exc.session_id},
    )


async def council_error_handler(
    request: Request,
    exc: CouncilError,
) -> JSONResponse:
    """Handle any other CouncilError as an internal failure."""
    logger.error(
        "council.request_failed",
        path=str(request.url.path),
        error_type=type(exc).__name__,
        session_id=exc.session_id,
        error=str(exc),
    )
    return _error_response(request, 500, ErrorCode.INTERNAL, "Unexpected error", str(exc))


async def generic_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle uncaught exceptions.

    Args:
        request: FastAPI request object
        exc: Exception raised

    Returns:
        JSONResponse with 500 status
    """
    logger.exception(
        "unhandled_exception",
        path=str(request.url.path),
        error_type=type(exc).__name__,
    )
    return _error_response(request, 500, ErrorCode.INTERNAL, "Unexpected error", str(exc))


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
        CouncilValidationError,
        council_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        SessionNotFoundError,
        session_not_found_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        CouncilError,
        council_error_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(
        Exception,
        generic_exception_handler,
    )


__all__ = [
    "ErrorDetail",
    "ErrorResponse",
    "register_error_handlers",
]
