"""
Global exception handling for the application.
Every error leaves the API in the same envelope:
{"error": {"code", "message", "details", "path"}}.
"""

from typing import Any, Dict, Optional

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(AppError):
    """Malformed input payload."""
    def __init__(self, message: str = "Invalid data", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class ConflictException(AppError):
    """Uniqueness violation (e.g. username already taken). Reported as 400."""
    def __init__(self, message: str = "Conflict", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_404_NOT_FOUND, details)


class UnauthorizedException(AppError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "Unauthorized", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED, details)


class ServerConfigurationError(AppError):
    """A required server-side secret or setting is missing."""
    def __init__(self, message: str = "Server configuration error", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class ProviderNotConfiguredError(AppError):
    """The user has no provider key and there is no process-wide default."""
    def __init__(
        self,
        message: str = "VAPI private key missing. Please configure in settings.",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR, details)


class UpstreamError(AppError):
    """A third-party service failed or could not be reached."""
    def __init__(
        self,
        message: str = "Upstream service error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, status_code, details)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Render AppError subclasses."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed with application error",
            code=exc.__class__.__name__,
            error=exc.message,
            path=request.url.path,
        )

    headers = None
    if isinstance(exc, UnauthorizedException):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": {
                "code": exc.__class__.__name__,
                "message": exc.message,
                "details": exc.details,
                "path": request.url.path,
            }
        },
        headers=headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report body/query validation failures as 400 with per-field errors."""
    errors = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": {
                "code": "ValidationException",
                "message": "Invalid data",
                "details": {"errors": errors},
                "path": request.url.path,
            }
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    if isinstance(exc, AppError):
        return await app_error_handler(request, exc)

    logger.exception("Unexpected error occurred", path=request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "InternalServerError",
                "message": "An unexpected error occurred. Please try again later.",
                "path": request.url.path,
            }
        },
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, global_exception_handler)
