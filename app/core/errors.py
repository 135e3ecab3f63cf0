"""
Custom exception hierarchy for the Impulse Journal API.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing human messages.

Propagation: validation / not-found errors are raised before any side
effect; storage and completion-service errors abort the operation with
nothing persisted. A malformed emotion-analysis reply is NOT an error
(see app/services/narrative.py).
"""
from __future__ import annotations

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exception classes
# ---------------------------------------------------------------------------

class JournalException(Exception):
    """Base class for all application-level errors."""
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class FieldValidationError(JournalException):
    """A required field is missing or malformed (raised outside pydantic)."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "VALIDATION_ERROR"

    def __init__(self, field: str, message: str):
        super().__init__(
            message=message,
            details={"errors": [{"field": field, "message": message, "type": "value_error"}]},
        )
        self.field = field


class LogNotFoundError(JournalException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "LOG_NOT_FOUND"

    def __init__(self, log_id: int):
        super().__init__(
            message=f"Impulse log {log_id} not found.",
            details={"id": log_id},
        )


class ReportNotFoundError(JournalException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "REPORT_NOT_FOUND"

    def __init__(self, report_id: int):
        super().__init__(
            message=f"Report {report_id} not found.",
            details={"id": report_id},
        )


class InsufficientDataError(JournalException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INSUFFICIENT_DATA"

    def __init__(self, start: Any = None, end: Any = None):
        details = {}
        if start is not None and end is not None:
            details = {"window_start": str(start), "window_end": str(end)}
        super().__init__(
            message="Not enough impulse logs in the window to generate a report.",
            details=details,
        )


class ServiceUnavailableError(JournalException):
    """The completion service could not be reached or returned an error. Safe to retry."""
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str = "The AI service is temporarily unavailable.", reason: str | None = None):
        super().__init__(
            message=message,
            details={"reason": reason} if reason else {},
        )


class StorageError(JournalException):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "STORAGE_ERROR"

    def __init__(self, operation: str):
        super().__init__(
            message=f"Storage failure during {operation}.",
            details={"operation": operation},
        )


class AuthenticationError(JournalException):
    http_status = status.HTTP_401_UNAUTHORIZED
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Invalid or expired authentication token."):
        super().__init__(message=message)


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def journal_exception_handler(request: Request, exc: JournalException) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
        headers=headers,
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return structured 422 with machine-readable field errors."""
    field_errors = []
    for error in exc.errors():
        field_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"] if loc != "body"),
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": {"errors": field_errors},
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
