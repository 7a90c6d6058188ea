"""
Custom exception hierarchy for HabitLab.

Rule: every HTTP error has a machine-readable `code` string so clients
can branch on it without parsing English messages.
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

class HabitLabException(Exception):
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


class HabitValidationError(HabitLabException):
    """A habit draft or frequency that cannot be scheduled."""
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "HABIT_VALIDATION_FAILED"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message=message,
            details={"field": field} if field else {},
        )


class PersistenceError(HabitLabException):
    http_status = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "PERSISTENCE_ERROR"

    def __init__(self, message: str, key: str | None = None):
        super().__init__(
            message=message,
            details={"key": key} if key else {},
        )


class HabitNotFoundError(HabitLabException):
    http_status = status.HTTP_404_NOT_FOUND
    code = "HABIT_NOT_FOUND"

    def __init__(self, habit_id: str):
        super().__init__(
            message=f"Habit {habit_id} does not exist.",
            details={"habit_id": habit_id},
        )


class StatsValidationError(HabitLabException):
    http_status = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "INVALID_STAT_VALUE"

    def __init__(self, stat: str, value: Any):
        super().__init__(
            message=f"Invalid value for {stat}: {value!r}.",
            details={"stat": stat, "value": value},
        )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

async def habitlab_exception_handler(request: Request, exc: HabitLabException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.http_status,
        content=exc.to_dict(),
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
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred.",
        },
    )
