import logging
from typing import Any

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from skincare_ai.middleware.tracing import TRACE_ID_CTX_VAR

logger = logging.getLogger("skincare_ai")


class AppError(Exception):
    """Base class for errors the API answers with a typed envelope."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Invalid input"


class DuplicateEmail(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "User already exists"


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Insufficient role"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class StorageError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An unexpected error occurred"


def status_to_code(status_code: int) -> str:
    mapping = {
        400: "BAD_REQUEST",
        401: "UNAUTHORIZED",
        403: "FORBIDDEN",
        404: "NOT_FOUND",
        405: "METHOD_NOT_ALLOWED",
        409: "CONFLICT",
        422: "UNPROCESSABLE_ENTITY",
        429: "TOO_MANY_REQUESTS",
        500: "INTERNAL_SERVER_ERROR",
    }
    return mapping.get(status_code, f"HTTP_{status_code}")


def _envelope(status_code: int, message: str, details: Any = None, headers=None) -> JSONResponse:
    body = {"code": status_to_code(status_code), "message": message, "trace_id": TRACE_ID_CTX_VAR.get()}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def handle_app_error(request: Request, exc: AppError):
    if isinstance(exc, StorageError):
        # Internal detail stays in the log; the caller gets the generic message.
        logger.error(
            {"function": "handle_app_error", "path": str(request.url.path), "error": str(exc)},
            exc_info=exc,
        )
        return _envelope(exc.status_code, StorageError.default_message)
    return _envelope(exc.status_code, exc.message)


async def handle_http_exception(request: Request, exc: HTTPException):
    detail: Any = exc.detail
    message = detail if isinstance(detail, str) else "HTTP error"
    return _envelope(
        exc.status_code,
        message,
        details=None if isinstance(detail, str) else detail,
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_exception(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return _envelope(status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request", details=errors)


async def handle_unhandled_exception(request: Request, exc: Exception):
    logger.exception({"function": "unhandled_exception", "path": str(request.url.path)})
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred")
