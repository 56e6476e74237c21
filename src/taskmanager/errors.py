"""Translate classified task failures into HTTP responses."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Mapping

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .schemas.tasks import ErrorResponse, ValidationErrorResponse
from .tasks.errors import ErrorKind, TaskServiceError, TaskValidationError

logger = logging.getLogger(__name__)

UNEXPECTED_MESSAGE = "An unexpected error occurred"
_LOCATION_PREFIXES = {"body", "path", "query", "header", "cookie"}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _validation_response(errors: Mapping[str, str]) -> JSONResponse:
    body = ValidationErrorResponse(
        message="Validation failed",
        status=400,
        timestamp=_now(),
        errors=dict(errors),
    )
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(message=message, status=status_code, timestamp=_now())
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _render_validation(exc: TaskServiceError) -> JSONResponse:
    errors = exc.errors if isinstance(exc, TaskValidationError) else {}
    return _validation_response(errors)


def _render_not_found(exc: TaskServiceError) -> JSONResponse:
    return _error_response(404, exc.message)


def _render_unexpected(exc: TaskServiceError) -> JSONResponse:
    return _error_response(500, UNEXPECTED_MESSAGE)


RENDERERS: dict[ErrorKind, Callable[[TaskServiceError], JSONResponse]] = {
    ErrorKind.VALIDATION: _render_validation,
    ErrorKind.NOT_FOUND: _render_not_found,
    ErrorKind.UNEXPECTED: _render_unexpected,
}


def field_errors_from_request(errors: list[dict[str, Any]]) -> dict[str, str]:
    """Flatten FastAPI request validation errors into ``{field: message}``."""

    flattened: dict[str, str] = {}
    for error in errors:
        parts = [
            str(part)
            for part in error.get("loc", ())
            if isinstance(part, str) and part not in _LOCATION_PREFIXES
        ]
        field = ".".join(parts) or "body"
        flattened.setdefault(field, error.get("msg", "Invalid value"))
    return flattened


async def handle_task_service_error(
    request: Request, exc: TaskServiceError
) -> JSONResponse:
    renderer = RENDERERS[exc.kind]
    return renderer(exc)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = field_errors_from_request(list(exc.errors()))
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, errors)
    return _validation_response(errors)


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error for %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return _error_response(500, UNEXPECTED_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the task error handlers to ``app``."""

    app.add_exception_handler(TaskServiceError, handle_task_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)


__all__ = [
    "RENDERERS",
    "UNEXPECTED_MESSAGE",
    "field_errors_from_request",
    "register_exception_handlers",
]
