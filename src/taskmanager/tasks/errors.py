"""Classified failures raised by the task service."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional


class ErrorKind(str, Enum):
    """Failure categories the HTTP boundary knows how to render."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    UNEXPECTED = "unexpected"


class TaskServiceError(RuntimeError):
    """Base class for every failure the task service reports."""

    kind: ErrorKind = ErrorKind.UNEXPECTED

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TaskValidationError(TaskServiceError):
    """Raised when input fails one or more field-level constraints."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        errors: Mapping[str, str],
        message: str = "Validation failed",
    ):
        super().__init__(message)
        self.errors = dict(errors)


class TaskNotFoundError(TaskServiceError):
    """Raised when no task exists with the requested identifier."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, task_id: int, message: Optional[str] = None):
        super().__init__(message or f"Task not found with id: {task_id}")
        self.task_id = task_id


class UnexpectedTaskError(TaskServiceError):
    """Raised when the store fails or an unforeseen condition occurs."""

    kind = ErrorKind.UNEXPECTED

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)


__all__ = [
    "ErrorKind",
    "TaskServiceError",
    "TaskValidationError",
    "TaskNotFoundError",
    "UnexpectedTaskError",
]
