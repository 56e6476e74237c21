"""Request and response schemas for the task endpoints.

Request models deliberately accept a missing ``title`` or ``status`` so that
the task service, not request parsing, decides whether the input is valid
and reports it with the same field/message mapping.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ..tasks.models import TaskStatus


class CreateTaskRequest(BaseModel):
    """Request body for creating a task. Any ``status`` sent is ignored."""

    title: Optional[str] = Field(default=None, description="Task title (required)")
    description: Optional[str] = Field(default=None, description="Free-form details")


class UpdateTaskRequest(BaseModel):
    """Request body for replacing a task."""

    title: Optional[str] = Field(default=None, description="Task title (required)")
    description: Optional[str] = Field(
        default=None,
        description="Replaces the stored description; omit to clear it",
    )
    status: Optional[TaskStatus] = Field(
        default=None,
        description="New status; omit to keep the current one",
    )


class UpdateTaskStatusRequest(BaseModel):
    """Request body for changing only the status of a task."""

    status: Optional[TaskStatus] = Field(default=None, description="New status (required)")


class TaskResponse(BaseModel):
    """Serialized task."""

    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus


class ErrorResponse(BaseModel):
    """Body returned for not-found and unexpected failures."""

    message: str
    status: int
    timestamp: datetime


class ValidationErrorResponse(ErrorResponse):
    """Body returned when one or more fields fail validation."""

    errors: dict[str, str] = Field(default_factory=dict)


__all__ = [
    "CreateTaskRequest",
    "UpdateTaskRequest",
    "UpdateTaskStatusRequest",
    "TaskResponse",
    "ErrorResponse",
    "ValidationErrorResponse",
]
