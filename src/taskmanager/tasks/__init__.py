"""Task domain package consolidating the task model and lifecycle logic."""

from .errors import (
    ErrorKind,
    TaskNotFoundError,
    TaskServiceError,
    TaskValidationError,
    UnexpectedTaskError,
)
from .models import Task, TaskStatus
from .service import TaskService
from .store import TaskStore

__all__ = [
    "Task",
    "TaskStatus",
    "TaskStore",
    "TaskService",
    "ErrorKind",
    "TaskServiceError",
    "TaskValidationError",
    "TaskNotFoundError",
    "UnexpectedTaskError",
]
