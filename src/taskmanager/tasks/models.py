"""Domain models representing tasks and their lifecycle states."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class TaskStatus(str, Enum):
    """Possible states for a task.

    Any state is reachable from any other; there is no transition graph.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


@dataclass(slots=True)
class Task:
    """Representation of a unit of work tracked by the service.

    ``id`` is ``None`` until the store assigns one on first save.
    """

    title: str
    status: TaskStatus = TaskStatus.TODO
    description: Optional[str] = None
    id: Optional[int] = None

    @property
    def is_persisted(self) -> bool:
        """Return True once the store has assigned an identifier."""

        return self.id is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "status": self.status.value,
        }


__all__ = ["Task", "TaskStatus"]
