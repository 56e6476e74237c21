"""Persistence contract the task service depends on."""

from __future__ import annotations

from typing import AsyncContextManager, Optional, Protocol

from .models import Task


class TaskStore(Protocol):
    """Durable keyed storage for task records.

    Implementations own identifier assignment: ``save`` assigns an id to a
    task that has none and overwrites the stored record otherwise.
    """

    def transaction(self) -> AsyncContextManager["TaskStore"]:
        """Return a scope that commits on exit and rolls back on error."""
        ...

    async def save(self, task: Task) -> Task: ...

    async def find_by_id(self, task_id: int) -> Optional[Task]: ...

    async def find_all(self) -> list[Task]: ...

    async def exists_by_id(self, task_id: int) -> bool: ...

    async def delete_by_id(self, task_id: int) -> None: ...


__all__ = ["TaskStore"]
