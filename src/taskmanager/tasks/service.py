"""Service layer coordinating task lifecycle operations."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

from .errors import TaskNotFoundError, TaskServiceError, UnexpectedTaskError
from .models import Task, TaskStatus
from .store import TaskStore
from .validation import ensure_valid, validate_status, validate_title

logger = logging.getLogger(__name__)


class TaskService:
    """Enforce task invariants and orchestrate store calls.

    The service keeps no state between calls. Each operation runs inside a
    single store transaction so that existence checks and the writes that
    follow them observe the same snapshot.
    """

    def __init__(self, store: TaskStore):
        self._store = store

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[TaskStore]:
        try:
            async with self._store.transaction() as store:
                yield store
        except TaskServiceError:
            raise
        except Exception as exc:
            logger.exception("Task store operation failed")
            raise UnexpectedTaskError() from exc

    @staticmethod
    async def _require(store: TaskStore, task_id: int) -> Task:
        task = await store.find_by_id(task_id)
        if task is None:
            logger.debug("Task %s not found", task_id)
            raise TaskNotFoundError(task_id)
        return task

    async def create_task(self, title: Optional[str], description: Optional[str]) -> Task:
        """Persist a new task in the ``TODO`` state."""

        ensure_valid(validate_title(title))
        assert title is not None

        async with self._transaction() as store:
            task = await store.save(
                Task(title=title, description=description, status=TaskStatus.TODO)
            )
        logger.info("Created task %s", task.id)
        return task

    async def get_all_tasks(self) -> List[Task]:
        async with self._transaction() as store:
            return await store.find_all()

    async def get_task_by_id(self, task_id: int) -> Task:
        async with self._transaction() as store:
            return await self._require(store, task_id)

    async def update_task(
        self,
        task_id: int,
        title: Optional[str],
        description: Optional[str],
        status: Optional[TaskStatus] = None,
    ) -> Task:
        """Replace title and description, and status when one is supplied.

        ``description`` is always overwritten, so omitting it clears the
        stored value. An omitted ``status`` keeps the current one.
        """

        async with self._transaction() as store:
            task = await self._require(store, task_id)
            ensure_valid(validate_title(title))
            assert title is not None

            task.title = title
            task.description = description
            if status is not None:
                task.status = status
            updated = await store.save(task)
        logger.info("Updated task %s (status=%s)", task_id, updated.status.value)
        return updated

    async def update_task_status(
        self, task_id: int, status: Optional[TaskStatus]
    ) -> Task:
        """Move a task to ``status`` without touching its other fields."""

        async with self._transaction() as store:
            task = await self._require(store, task_id)
            ensure_valid(validate_status(status))
            assert status is not None

            task.status = status
            updated = await store.save(task)
        logger.info("Task %s moved to %s", task_id, status.value)
        return updated

    async def delete_task(self, task_id: int) -> None:
        async with self._transaction() as store:
            if not await store.exists_by_id(task_id):
                logger.debug("Task %s not found", task_id)
                raise TaskNotFoundError(task_id)
            await store.delete_by_id(task_id)
        logger.info("Deleted task %s", task_id)


__all__ = ["TaskService"]
