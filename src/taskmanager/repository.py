"""SQLite-backed repository for tasks."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from dataclasses import replace
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite

from .tasks.models import Task, TaskStatus

logger = logging.getLogger(__name__)

_SQLITE_MIN_INTEGER = -(2**63)
_SQLITE_MAX_INTEGER = 2**63 - 1


def _fits_sqlite_integer(value: int) -> bool:
    # Larger ids cannot be bound as parameters, so no row can carry them
    return _SQLITE_MIN_INTEGER <= value <= _SQLITE_MAX_INTEGER


class TaskRepository:
    """Persist and retrieve tasks from SQLite.

    The connection runs in autocommit mode; statements are grouped with
    :meth:`transaction`, which serializes access to the shared connection.
    Identifiers come from an ``AUTOINCREMENT`` sequence and are never reused.
    """

    def __init__(self, database_path: Path):
        self._path = database_path
        self._connection: aiosqlite.Connection | None = None
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        """Open the SQLite connection and ensure tables exist."""

        if self._connection is not None:
            return

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._path, isolation_level=None)
        self._connection.row_factory = aiosqlite.Row
        await self._connection.execute("PRAGMA journal_mode=WAL;")
        await self._create_schema()
        logger.info("Task repository ready at %s", self._path)

    async def _create_schema(self) -> None:
        assert self._connection is not None
        await self._connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS tasks (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT,
                status TEXT NOT NULL DEFAULT 'TODO'
            );

            CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);
            """
        )

    async def close(self) -> None:
        """Close the database connection."""
        if self._connection is not None:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("TaskRepository.initialize() has not been called")
        return self._connection

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["TaskRepository"]:
        """Run the enclosed store calls as one SQLite transaction.

        Commits on normal exit, rolls back when the block raises, and always
        releases the connection lock.
        """

        connection = self._require_connection()
        async with self._lock:
            await connection.execute("BEGIN IMMEDIATE")
            try:
                yield self
            except BaseException:
                await connection.execute("ROLLBACK")
                raise
            else:
                try:
                    await connection.execute("COMMIT")
                except BaseException:
                    # A failed COMMIT leaves the transaction open
                    await connection.execute("ROLLBACK")
                    raise

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """Convert a database row to a Task object."""
        return Task(
            id=row["id"],
            title=row["title"],
            description=row["description"],
            status=TaskStatus(row["status"]),
        )

    async def save(self, task: Task) -> Task:
        """Insert a new task or overwrite an existing one.

        A task without an id receives the next value of the sequence; the
        returned object carries it while the argument is left unchanged.
        """

        connection = self._require_connection()

        if not task.is_persisted:
            cursor = await connection.execute(
                """
                INSERT INTO tasks (title, description, status)
                VALUES (?, ?, ?)
                """,
                (task.title, task.description, task.status.value),
            )
            task_id = cursor.lastrowid
            await cursor.close()
            return replace(task, id=task_id)

        await connection.execute(
            """
            INSERT INTO tasks (id, title, description, status)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                title = excluded.title,
                description = excluded.description,
                status = excluded.status
            """,
            (task.id, task.title, task.description, task.status.value),
        )
        return replace(task)

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """Retrieve a single task by ID."""
        connection = self._require_connection()
        if not _fits_sqlite_integer(task_id):
            return None

        cursor = await connection.execute(
            "SELECT * FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        await cursor.close()

        if row is None:
            return None
        return self._row_to_task(row)

    async def find_all(self) -> list[Task]:
        """Retrieve every stored task."""
        connection = self._require_connection()

        cursor = await connection.execute("SELECT * FROM tasks")
        rows = await cursor.fetchall()
        await cursor.close()

        return [self._row_to_task(row) for row in rows]

    async def exists_by_id(self, task_id: int) -> bool:
        connection = self._require_connection()
        if not _fits_sqlite_integer(task_id):
            return False

        cursor = await connection.execute(
            "SELECT 1 FROM tasks WHERE id = ? LIMIT 1",
            (task_id,),
        )
        row = await cursor.fetchone()
        await cursor.close()
        return row is not None

    async def delete_by_id(self, task_id: int) -> None:
        connection = self._require_connection()

        cursor = await connection.execute(
            "DELETE FROM tasks WHERE id = ?",
            (task_id,),
        )
        await cursor.close()


__all__ = ["TaskRepository"]
