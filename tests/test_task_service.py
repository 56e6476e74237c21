from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import pytest

from taskmanager.repository import TaskRepository
from taskmanager.tasks import (
    ErrorKind,
    Task,
    TaskNotFoundError,
    TaskService,
    TaskStatus,
    TaskValidationError,
    UnexpectedTaskError,
)


class RecordingStore:
    """Store double that records every call and fails on demand."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self._error = error

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["RecordingStore"]:
        self.calls.append("transaction")
        yield self

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self._error is not None:
            raise self._error

    async def save(self, task: Task) -> Task:
        self._record("save")
        return task

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        self._record("find_by_id")
        return None

    async def find_all(self) -> list[Task]:
        self._record("find_all")
        return []

    async def exists_by_id(self, task_id: int) -> bool:
        self._record("exists_by_id")
        return False

    async def delete_by_id(self, task_id: int) -> None:
        self._record("delete_by_id")


@pytest.fixture
async def repository(tmp_path):
    repo = TaskRepository(tmp_path / "tasks.db")
    await repo.initialize()
    try:
        yield repo
    finally:
        await repo.close()


@pytest.fixture
def service(repository) -> TaskService:
    return TaskService(repository)


@pytest.mark.anyio
async def test_create_task_starts_in_todo(service):
    task = await service.create_task("Test Task", "Test Description")

    assert task.id is not None
    assert task.title == "Test Task"
    assert task.description == "Test Description"
    assert task.status is TaskStatus.TODO


@pytest.mark.anyio
async def test_create_task_assigns_fresh_ids(service):
    first = await service.create_task("One", None)
    second = await service.create_task("Two", "")

    assert first.id != second.id
    assert second.description == ""


@pytest.mark.anyio
@pytest.mark.parametrize("title", [None, "", "   ", "\t\n"])
async def test_create_task_rejects_blank_title_before_store(title):
    store = RecordingStore()
    service = TaskService(store)

    with pytest.raises(TaskValidationError) as exc_info:
        await service.create_task(title, "desc")

    assert exc_info.value.errors == {"title": "Title must not be blank"}
    assert exc_info.value.kind is ErrorKind.VALIDATION
    assert store.calls == []


@pytest.mark.anyio
async def test_get_all_tasks(service):
    assert await service.get_all_tasks() == []

    await service.create_task("One", None)
    await service.create_task("Two", None)

    titles = sorted(task.title for task in await service.get_all_tasks())
    assert titles == ["One", "Two"]


@pytest.mark.anyio
async def test_get_task_by_id_missing(service):
    with pytest.raises(TaskNotFoundError) as exc_info:
        await service.get_task_by_id(999)

    assert exc_info.value.task_id == 999
    assert exc_info.value.message == "Task not found with id: 999"


@pytest.mark.anyio
async def test_update_task_without_status_preserves_it(service):
    created = await service.create_task("Old", "old description")
    await service.update_task_status(created.id, TaskStatus.IN_PROGRESS)

    updated = await service.update_task(created.id, "New", "new description")

    assert updated.title == "New"
    assert updated.description == "new description"
    assert updated.status is TaskStatus.IN_PROGRESS


@pytest.mark.anyio
@pytest.mark.parametrize("status", list(TaskStatus))
async def test_update_task_with_status_replaces_it(service, status):
    created = await service.create_task("Task", None)
    await service.update_task_status(created.id, TaskStatus.DONE)

    updated = await service.update_task(created.id, "Task", None, status)

    assert updated.status is status
    assert (await service.get_task_by_id(created.id)).status is status


@pytest.mark.anyio
async def test_update_task_clears_omitted_description(service):
    created = await service.create_task("Task", "something")

    updated = await service.update_task(created.id, "Task", None)

    assert updated.description is None
    assert (await service.get_task_by_id(created.id)).description is None


@pytest.mark.anyio
async def test_update_task_missing_is_checked_before_title(service):
    with pytest.raises(TaskNotFoundError):
        await service.update_task(999, "   ", None)


@pytest.mark.anyio
async def test_update_task_blank_title_leaves_record_untouched(service):
    created = await service.create_task("Keep me", "original")

    with pytest.raises(TaskValidationError) as exc_info:
        await service.update_task(created.id, "", "changed", TaskStatus.DONE)

    assert "title" in exc_info.value.errors
    stored = await service.get_task_by_id(created.id)
    assert stored.title == "Keep me"
    assert stored.description == "original"
    assert stored.status is TaskStatus.TODO


@pytest.mark.anyio
async def test_update_task_status_changes_only_status(service):
    created = await service.create_task("Test Task", "Test Description")

    updated = await service.update_task_status(created.id, TaskStatus.DONE)

    assert updated.status is TaskStatus.DONE
    assert updated.title == created.title
    assert updated.description == created.description


@pytest.mark.anyio
async def test_update_task_status_requires_status(service):
    created = await service.create_task("Task", None)

    with pytest.raises(TaskValidationError) as exc_info:
        await service.update_task_status(created.id, None)

    assert exc_info.value.errors == {"status": "Status must not be null"}


@pytest.mark.anyio
async def test_update_task_status_missing(service):
    with pytest.raises(TaskNotFoundError):
        await service.update_task_status(999, TaskStatus.DONE)


@pytest.mark.anyio
async def test_delete_task_then_lookup_and_delete_again_fail(service):
    created = await service.create_task("Short lived", None)

    await service.delete_task(created.id)

    with pytest.raises(TaskNotFoundError):
        await service.get_task_by_id(created.id)
    with pytest.raises(TaskNotFoundError):
        await service.delete_task(created.id)


@pytest.mark.anyio
async def test_delete_task_missing_never_calls_store_delete():
    store = RecordingStore()
    service = TaskService(store)

    with pytest.raises(TaskNotFoundError):
        await service.delete_task(42)

    assert "exists_by_id" in store.calls
    assert "delete_by_id" not in store.calls


@pytest.mark.anyio
async def test_store_failure_surfaces_as_unexpected_error():
    failure = OSError("disk on fire")
    service = TaskService(RecordingStore(error=failure))

    with pytest.raises(UnexpectedTaskError) as exc_info:
        await service.get_all_tasks()

    assert exc_info.value.kind is ErrorKind.UNEXPECTED
    assert exc_info.value.__cause__ is failure
    assert "disk on fire" not in exc_info.value.message
