"""REST API endpoints for task management."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..schemas.tasks import (
    CreateTaskRequest,
    ErrorResponse,
    TaskResponse,
    UpdateTaskRequest,
    UpdateTaskStatusRequest,
    ValidationErrorResponse,
)
from ..tasks.service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])

_NOT_FOUND = {404: {"model": ErrorResponse}}
_INVALID = {400: {"model": ValidationErrorResponse}}


def get_task_service(request: Request) -> TaskService:
    """Get the task service from application state."""
    service = getattr(request.app.state, "task_service", None)
    if service is None:
        raise HTTPException(status_code=503, detail="Task service not available")
    return service


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_INVALID,
)
async def create_task(
    body: CreateTaskRequest,
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """Create a new task in the TODO state."""
    task = await service.create_task(body.title, body.description)
    return task.to_dict()


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    service: TaskService = Depends(get_task_service),
) -> list[dict[str, Any]]:
    """List all tasks."""
    tasks = await service.get_all_tasks()
    return [task.to_dict() for task in tasks]


@router.get("/{task_id}", response_model=TaskResponse, responses=_NOT_FOUND)
async def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """Get a specific task."""
    task = await service.get_task_by_id(task_id)
    return task.to_dict()


@router.put(
    "/{task_id}",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
async def update_task(
    task_id: int,
    body: UpdateTaskRequest,
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """Replace a task's title and description, and its status when given."""
    task = await service.update_task(
        task_id,
        body.title,
        body.description,
        body.status,
    )
    return task.to_dict()


@router.patch(
    "/{task_id}/status",
    response_model=TaskResponse,
    responses={**_NOT_FOUND, **_INVALID},
)
async def update_task_status(
    task_id: int,
    body: UpdateTaskStatusRequest,
    service: TaskService = Depends(get_task_service),
) -> dict[str, Any]:
    """Change only the status of a task."""
    task = await service.update_task_status(task_id, body.status)
    return task.to_dict()


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
async def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service),
) -> Response:
    """Delete a task permanently."""
    await service.delete_task(task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router", "get_task_service"]
