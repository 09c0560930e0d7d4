"""Task management routes."""

from datetime import datetime
from typing import Annotated, Optional, Sequence

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, ConfigDict

from ...domain.models import Task
from ...services.task_service import TaskService
from ...container import get_container

router = APIRouter(prefix="/tasks", tags=["tasks"])

TaskIdPath = Annotated[int, Path(ge=1, le=2**64 - 1, description="Task ID")]


class TaskResponse(BaseModel):
    """Task response model."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    description: str
    completed: bool
    created_at: datetime
    updated_at: datetime


class TaskCreateRequest(BaseModel):
    """Task creation request model."""

    description: str


class TaskUpdateRequest(BaseModel):
    """Task update request model."""

    description: Optional[str] = None
    completed: Optional[bool] = None


def get_task_service() -> TaskService:
    """Get TaskService from container."""
    container = get_container()
    return container.task_service


def task_to_response(task: Task) -> TaskResponse:
    """Convert Task to TaskResponse."""
    return TaskResponse(
        id=task.id,
        description=task.description,
        completed=task.completed,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def tasks_to_response(tasks: Sequence[Task]) -> list[TaskResponse]:
    return [task_to_response(t) for t in tasks]


# Static routes must come before dynamic routes
@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    completed: Optional[bool] = Query(None, description="Filter by completion state"),
) -> list[TaskResponse]:
    """List all tasks, optionally filtered by completion state."""
    service = get_task_service()
    if completed is None:
        tasks = await service.get_all_tasks()
    else:
        tasks = await service.get_tasks_by_status(completed)
    return tasks_to_response(tasks)


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(request: TaskCreateRequest) -> TaskResponse:
    """Create a new task."""
    service = get_task_service()
    task = await service.create_task(request.description)
    return task_to_response(task)


@router.get("/completed", response_model=list[TaskResponse])
async def list_completed_tasks() -> list[TaskResponse]:
    """List completed tasks."""
    service = get_task_service()
    return tasks_to_response(await service.get_completed_tasks())


@router.get("/pending", response_model=list[TaskResponse])
async def list_pending_tasks() -> list[TaskResponse]:
    """List pending tasks."""
    service = get_task_service()
    return tasks_to_response(await service.get_pending_tasks())


@router.get("/search", response_model=list[TaskResponse])
async def search_tasks(
    q: Optional[str] = Query(None, description="Case-insensitive text to look for"),
) -> list[TaskResponse]:
    """Search tasks by description."""
    service = get_task_service()
    return tasks_to_response(await service.search_tasks(q or ""))


# Dynamic routes must come after static routes
@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: TaskIdPath) -> TaskResponse:
    """Get task by ID."""
    service = get_task_service()
    task = await service.get_task_by_id(task_id)
    return task_to_response(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    request: TaskUpdateRequest, task_id: TaskIdPath
) -> TaskResponse:
    """Update an existing task."""
    service = get_task_service()
    task = await service.update_task(
        task_id,
        description=request.description,
        completed=request.completed,
    )
    return task_to_response(task)


@router.delete("/{task_id}", status_code=204)
async def delete_task(task_id: TaskIdPath) -> None:
    """Delete a task."""
    service = get_task_service()
    await service.delete_task(task_id)


@router.put("/{task_id}/complete", response_model=TaskResponse)
async def complete_task(task_id: TaskIdPath) -> TaskResponse:
    """Mark a task as completed."""
    service = get_task_service()
    return task_to_response(await service.complete_task(task_id))


@router.put("/{task_id}/uncomplete", response_model=TaskResponse)
async def uncomplete_task(task_id: TaskIdPath) -> TaskResponse:
    """Mark a task as pending."""
    service = get_task_service()
    return task_to_response(await service.uncomplete_task(task_id))
