from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Request, status

from ..schemas import ErrorEnvelope, TaskCreate, TaskEnvelope, TaskListEnvelope, TaskOut
from ..services import TaskService
from ..utils import success_envelope

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)

# largest value a SQLite INTEGER column holds
MAX_TASK_ID = 2**63 - 1

_ERROR_RESPONSES = {
    500: {"model": ErrorEnvelope, "description": "Unexpected server or storage error"},
}


def get_task_service(request: Request) -> TaskService:
    """
    Dependency returning the TaskService built by create_app.
    Tests may swap it through app.dependency_overrides.
    """
    return request.app.state.task_service


def get_recent_tasks_limit(request: Request) -> int:
    """Dependency returning the configured size of the recent tasks window."""
    return request.app.state.settings.recent_tasks_limit


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new incomplete task and return it.",
    responses={
        201: {"description": "Task created successfully"},
        400: {"model": ErrorEnvelope, "description": "Validation error"},
        **_ERROR_RESPONSES,
    },
)
def create_task(
    payload: Optional[TaskCreate] = Body(None),
    service: TaskService = Depends(get_task_service),
) -> TaskEnvelope:
    """
    Create a task. A missing body is treated like a missing title.
    """
    body = payload or TaskCreate()
    created = service.create_task(body.title, body.description)
    return TaskEnvelope(**success_envelope(TaskOut(**created)))


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=TaskListEnvelope,
    summary="List Recent Tasks",
    description=(
        "Return the most recently created incomplete tasks (newest first) together with "
        "totalCount, the number of all incomplete tasks."
    ),
    responses={
        200: {"description": "Recent tasks retrieved successfully"},
        **_ERROR_RESPONSES,
    },
)
def list_recent_tasks(
    service: TaskService = Depends(get_task_service),
    limit: int = Depends(get_recent_tasks_limit),
) -> TaskListEnvelope:
    """
    List the recent tasks window.
    """
    recent = service.get_recent_tasks(limit)
    envelope = success_envelope(
        [TaskOut(**t) for t in recent.tasks],
        totalCount=recent.total_count,
    )
    return TaskListEnvelope(**envelope)


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/complete",
    response_model=TaskEnvelope,
    summary="Complete Task",
    description="Mark an incomplete task as completed. Completing a task twice is rejected.",
    responses={
        200: {"description": "Task completed"},
        400: {"model": ErrorEnvelope, "description": "Task is already completed"},
        404: {"model": ErrorEnvelope, "description": "Task not found"},
        **_ERROR_RESPONSES,
    },
)
def complete_task(
    task_id: int = Path(..., ge=1, le=MAX_TASK_ID, description="Id of the task to complete"),
    service: TaskService = Depends(get_task_service),
) -> TaskEnvelope:
    """
    Complete a single task by its ID.
    """
    updated = service.complete_task(task_id)
    return TaskEnvelope(**success_envelope(TaskOut(**updated)))
