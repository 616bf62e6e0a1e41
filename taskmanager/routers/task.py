"""
Task router - API endpoints for tasks.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from taskmanager.core.dependencies import get_task_service
from taskmanager.errors import AppError, InvalidIdentifier, NotFound, StoreError, TaskStoreError
from taskmanager.schemas.task import ErrorResponse, TaskCreate, TaskDeleted, TaskRead, TaskUpdate
from taskmanager.services.task_service import TaskService, parse_task_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])

_errors = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("", response_model=List[TaskRead], responses={500: _errors[500]})
async def list_tasks(service: TaskService = Depends(get_task_service)):
    """List all tasks, newest first."""
    try:
        return await service.list_tasks()
    except TaskStoreError as exc:
        raise AppError.from_store_error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc) from exc


@router.get("/{task_id}", response_model=TaskRead, responses=_errors)
async def get_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Get a task by ID."""
    try:
        return await service.get_task(task_id)
    except InvalidIdentifier as exc:
        raise AppError.from_store_error(status.HTTP_400_BAD_REQUEST, exc) from exc
    except NotFound as exc:
        raise AppError.from_store_error(status.HTTP_404_NOT_FOUND, exc) from exc
    except TaskStoreError as exc:
        raise AppError.from_store_error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc) from exc


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: _errors[400], 500: _errors[500]},
)
async def create_task(data: TaskCreate, service: TaskService = Depends(get_task_service)):
    """Create a new task. It always starts as pending."""
    try:
        return await service.create_task(data.title, data.description)
    except TaskStoreError as exc:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR if isinstance(exc, StoreError) else status.HTTP_400_BAD_REQUEST
        raise AppError.from_store_error(code, exc) from exc


@router.put("/{task_id}", response_model=TaskRead, responses=_errors)
async def update_task(task_id: str, data: TaskUpdate, service: TaskService = Depends(get_task_service)):
    """
    Update a task.

    Only the fields present in the body change. Toggling status is an
    update naming the other value.
    """
    try:
        return await service.update_task(task_id, data.changes())
    except NotFound as exc:
        raise AppError.from_store_error(status.HTTP_404_NOT_FOUND, exc) from exc
    except TaskStoreError as exc:
        raise AppError.from_store_error(status.HTTP_400_BAD_REQUEST, exc) from exc


@router.patch("/{task_id}/toggle", response_model=TaskRead, responses=_errors)
async def toggle_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Flip a task between pending and completed."""
    try:
        return await service.toggle_task_status(task_id)
    except NotFound as exc:
        raise AppError.from_store_error(status.HTTP_404_NOT_FOUND, exc) from exc
    except TaskStoreError as exc:
        raise AppError.from_store_error(status.HTTP_400_BAD_REQUEST, exc) from exc


@router.delete("/{task_id}", response_model=TaskDeleted, responses=_errors)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)):
    """Delete a task. Malformed ids are rejected before the store is queried."""
    try:
        parsed = parse_task_id(task_id)
    except InvalidIdentifier as exc:
        raise AppError.from_store_error(status.HTTP_400_BAD_REQUEST, exc) from exc

    try:
        deleted_id = await service.delete_task(parsed)
    except NotFound as exc:
        raise AppError.from_store_error(status.HTTP_404_NOT_FOUND, exc) from exc
    except Exception as exc:
        logger.exception("Delete task error for %s", task_id)
        raise AppError(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "delete_failed",
            "Error deleting task",
            {"error": str(exc)},
        ) from exc

    return TaskDeleted(task_id=deleted_id)
