"""
FastAPI dependencies for the application.
"""

from typing import AsyncGenerator

from fastapi import Depends, Request

from taskmanager.errors import StoreError
from taskmanager.repositories.base import TaskRepository
from taskmanager.repositories.task_repository import SqlTaskRepository
from taskmanager.services.task_service import TaskService


async def get_task_repository(request: Request) -> AsyncGenerator[TaskRepository, None]:
    """
    Provide the task repository for one request.

    memory:// deployments share a single in-process repository; otherwise
    each request gets its own database session, closed when the request ends.
    """
    memory_repository = getattr(request.app.state, "memory_repository", None)
    if memory_repository is not None:
        yield memory_repository
        return

    database = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreError("Database is not configured")

    async with database.session() as session:
        yield SqlTaskRepository(session)


def get_task_service(repository: TaskRepository = Depends(get_task_repository)) -> TaskService:
    """Dependency to get the task service."""
    return TaskService(repository)
