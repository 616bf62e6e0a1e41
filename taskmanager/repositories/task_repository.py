"""
Task repository - database operations for Task.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Mapping, Optional
from uuid import UUID

from sqlalchemy import select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager.errors import StoreError
from taskmanager.models.task import Task
from taskmanager.schemas.task import TaskRead, TaskStatus


class SqlTaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _translate_errors(self) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StoreError(str(getattr(exc, "orig", None) or exc)) from exc

    async def list(self) -> List[TaskRead]:
        """List all tasks, newest first."""
        async with self._translate_errors():
            result = await self.db.execute(select(Task).order_by(Task.created_at.desc()))
            return [TaskRead.model_validate(task) for task in result.scalars().all()]

    async def get_by_id(self, task_id: UUID) -> Optional[TaskRead]:
        """Get a task by ID."""
        async with self._translate_errors():
            task = await self.db.get(Task, task_id)
        return TaskRead.model_validate(task) if task else None

    async def create(self, title: str, description: str) -> TaskRead:
        """Create a new task."""
        async with self._translate_errors():
            task = Task(
                title=title,
                description=description,
                status=TaskStatus.PENDING.value,
            )
            self.db.add(task)
            await self.db.commit()
            await self.db.refresh(task)
            return TaskRead.model_validate(task)

    async def update(self, task_id: UUID, changes: Mapping[str, Any]) -> Optional[TaskRead]:
        """Update a task in place."""
        async with self._translate_errors():
            task = await self.db.get(Task, task_id)
            if not task:
                return None

            for field, value in changes.items():
                setattr(task, field, value)

            await self.db.commit()
            await self.db.refresh(task)
            return TaskRead.model_validate(task)

    async def delete(self, task_id: UUID) -> bool:
        """Delete a task."""
        async with self._translate_errors():
            task = await self.db.get(Task, task_id)
            if not task:
                return False

            await self.db.delete(task)
            await self.db.commit()
            return True

    async def ping(self) -> bool:
        try:
            await self.db.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False
