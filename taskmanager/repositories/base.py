"""
Task repository interface.

TaskService only talks to this protocol, so the backing database can be
swapped without touching the service or the routes.
"""

from typing import Any, List, Mapping, Optional, Protocol
from uuid import UUID

from taskmanager.schemas.task import TaskRead


class TaskRepository(Protocol):
    """Persistence operations over Task records. Every write is committed before returning."""

    async def list(self) -> List[TaskRead]:
        """All tasks, newest first."""
        ...

    async def get_by_id(self, task_id: UUID) -> Optional[TaskRead]:
        ...

    async def create(self, title: str, description: str) -> TaskRead:
        ...

    async def update(self, task_id: UUID, changes: Mapping[str, Any]) -> Optional[TaskRead]:
        """Apply changes to an existing task; None if it does not exist."""
        ...

    async def delete(self, task_id: UUID) -> bool:
        """Remove a task; False if it did not exist."""
        ...

    async def ping(self) -> bool:
        ...
