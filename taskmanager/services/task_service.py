"""
Task business logic service.

This is the task store contract: ids are validated before any lookup,
missing records raise NotFound, bad input raises ValidationError and
backend failures surface as StoreError. No retries.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union
from uuid import UUID

from taskmanager.errors import InvalidIdentifier, NotFound, ValidationError
from taskmanager.repositories.base import TaskRepository
from taskmanager.schemas.task import TaskRead, TaskStatus

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "description", "status")


def parse_task_id(raw_id: Union[str, UUID, None]) -> UUID:
    """Parse a task id, raising InvalidIdentifier if it is not a UUID."""
    if isinstance(raw_id, UUID):
        return raw_id
    if not isinstance(raw_id, str):
        raise InvalidIdentifier(raw_id)
    try:
        return UUID(raw_id.strip())
    except ValueError as exc:
        raise InvalidIdentifier(raw_id) from exc


def _validated_changes(fields: Mapping[str, Any]) -> Dict[str, Any]:
    unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown or read-only fields: {', '.join(unknown)}")

    changes: Dict[str, Any] = {}
    for name, value in fields.items():
        if value is None:
            raise ValidationError(f"{name} may not be null")
        if name == "status":
            try:
                value = TaskStatus(value).value
            except ValueError as exc:
                allowed = ", ".join(s.value for s in TaskStatus)
                raise ValidationError(f"status must be one of: {allowed}") from exc
        elif not isinstance(value, str):
            raise ValidationError(f"{name} must be a string")
        changes[name] = value
    return changes


class TaskService:
    """Service for task business logic."""

    def __init__(self, repository: TaskRepository):
        self.repository = repository

    async def list_tasks(self) -> List[TaskRead]:
        """List all tasks, newest first."""
        tasks = await self.repository.list()
        logger.debug("Listed %d tasks", len(tasks))
        return tasks

    async def get_task(self, task_id: Union[str, UUID]) -> TaskRead:
        """Get a task by ID."""
        parsed = parse_task_id(task_id)
        task = await self.repository.get_by_id(parsed)
        if task is None:
            raise NotFound(parsed)
        return task

    async def create_task(self, title: Optional[str], description: Optional[str]) -> TaskRead:
        """Create a new pending task. Empty strings are allowed, missing fields are not."""
        missing = [name for name, value in (("title", title), ("description", description)) if value is None]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

        task = await self.repository.create(title, description)
        logger.info("Created task %s", task.id)
        return task

    async def update_task(self, task_id: Union[str, UUID], fields: Mapping[str, Any]) -> TaskRead:
        """
        Apply a partial update.

        Only keys present in ``fields`` are written; a present key with an
        empty string overwrites the stored value. The record is looked up
        before the fields are checked, so an unknown id is NotFound whatever
        the body holds.
        """
        parsed = parse_task_id(task_id)
        if await self.repository.get_by_id(parsed) is None:
            raise NotFound(parsed)

        changes = _validated_changes(fields)
        task = await self.repository.update(parsed, changes)
        if task is None:
            raise NotFound(parsed)

        logger.info("Updated task %s fields=%s", parsed, sorted(changes))
        return task

    async def toggle_task_status(self, task_id: Union[str, UUID]) -> TaskRead:
        """Flip pending <-> completed."""
        task = await self.get_task(task_id)
        return await self.update_task(task.id, {"status": task.status.toggled().value})

    async def delete_task(self, task_id: Union[str, UUID]) -> str:
        """Delete a task and return its id."""
        parsed = parse_task_id(task_id)
        if await self.repository.get_by_id(parsed) is None:
            raise NotFound(parsed)

        if not await self.repository.delete(parsed):
            # removed by a concurrent request between the check and the delete
            raise NotFound(parsed)

        logger.info("Deleted task %s", parsed)
        return str(parsed)
