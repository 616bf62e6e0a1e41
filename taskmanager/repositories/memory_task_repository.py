from __future__ import annotations

import asyncio
import itertools
import uuid
from typing import Any, Dict, List, Mapping, Optional, Tuple

from taskmanager.schemas.task import TaskRead, TaskStatus
from taskmanager.utils.time import utc_now


class InMemoryTaskRepository:
    """
    In-process task store (DATABASE_URL=memory:// and tests).

    Records live in a dict keyed by id. The lock makes each operation
    see and write whole records; nothing survives a restart.
    """

    def __init__(self) -> None:
        self._tasks: Dict[uuid.UUID, TaskRead] = {}
        # insertion sequence breaks created_at ties so newest-first stays stable
        self._seq: Dict[uuid.UUID, int] = {}
        self._counter = itertools.count()
        self._lock = asyncio.Lock()

    def _sort_key(self, task: TaskRead) -> Tuple[Any, int]:
        return task.created_at, self._seq[task.id]

    async def list(self) -> List[TaskRead]:
        async with self._lock:
            ordered = sorted(self._tasks.values(), key=self._sort_key, reverse=True)
            return [task.model_copy() for task in ordered]

    async def get_by_id(self, task_id: uuid.UUID) -> Optional[TaskRead]:
        async with self._lock:
            task = self._tasks.get(task_id)
            return task.model_copy() if task is not None else None

    async def create(self, title: str, description: str) -> TaskRead:
        task = TaskRead(
            id=uuid.uuid4(),
            title=title,
            description=description,
            status=TaskStatus.PENDING,
            created_at=utc_now(),
        )
        async with self._lock:
            self._tasks[task.id] = task
            self._seq[task.id] = next(self._counter)
        return task.model_copy()

    async def update(self, task_id: uuid.UUID, changes: Mapping[str, Any]) -> Optional[TaskRead]:
        async with self._lock:
            current = self._tasks.get(task_id)
            if current is None:
                return None
            updated = TaskRead.model_validate({**current.model_dump(), **changes})
            self._tasks[task_id] = updated
            return updated.model_copy()

    async def delete(self, task_id: uuid.UUID) -> bool:
        async with self._lock:
            if self._tasks.pop(task_id, None) is None:
                return False
            self._seq.pop(task_id, None)
            return True

    async def ping(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._tasks)
