from taskmanager.repositories.base import TaskRepository
from taskmanager.repositories.memory_task_repository import InMemoryTaskRepository
from taskmanager.repositories.task_repository import SqlTaskRepository

__all__ = ["InMemoryTaskRepository", "SqlTaskRepository", "TaskRepository"]
