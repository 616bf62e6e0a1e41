"""
Pydantic schemas for request/response validation.
"""

from taskmanager.schemas.task import (
    ErrorResponse,
    TaskCreate,
    TaskDeleted,
    TaskRead,
    TaskStatus,
    TaskUpdate,
)

__all__ = [
    "ErrorResponse",
    "TaskCreate",
    "TaskDeleted",
    "TaskRead",
    "TaskStatus",
    "TaskUpdate",
]
