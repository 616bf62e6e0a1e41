"""
Task Pydantic schemas.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator

from taskmanager.utils.time import ensure_utc


class TaskStatus(str, Enum):
    """Two-valued completion flag. Both states are reachable from each other."""

    PENDING = "pending"
    COMPLETED = "completed"

    def toggled(self) -> "TaskStatus":
        if self is TaskStatus.PENDING:
            return TaskStatus.COMPLETED
        return TaskStatus.PENDING


class TaskCreate(BaseModel):
    """Schema for creating a new task. Status is always pending on create."""

    model_config = ConfigDict(extra="forbid")

    title: str
    description: str


class TaskUpdate(BaseModel):
    """
    Schema for updating a task. All fields optional.

    Only the fields present in the request body are applied, so an empty
    string is a real value and not "leave unchanged". Explicit nulls are
    rejected.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "TaskUpdate":
        for name in self.model_fields_set:
            if getattr(self, name) is None:
                raise ValueError(f"{name} may not be null")
        return self

    def changes(self) -> Dict[str, Any]:
        """Supplied fields only, with plain-string status."""
        return self.model_dump(mode="json", exclude_unset=True)


class TaskRead(BaseModel):
    """Schema for reading task data (API response)."""

    id: UUID
    title: str
    description: str
    status: TaskStatus
    created_at: datetime = Field(
        validation_alias=AliasChoices("created_at", "createdAt"),
        serialization_alias="createdAt",
    )

    # This tells Pydantic to work with SQLAlchemy models
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class TaskDeleted(BaseModel):
    """Confirmation returned by DELETE."""

    message: str = "Task deleted successfully"
    task_id: str = Field(
        validation_alias=AliasChoices("task_id", "taskId"),
        serialization_alias="taskId",
    )


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    message: str
    code: str
    details: Optional[Dict[str, Any]] = None
