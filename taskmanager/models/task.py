"""
Task model.

Represents a task or to-do item in the system.
"""

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from taskmanager.db.base import Base
from taskmanager.schemas.task import TaskStatus
from taskmanager.utils.time import utc_now


class Task(Base):
    """
    Task table - a flat, self-contained to-do record.

    id and created_at are assigned once on insert and never updated.
    """

    __tablename__ = "task"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'completed')",
            name="ck_task_status",
        ),
        Index("ix_task_created_at", "created_at"),
    )

    # Primary key - UUID, assigned by the store
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=TaskStatus.PENDING.value,
    )

    # Set client-side so ordering is stable on every backend
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} status={self.status!r} title={self.title!r}>"
