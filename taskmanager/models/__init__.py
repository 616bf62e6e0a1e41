"""
Database models.

Import all models here so Alembic can detect them for migrations.
"""

from taskmanager.models.task import Task

__all__ = ["Task"]
