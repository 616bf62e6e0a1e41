"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from taskmanager.core.config import Settings
from taskmanager.core.dependencies import get_task_repository
from taskmanager.main import create_app
from taskmanager.repositories.memory_task_repository import InMemoryTaskRepository

SQLITE_MEMORY_URL = "sqlite+aiosqlite://"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests, no external deps")
    config.addinivalue_line("markers", "db: runs against an in-memory sqlite database")


@pytest.fixture
def memory_repository():
    return InMemoryTaskRepository()


@pytest.fixture
def client(memory_repository):
    """
    TestClient over an app whose task store is an in-memory repository.

    The lifespan is not entered, so no database connection is attempted.
    """
    app = create_app(Settings(DATABASE_URL="memory://"))
    app.dependency_overrides[get_task_repository] = lambda: memory_repository
    return TestClient(app)
