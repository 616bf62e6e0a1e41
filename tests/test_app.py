"""
App lifecycle tests: the lifespan opens the store at startup and closes it at shutdown.
"""

import pytest
from fastapi.testclient import TestClient

from taskmanager.core.config import Settings
from taskmanager.errors import StoreError
from taskmanager.main import create_app

from tests.conftest import SQLITE_MEMORY_URL


def test_root_reports_name_and_version():
    app = create_app(Settings(DATABASE_URL="memory://", APP_NAME="Tasks", APP_VERSION="9.9.9"))
    response = TestClient(app).get("/")
    assert response.json() == {"name": "Tasks", "version": "9.9.9"}


def test_memory_store_lifespan_and_health():
    app = create_app(Settings(DATABASE_URL="memory://"))
    with TestClient(app) as client:
        health = client.get("/health").json()
        assert health["api_ok"] is True
        assert health["db_ok"] is True
        assert health["alembic_current"] is None

        created = client.post("/api/tasks", json={"title": "A", "description": "B"})
        assert created.status_code == 201
        assert len(client.get("/api/tasks").json()) == 1

    assert app.state.database is None


@pytest.mark.db
def test_sqlite_end_to_end_with_auto_created_schema():
    app = create_app(Settings(DATABASE_URL=SQLITE_MEMORY_URL, AUTO_CREATE_SCHEMA=True))
    with TestClient(app) as client:
        assert client.get("/health").json()["db_ok"] is True

        created = client.post("/api/tasks", json={"title": "A", "description": "B"}).json()
        assert created["status"] == "pending"

        updated = client.put(f"/api/tasks/{created['id']}", json={"status": "completed"}).json()
        assert updated["status"] == "completed"
        assert updated["title"] == "A"
        assert updated["createdAt"] == created["createdAt"]

        listed = client.get("/api/tasks").json()
        assert [t["id"] for t in listed] == [created["id"]]

        deleted = client.delete(f"/api/tasks/{created['id']}")
        assert deleted.json() == {"message": "Task deleted successfully", "taskId": created["id"]}
        assert client.delete(f"/api/tasks/{created['id']}").status_code == 404

        database = app.state.database
        assert database.is_connected

    assert database.is_connected is False


def test_startup_fails_fast_when_database_unreachable(tmp_path):
    url = f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'tasks.db'}"
    app = create_app(Settings(DATABASE_URL=url))
    with pytest.raises(StoreError):
        with TestClient(app):
            pass


def test_mongodb_url_variable_is_not_read(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("MONGODBURL", "mongodb://localhost:27017/taskmanager")

    assert Settings(_env_file=None).DATABASE_URL.startswith("postgresql+asyncpg://")


def test_store_error_outside_a_route_is_500():
    # lifespan not entered, so neither a memory repository nor a database is set up
    app = create_app(Settings(DATABASE_URL=SQLITE_MEMORY_URL))
    app.state.database = None

    response = TestClient(app).get("/api/tasks")
    assert response.status_code == 500
    assert response.json() == {"message": "Database is not configured", "code": "store_error"}
