import uuid
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from taskmanager.schemas.task import TaskCreate, TaskDeleted, TaskRead, TaskStatus, TaskUpdate

pytestmark = pytest.mark.unit


def test_status_toggles_both_ways():
    assert TaskStatus.PENDING.toggled() is TaskStatus.COMPLETED
    assert TaskStatus.COMPLETED.toggled() is TaskStatus.PENDING
    assert TaskStatus.PENDING.toggled().toggled() is TaskStatus.PENDING


def test_create_requires_title_and_description():
    with pytest.raises(ValidationError):
        TaskCreate(title="only a title")
    with pytest.raises(ValidationError):
        TaskCreate(description="only a description")


def test_create_accepts_empty_strings():
    data = TaskCreate(title="", description="")
    assert data.title == ""
    assert data.description == ""


def test_create_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        TaskCreate(title="A", description="B", status="completed")


def test_update_changes_only_include_supplied_fields():
    assert TaskUpdate().changes() == {}
    assert TaskUpdate(status="completed").changes() == {"status": "completed"}
    assert TaskUpdate.model_validate({"title": "New"}).changes() == {"title": "New"}


def test_update_keeps_empty_string_as_a_value():
    changes = TaskUpdate.model_validate({"description": ""}).changes()
    assert changes == {"description": ""}


def test_update_rejects_explicit_null():
    with pytest.raises(ValidationError):
        TaskUpdate.model_validate({"title": None})


@pytest.mark.parametrize("bad_status", ["", "done", "PENDING", 1])
def test_update_rejects_status_outside_domain(bad_status):
    with pytest.raises(ValidationError):
        TaskUpdate.model_validate({"status": bad_status})


def test_update_rejects_read_only_fields():
    with pytest.raises(ValidationError):
        TaskUpdate.model_validate({"id": str(uuid.uuid4())})
    with pytest.raises(ValidationError):
        TaskUpdate.model_validate({"createdAt": "2024-01-01T00:00:00Z"})


def test_read_serializes_created_at_as_camel_case():
    task = TaskRead(
        id=uuid.uuid4(),
        title="A",
        description="B",
        status=TaskStatus.PENDING,
        created_at=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
    )
    body = task.model_dump(mode="json", by_alias=True)
    assert set(body) == {"id", "title", "description", "status", "createdAt"}
    assert body["status"] == "pending"
    assert body["id"] == str(task.id)


def test_read_treats_naive_timestamps_as_utc():
    task = TaskRead(
        id=uuid.uuid4(),
        title="A",
        description="B",
        status="completed",
        created_at=datetime(2024, 5, 1, 12, 0),
    )
    assert task.created_at.tzinfo is not None
    assert task.created_at.utcoffset().total_seconds() == 0


def test_deleted_payload_shape():
    body = TaskDeleted(task_id="abc").model_dump(by_alias=True)
    assert body == {"message": "Task deleted successfully", "taskId": "abc"}
