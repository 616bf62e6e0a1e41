"""Task store exceptions and structured error helpers for API responses."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class TaskStoreError(Exception):
    """Base class for everything the task store can raise."""

    code = "task_store_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskStoreError):
    """Missing or malformed input fields."""

    code = "validation_error"


class InvalidIdentifier(TaskStoreError):
    """The id is not well-formed for the store's id scheme."""

    code = "invalid_id"

    def __init__(self, raw_id: Any):
        super().__init__("Invalid task ID")
        self.raw_id = raw_id


class NotFound(TaskStoreError):
    """Well-formed id, but no task carries it."""

    code = "not_found"

    def __init__(self, task_id: Any):
        super().__init__("Task not found")
        self.task_id = task_id


class StoreError(TaskStoreError):
    """The backing engine is unreachable or rejected the operation."""

    code = "store_error"


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"message": message, "code": code}
    if details is not None:
        payload["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = build_error_payload(code, message, details)

    @classmethod
    def from_store_error(cls, status_code: int, exc: TaskStoreError) -> "AppError":
        return cls(status_code, exc.code, exc.message)


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def request_validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    """Render body/query validation failures as 400 with a readable message."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.append({"field": loc, "message": error["msg"]})

    message = "; ".join(f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors)
    payload = build_error_payload(
        ValidationError.code,
        message or "Invalid request body",
        {"errors": errors},
    )
    return JSONResponse(status_code=400, content=payload)
