"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from taskmanager.core.config import Settings, get_settings
from taskmanager.core.logging_setup import setup_logging
from taskmanager.db.session import Database
from taskmanager.errors import (
    AppError,
    StoreError,
    TaskStoreError,
    app_error_handler,
    build_error_payload,
    request_validation_error_handler,
)
from taskmanager.repositories.memory_task_repository import InMemoryTaskRepository
from taskmanager.routers import health, task

logger = logging.getLogger(__name__)


async def task_store_error_handler(_: Request, exc: TaskStoreError) -> JSONResponse:
    """Fallback for store errors that escape a route (e.g. raised while opening a session)."""
    status_code = 500 if isinstance(exc, StoreError) else 400
    return JSONResponse(status_code=status_code, content=build_error_payload(exc.code, exc.message))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: open the task store (fail fast if the database is down).
        Shutdown: release the connection pool.
        """
        logger.info("Starting %s...", settings.APP_NAME)

        database: Optional[Database] = None
        if settings.uses_memory_store:
            app.state.memory_repository = InMemoryTaskRepository()
            logger.info("Using in-memory task store")
        else:
            database = Database(settings.DATABASE_URL, echo=settings.DEBUG)
            await database.connect()
            if settings.AUTO_CREATE_SCHEMA:
                await database.create_schema()
        app.state.database = database

        yield  # The server runs while we're "yielded" here

        logger.info("Shutting down %s...", settings.APP_NAME)
        if database is not None:
            await database.disconnect()

    app = FastAPI(
        title=settings.APP_NAME,
        description="CRUD API for tasks",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(TaskStoreError, task_store_error_handler)

    # Include routers (API endpoints)
    app.include_router(health.router, tags=["Health"])
    app.include_router(task.router)

    @app.get("/")
    async def root():
        """Service name and version."""
        return {"name": settings.APP_NAME, "version": settings.APP_VERSION}

    return app


setup_logging(get_settings().LOG_LEVEL, debug=get_settings().DEBUG)

# Create the FastAPI application
app = create_app()
