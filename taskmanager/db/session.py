"""
Database engine and session management.

The engine is process-wide state owned by a Database object. It is created
by connect() at startup (failing fast if the database is unreachable) and
released by disconnect() at shutdown. Each request gets its own AsyncSession.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from taskmanager.db.base import Base
from taskmanager.errors import StoreError

logger = logging.getLogger(__name__)


class Database:
    """Owns the async engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    def _engine_kwargs(self) -> dict:
        url = make_url(self.url)
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
        return {}

    async def connect(self) -> None:
        """Create the engine and verify the database answers."""
        if self.engine is not None:
            return

        engine: Optional[AsyncEngine] = None
        try:
            # bad URLs and missing async drivers fail here, before any I/O
            engine = create_async_engine(self.url, echo=self.echo, **self._engine_kwargs())
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            if engine is not None:
                await engine.dispose()
            logger.error("Database connection failed: %s", exc)
            raise StoreError(f"Could not connect to database: {exc}") from exc

        self.engine = engine
        self._session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keeps data accessible after commit
        )
        logger.info("Connected to database %s", make_url(self.url).render_as_string(hide_password=True))

    async def create_schema(self) -> None:
        """Create all tables directly (used for sqlite/dev instead of alembic)."""
        # Import models so they register on Base.metadata
        import taskmanager.models  # noqa: F401

        engine = self._require_engine()
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created")

    async def disconnect(self) -> None:
        """Dispose the engine; safe to call more than once."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._session_maker = None
        logger.info("Database connection closed")

    async def ping(self) -> bool:
        if self.engine is None:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session; rolled back if the block raises."""
        if self._session_maker is None:
            raise StoreError("Database is not connected")
        async with self._session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise StoreError("Database is not connected")
        return self.engine
