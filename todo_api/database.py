"""
Todo API - Database Module

SQLite connection management using SQLAlchemy's async engine (aiosqlite).
Table definitions for users and todos live here; the schema is applied
when the application starts.
"""

import logging
from datetime import datetime, timezone
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
    event,
)
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class TodoRecord(Base):
    __tablename__ = "todos"

    id = Column(String(36), primary_key=True)
    owner_id = Column(String(36), ForeignKey("users.id"), index=True, nullable=False)
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    completed = Column(Boolean, nullable=False, default=False)
    deadline = Column(String(100), nullable=True)
    priority = Column(String(20), nullable=False, default="Medium")
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with foreign key enforcement switched off per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """SQLite database connection manager."""

    def __init__(self, url: str):
        self.url = url
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def connect(self) -> None:
        """Create the engine and apply the schema."""
        connect_args = {}
        if self.url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        self.engine = create_async_engine(
            self.url, echo=False, connect_args=connect_args
        )
        if self.url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info(f"[Database] Connected and schema applied: {self.engine.url.database}")

    async def disconnect(self) -> None:
        """Dispose of the engine and its connection pool."""
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("[Database] Disconnected")

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get the session factory."""
        if self.session_factory is None:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.session_factory


async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency yielding one session per request."""
    database: Database = request.app.state.database
    async with database.get_session_factory()() as session:
        yield session
