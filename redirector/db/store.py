"""
Event Store with Connection Pooling

This module wraps the append-only clicks table behind a small query
interface using SQLAlchemy's async engine.

Key Features:
- Database abstraction: SQLite by default, PostgreSQL in production
- Idempotent schema bootstrap on every startup
- Read failures are raised as DatabaseError for the admin surface
- Graceful close drains the connection pool
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from redirector.core.exceptions import DatabaseError
from redirector.core.setting import Settings
from redirector.db.interface import DatabaseAdapter
from redirector.db.models import ClickEvent
from redirector.db.postgres_adapter import PostgreSQLAdapter
from redirector.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger("redirector.db")


def get_database_adapter(settings: Settings) -> DatabaseAdapter:
    """
    Factory function to get the database adapter for the configured URL.

    Returns:
        SQLiteAdapter for sqlite URLs, PostgreSQLAdapter otherwise
    """
    if settings.DATABASE_URL.startswith("sqlite"):
        return SQLiteAdapter(connect_timeout=settings.DB_CONNECT_TIMEOUT)

    return PostgreSQLAdapter(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        connect_timeout=settings.DB_CONNECT_TIMEOUT,
        command_timeout=settings.DB_COMMAND_TIMEOUT,
        ssl=settings.DATABASE_SSL,
    )


class EventStore:
    """
    Append-only store of click events.

    Every call opens its own session from the pool, so the store can be
    shared by concurrent request handlers and detached logging tasks.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_maker = async_sessionmaker(
            engine,
            class_=SQLModelAsyncSession,
            expire_on_commit=False,  # Returned events stay readable after commit
            autoflush=False,
        )

    async def ensure_schema(self) -> None:
        """Create the clicks table and its indexes if they are missing."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all, tables=[ClickEvent.__table__])
        logger.info("Event store schema ready")

    async def append(self, event: ClickEvent) -> ClickEvent:
        """
        Insert a click event; the timestamp is set here unless supplied.

        Errors propagate to the caller untouched, the event logger decides
        what to do with them.
        """
        if event.ts is None:
            event.ts = datetime.now(timezone.utc)

        async with self.session_maker() as session:
            session.add(event)
            await session.commit()
        return event

    async def recent(self, limit: int) -> list[ClickEvent]:
        """Most recent events by insertion order, newest first."""
        statement = select(ClickEvent).order_by(ClickEvent.id.desc()).limit(limit)
        return await self._fetch(statement, "read recent clicks")

    async def for_day(self, day: date) -> list[ClickEvent]:
        """All events whose UTC timestamp falls on day, oldest insertion first."""
        start = datetime.combine(day, time.min, tzinfo=timezone.utc)
        end = start + timedelta(days=1)
        statement = (
            select(ClickEvent)
            .where(ClickEvent.ts >= start, ClickEvent.ts < end)
            .order_by(ClickEvent.id.asc())
        )
        return await self._fetch(statement, f"read clicks for {day.isoformat()}")

    async def count(self) -> int:
        statement = select(func.count()).select_from(ClickEvent)
        try:
            async with self.session_maker() as session:
                result = await session.execute(statement)
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise DatabaseError("count clicks", original_error=e) from e

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Event store connection pool closed")

    async def _fetch(self, statement, action: str) -> list[ClickEvent]:
        try:
            async with self.session_maker() as session:
                result = await session.execute(statement)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            raise DatabaseError(action, original_error=e) from e


def create_event_store(settings: Settings) -> Optional[EventStore]:
    """
    Build the event store for the configured DATABASE_URL.

    Returns:
        EventStore, or None when persistence is disabled (empty URL)
    """
    if not settings.DATABASE_URL:
        logger.warning("DATABASE_URL is empty; click events will not be persisted")
        return None

    adapter = get_database_adapter(settings)
    engine = adapter.create_engine(settings.DATABASE_URL)
    logger.info(f"Event store configured with {adapter.get_dialect_name()} backend")
    return EventStore(engine)
