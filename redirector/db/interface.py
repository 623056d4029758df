"""
Database Abstraction Interface

This module defines the database abstraction layer that allows switching between
different database backends (SQLite, PostgreSQL) without changing the
rest of the codebase.

Each adapter owns the pool and connection settings for its dialect; the
EventStore only ever sees the resulting AsyncEngine.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import Pool


class DatabaseAdapter(ABC):
    """
    Abstract base class for database adapters.

    To add a new database backend:
    1. Create a new class inheriting from DatabaseAdapter
    2. Implement all abstract methods
    3. Register it in get_database_adapter()
    """

    def create_engine(self, database_url: str, **kwargs) -> AsyncEngine:
        """
        Create and configure the async database engine.

        Args:
            database_url: Connection string for the database
            **kwargs: Additional engine options (merged with adapter defaults)

        Returns:
            Configured AsyncEngine instance
        """
        engine_kwargs = self.get_engine_kwargs()
        engine_kwargs.update(kwargs)

        pool_class = self.get_pool_class()
        if pool_class is not None:
            engine_kwargs["poolclass"] = pool_class

        return create_async_engine(
            self.normalize_url(database_url),
            connect_args=self.get_connect_args(),
            **engine_kwargs
        )

    def normalize_url(self, database_url: str) -> str:
        return database_url

    @abstractmethod
    def get_pool_class(self) -> Optional[type[Pool]]:
        """
        Get the connection pool class for this database type.

        Returns:
            Pool class (e.g., NullPool for SQLite) or None to use the default
        """
        pass

    @abstractmethod
    def get_connect_args(self) -> dict[str, Any]:
        """Get connection arguments specific to this database type."""
        pass

    @abstractmethod
    def get_engine_kwargs(self) -> dict[str, Any]:
        """Get additional engine configuration specific to this database type."""
        pass

    @abstractmethod
    def get_dialect_name(self) -> str:
        """
        Get the SQLAlchemy dialect name for this database.

        Returns:
            Dialect name (e.g., 'sqlite', 'postgresql')
        """
        pass
