"""
PostgreSQL Database Adapter

This module implements the DatabaseAdapter interface for PostgreSQL via
asyncpg, the production backend.

The pool is bounded (pool_size + max_overflow) and every wait is timed:
acquiring a pooled connection, opening a new one and running a statement.
A slow or unreachable database therefore fails fast instead of piling up
redirect-side logging tasks.
"""

from typing import Any, Optional

from redirector.db.interface import DatabaseAdapter

_URL_PREFIXES = (
    ("postgres://", "postgresql+asyncpg://"),
    ("postgresql://", "postgresql+asyncpg://"),
)


class PostgreSQLAdapter(DatabaseAdapter):
    """PostgreSQL database adapter implementation."""

    def __init__(
        self,
        pool_size: int = 5,
        max_overflow: int = 5,
        pool_timeout: float = 5.0,
        pool_recycle: int = 300,
        connect_timeout: float = 5.0,
        command_timeout: float = 10.0,
        ssl: bool = False,
    ):
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.connect_timeout = connect_timeout
        self.command_timeout = command_timeout
        self.ssl = ssl

    def normalize_url(self, database_url: str) -> str:
        """Route plain postgres:// URLs (as issued by most hosts) to asyncpg."""
        for prefix, replacement in _URL_PREFIXES:
            if database_url.startswith(prefix):
                return replacement + database_url[len(prefix):]
        return database_url

    def get_pool_class(self) -> Optional[type]:
        # AsyncAdaptedQueuePool, SQLAlchemy's default for async engines
        return None

    def get_connect_args(self) -> dict[str, Any]:
        connect_args: dict[str, Any] = {
            "timeout": self.connect_timeout,
            "command_timeout": self.command_timeout,
        }
        if self.ssl:
            connect_args["ssl"] = "require"
        return connect_args

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False,
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,
        }

    def get_dialect_name(self) -> str:
        return "postgresql"
