"""
SQLite Database Adapter

This module implements the DatabaseAdapter interface for SQLite.
All SQLite-specific configuration and behavior is encapsulated here.

SQLite is a file-based database that's perfect for:
- Local development
- Testing
- Single-instance deployments
"""

from typing import Any

from sqlalchemy.pool import NullPool

from redirector.db.interface import DatabaseAdapter


class SQLiteAdapter(DatabaseAdapter):
    """
    SQLite database adapter implementation.

    SQLite uses file-based storage, so pooling buys nothing; every session
    opens its own short-lived connection.
    """

    def __init__(self, connect_timeout: float = 5.0):
        self.connect_timeout = connect_timeout

    def get_pool_class(self) -> type[NullPool]:
        return NullPool

    def get_connect_args(self) -> dict[str, Any]:
        """
        Get SQLite-specific connection arguments.

        timeout bounds how long a writer waits on the file lock.
        """
        return {
            "check_same_thread": False,
            "timeout": self.connect_timeout,
        }

    def get_engine_kwargs(self) -> dict[str, Any]:
        return {
            "echo": False  # Set to True only for SQL debugging in development
        }

    def get_dialect_name(self) -> str:
        return "sqlite"
