"""
Database module with abstraction layer.

This module provides:
- DatabaseAdapter interface: Abstract base class for database implementations
- SQLiteAdapter / PostgreSQLAdapter: Dialect-specific engine configuration
- EventStore: Append-only click event store used by the logger and admin API

To add a new database backend:
1. Create a new adapter class inheriting from DatabaseAdapter
2. Implement all abstract methods
3. Return it from get_database_adapter() in store.py
"""

from redirector.db.interface import DatabaseAdapter
from redirector.db.models import ClickEvent
from redirector.db.store import EventStore, create_event_store, get_database_adapter

__all__ = [
    "ClickEvent",
    "DatabaseAdapter",
    "EventStore",
    "create_event_store",
    "get_database_adapter",
]
