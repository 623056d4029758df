"""
Database Models for the Redirector Service

This module defines the SQLModel schema for:
- ClickEvent: One append-only record per redirect that reached logging

Design Decisions:
- Rows are only ever appended, never updated or deleted
- Insertion order (id) is authoritative for "most recent" queries,
  timestamps may skew
- Indexes on ts for day exports and on slug for per-slug lookups
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Column, Field, SQLModel


class ClickEvent(SQLModel, table=True):
    """
    Click log table.

    Fields:
    - id: Auto-incrementing primary key assigned by the store
    - ts: When the event was inserted (UTC)
    - slug: Path segment of the redirect request, unvalidated
    - dest: Resolved destination actually redirected to
    - ip: First X-Forwarded-For hop or the peer address
    - ua: User agent, may be empty
    """
    __tablename__ = "clicks"

    id: Optional[int] = Field(default=None, primary_key=True)
    ts: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True)
    )
    slug: str = Field(sa_column=Column(Text, nullable=False, index=True))
    dest: str = Field(sa_column=Column(Text, nullable=False))
    ip: str = Field(default="", sa_column=Column(Text, nullable=False))
    ua: str = Field(default="", sa_column=Column(Text, nullable=False))
