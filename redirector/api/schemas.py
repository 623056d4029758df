"""
API Response Schemas

This module defines the Pydantic models for JSON responses.
Separated from endpoints to keep concerns separated and enable reuse.
"""

from typing import Optional

from pydantic import BaseModel, Field


class StatusResponse(BaseModel):
    """Response model for the status endpoint."""
    ok: bool
    ts: str = Field(..., description="Current server time, ISO 8601")
    clicks: int = Field(..., description="Total clicks recorded in the store")


class RecentClick(BaseModel):
    """One row of the admin recent-clicks view."""
    ts: Optional[str]
    slug: str
    dest: str


class KillSwitchResponse(BaseModel):
    """Response model for kill/unkill."""
    killed: bool


class AdminStateResponse(BaseModel):
    """Operator view of the process state."""
    killed: bool
    store: bool = Field(..., description="Whether click events are being persisted")
    pending_writes: int
