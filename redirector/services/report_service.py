"""
Reporting Service

This service backs the admin endpoints: recent clicks and CSV exports.

Design Decisions:
- Store errors propagate (as DatabaseError) so operators see them
- A missing store raises ServiceUnavailableError rather than returning
  an empty report that would look like "no traffic"
"""

import csv
import io
from datetime import date, datetime, timezone
from typing import Optional

from redirector.core.exceptions import ServiceUnavailableError
from redirector.db.models import ClickEvent
from redirector.db.store import EventStore

RECENT_LIMIT = 5
EXPORT_LIMIT = 1000
DEST_DISPLAY_LENGTH = 200

CSV_COLUMNS = ["id", "ts", "slug", "dest", "ip", "ua"]


def format_ts(ts: Optional[datetime]) -> Optional[str]:
    """ISO 8601 in UTC; SQLite hands timestamps back without an offset."""
    if ts is None:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat()


def events_to_csv(events: list[ClickEvent]) -> str:
    """
    Encode events as CSV with a header row.

    Args:
        events: Click events in the order they should appear

    Returns:
        CSV text (all columns, timestamps in ISO 8601)
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for event in events:
        writer.writerow({
            "id": event.id,
            "ts": format_ts(event.ts) or "",
            "slug": event.slug,
            "dest": event.dest,
            "ip": event.ip,
            "ua": event.ua,
        })
    return buffer.getvalue()


class ReportService:
    """Read-only queries over recorded click events."""

    def __init__(self, store: Optional[EventStore]):
        self.store = store

    def _require_store(self) -> EventStore:
        if self.store is None:
            raise ServiceUnavailableError("event store")
        return self.store

    async def last(self, limit: int = RECENT_LIMIT) -> list[dict]:
        """
        Most recent events for display, newest first.

        Returns:
            List of dicts with ts (ISO 8601), slug and dest (truncated)
        """
        events = await self._require_store().recent(limit)
        return [
            {
                "ts": format_ts(event.ts),
                "slug": event.slug,
                "dest": event.dest[:DEST_DISPLAY_LENGTH],
            }
            for event in events
        ]

    async def export_recent(self, limit: int = EXPORT_LIMIT) -> str:
        events = await self._require_store().recent(limit)
        return events_to_csv(events)

    async def export_day(self, day: date) -> str:
        events = await self._require_store().for_day(day)
        return events_to_csv(events)
