"""
Click Event Logging Service

This service records click events without ever delaying a redirect.

Design Decisions:
- record() spawns a detached asyncio task and returns immediately
- The task owns its own database session (the request is long gone)
- Failures are logged and dropped: no retry queue, no backpressure
- Pending tasks are kept in a set so they are neither garbage collected
  mid-flight nor silently lost; shutdown drains them before the pool closes
- Without a store, record() is a no-op and the redirector keeps working
"""

import asyncio
import logging
from typing import Optional

from redirector.db.models import ClickEvent
from redirector.db.store import EventStore

logger = logging.getLogger("redirector.events")


class EventLogger:
    """
    Best-effort, non-blocking recorder of click events.

    Tasks are not tied to the originating HTTP exchange, so a client
    disconnecting never cancels its pending write.
    """

    def __init__(self, store: Optional[EventStore]):
        self.store = store
        self._pending: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self.store is not None

    @property
    def pending(self) -> int:
        return len(self._pending)

    def record(self, event: ClickEvent) -> None:
        """
        Schedule an append of event to the store.

        Must be called from within the running event loop. The caller does
        not (and cannot) learn whether the write succeeded.
        """
        if self.store is None:
            return

        task = asyncio.create_task(self._append(event))
        self._pending.add(task)
        task.add_done_callback(self._on_done)

    async def _append(self, event: ClickEvent) -> None:
        try:
            await self.store.append(event)
        except Exception as e:
            logger.error(
                f"Failed to log click for {event.slug!r}: {str(e)}",
                exc_info=True
            )

    def _on_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            logger.warning("Click logging task was cancelled before completing")
            return
        error = task.exception()
        if error is not None:
            logger.error("Click logging task crashed", exc_info=error)

    async def drain(self, timeout: Optional[float] = None) -> None:
        """
        Wait for outstanding writes to finish.

        Args:
            timeout: Seconds to wait; unfinished writes are left running
        """
        if not self._pending:
            return

        done, still_pending = await asyncio.wait(set(self._pending), timeout=timeout)
        if still_pending:
            logger.warning(f"{len(still_pending)} click writes still pending after drain")
