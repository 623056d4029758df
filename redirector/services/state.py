"""
Application State

Everything a request handler may mutate or share lives on one
RedirectorState built per application instance: the kill switch, the
rate-limit windows, the click counters, the event store and the logger
writing to it.

Handlers reach it through app.state.redirector (see get_state), never
through module globals, so every test can build a fresh instance.
"""

import logging
from typing import Optional

from fastapi import Request

from redirector.core.kill_switch import KillSwitch
from redirector.core.metrics import ClickMetrics
from redirector.core.rate_limit import RedirectRateLimiter
from redirector.core.setting import Settings
from redirector.core.validators import DestinationValidator
from redirector.db.store import EventStore, create_event_store
from redirector.services.event_logger import EventLogger

logger = logging.getLogger("redirector.main")


class RedirectorState:
    """Process-wide state shared by every request-handling task."""

    def __init__(self, settings: Settings, event_store: Optional[EventStore] = None):
        self.settings = settings
        self.validator = DestinationValidator(settings.allowed_hosts, settings.FALLBACK_URL)
        self.kill_switch = KillSwitch()
        self.rate_limiter = RedirectRateLimiter(settings.REDIRECT_RATE_LIMIT)
        self.metrics = ClickMetrics()
        self.event_store = event_store
        self.event_logger = EventLogger(event_store)

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedirectorState":
        return cls(settings, create_event_store(settings))

    async def startup(self) -> None:
        """
        Prepare the event store.

        An unreachable store is not fatal: it is dropped and the service
        keeps redirecting without persistence.
        """
        if not self.settings.allowed_hosts:
            logger.warning(
                "ALLOWED_HOSTS is empty: any http(s) destination will be redirected to"
            )

        if self.event_store is None:
            return

        try:
            await self.event_store.ensure_schema()
        except Exception as e:
            logger.error(
                f"Event store unavailable, continuing without persistence: {str(e)}",
                exc_info=True
            )
            await self.event_store.close()
            self.detach_store()

    async def shutdown(self) -> None:
        """Let pending click writes finish, then close the connection pool."""
        await self.event_logger.drain(timeout=self.settings.SHUTDOWN_DRAIN_TIMEOUT)
        if self.event_store is not None:
            await self.event_store.close()

    def detach_store(self) -> None:
        self.event_store = None
        self.event_logger.store = None


def get_state(request: Request) -> RedirectorState:
    """FastAPI dependency returning the state of the serving application."""
    return request.app.state.redirector
