"""
Redirect Service

This service orchestrates a single redirect:
validator -> event logger -> click counter -> 302.

Design Decisions:
- Destination validation always succeeds (fallback on rejection)
- Logging is fired and forgotten; the response never waits on the store
- Counter and durable log are not transactional and may drift apart
"""

from typing import NamedTuple, Optional

from fastapi import status

from redirector.db.models import ClickEvent
from redirector.services.state import RedirectorState


class RedirectResult(NamedTuple):
    status_code: int
    location: str


class RedirectService:
    """
    Service for handling slug redirects.

    Holds no state of its own; everything shared lives on RedirectorState.
    """

    def __init__(self, state: RedirectorState):
        self.state = state

    def handle(
        self,
        slug: str,
        raw_dest: Optional[str],
        client_ip: str,
        user_agent: Optional[str] = None
    ) -> RedirectResult:
        """
        Resolve, record and count one redirect.

        Args:
            slug: Path segment of the request (unvalidated)
            raw_dest: dest query parameter, possibly missing
            client_ip: Resolved client address
            user_agent: User-Agent header, possibly missing

        Returns:
            RedirectResult with status 302 and the resolved destination
        """
        destination = self.state.validator.validate(raw_dest)

        self.state.event_logger.record(
            ClickEvent(
                slug=slug,
                dest=destination,
                ip=client_ip,
                ua=user_agent or ""
            )
        )

        self.state.metrics.increment(slug)

        return RedirectResult(status.HTTP_302_FOUND, destination)
