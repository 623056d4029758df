"""
Rate Limiting Configuration

This module provides rate limiting for the redirect endpoint.

Design Decisions:
- Uses slowapi for rate limiting (lightweight, FastAPI-compatible)
- Fixed window strategy with in-memory storage; state is process-local
- One limiter per application instance, built from that app's settings
- Client key is the same address recorded in click events
  (first X-Forwarded-For hop, falling back to the peer address)
- Emits the standard RateLimit-* headers only, never X-RateLimit-*,
  with RateLimit-Reset in seconds until the window rolls over

Only the redirect path is limited. Admin, status and metrics endpoints
never consume quota.
"""

import math
import time
from typing import NamedTuple

from limits import parse
from slowapi import Limiter

from redirector.core.client_ip import get_client_ip

REDIRECT_SCOPE = "redirect"


class RateLimitStatus(NamedTuple):
    allowed: bool
    headers: dict[str, str]


class RedirectRateLimiter:
    """
    Per-client fixed-window limiter for /go.

    Args:
        limit: "count/period" (e.g., "120/minute" means 120 requests per minute)
    """

    def __init__(self, limit: str):
        self.limit = parse(limit)
        self.limiter = Limiter(
            key_func=get_client_ip,
            storage_uri="memory://",
            strategy="fixed-window",
        )

    @property
    def description(self) -> str:
        return str(self.limit)

    def hit(self, client_key: str) -> RateLimitStatus:
        """
        Consume one request for client_key and report the window state.

        Returns:
            RateLimitStatus with the decision and the headers to send
        """
        backend = self.limiter.limiter
        allowed = backend.hit(self.limit, REDIRECT_SCOPE, client_key)
        window = backend.get_window_stats(self.limit, REDIRECT_SCOPE, client_key)
        reset_in = max(0, math.ceil(window[0] - time.time()))

        headers = {
            "RateLimit-Limit": str(self.limit.amount),
            "RateLimit-Remaining": str(max(0, window[1])),
            "RateLimit-Reset": str(reset_in),
        }
        if not allowed:
            headers["Retry-After"] = str(reset_in)

        return RateLimitStatus(allowed, headers)

    def allow(self, client_key: str) -> bool:
        return self.hit(client_key).allowed

    def reset(self) -> None:
        self.limiter.reset()
