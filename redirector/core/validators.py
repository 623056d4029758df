"""
Destination Validation

This module decides whether a requested destination may be redirected to.

Security Considerations:
- Only http and https destinations are ever redirected to
- When an allowlist is configured, the destination host must be on it
- With an EMPTY allowlist any http(s) host is accepted, which makes the
  service an open redirector. Configure ALLOWED_HOSTS in production.

Rejected destinations never produce an error; the configured fallback
is returned instead.
"""

from typing import Iterable, Optional
from urllib.parse import urlsplit

ALLOWED_SCHEMES = frozenset({"http", "https"})


class DestinationValidator:
    """
    Resolves a raw destination to the URL that will actually be redirected to.

    Accepted destinations are returned byte-for-byte as given (no
    normalization), so query strings and fragments survive untouched.
    """

    def __init__(self, allowed_hosts: Iterable[str], fallback: str):
        self.allowed_hosts = frozenset(host.lower() for host in allowed_hosts)
        self.fallback = fallback

    def is_allowed(self, raw: Optional[str]) -> bool:
        if not raw:
            return False

        try:
            parts = urlsplit(raw)
            hostname = parts.hostname
            parts.port  # raises on an out-of-range or non-numeric port
        except ValueError:
            # e.g. unbalanced IPv6 brackets or a bad port
            return False

        if parts.scheme not in ALLOWED_SCHEMES or not hostname:
            return False

        if self.allowed_hosts and hostname.lower() not in self.allowed_hosts:
            return False

        return True

    def validate(self, raw: Optional[str]) -> str:
        """
        Return raw if it may be redirected to, the fallback otherwise.

        Args:
            raw: Destination taken from the request, possibly missing

        Returns:
            A usable destination; never raises
        """
        if self.is_allowed(raw):
            return raw
        return self.fallback
