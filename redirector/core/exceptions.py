"""
Custom Exceptions

This module defines custom exceptions for better error handling
and more specific error messages.

Only operator-facing paths (admin, status) ever see these; the redirect
path absorbs store failures before they reach the client.
"""

from typing import Optional


class RedirectorException(Exception):
    """Base exception for the redirector service."""
    pass


class DatabaseError(RedirectorException):
    """Raised when event store operations fail."""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class ServiceUnavailableError(RedirectorException):
    """Raised when a required service is unavailable."""

    def __init__(self, service_name: str):
        self.service_name = service_name
        super().__init__(f"Service '{service_name}' is unavailable")
