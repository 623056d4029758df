"""
Shared-Secret Authentication for Admin Endpoints

A single configured secret is compared against the X-Admin-Pass header.
No sessions, no expiry, no per-operation scoping.
"""

import secrets
from typing import Optional

from fastapi import Header, HTTPException, Request, status

ADMIN_HEADER = "X-Admin-Pass"


def secret_matches(provided: Optional[str], expected: Optional[str]) -> bool:
    """Constant-time comparison; an unset secret never matches."""
    if not expected or provided is None:
        return False
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def require_admin(
    request: Request,
    x_admin_pass: Optional[str] = Header(default=None, alias=ADMIN_HEADER),
) -> None:
    """
    FastAPI dependency guarding the admin router.

    Raises:
        HTTPException 403: If the header is missing or does not match
    """
    expected = request.app.state.redirector.settings.ADMIN_PASS
    if not secret_matches(x_admin_pass, expected):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="forbidden"
        )
