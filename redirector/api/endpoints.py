"""
FastAPI Endpoints for the Public Surface

This module defines the redirect, status and metrics endpoints.
Endpoints only handle:
- Request parsing
- Rate limiting
- Error handling and HTTP responses
- Delegating to service layer

Design Principles:
- Thin endpoints: All redirect logic lives in RedirectService
- The redirect path never surfaces a store failure to the client
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse

from redirector.api.schemas import StatusResponse
from redirector.core.client_ip import get_client_ip
from redirector.core.exceptions import DatabaseError
from redirector.core.metrics import CONTENT_TYPE_LATEST
from redirector.services.redirect_service import RedirectService
from redirector.services.state import RedirectorState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/go/{slug}",
    status_code=status.HTTP_302_FOUND,
    summary="Redirect to destination",
    description="Validates dest, records the click and redirects to it (or to the fallback)"
)
async def redirect_to_destination(
    slug: str,
    request: Request,
    dest: Optional[str] = Query(default=None, description="Destination URL"),
    state: RedirectorState = Depends(get_state)
) -> RedirectResponse:
    """
    Redirect a slug to the requested destination.

    Returns:
        RedirectResponse (HTTP 302) to the resolved destination

    Raises:
        HTTPException 429: If rate limit exceeded
    """
    client_ip = get_client_ip(request)

    rate_limit = state.rate_limiter.hit(client_ip)
    if not rate_limit.allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"Rate limit exceeded: {state.rate_limiter.description}",
            headers=rate_limit.headers
        )

    result = RedirectService(state).handle(
        slug=slug,
        raw_dest=dest,
        client_ip=client_ip,
        user_agent=request.headers.get("User-Agent")
    )

    response = RedirectResponse(url=result.location, status_code=result.status_code)
    response.headers.update(rate_limit.headers)
    return response


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Service status",
    description="Reports liveness and the total number of recorded clicks"
)
async def service_status(state: RedirectorState = Depends(get_state)) -> StatusResponse:
    ok = True
    clicks = 0

    if state.event_store is not None:
        try:
            clicks = await state.event_store.count()
        except DatabaseError as e:
            logger.error(f"Status click count failed: {str(e)}")
            ok = False

    return StatusResponse(
        ok=ok,
        ts=datetime.now(timezone.utc).isoformat(),
        clicks=clicks
    )


@router.get("/metrics", summary="Prometheus metrics", include_in_schema=False)
async def metrics(state: RedirectorState = Depends(get_state)) -> Response:
    return Response(content=state.metrics.render(), media_type=CONTENT_TYPE_LATEST)
