"""
Kill Switch Middleware

Rejects every non-admin request with 503 while the kill switch is engaged.

Runs before routing, so a rejected request never reaches the rate limiter,
the event logger or the click counter.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from redirector.core.kill_switch import is_admin_path


class KillSwitchMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        kill_switch = request.app.state.redirector.kill_switch
        if kill_switch.killed and not is_admin_path(request.url.path):
            return JSONResponse(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                content={"detail": "Service temporarily unavailable"}
            )
        return await call_next(request)


def add_kill_switch_middleware(app: FastAPI) -> None:
    app.add_middleware(KillSwitchMiddleware)
