"""
Logging Middleware for Request/Response Logging

This middleware logs all HTTP requests and responses for observability.
It captures:
- Request method and path
- Response status code
- Request processing time
- Client IP address

Design Decisions:
- Uses Starlette's BaseHTTPMiddleware for compatibility
- Logs to standard Python logging under the "redirector" logger
- Registered outermost so gated (429/503) responses are logged too
"""

import logging
import time

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from redirector.core.client_ip import get_client_ip

logger = logging.getLogger("redirector")


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    It wraps the request/response cycle to add logging without
    modifying endpoint code.
    """

    async def dispatch(self, request: Request, call_next):
        client_ip = get_client_ip(request)

        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time

        # Format: METHOD PATH STATUS_CODE PROCESS_TIME_MS CLIENT_IP
        logger.info(
            f"{request.method} {request.url.path} "
            f"{response.status_code} {process_time*1000:.2f}ms "
            f"IP:{client_ip}"
        )

        response.headers["X-Process-Time"] = str(process_time)

        return response


def add_logging_middleware(app: FastAPI) -> None:
    app.add_middleware(LoggingMiddleware)
