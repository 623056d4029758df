"""
Security Headers Middleware

Adds a conservative set of browser security headers to every response and
strips server banners.
"""

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}

BANNER_HEADERS = ("Server", "X-Powered-By")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        for name in BANNER_HEADERS:
            if name in response.headers:
                del response.headers[name]

        return response


def add_security_middleware(app: FastAPI) -> None:
    app.add_middleware(SecurityHeadersMiddleware)
