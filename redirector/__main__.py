"""
Run the redirector with uvicorn.

Usage:
    python -m redirector

uvicorn handles SIGTERM/SIGINT by refusing new connections, finishing
in-flight requests and then running the application's shutdown, which
drains pending click writes and closes the connection pool.
"""

import logging

import uvicorn

from redirector.core.setting import settings


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(
        "redirector.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
