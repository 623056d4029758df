"""
Shared fixtures for the redirector test-suite.

Every test gets a fresh application (kill switch, counters, store) backed
by a temporary SQLite file, with the lifespan entered so the schema exists.
"""

import httpx
import pytest
import pytest_asyncio

from redirector.core.setting import Settings
from redirector.main import create_app

ADMIN_PASS = "s3cret"


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'clicks.db'}",
        "ADMIN_PASS": ADMIN_PASS,
        "ALLOWED_HOSTS": "",
        "FALLBACK_URL": "https://example.com",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def admin_headers():
    return {"X-Admin-Pass": ADMIN_PASS}


@pytest_asyncio.fixture
async def app(settings):
    application = create_app(settings)
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
def state(app):
    return app.state.redirector


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client
