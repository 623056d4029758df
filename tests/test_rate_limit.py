"""Tests for per-client rate limiting of the redirect path."""

import pytest

from redirector.core.rate_limit import RedirectRateLimiter
from redirector.main import create_app
from tests.conftest import make_settings


@pytest.fixture
def settings(tmp_path):
    # No persistence: 121 concurrent SQLite writes only slow the test down
    return make_settings(tmp_path, DATABASE_URL="")


@pytest.mark.asyncio
async def test_121st_request_in_window_is_rejected(client):
    headers = {"X-Forwarded-For": "198.51.100.7"}

    for i in range(120):
        response = await client.get("/go/abc", params={"dest": "https://x.test"}, headers=headers)
        assert response.status_code == 302, f"request {i + 1} was rejected"

    response = await client.get("/go/abc", params={"dest": "https://x.test"}, headers=headers)

    assert response.status_code == 429
    assert response.headers["RateLimit-Limit"] == "120"
    assert response.headers["RateLimit-Remaining"] == "0"
    assert "RateLimit-Reset" in response.headers
    assert "Retry-After" in response.headers


@pytest.mark.asyncio
async def test_no_legacy_headers_are_emitted(client):
    response = await client.get("/go/abc")

    assert response.headers["RateLimit-Limit"] == "120"
    assert not any(name.lower().startswith("x-ratelimit") for name in response.headers)


@pytest.mark.asyncio
async def test_clients_are_limited_independently(client):
    for _ in range(120):
        await client.get("/go/abc", headers={"X-Forwarded-For": "198.51.100.7"})

    blocked = await client.get("/go/abc", headers={"X-Forwarded-For": "198.51.100.7"})
    other = await client.get("/go/abc", headers={"X-Forwarded-For": "198.51.100.8, 10.0.0.1"})

    assert blocked.status_code == 429
    assert other.status_code == 302


@pytest.mark.asyncio
async def test_rejected_request_is_not_counted(client, state):
    for _ in range(121):
        await client.get("/go/abc", headers={"X-Forwarded-For": "198.51.100.7"})

    assert state.metrics.clicks_for("abc") == 120


@pytest.mark.asyncio
async def test_admin_and_status_are_not_rate_limited(client, admin_headers):
    for _ in range(130):
        response = await client.get("/status")
        assert response.status_code == 200

    response = await client.get("/admin/state", headers=admin_headers)
    assert response.status_code == 200
    assert "RateLimit-Limit" not in response.headers


@pytest.mark.asyncio
async def test_reset_header_is_seconds_until_window_end(client):
    response = await client.get("/go/abc")

    assert 0 <= int(response.headers["RateLimit-Reset"]) <= 60


@pytest.mark.asyncio
async def test_retry_after_is_seconds_on_rejection(client):
    for _ in range(121):
        response = await client.get("/go/abc", headers={"X-Forwarded-For": "198.51.100.7"})

    assert response.status_code == 429
    assert 0 <= int(response.headers["Retry-After"]) <= 60
    assert response.json() == {"detail": "Rate limit exceeded: 120 per 1 minute"}


class TestConfiguredLimit:

    @pytest.fixture
    def settings(self, tmp_path):
        return make_settings(tmp_path, DATABASE_URL="", REDIRECT_RATE_LIMIT="2/minute")

    @pytest.mark.asyncio
    async def test_limit_comes_from_app_settings(self, client):
        codes = [(await client.get("/go/abc")).status_code for _ in range(3)]

        assert codes == [302, 302, 429]

    @pytest.mark.asyncio
    async def test_limit_header_reflects_setting(self, client):
        response = await client.get("/go/abc")

        assert response.headers["RateLimit-Limit"] == "2"
        assert response.headers["RateLimit-Remaining"] == "1"


def test_windows_are_not_shared_between_apps(tmp_path):
    first = create_app(make_settings(tmp_path, DATABASE_URL="", REDIRECT_RATE_LIMIT="1/minute"))
    second = create_app(make_settings(tmp_path, DATABASE_URL="", REDIRECT_RATE_LIMIT="1/minute"))

    assert first.state.redirector.rate_limiter.allow("192.0.2.1") is True
    assert first.state.redirector.rate_limiter.allow("192.0.2.1") is False
    assert second.state.redirector.rate_limiter.allow("192.0.2.1") is True


def test_reset_clears_windows():
    rate_limiter = RedirectRateLimiter("1/minute")
    rate_limiter.allow("192.0.2.1")

    rate_limiter.reset()

    assert rate_limiter.allow("192.0.2.1") is True
