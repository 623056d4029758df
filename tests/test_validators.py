"""Tests for destination validation."""

import pytest

from redirector.core.validators import DestinationValidator

FALLBACK = "https://fallback.example/"


class TestAllowlistedValidator:
    """Validator configured with allowlist {"example.com"}."""

    @pytest.fixture
    def validator(self):
        return DestinationValidator({"example.com"}, FALLBACK)

    def test_allowlisted_host_is_returned_unchanged(self, validator):
        assert validator.validate("https://example.com/ok") == "https://example.com/ok"

    def test_other_host_falls_back(self, validator):
        assert validator.validate("https://evil.com/x") == FALLBACK

    def test_not_a_url_falls_back(self, validator):
        assert validator.validate("not a url") == FALLBACK

    def test_host_comparison_ignores_case(self, validator):
        assert validator.validate("https://EXAMPLE.com/Path") == "https://EXAMPLE.com/Path"

    def test_allowlist_entries_are_lowercased(self):
        validator = DestinationValidator({"Example.COM"}, FALLBACK)
        assert validator.validate("http://example.com") == "http://example.com"

    def test_subdomain_is_not_implicitly_allowed(self, validator):
        assert validator.validate("https://www.example.com/") == FALLBACK

    def test_userinfo_does_not_fool_host_check(self, validator):
        assert validator.validate("https://example.com@evil.com/") == FALLBACK


class TestOpenValidator:
    """Validator with an empty allowlist accepts any http(s) host."""

    @pytest.fixture
    def validator(self):
        return DestinationValidator(set(), FALLBACK)

    @pytest.mark.parametrize("url", [
        "https://anything.test/a?b=c#frag",
        "http://10.0.0.1:8080/path/",
        "HTTPS://Upper.Case.test",
    ])
    def test_accepted_urls_are_returned_verbatim(self, validator, url):
        assert validator.validate(url) == url

    @pytest.mark.parametrize("url", [
        None,
        "",
        "not a url",
        "example.com",
        "ftp://example.com/file",
        "javascript:alert(1)",
        "data:text/html,hi",
        "http://",
        "//example.com/no-scheme",
        "http://[::1",
        "https://example.com:99999/",
        "https://example.com:port/",
    ])
    def test_rejected_urls_use_fallback(self, validator, url):
        assert validator.validate(url) == FALLBACK

    def test_query_string_is_not_normalized(self, validator):
        url = "https://example.com?b=2&a=1&a=1"
        assert validator.validate(url) == url
