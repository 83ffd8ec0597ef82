"""Tests for common utilities."""

import io
import json
import logging

import pytest
from starlette.datastructures import Headers

from url_expander.common.logging_config import JsonFormatter, setup_logging
from url_expander.common.url_builder import build_expanded_url, extract_token
from url_expander.common.validators import is_valid_length, is_valid_url
from url_expander.web_app.context import derive_base_url, first_hop


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        """Test valid URL validation."""
        valid, _ = is_valid_url("https://example.com")
        assert valid

        valid, _ = is_valid_url("http://example.com/path")
        assert valid

        valid, _ = is_valid_url("https://sub.example.com:8080/path?query=value")
        assert valid

    def test_invalid_urls(self):
        """Test invalid URL validation."""
        valid, error = is_valid_url("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_url("not-a-url")
        assert not valid

        valid, error = is_valid_url("ftp://example.com")
        assert not valid
        assert "http" in error.lower()

        valid, error = is_valid_url("https://")
        assert not valid
        assert "domain" in error.lower()

        valid, error = is_valid_url("https://exa mple.com")
        assert not valid

        valid, error = is_valid_url("https://example.com:99999/")
        assert not valid

        valid, error = is_valid_url("https://example.com/" + "a" * 2048)
        assert not valid
        assert "too long" in error.lower()

    @pytest.mark.parametrize("length", [5, 6, 500, 1000])
    def test_valid_lengths(self, length):
        valid, _ = is_valid_length(length)
        assert valid

    def test_invalid_lengths(self):
        valid, error = is_valid_length(4)
        assert not valid
        assert "at least 5" in error

        valid, error = is_valid_length(1001)
        assert not valid
        assert "at most 1000" in error

        valid, error = is_valid_length("10")
        assert not valid
        assert "integer" in error

        valid, error = is_valid_length(True)
        assert not valid

    def test_custom_length_bounds(self):
        valid, _ = is_valid_length(3, min_length=2, max_length=4)
        assert valid

        valid, _ = is_valid_length(5, min_length=2, max_length=4)
        assert not valid


class TestBaseURLDerivation:
    """Test deriving the base URL from proxy and host headers."""

    def test_forwarded_headers_win(self):
        headers = Headers({
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "Host": "internal:9200",
        })

        assert derive_base_url(headers, "http", "http://localhost:9200") == "https://example.com"

    def test_first_proxy_hop(self):
        headers = Headers({
            "x-forwarded-proto": "https, http",
            "x-forwarded-host": "edge.example.com, internal",
        })

        assert derive_base_url(headers, "http", "http://localhost:9200") == "https://edge.example.com"

    def test_host_header(self):
        headers = Headers({"host": "links.local:8080"})

        assert derive_base_url(headers, "http", "http://localhost:9200") == "http://links.local:8080"

    def test_forwarded_proto_with_host_header(self):
        headers = Headers({"x-forwarded-proto": "https", "host": "links.example.com"})

        assert derive_base_url(headers, "http", "http://localhost:9200") == "https://links.example.com"

    def test_fallback(self):
        assert derive_base_url(Headers({}), "http", "http://localhost:9200/") == "http://localhost:9200"

    @pytest.mark.parametrize("value, expected", [
        (None, None),
        ("", None),
        (" a.example.com , b ", "a.example.com"),
        (", b", None),
    ])
    def test_first_hop(self, value, expected):
        assert first_hop(value) == expected


class TestJsonFormatter:
    """Test structured log output."""

    def test_one_json_object_per_record(self):
        record = logging.LogRecord(
            name="url_expander.web",
            level=logging.WARNING,
            pathname=__file__,
            lineno=1,
            msg='Expanded URL not found: "%s"',
            args=("http://testserver/abc",),
            exc_info=None,
        )

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "url_expander.web"
        assert entry["message"] == 'Expanded URL not found: "http://testserver/abc"'

    def test_setup_logging_replaces_handlers(self):
        stream = io.StringIO()
        setup_logging(level="INFO", stream=io.StringIO())
        logger = setup_logging(level="INFO", json_format=True, stream=stream)

        logger.info("ready")

        assert len(logger.handlers) == 1
        assert json.loads(stream.getvalue())["message"] == "ready"


class TestURLBuilder:
    """Test URL building utilities."""

    def test_build_expanded_url(self):
        assert build_expanded_url("abc123", "https://example.com") == "https://example.com/abc123"

    def test_build_expanded_url_trailing_slash(self):
        assert build_expanded_url("abc123", "https://example.com/") == "https://example.com/abc123"

    def test_extract_token(self):
        assert extract_token("https://example.com/abc123", "https://example.com") == "abc123"
        assert extract_token("https://example.com/abc123", "https://example.com/") == "abc123"

    def test_extract_token_foreign_base(self):
        assert extract_token("https://other.com/abc123", "https://example.com") is None
        assert extract_token("https://example.com/", "https://example.com") is None
