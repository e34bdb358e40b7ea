"""Tests for common utilities."""

import json
import logging

from shortlinks.common.validators import is_valid_url, find_alias_violation
from shortlinks.common.headers import ForwardedInfo, parse_forwarded, public_base_url
from shortlinks.common.url_builder import build_short_url
from shortlinks.common.logging_config import JsonFormatter, setup_logging, get_logger
from shortlinks.errors import ValidationRule


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

        valid, error = is_valid_url("https://example.com/" + "a" * 2048)
        assert not valid
        assert "too long" in error.lower()

    def test_alias_violations(self):
        """Rules are reported in order."""
        assert find_alias_violation("promo") is None
        assert find_alias_violation("")[0] is ValidationRule.LENGTH
        assert find_alias_violation("a.b")[0] is ValidationRule.CHARSET
        assert find_alias_violation("2024")[0] is ValidationRule.ALL_DIGITS
        assert find_alias_violation("Settings")[0] is ValidationRule.RESERVED
        assert find_alias_violation("files")[0] is ValidationRule.RESERVED
        assert find_alias_violation("fancy")[0] is ValidationRule.FILE_PREFIX

    def test_alias_violation_without_prefix_rule(self):
        assert find_alias_violation("fancy", file_prefix="") is None


class TestHeaders:
    """Test header utilities."""

    def test_parse_forwarded(self):
        """Test extracting forwarded headers."""
        headers = {
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "example.com",
            "X-Forwarded-For": "192.168.1.1",
            "X-Forwarded-Prefix": "/s/",
        }

        forwarded = parse_forwarded(headers)

        assert forwarded == ForwardedInfo(
            proto="https", host="example.com", client="192.168.1.1", prefix="/s"
        )

    def test_proxy_chain_uses_first_hop(self):
        forwarded = parse_forwarded({"x-forwarded-for": "203.0.113.7, 10.0.0.2, 10.0.0.1"})
        assert forwarded.client == "203.0.113.7"

    def test_rfc7239_fallback(self):
        forwarded = parse_forwarded({
            "Forwarded": 'for="198.51.100.17";proto=https;host=sho.rt, for=10.0.0.1',
        })

        assert forwarded.proto == "https"
        assert forwarded.host == "sho.rt"
        assert forwarded.client == "198.51.100.17"

    def test_x_forwarded_wins_over_rfc7239(self):
        forwarded = parse_forwarded({
            "Forwarded": "proto=http;host=internal",
            "X-Forwarded-Proto": "https",
            "X-Forwarded-Host": "public.example",
        })
        assert (forwarded.proto, forwarded.host) == ("https", "public.example")

    def test_prefix_normalization(self):
        assert parse_forwarded({"x-forwarded-prefix": "s"}).prefix == "/s"
        assert parse_forwarded({"X-Forwarded-Prefix": "/"}).prefix == ""
        assert parse_forwarded({}).prefix == ""

    def test_base_url_from_forwarded(self):
        """Test building base URL from forwarded headers."""
        forwarded = ForwardedInfo(proto="https", host="example.com")

        base_url = public_base_url(forwarded, "http://localhost:9200", "http", "internal:9200")
        assert base_url == "https://example.com"

    def test_base_url_from_request(self):
        base_url = public_base_url(ForwardedInfo(), "http://localhost:9200", "http", "links.internal")
        assert base_url == "http://links.internal"

    def test_base_url_fallback(self):
        """Test fallback base URL."""
        base_url = public_base_url(ForwardedInfo(), "http://localhost:9200/")
        assert base_url == "http://localhost:9200"


class TestURLBuilder:
    """Test URL builder."""

    def test_numeric(self):
        url = build_short_url(42, "https://example.com")
        assert url == "https://example.com/42"

    def test_alias_preferred(self):
        url = build_short_url(42, "https://example.com/", alias="promo")
        assert url == "https://example.com/promo"

    def test_with_prefix(self):
        url = build_short_url(42, "https://example.com", path_prefix="/s/")
        assert url == "https://example.com/s/42"


class TestLogging:
    """Test logging setup."""

    def test_json_lines_escape_messages(self):
        record = logging.LogRecord(
            "shortlinks.web", logging.WARNING, __file__, 1, 'Alias "promo" is taken', None, None
        )

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "shortlinks.web"
        assert entry["message"] == 'Alias "promo" is taken'

    def test_setup_replaces_handlers(self):
        setup_logging(level="DEBUG")
        logger = setup_logging(level="WARNING", json_format=True)

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_defaults_to_info(self):
        assert setup_logging(level="chatty").level == logging.INFO

    def test_get_logger_namespace(self):
        assert get_logger("web").name == "shortlinks.web"
        assert get_logger("shortlinks.service").name == "shortlinks.service"
