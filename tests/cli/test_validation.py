"""Tests for CLI validation utilities."""

import pytest

from src.cli.utils.validation import validate_server_url, validate_session_id


class TestValidateSessionId:
    """Tests for session ID validation."""

    def test_valid_session_id(self):
        """Valid session IDs are returned unchanged."""
        assert validate_session_id("ABC12345") == "ABC12345"

    def test_normalises_case_and_whitespace(self):
        """Session IDs are upper-cased and stripped."""
        assert validate_session_id("  abc12345 ") == "ABC12345"

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_session_id("   ")

    def test_invalid_chars_raises(self):
        """Session ID with punctuation raises ValueError."""
        with pytest.raises(ValueError, match="letters and numbers"):
            validate_session_id("ABC-1234")

    def test_too_short_raises(self):
        with pytest.raises(ValueError):
            validate_session_id("AB1")


class TestValidateServerUrl:
    """Tests for relay URL validation."""

    def test_valid_url_strips_trailing_slash(self):
        assert validate_server_url("https://relay.example.com/") == "https://relay.example.com"

    def test_plain_http_allowed(self):
        """Local relays usually run without TLS."""
        assert validate_server_url("http://localhost:3000") == "http://localhost:3000"

    def test_empty_raises(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_server_url("")

    def test_wrong_scheme_raises(self):
        with pytest.raises(ValueError, match="must start with"):
            validate_server_url("ws://relay.example.com")

    def test_too_long_raises(self):
        with pytest.raises(ValueError, match="2048"):
            validate_server_url("https://" + "a" * 2050)
