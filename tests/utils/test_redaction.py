"""Tests for secret redaction helpers."""

from shiprate.utils.redaction import (
    REDACTED,
    mask_secret,
    redact_for_logging,
    redact_headers,
    sanitize_error_message,
)


class TestRedactHeaders:
    """Test request header redaction."""

    def test_keeps_auth_scheme(self):
        """Test the scheme survives and the credential does not."""
        headers = {
            "Authorization": "Bearer abc",
            "transId": "ups-1-abc",
            "transactionSrc": "cybership",
        }
        redacted = redact_headers(headers)
        assert redacted["Authorization"] == f"Bearer {REDACTED}"
        assert redacted["transId"] == "ups-1-abc"
        assert redacted["transactionSrc"] == "cybership"
        assert headers["Authorization"] == "Bearer abc"

    def test_basic_and_unknown_scheme(self):
        """Test Basic keeps its scheme and other values are fully hidden."""
        assert redact_headers({"authorization": "Basic Zm9vOmJhcg=="}) == {
            "authorization": f"Basic {REDACTED}",
        }
        assert redact_headers({"X-Api-Token": "raw"}) == {"X-Api-Token": REDACTED}


class TestRedactForLogging:
    """Test JSON body redaction."""

    def test_token_body(self):
        """Test OAuth fields are hidden."""
        body = {"access_token": "t", "token_type": "Bearer", "expires_in": 3600}
        redacted = redact_for_logging(body)
        assert redacted["access_token"] == REDACTED
        assert redacted["expires_in"] == 3600

    def test_nested(self):
        """Test nested dicts and lists are handled."""
        data = {"outer": {"client_secret": "s"}, "items": [{"refresh_token": "t"}, 1]}
        redacted = redact_for_logging(data)
        assert redacted["outer"]["client_secret"] == REDACTED
        assert redacted["items"][0]["refresh_token"] == REDACTED
        assert redacted["items"][1] == 1


class TestSanitizeErrorMessage:
    """Test free-text sanitization."""

    def test_bearer_and_basic(self):
        """Test Authorization header values are removed."""
        assert "abc123" not in sanitize_error_message("Authorization: Bearer abc123")
        assert "dXNlcjpw" not in sanitize_error_message("Authorization: Basic dXNlcjpw")

    def test_key_value(self):
        """Test key=value secrets are removed."""
        result = sanitize_error_message("failed with client_secret=hunter2 at host")
        assert "hunter2" not in result
        assert "at host" in result

    def test_json_fragment(self):
        """Test quoted JSON secrets are removed."""
        result = sanitize_error_message('body {"access_token": "xyz", "ok": "1"}')
        assert "xyz" not in result
        assert '"ok": "1"' in result

    def test_plain_text_untouched(self):
        """Test ordinary transport errors pass through."""
        text = "All connection attempts failed"
        assert sanitize_error_message(text) == text

    def test_none_and_truncation(self):
        """Test None passes through and long text is cut."""
        assert sanitize_error_message(None) is None
        result = sanitize_error_message("x" * 50, max_length=10)
        assert result == "xxxxxxx..."


class TestMaskSecret:
    """Test display masking."""

    def test_mask(self):
        """Test only the last four characters remain."""
        assert mask_secret("abcdefgh") == "****efgh"
        assert mask_secret("abc") == "***"
        assert mask_secret("") == ""
