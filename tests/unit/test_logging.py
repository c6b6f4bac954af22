"""
Unit tests for log redaction.
"""

import pytest

from lognest.core.logging import redact_sensitive_fields


def _redact(**event):
    return redact_sensitive_fields(None, "info", {"event": "test_event", **event})


class TestRedactSensitiveFields:
    @pytest.mark.parametrize(
        "key", ["access_token", "refresh_token", "password", "Authorization", "jwt_secret"]
    )
    def test_credentials_are_hidden(self, key):
        assert _redact(**{key: "value"})[key] == "[REDACTED]"

    def test_nested_headers_are_hidden(self):
        event = _redact(
            headers={"Cookie": "access_token=abc", "X-Refresh-Token": "xyz", "Accept": "*/*"}
        )

        assert event["headers"] == {
            "Cookie": "[REDACTED]",
            "X-Refresh-Token": "[REDACTED]",
            "Accept": "*/*",
        }

    def test_ordinary_fields_pass_through(self):
        event = _redact(log_id="0192", token_count=3, media=[{"file_path": "a.png"}])

        assert event == {
            "event": "test_event",
            "log_id": "0192",
            "token_count": 3,
            "media": [{"file_path": "a.png"}],
        }

    def test_long_values_are_truncated(self):
        event = _redact(content="x" * 1500)

        assert event["content"] == "x" * 1000 + "...[TRUNCATED]"
