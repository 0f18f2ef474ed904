"""
Unit tests for logging helpers.
"""

import structlog

from incident_hub.core.logging import LogContext, add_app_context, redact_secrets


def test_redact_secrets_masks_credentials() -> None:
    event = redact_secrets(None, "info", {"event": "x", "api_key": "sk-123", "model": "m"})

    assert event["api_key"] == "***"
    assert event["model"] == "m"


def test_redact_secrets_leaves_empty_values() -> None:
    assert redact_secrets(None, "info", {"bot_token": None})["bot_token"] is None


def test_app_context_is_added() -> None:
    event = add_app_context(None, "info", {"event": "x"})

    assert event["app"] == "incident-hub"
    assert "env" in event


def test_log_context_binds_and_unbinds() -> None:
    with LogContext(request_id="req_1"):
        assert structlog.contextvars.get_contextvars()["request_id"] == "req_1"

    assert "request_id" not in structlog.contextvars.get_contextvars()
