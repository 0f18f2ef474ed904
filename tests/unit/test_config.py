"""
Unit tests for settings loading.
"""

import pytest
from pydantic import ValidationError

from incident_hub.core.config import Settings


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TOGETHER_MODEL", raising=False)
    monkeypatch.delenv("ANALYSIS_RATE_LIMIT_MAX_REQUESTS", raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 3001
    assert settings.completion.model == "deepseek-ai/deepseek-r1-distill-llama-70b"
    assert settings.completion.max_tokens == 500
    assert settings.rate_limit.max_requests == 100
    assert settings.rate_limit.window_seconds == 900


def test_nested_settings_read_prefixed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://proj.supabase.test")
    monkeypatch.setenv("TOGETHER_API_KEY", "sk-test")
    monkeypatch.setenv("ANALYSIS_RATE_LIMIT_MAX_REQUESTS", "5")

    settings = Settings(_env_file=None)

    assert settings.supabase.url == "https://proj.supabase.test"
    assert settings.completion.api_key == "sk-test"
    assert settings.rate_limit.max_requests == 5


def test_data_store_backend_is_validated() -> None:
    assert Settings(_env_file=None, data_store_backend="MEMORY").data_store_backend == "memory"

    with pytest.raises(ValidationError):
        Settings(_env_file=None, data_store_backend="sqlite")
