"""
Configuration management using Pydantic Settings.
Loads settings from environment variables and .env files.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SupabaseSettings(BaseSettings):
    """Hosted database (Supabase / PostgREST) settings."""

    model_config = SettingsConfigDict(env_prefix="SUPABASE_")

    url: str = Field(default="", description="Supabase project URL")
    anon_key: str = Field(default="", description="Supabase anon or service key")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")


class CompletionSettings(BaseSettings):
    """Chat-completion service settings (Together AI compatible)."""

    model_config = SettingsConfigDict(env_prefix="TOGETHER_")

    api_key: str = Field(default="", description="Completion service API key")
    base_url: str = Field(
        default="https://api.together.xyz/v1",
        description="Base URL of the OpenAI-compatible completion API",
    )
    model: str = Field(
        default="deepseek-ai/deepseek-r1-distill-llama-70b",
        description="Model used for incident analysis",
    )
    temperature: float = Field(default=0.7, description="Sampling temperature")
    max_tokens: int = Field(default=500, description="Max tokens per response")
    timeout: float = Field(default=60.0, description="Request timeout in seconds")


class TelegramSettings(BaseSettings):
    """Outbound notification bot settings."""

    model_config = SettingsConfigDict(env_prefix="TELEGRAM_")

    bot_token: Optional[str] = Field(default=None, description="Telegram bot token")
    api_base: str = Field(default="https://api.telegram.org", description="Telegram Bot API URL")
    timeout: float = Field(default=10.0, description="Request timeout in seconds")


class RateLimitSettings(BaseSettings):
    """Admission control for the analysis endpoint."""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_RATE_LIMIT_")

    max_requests: int = Field(default=100, description="Requests allowed per window")
    window_seconds: int = Field(default=15 * 60, description="Window length in seconds")


class SecuritySettings(BaseSettings):
    """Security configuration."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    allowed_origins: list[str] = Field(
        default=["*"],
        description="CORS allowed origins",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="incident-hub", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=True, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3001, description="Server port")

    # Storage
    data_store_backend: str = Field(
        default="supabase", description="Data store backend (supabase/memory)"
    )

    # Sub-settings
    supabase: SupabaseSettings = Field(default_factory=SupabaseSettings)
    completion: CompletionSettings = Field(default_factory=CompletionSettings)
    telegram: TelegramSettings = Field(default_factory=TelegramSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"app_env must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @field_validator("data_store_backend")
    @classmethod
    def validate_data_store_backend(cls, v: str) -> str:
        allowed = {"supabase", "memory"}
        if v.lower() not in allowed:
            raise ValueError(f"data_store_backend must be one of {allowed}")
        return v.lower()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience function for accessing settings
settings = get_settings()
