"""Configuration management for book_chat.

This module provides typed configuration classes using pydantic-settings.
Configuration is loaded from environment variables with optional .env file support.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "LLMSettings",
    "ContextSettings",
    "LoggingSettings",
    "BookChatConfig",
]


class LLMSettings(BaseSettings):
    """LLM provider settings.

    ``provider`` and ``model`` only seed a conversation when the user has
    no stored preference yet.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOK_CHAT_LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    provider: str = "openai"  # "openai" or "anthropic"
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1000
    request_timeout: float = 60.0  # seconds, expiry surfaces as NetworkError
    openai_base_url: str | None = None
    anthropic_base_url: str | None = None


class ContextSettings(BaseSettings):
    """Book context settings."""

    model_config = SettingsConfigDict(
        env_prefix="BOOK_CHAT_CONTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_context_chars: int = 2000
    preview_chars: int = 100
    default_language: str | None = "en"


class LoggingSettings(BaseSettings):
    """Log output settings."""

    model_config = SettingsConfigDict(
        env_prefix="BOOK_CHAT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: str = "INFO"
    json_output: bool = False
    add_timestamp: bool = True


class BookChatConfig(BaseSettings):
    """Main configuration aggregating all settings.

    Example usage:
        config = BookChatConfig()
        timeout = config.llm.request_timeout
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    llm: LLMSettings = LLMSettings()
    context: ContextSettings = ContextSettings()
    logging: LoggingSettings = LoggingSettings()
