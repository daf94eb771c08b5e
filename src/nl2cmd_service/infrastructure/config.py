"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    claude_api_key: SecretStr
    provider_base_url: str = "https://api.anthropic.com/v1/"
    default_model: str = "claude-3-5-haiku-latest"
    prompt_dir: str = "./prompts"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3400


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()  # type: ignore[call-arg]
