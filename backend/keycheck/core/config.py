from functools import lru_cache
from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables and .env files."""

    app_name: str = "LLM Key Check API"
    environment: str = "dev"
    debug: bool = False
    version: str = "0.1.0"
    log_level: str = "INFO"

    # Outbound provider calls.
    probe_timeout_seconds: float = 8.0
    catalog_model_limit: int = 50

    # Per-client fixed window applied before a check is run.
    rate_limit_max_requests: int = 20
    rate_limit_window_seconds: float = 60.0
    trust_forwarded_for: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="KC_",
        extra="ignore",
    )

    def dict_for_logging(self) -> dict[str, Any]:
        return {
            "app_name": self.app_name,
            "environment": self.environment,
            "debug": self.debug,
            "version": self.version,
            "probe_timeout_seconds": self.probe_timeout_seconds,
        }


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


__all__ = ["Settings", "get_settings"]
