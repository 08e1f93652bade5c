"""Application configuration loaded from environment variables."""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment."""

    def __init__(self):
        self.open_states_api_key: str = os.getenv("OPEN_STATES_API_KEY", "")
        self.anthropic_api_key: str = os.getenv("ANTHROPIC_API_KEY", "")
        self.anthropic_model: str = os.getenv(
            "ANTHROPIC_MODEL", "claude-sonnet-4-20250514"
        )
        self.jurisdiction: str = os.getenv("JURISDICTION", "California")
        self.cache_database_url: str = os.getenv(
            "CACHE_DATABASE_URL", "sqlite:///./civicpulse_cache.db"
        )
        # Browser local storage typically allows around 5 MB per origin
        self.cache_quota_bytes: int = int(os.getenv("CACHE_QUOTA_BYTES", 5 * 1024 * 1024))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def open_states_api_base_url(self) -> str:
        return "https://v3.openstates.org"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for the application."""
    logging.basicConfig(
        level=(level or get_settings().log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
