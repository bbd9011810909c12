"""Configuration settings for the practice tracker."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_DATA_DIR = Path.home() / ".practice_tracker"


class Settings(BaseSettings):
    """Settings loaded from PRACTICE_* environment variables or a .env file."""

    model_config = SettingsConfigDict(
        env_prefix="PRACTICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend API
    api_base_url: str = "http://localhost:5000/api/v1"
    api_token: str = ""  # session token; empty means signed out
    request_timeout: float = 30.0

    # "Today" is taken in this IANA zone; everything after is calendar-date math
    timezone: str = "UTC"

    # Local store for the challenge tracker
    store_path: Path | None = None

    # Refuse to silently discard an in-progress challenge of another type
    confirm_challenge_switch: bool = False

    log_level: str = "WARNING"

    def model_post_init(self, __context) -> None:
        """Set default store path after initialization."""
        if self.store_path is None:
            self.store_path = DEFAULT_DATA_DIR / "tracker.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
