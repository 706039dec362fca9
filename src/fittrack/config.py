"""Configuration settings for fittrack."""

from pathlib import Path
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/fittrack/config.py
# .parent.parent.parent = project root
PROJECT_ROOT = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="FITTRACK_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    db_path: Path | None = None

    # Logging
    log_level: str = "WARNING"

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.db_path is None:
            self.db_path = Path.home() / ".fittrack" / "fittrack.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
