"""
Application configuration using Pydantic Settings.

Centralizes all configuration with environment variable support.
Variables are read with the ``LIFE_WEEKS_`` prefix, e.g. ``LIFE_WEEKS_STATE_FILE``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="LIFE_WEEKS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Storage for the persisted birth date
    state_file: str = "~/.life_weeks/state.json"

    # Rendered PNGs
    image_output_dir: str = "~/.life_weeks/images"

    # Countdown refresh period (seconds)
    tick_interval_seconds: float = Field(1.0, gt=0)

    # Environment
    environment: str = "development"
    log_level: str = "INFO"
    log_to_file: bool = False
    logs_dir: str = "logs"

    @property
    def state_path(self) -> Path:
        return Path(self.state_file).expanduser()

    @property
    def image_output_path(self) -> Path:
        return Path(self.image_output_dir).expanduser()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
