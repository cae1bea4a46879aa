"""Configuration settings for findpath."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseSettings):
    """Settings loaded from FINDPATH_* environment variables.

    - FINDPATH_PROBE_TIMEOUT: seconds a version probe or shell check may run
    - FINDPATH_LOG_LEVEL: log level used by the findpath command
    """

    probe_timeout: float = 10.0
    log_level: str = "WARNING"

    model_config = SettingsConfigDict(env_prefix="FINDPATH_")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {v!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
