"""
Process-level settings for ctrf-reporter.

Per-run reporter options live in :mod:`ctrf_reporter.reporter_config`; this
module only covers knobs that affect the reporter process as a whole.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    # Logging settings
    log_level: str = Field(default="INFO", json_schema_extra={"env": "CTRF_LOG_LEVEL"})
    log_file: Optional[str] = Field(default=None, json_schema_extra={"env": "CTRF_LOG_FILE"})

    model_config = SettingsConfigDict(
        env_prefix="CTRF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unexpected environment variables
    )


settings = Settings()
