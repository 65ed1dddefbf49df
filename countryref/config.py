import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library configuration loaded from environment variables."""

    data_dir: Path | None = Field(
        default=None,
        alias="COUNTRYREF_DATA_DIR",
        description="Directory with the YAML reference tables (bundled data when unset)"
    )
    min_letter: int = Field(
        default=5,
        ge=0,
        alias="COUNTRYREF_MIN_LETTER",
        description="Minimum normalized length before prefix/substring matching is tried"
    )
    verbose: bool = Field(default=True, alias="COUNTRYREF_VERBOSE")
    log_level: str = Field(default="INFO", alias="COUNTRYREF_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,  # Treat empty strings as not set
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v):
        """Accept any stdlib level name, case-insensitively."""
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
