from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    sheet_id: str = Field("", alias="SHEET_ID")
    api_key: str = Field("", alias="SHEETS_API_KEY")
    sheet_range: str = Field("Sheet1!A1:AB1000", alias="SHEET_RANGE")
    cache_ttl_s: int = Field(300, alias="CACHE_TTL_S")
    fetch_retries: int = Field(3, alias="FETCH_RETRIES")
    retry_delay_s: float = Field(1.0, alias="RETRY_DELAY_S")
    poll_interval_min: int = Field(5, alias="POLL_INTERVAL_MIN")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("sheet_id", "api_key")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    @field_validator("sheet_range")
    @classmethod
    def _range_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SHEET_RANGE must be a non-empty string")
        return v.strip()

    @field_validator("cache_ttl_s", "retry_delay_s")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("CACHE_TTL_S and RETRY_DELAY_S must not be negative")
        return v

    @field_validator("fetch_retries")
    @classmethod
    def _retries_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("FETCH_RETRIES must be at least 1")
        return v

    @field_validator("poll_interval_min")
    @classmethod
    def _poll_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("POLL_INTERVAL_MIN must be greater than 0")
        return v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL {v!r} is not a logging level")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Return application settings loaded from the environment."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
