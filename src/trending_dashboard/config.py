"""Configuration settings for trending dashboard."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_SOURCE_URL = (
    "https://script.google.com/macros/s/"
    "AKfycbzngmCLQCvJFb-jle7fytMWewoCwN8-2I6-ZCixgtiPZsXU-quUX6QKGLUexlo7UKc1/exec"
)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Data source
    source_url: str = DEFAULT_SOURCE_URL
    request_timeout: float = 30.0  # seconds

    # Retry on transport errors and 5xx responses
    fetch_attempts: int = 3
    fetch_backoff: float = 1.0  # exponential backoff multiplier, seconds

    # How long a fetched snapshot is served before refetching
    cache_ttl_seconds: int = 3600

    # Where region dropdown values come from
    region_options: Literal["data", "reference"] = "data"

    log_level: str = "INFO"


settings = Settings()
