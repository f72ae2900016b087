"""
Fetcher settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FetcherSettings(BaseSettings):
    """HTTP fetcher configuration using Pydantic settings."""

    user_agent: str = Field(
        default="financial-data-fetcher/1.0",
        description="User-Agent header sent with every request",
    )

    request_timeout: float | None = Field(
        default=30.0,
        description="Total timeout in seconds for one request, None to disable",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


fetcher_settings = FetcherSettings()
