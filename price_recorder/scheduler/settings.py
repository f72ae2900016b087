"""
Scheduler settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SchedulerSettings(BaseSettings):
    """Polling loop configuration using Pydantic settings."""

    poll_interval: float = Field(
        default=10,
        gt=0,
        description="Seconds to wait between the end of one cycle and the next",
    )

    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create a global instance
scheduler_settings = SchedulerSettings()
