"""
Storage settings using Pydantic for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Storage configuration for the per-asset record files."""

    data_dir: str = Field(
        default=".", description="Directory holding the per-asset CSV record files"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Create a global instance
storage_settings = StorageSettings()
