"""
Command Channel Configuration.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChannelSettings(BaseSettings):
    """Connection to the host shell's privileged command endpoint."""

    model_config = SettingsConfigDict(
        env_prefix="HL_CHANNEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # None means we are not running inside the host shell
    base_url: Optional[str] = Field(default=None, description="Base URL of the host command endpoint")
    timeout_seconds: float = Field(default=5.0, gt=0, description="Per-command request timeout")
