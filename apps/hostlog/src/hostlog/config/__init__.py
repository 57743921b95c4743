"""
hostlog Configuration Module.

Nested settings, one class per concern, each with its own environment prefix:

    HL_           environment (build mode)
    HL_LOG_       backend sink settings and caller resolution
    HL_CHANNEL_   host command endpoint

Usage:
    from hostlog.config import settings

    settings.environment.is_development
    settings.logging.to_command_payload()
    settings.channel.base_url
"""

from functools import cached_property

from pydantic_settings import BaseSettings, SettingsConfigDict

from .channel import ChannelSettings
from .environment import EnvironmentSettings
from .logging import DEFAULT_FRAME_DEPTH, DEFAULT_SOURCE_ROOTS, LocalFormat, LogSettings, LogType


class Settings(BaseSettings):
    """Composite settings aggregating the configuration domains."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @cached_property
    def environment(self) -> EnvironmentSettings:
        return EnvironmentSettings()

    @cached_property
    def logging(self) -> LogSettings:
        return LogSettings()

    @cached_property
    def channel(self) -> ChannelSettings:
        return ChannelSettings()


# Singleton instance
settings = Settings()

__all__ = [
    "Settings",
    "settings",
    "ChannelSettings",
    "EnvironmentSettings",
    "LogSettings",
    "LogType",
    "LocalFormat",
    "DEFAULT_FRAME_DEPTH",
    "DEFAULT_SOURCE_ROOTS",
]
