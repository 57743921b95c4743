"""
Logging Configuration.

`LogSettings` carries two groups of values:

- backend settings forwarded once to the host's log sink (`init_logger_cmd`);
- local settings for caller resolution and the in-process console pipeline.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hostlog.models import Severity


DEFAULT_SOURCE_ROOTS: tuple[str, ...] = ("app", "src", "components", "lib", "hooks", "constants", "types")

# resolver, dispatcher, public level method, caller
DEFAULT_FRAME_DEPTH = 3


class LogType(str, Enum):
    FILE = "file"
    STDOUT = "stdout"
    BOTH = "both"


class LocalFormat(str, Enum):
    CONSOLE = "console"
    JSON = "json"


class LogSettings(BaseSettings):
    """Logger configuration, immutable once loaded."""

    model_config = SettingsConfigDict(
        env_prefix="HL_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Backend sink
    log_path: Optional[str] = Field(default=None, description="Directory or file the host writes logs to")
    log_type: LogType = Field(default=LogType.BOTH, description="Backend sink kind")
    max_file_size: int = Field(default=10 * 1024 * 1024, gt=0, description="Rotation size in bytes")
    console_level: Severity = Field(default=Severity.INFO, description="Host console verbosity")
    file_level: Severity = Field(default=Severity.DEBUG, description="Host file verbosity")

    # Caller resolution
    frame_depth: int = Field(default=DEFAULT_FRAME_DEPTH, ge=0, description="Stack offset of the caller frame")
    source_roots: tuple[str, ...] = Field(
        default=DEFAULT_SOURCE_ROOTS,
        description="Top-level source directories used to shorten file paths",
    )

    # Local console pipeline
    local_level: str = Field(default="DEBUG", description="Level of the in-process console pipeline")
    local_format: LocalFormat = Field(default=LocalFormat.CONSOLE, description="Local console output format")

    @field_validator("console_level", "file_level", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Any:
        # Unknown values pass through unchanged and fail enum validation
        return Severity.parse(value) or value

    def to_command_payload(self) -> dict[str, Any]:
        """Settings in the shape expected by `init_logger_cmd`."""
        return {
            "log_path": self.log_path or None,
            "log_type": self.log_type.value,
            "max_file_size": self.max_file_size,
            "console_level": self.console_level.value,
            "file_level": self.file_level.value,
        }
