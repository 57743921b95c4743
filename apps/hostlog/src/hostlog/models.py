"""
Value types shared by the resolver, dispatcher and initializer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class Severity(str, Enum):
    """Log severity, ordered from most to least verbose."""

    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @classmethod
    def parse(cls, value: Union[str, "Severity", None]) -> Optional["Severity"]:
        """Return the matching member, or None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        normalized = value.strip().lower()
        if normalized == "warning":
            return cls.WARN
        try:
            return cls(normalized)
        except ValueError:
            return None


_RANKS = {member: index for index, member in enumerate(Severity)}


@dataclass(frozen=True)
class StackFrame:
    file_name: str
    line_number: Optional[int] = None


@dataclass(frozen=True)
class LogRecord:
    """A single record bound for the host log sink."""

    level: Severity
    message: str
    location: str

    def to_command_args(self) -> dict[str, Any]:
        return {"level": self.level.value, "message": self.message, "location": self.location}


@dataclass
class InitState:
    """Process-wide initialization flag; flips to True once and is never reset."""

    initialized: bool = False
