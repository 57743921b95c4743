"""
Console line rendering.
"""

from __future__ import annotations

from datetime import datetime, timezone

from structlog.typing import EventDict

COLORS = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "timestamp": "\033[90m",
    "logger": "\033[35m",
    "key": "\033[34m",
}


def colorize(text: str, color: str) -> str:
    """Apply ANSI color to text."""
    return f"{COLORS.get(color, '')}{text}{COLORS['reset']}"


class ConsoleFormatter:
    """Fixed-width, human-readable console lines: ``time | LEVEL | logger | message k=v``."""

    _RESET = "\x1b[0m"
    _LEVEL_COLORS = {
        "DEBUG": "\x1b[36m",
        "INFO": "\x1b[32m",
        "WARNING": "\x1b[33m",
        "ERROR": "\x1b[31m",
        "CRITICAL": "\x1b[1;31m",
    }

    EXCLUDED_KEYS = {"level", "message", "event", "logger", "timestamp", "stack", "exception"}
    TIMESTAMP_FORMAT = "%H:%M:%S"
    LEVEL_WIDTH = 7
    LOGGER_WIDTH = 20
    SEPARATOR = " | "

    @staticmethod
    def _fit_right(text: str, width: int) -> str:
        if len(text) > width:
            text = "..." + text[-(width - 3) :] if width > 3 else text[-width:]
        return f"{text:>{width}}"

    @classmethod
    def _format_timestamp(cls, raw_timestamp: str | None) -> str:
        if raw_timestamp:
            try:
                dt = datetime.fromisoformat(raw_timestamp.replace("Z", "+00:00"))
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=timezone.utc)
                return dt.astimezone().strftime(cls.TIMESTAMP_FORMAT)
            except (ValueError, TypeError):
                pass
        return datetime.now().strftime(cls.TIMESTAMP_FORMAT)

    @classmethod
    def format(cls, event_dict: EventDict, *, use_color: bool = True) -> str:
        """Format an event dict into an aligned string."""
        level_upper = str(event_dict.get("level", "info")).upper()
        message = str(event_dict.get("message", event_dict.get("event", "")))
        logger_name = str(event_dict.get("logger", "root"))

        extras = []
        for key, value in event_dict.items():
            if key in cls.EXCLUDED_KEYS:
                continue
            extras.append(f"{colorize(key, 'key')}={value}" if use_color else f"{key}={value}")
        if extras:
            message = f"{message} " + " ".join(extras)

        level_text = cls._fit_right(level_upper, cls.LEVEL_WIDTH)
        timestamp = cls._format_timestamp(event_dict.get("timestamp"))
        logger_text = cls._fit_right(logger_name, cls.LOGGER_WIDTH)
        if use_color:
            level_text = f"{cls._LEVEL_COLORS.get(level_upper, '')}{level_text}{cls._RESET}"
            timestamp = colorize(timestamp, "timestamp")
            logger_text = colorize(logger_text, "logger")

        line = cls.SEPARATOR.join([timestamp, level_text, logger_text, message])

        # Multi-line payloads go below the aligned line
        for key in ("stack", "exception"):
            if event_dict.get(key):
                line += "\n" + str(event_dict[key])
        return line
