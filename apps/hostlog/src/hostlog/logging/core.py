"""
Core logging configuration and initialization logic.

This is the in-process console pipeline the façade mirrors every message to.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import structlog
from structlog.typing import EventDict, WrappedLogger

from .sinks import BaseSink, LogFormat, StdioSink

# =============================================================================
# Global State
# =============================================================================

_sinks: list[BaseSink] = []


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(_name=name or "root")


def is_configured() -> bool:
    return bool(_sinks)


# =============================================================================
# Structlog Processors
# =============================================================================


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "root")
    return event_dict


def rename_event_key(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Rename 'event' to 'message'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def multi_sink_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Render log to all configured sinks. Returns empty to suppress default output."""
    for sink in _sinks:
        try:
            sink.emit(event_dict)
        except Exception:
            pass  # a broken stream must not break the caller
    return ""


# =============================================================================
# Configuration Logic
# =============================================================================


class _NopFile:
    def write(self, s: str) -> None:
        pass

    def flush(self) -> None:
        pass


_NOP_FILE = _NopFile()


class SilentPrintLoggerFactory:
    """Logger factory that returns a logger writing to nowhere; sinks do the output."""

    def __call__(self, *args: Any) -> structlog.PrintLogger:
        return structlog.PrintLogger(file=_NOP_FILE)


def _initialize_sinks(fmt: str, stream: Any) -> None:
    for sink in _sinks:
        sink.close()
    _sinks.clear()

    log_format: LogFormat = "json" if fmt.lower() == "json" else "console"
    _sinks.append(StdioSink(fmt=log_format, stream=stream or sys.stderr))


def _configure_structlog(level: str) -> None:
    shared_processors = [
        structlog.stdlib.add_log_level,
        add_timestamp,
        add_logger_name,
        rename_event_key,
        structlog.processors.StackInfoRenderer(additional_ignores=["hostlog.logging"]),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [multi_sink_renderer],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper(), logging.INFO)),
        context_class=dict,
        logger_factory=SilentPrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(
    *,
    level: str = "INFO",
    fmt: str = "console",
    stream: Any = None,
) -> None:
    """
    Configure the local console pipeline.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Output format (console, json)
        stream: Target stream, stderr by default
    """
    from .interceptors import RedirectStdLibHandler, intercept_third_party_loggers

    _initialize_sinks(fmt, stream)
    _configure_structlog(level)

    # Transport records (httpx, httpcore) join the same sinks; the root logger is left to the application
    intercept_third_party_loggers(RedirectStdLibHandler())
