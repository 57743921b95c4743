"""
Local console logging for hostlog.

Library: structlog + orjson. Records are fanned out to stream sinks; the
durable copy of every message lives in the host shell's log sink.
"""

from .console import Console
from .core import configure_logging, get_logger, is_configured

__all__ = ["Console", "configure_logging", "get_logger", "is_configured"]
