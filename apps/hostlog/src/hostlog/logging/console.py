"""
Console primitives used by the façade.

Each method is one "channel" of the local console. They share the structlog
pipeline configured by `configure_logging`.
"""

from __future__ import annotations

from typing import Any, Optional

from .core import get_logger


class Console:
    """Named console channels: trace, debug, info, warn, error and the general `log`."""

    def __init__(self, logger: Optional[Any] = None) -> None:
        self._logger = logger if logger is not None else get_logger("hostlog.console")

    def trace(self, message: str, **kw: Any) -> None:
        # trace prints the current stack along with the message
        self._logger.debug(message, stack_info=True, **kw)

    def debug(self, message: str, **kw: Any) -> None:
        self._logger.debug(message, **kw)

    def info(self, message: str, **kw: Any) -> None:
        self._logger.info(message, **kw)

    def warn(self, message: str, **kw: Any) -> None:
        self._logger.warning(message, **kw)

    def error(self, message: str, **kw: Any) -> None:
        self._logger.error(message, **kw)

    def log(self, message: str, **kw: Any) -> None:
        self._logger.info(message, **kw)
