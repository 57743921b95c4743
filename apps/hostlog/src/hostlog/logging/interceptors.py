"""
Interceptors for capturing standard library and third-party logs.
"""

import logging

from .core import get_logger

# Transport libraries used by the command channel
THIRD_PARTY_ROOTS = ("httpx", "httpcore")


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging events to structlog so that
    transport logs share the console pipeline with the façade.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if "structlog" in record.name:
                return

            msg = self.format(record)
            logger = get_logger(self._simplify_logger_name(record.name))
            logger.log(getattr(logging, record.levelname, logging.INFO), msg)
        except Exception:
            self.handleError(record)

    @staticmethod
    def _simplify_logger_name(name: str) -> str:
        """
        Keep short names as-is, shorten long ones to their last two parts.

        - "httpx" -> "httpx"
        - "httpcore.connection" -> "httpcore.connection"
        - "a.b.c.d" -> "c.d"
        """
        if not name:
            return "stdlib"
        parts = name.split(".")
        if len(parts) <= 2:
            return name
        return ".".join(parts[-2:])


def intercept_third_party_loggers(handler: logging.Handler) -> None:
    """
    Attach `handler` to the transport loggers only.

    Child loggers lose their own handlers and propagate to the transport
    root, which stops there. Levels and the root logger are not touched.
    """
    for name in THIRD_PARTY_ROOTS:
        lg = logging.getLogger(name)
        lg.handlers = [h for h in lg.handlers if not isinstance(h, RedirectStdLibHandler)]
        lg.addHandler(handler)
        lg.propagate = False

    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.PlaceHolder) or name in THIRD_PARTY_ROOTS:
            continue
        if name.startswith(tuple(root + "." for root in THIRD_PARTY_ROOTS)):
            logger.handlers = []
            logger.propagate = True
