"""
Per-call fan-out: caller location, local console, host log sink.
"""

from __future__ import annotations

from typing import Optional, Union

from .channel import LOG_MESSAGE_COMMAND, CommandChannel
from .location import LocationProvider
from .logging import Console, get_logger
from .models import LogRecord, Severity

logger = get_logger("hostlog.dispatcher")

# Console channel per severity; anything else goes to the general `log` channel
CONSOLE_CHANNELS: dict[Severity, str] = {
    Severity.TRACE: "trace",
    Severity.DEBUG: "debug",
    Severity.INFO: "info",
    Severity.WARN: "warn",
    Severity.ERROR: "error",
}
DEFAULT_CONSOLE_CHANNEL = "log"


def console_channel_for(level: Optional[Severity]) -> str:
    if level is None:
        return DEFAULT_CONSOLE_CHANNEL
    return CONSOLE_CHANNELS.get(level, DEFAULT_CONSOLE_CHANNEL)


def format_console_line(level_tag: str, message: str, label: Optional[str] = None) -> str:
    """``[LEVEL] [label] message``, without the label part when none is given."""
    prefix = f"[{level_tag.upper()}]"
    if label:
        prefix = f"{prefix} [{label}]"
    return f"{prefix} {message}"


class Dispatcher:
    """Deliver one log call to the console and the host sink.

    `dispatch` always completes: console problems are swallowed, sink failures
    are reported on the console error channel and the record is dropped.
    """

    def __init__(self, provider: LocationProvider, channel: CommandChannel, console: Console) -> None:
        self._provider = provider
        self._channel = channel
        self._console = console

    async def dispatch(self, level: Union[Severity, str], message: str, label: Optional[str] = None) -> None:
        # Keep `resolve` one await below this frame; the stack provider counts on it.
        location = await self._provider.resolve(label)

        severity = Severity.parse(level)
        level_tag = severity.value if severity is not None else str(level).lower()

        self._write_console(severity, level_tag, message, label)
        await self._submit(severity, level_tag, message, location)

    def _write_console(self, severity: Optional[Severity], level_tag: str, message: str, label: Optional[str]) -> None:
        self._safe_console(console_channel_for(severity), format_console_line(level_tag, message, label))

    def _safe_console(self, channel: str, message: str, **kw) -> None:
        try:
            getattr(self._console, channel)(message, **kw)
        except Exception as exc:
            logger.debug("console_write_failed", channel=channel, error=str(exc))

    async def _submit(self, severity: Optional[Severity], level_tag: str, message: str, location: str) -> None:
        if severity is not None:
            args = LogRecord(level=severity, message=message, location=location).to_command_args()
        else:
            args = {"level": level_tag, "message": message, "location": location}

        try:
            await self._channel.invoke(LOG_MESSAGE_COMMAND, args)
        except Exception as exc:
            self._safe_console("error", "Failed to send log to backend", error=str(exc), code=getattr(exc, "code", None))
