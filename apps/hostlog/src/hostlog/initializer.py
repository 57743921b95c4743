"""
One-shot configuration of the host log sink.
"""

from __future__ import annotations

from .channel import INIT_LOGGER_COMMAND, CommandChannel
from .config.logging import LogSettings
from .logging import Console
from .models import InitState


class LoggerInitializer:
    """Send the static sink settings to the host, at most once per successful run.

    Outside the host shell (no command channel) the call defers silently so the
    façade can be constructed anywhere. A failed attempt is reported on the
    console and leaves the state untouched; calling `initialize` again retries.
    """

    def __init__(
        self,
        channel: CommandChannel,
        log_settings: LogSettings,
        console: Console,
        state: InitState | None = None,
    ) -> None:
        self._channel = channel
        self._settings = log_settings
        self._console = console
        self.state = state if state is not None else InitState()

    async def initialize(self) -> bool:
        if self.state.initialized:
            return True
        if not self._channel.is_available():
            return False

        try:
            await self._channel.invoke(INIT_LOGGER_COMMAND, {"settings": self._settings.to_command_payload()})
        except Exception as exc:
            self._console.error("Failed to initialize logger", error=str(exc), code=getattr(exc, "code", None))
            return False

        self.state.initialized = True
        self._console.info("Logger initialized successfully")
        return True
