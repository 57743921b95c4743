"""
FrontendLogger: the public logging façade.

Usage:
    from hostlog import create_logger

    log = create_logger()
    await log.info("Saved", "profile-form")

Each level method resolves the caller location, mirrors the message to the
local console and forwards a record to the host log sink. A call always
completes; in the worst case the message only reaches the console.
"""

from __future__ import annotations

import asyncio
from typing import Optional, Union

import structlog

from .channel import CommandChannel, HttpCommandChannel
from .config import Settings
from .dispatcher import Dispatcher
from .initializer import LoggerInitializer
from .location import LocationProvider, StackCapture, build_location_provider
from .logging import Console, configure_logging, get_logger, is_configured
from .models import InitState, Severity

logger = get_logger("hostlog.service")


class FrontendLogger:
    """Logging façade composed of an initializer, a location provider and a dispatcher.

    Construction schedules sink initialization on the running event loop, if
    there is one; otherwise the first log call schedules it. Only one attempt is
    made automatically, `initialize()` can be awaited to retry.
    """

    def __init__(
        self,
        *,
        channel: CommandChannel,
        provider: LocationProvider,
        initializer: LoggerInitializer,
        console: Console,
    ) -> None:
        self._channel = channel
        self._initializer = initializer
        self._dispatcher = Dispatcher(provider, channel, console)
        self._init_task: Optional[asyncio.Task[bool]] = None
        self._schedule_initialize()

    @property
    def state(self) -> InitState:
        return self._initializer.state

    def _schedule_initialize(self) -> None:
        if self._init_task is not None or self.state.initialized:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return  # no loop yet; the first log call retries scheduling
        self._init_task = loop.create_task(self._initializer.initialize())

    async def initialize(self) -> bool:
        return await self._initializer.initialize()

    # Level methods call the dispatcher directly: the caller must stay three frames up.

    async def log(self, level: Union[Severity, str], message: str, label: Optional[str] = None) -> None:
        self._schedule_initialize()
        await self._dispatcher.dispatch(level, message, label)

    async def trace(self, message: str, label: Optional[str] = None) -> None:
        self._schedule_initialize()
        await self._dispatcher.dispatch(Severity.TRACE, message, label)

    async def debug(self, message: str, label: Optional[str] = None) -> None:
        self._schedule_initialize()
        await self._dispatcher.dispatch(Severity.DEBUG, message, label)

    async def info(self, message: str, label: Optional[str] = None) -> None:
        self._schedule_initialize()
        await self._dispatcher.dispatch(Severity.INFO, message, label)

    async def warn(self, message: str, label: Optional[str] = None) -> None:
        self._schedule_initialize()
        await self._dispatcher.dispatch(Severity.WARN, message, label)

    warning = warn

    async def error(self, message: str, label: Optional[str] = None) -> None:
        self._schedule_initialize()
        await self._dispatcher.dispatch(Severity.ERROR, message, label)

    async def aclose(self) -> None:
        """Wait for a pending initialization attempt and release the channel."""
        if self._init_task is not None and not self._init_task.done():
            try:
                await self._init_task
            except Exception as exc:
                logger.warning("logger_init_task_failed", error=str(exc))
        await self._channel.aclose()


def create_logger(
    settings: Optional[Settings] = None,
    *,
    channel: Optional[CommandChannel] = None,
    console: Optional[Console] = None,
    capture: Optional[StackCapture] = None,
) -> FrontendLogger:
    """
    Build a FrontendLogger from configuration.

    Args:
        settings: Composite settings, the module singleton by default
        channel: Command channel override, HTTP to `HL_CHANNEL_BASE_URL` by default
        console: Console override, the structlog-backed console by default
        capture: Stack capture override for the development provider

    Returns:
        A façade whose location strategy matches the build mode.
    """
    if settings is None:
        from .config import settings as default_settings

        settings = default_settings

    log_settings = settings.logging
    if console is None:
        # An application that configured structlog itself keeps its pipeline
        if not is_configured() and not structlog.is_configured():
            configure_logging(level=log_settings.local_level, fmt=log_settings.local_format.value)
        console = Console()

    if channel is None:
        channel = HttpCommandChannel(settings.channel.base_url, timeout=settings.channel.timeout_seconds)

    return FrontendLogger(
        channel=channel,
        provider=build_location_provider(settings.environment, log_settings, capture=capture),
        initializer=LoggerInitializer(channel, log_settings, console),
        console=console,
    )
