"""
LoggerInitializer: one-shot sink configuration.
"""

from __future__ import annotations

import pytest

from hostlog.channel import INIT_LOGGER_COMMAND
from hostlog.exceptions import CommandTransportError
from hostlog.initializer import LoggerInitializer
from hostlog.models import InitState


class TestLoggerInitializer:
    @pytest.mark.asyncio
    async def test_sends_settings_once(self, channel, console, log_settings) -> None:
        initializer = LoggerInitializer(channel, log_settings, console)

        assert await initializer.initialize() is True
        assert await initializer.initialize() is True

        assert channel.calls == [
            (
                INIT_LOGGER_COMMAND,
                {
                    "settings": {
                        "log_path": "/var/log/app",
                        "log_type": "both",
                        "max_file_size": 1024,
                        "console_level": "info",
                        "file_level": "debug",
                    }
                },
            )
        ]
        console.info.assert_called_once_with("Logger initialized successfully")
        console.error.assert_not_called()
        assert initializer.state.initialized is True

    @pytest.mark.asyncio
    async def test_defers_outside_host(self, make_channel, console, log_settings) -> None:
        channel = make_channel(available=False)
        initializer = LoggerInitializer(channel, log_settings, console)

        assert await initializer.initialize() is False

        assert channel.calls == []
        console.info.assert_not_called()
        console.error.assert_not_called()
        assert initializer.state.initialized is False

    @pytest.mark.asyncio
    async def test_failure_leaves_flag_down(self, failing_channel, console, log_settings) -> None:
        initializer = LoggerInitializer(failing_channel, log_settings, console)

        assert await initializer.initialize() is False

        assert initializer.state.initialized is False
        console.error.assert_called_once()
        assert console.error.call_args.args == ("Failed to initialize logger",)
        console.info.assert_not_called()

    @pytest.mark.asyncio
    async def test_explicit_retry_after_failure(self, make_channel, console, log_settings) -> None:
        channel = make_channel(fail_with=CommandTransportError(command=INIT_LOGGER_COMMAND, reason="refused"))
        initializer = LoggerInitializer(channel, log_settings, console)

        assert await initializer.initialize() is False
        channel.fail_with = None
        assert await initializer.initialize() is True

        assert len(channel.calls) == 2
        console.info.assert_called_once_with("Logger initialized successfully")

    @pytest.mark.asyncio
    async def test_shared_state(self, channel, console, log_settings) -> None:
        state = InitState(initialized=True)
        initializer = LoggerInitializer(channel, log_settings, console, state)

        assert await initializer.initialize() is True
        assert channel.calls == []
