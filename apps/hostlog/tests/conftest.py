import logging
import typing as t
from unittest.mock import MagicMock

import pytest
import structlog

from hostlog.channel import CommandChannel
from hostlog.config import LogSettings
from hostlog.exceptions import CommandRejected
from hostlog.logging import Console, core
from hostlog.logging.interceptors import THIRD_PARTY_ROOTS, RedirectStdLibHandler


class RecordingChannel(CommandChannel):
    """In-memory command channel that records every invocation."""

    def __init__(self, *, available: bool = True, fail_with: t.Optional[Exception] = None) -> None:
        self.available = available
        self.fail_with = fail_with
        self.calls: list[tuple[str, dict]] = []
        self.closed = False

    def is_available(self) -> bool:
        return self.available

    async def invoke(self, command: str, args: t.Mapping[str, t.Any]) -> t.Any:
        self.calls.append((command, dict(args)))
        if self.fail_with is not None:
            raise self.fail_with
        return None

    async def aclose(self) -> None:
        self.closed = True

    def payloads(self, command: str) -> list[dict]:
        return [args for name, args in self.calls if name == command]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep host environment variables out of the settings under test."""
    for name in (
        "HL_ENV",
        "HL_CHANNEL_BASE_URL",
        "HL_LOG_FRAME_DEPTH",
        "HL_LOG_LOG_PATH",
        "HL_LOG_CONSOLE_LEVEL",
        "HL_LOG_FILE_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def console():
    return MagicMock(spec=Console)


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def failing_channel():
    return RecordingChannel(fail_with=CommandRejected(command="any", reason="backend down", status_code=503))


@pytest.fixture
def log_settings():
    return LogSettings(
        log_path="/var/log/app",
        max_file_size=1024,
        console_level="info",
        file_level="debug",
    )


@pytest.fixture
def make_channel():
    return RecordingChannel


@pytest.fixture
def reset_console_pipeline():
    """Undo whatever `configure_logging` installed during the test."""
    yield
    for sink in core._sinks:
        sink.close()
    core._sinks.clear()
    for name in THIRD_PARTY_ROOTS:
        lg = logging.getLogger(name)
        lg.handlers = [h for h in lg.handlers if not isinstance(h, RedirectStdLibHandler)]
        lg.propagate = True
    structlog.reset_defaults()
