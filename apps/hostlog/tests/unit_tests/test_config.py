"""
Settings loading and the init_logger_cmd payload.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from hostlog.config import (
    DEFAULT_FRAME_DEPTH,
    DEFAULT_SOURCE_ROOTS,
    ChannelSettings,
    EnvironmentSettings,
    LogSettings,
    LogType,
    Settings,
)
from hostlog.models import Severity


class TestLogSettings:
    def test_defaults(self) -> None:
        s = LogSettings()

        assert s.log_path is None
        assert s.log_type is LogType.BOTH
        assert s.max_file_size == 10 * 1024 * 1024
        assert s.console_level is Severity.INFO
        assert s.file_level is Severity.DEBUG
        assert s.frame_depth == DEFAULT_FRAME_DEPTH
        assert s.source_roots == DEFAULT_SOURCE_ROOTS

    def test_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("HL_LOG_LOG_PATH", "/tmp/app-logs")
        monkeypatch.setenv("HL_LOG_LOG_TYPE", "file")
        monkeypatch.setenv("HL_LOG_MAX_FILE_SIZE", "2048")
        monkeypatch.setenv("HL_LOG_FILE_LEVEL", "trace")

        s = LogSettings()

        assert s.log_path == "/tmp/app-logs"
        assert s.log_type is LogType.FILE
        assert s.max_file_size == 2048
        assert s.file_level is Severity.TRACE

    def test_payload_uses_wire_names(self, log_settings) -> None:
        assert log_settings.to_command_payload() == {
            "log_path": "/var/log/app",
            "log_type": "both",
            "max_file_size": 1024,
            "console_level": "info",
            "file_level": "debug",
        }

    @pytest.mark.parametrize("path", [None, ""])
    def test_absent_path_is_null(self, path) -> None:
        assert LogSettings(log_path=path).to_command_payload()["log_path"] is None

    def test_immutable(self, log_settings) -> None:
        with pytest.raises(ValidationError):
            log_settings.max_file_size = 1

    def test_levels_from_environment_ignore_case(self, monkeypatch) -> None:
        monkeypatch.setenv("HL_LOG_CONSOLE_LEVEL", "INFO")
        monkeypatch.setenv("HL_LOG_FILE_LEVEL", "Warning")

        s = LogSettings()

        assert s.console_level is Severity.INFO
        assert s.file_level is Severity.WARN
        assert s.to_command_payload()["file_level"] == "warn"

    def test_rejects_unknown_level(self) -> None:
        with pytest.raises(ValidationError):
            LogSettings(console_level="verbose")


class TestEnvironmentSettings:
    def test_defaults_to_development(self) -> None:
        env = EnvironmentSettings()

        assert env.is_development is True
        assert env.is_production is False

    def test_production(self, monkeypatch) -> None:
        monkeypatch.setenv("HL_ENV", "production")

        assert EnvironmentSettings().is_production is True


class TestCompositeSettings:
    def test_sub_settings(self, monkeypatch) -> None:
        monkeypatch.setenv("HL_CHANNEL_BASE_URL", "http://127.0.0.1:1430")

        s = Settings()

        assert isinstance(s.logging, LogSettings)
        assert isinstance(s.environment, EnvironmentSettings)
        assert s.channel.base_url == "http://127.0.0.1:1430"
        assert s.channel.timeout_seconds == 5.0

    def test_channel_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ChannelSettings(timeout_seconds=0)
