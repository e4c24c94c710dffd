"""Tests for the logging dictConfig builder."""

from __future__ import annotations

import logging

import structlog

from animeav1.infrastructure.config import AppConfig
from animeav1.infrastructure.logging.setup import (
    BASE_LOGGING_CONFIG,
    _add_record_created_timestamp_utc,
    _drop_color_message,
    _MaxLevelFilter,
    _MinLevelFilter,
    build_logging_config,
)


class TestBuildLoggingConfig:
    def test_handlers_use_structlog_formatter(self) -> None:
        cfg = build_logging_config(AppConfig())
        assert cfg["formatters"]["structlog"]["()"] is structlog.stdlib.ProcessorFormatter
        assert {h["formatter"] for h in cfg["handlers"].values()} == {"structlog"}

    def test_base_config_not_mutated(self) -> None:
        build_logging_config(AppConfig(log_level="DEBUG"))
        assert BASE_LOGGING_CONFIG["formatters"] == {}
        assert BASE_LOGGING_CONFIG["loggers"]["uvicorn"]["level"] == "INFO"

    def test_debug_keeps_http_client_loggers_quiet(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="DEBUG"))
        assert cfg["loggers"]["uvicorn"]["level"] == "DEBUG"
        assert cfg["loggers"]["httpx"]["level"] == "WARNING"
        assert cfg["loggers"]["httpcore"]["level"] == "WARNING"
        assert cfg["root"]["level"] == "DEBUG"

    def test_error_level_applies_everywhere(self) -> None:
        cfg = build_logging_config(AppConfig(log_level="ERROR"))
        assert {c["level"] for c in cfg["loggers"].values()} == {"ERROR"}

    def test_renderer_follows_format(self) -> None:
        json_cfg = build_logging_config(AppConfig(log_format="json"))
        console_cfg = build_logging_config(AppConfig(log_format="console"))
        assert isinstance(
            json_cfg["formatters"]["structlog"]["processors"][-1],
            structlog.processors.JSONRenderer,
        )
        assert isinstance(
            console_cfg["formatters"]["structlog"]["processors"][-1],
            structlog.dev.ConsoleRenderer,
        )


class TestProcessors:
    def test_drop_color_message(self) -> None:
        event = _drop_color_message(None, None, {"event": "x", "color_message": "y"})
        assert event == {"event": "x"}

    def test_record_timestamp(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        record.created = 0.0
        event = _add_record_created_timestamp_utc(None, None, {"_record": record})
        assert event["timestamp"] == "1970-01-01T00:00:00Z"

    def test_no_record_no_timestamp(self) -> None:
        assert "timestamp" not in _add_record_created_timestamp_utc(None, None, {})


class TestLevelFilters:
    def _record(self, level: int) -> logging.LogRecord:
        return logging.LogRecord("t", level, __file__, 1, "msg", None, None)

    def test_max_level(self) -> None:
        f = _MaxLevelFilter(logging.WARNING)
        assert f.filter(self._record(logging.WARNING))
        assert not f.filter(self._record(logging.ERROR))

    def test_min_level(self) -> None:
        f = _MinLevelFilter(logging.ERROR)
        assert f.filter(self._record(logging.CRITICAL))
        assert not f.filter(self._record(logging.INFO))
