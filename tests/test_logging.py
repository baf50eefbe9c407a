"""Tests for structured logging configuration."""

import json
import logging
import sys
from unittest.mock import patch

from claudle.app.core.config import settings
from claudle.app.core.logging import (
    ContextFilter,
    JSONFormatter,
    get_log_context,
    get_logger,
    get_logging_config,
)


def make_record(msg="Test message", level=logging.INFO, exc_info=None):
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )


class TestJSONFormatter:
    """Test JSON formatter for structured logging."""

    def test_basic_json_format(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test"
        assert data["message"] == "Test message"
        assert "timestamp" in data
        assert data["source"]["file"] == "test.py"
        assert data["source"]["line"] == 1

    def test_context_fields_are_top_level(self):
        record = make_record("Rate limit exceeded")
        record.client_ip = "10.0.0.1"
        record.route = "/api/claude/get-hint"
        record.duration_ms = 12.5

        data = json.loads(JSONFormatter().format(record))

        assert data["client_ip"] == "10.0.0.1"
        assert data["route"] == "/api/claude/get-hint"
        assert data["duration_ms"] == 12.5
        assert "extra" not in data

    def test_other_fields_go_under_extra(self):
        record = make_record()
        record.retry_after = 3600

        data = json.loads(JSONFormatter().format(record))
        assert data["extra"] == {"retry_after": 3600}

    def test_exception_is_included(self):
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", logging.ERROR, sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert any("ValueError: Test error" in line for line in data["exception"])


class TestContextFilter:
    def test_fills_missing_fields(self):
        record = make_record()
        assert ContextFilter().filter(record) is True
        assert record.request_id is None
        assert record.client_ip is None

    def test_keeps_existing_fields(self):
        record = make_record()
        record.request_id = "req-1"
        ContextFilter().filter(record)
        assert record.request_id == "req-1"


class TestLoggingConfig:
    def test_text_format_by_default(self):
        with patch.object(settings, "log_format", "text"):
            config = get_logging_config()
        assert config["handlers"]["console"]["formatter"] == "standard"
        assert "json" not in config["formatters"]

    def test_json_format(self):
        with patch.object(settings, "log_format", "JSON"):
            config = get_logging_config()
        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["()"] == "claudle.app.core.logging.JSONFormatter"

    def test_level_applies_to_app_logger(self):
        with patch.object(settings, "log_level", "debug"):
            config = get_logging_config()
        assert config["loggers"]["claudle"]["level"] == "DEBUG"


def test_get_log_context_drops_none():
    context = get_log_context(request_id=None, client_ip="10.0.0.1", retry_after=60)
    assert context == {"client_ip": "10.0.0.1", "retry_after": 60}


def test_get_logger_names():
    assert get_logger().name == "claudle"
    assert get_logger("claudle.app.main").name == "claudle.app.main"
