"""Tests for JSON and text log formatters."""

from __future__ import annotations

import json
import logging
import sys

import pytest

from rate_limits.logging_config import (
    LOGGER_NAME,
    JSONFormatter,
    TextFormatter,
    setup_logging,
)
from rate_limits.rfc6585 import HeaderRateLimit


def _make_record(msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="rate_limits.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )


@pytest.fixture
def _restore_library_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_json_output_structure():
    output = JSONFormatter().format(_make_record("test message"))
    data = json.loads(output)
    assert data["level"] == "INFO"
    assert data["logger"] == "rate_limits.test"
    assert data["message"] == "test message"
    assert "timestamp" in data


def test_json_includes_extra_fields():
    record = _make_record("matched")
    record.vendor = "github"
    data = json.loads(JSONFormatter().format(record))
    assert data["vendor"] == "github"


def test_json_exception_formatting():
    try:
        raise ValueError("boom")
    except ValueError:
        record = _make_record("error")
        record.exc_info = sys.exc_info()
    data = json.loads(JSONFormatter().format(record))
    assert "exception" in data
    assert "ValueError: boom" in data["exception"]


def test_text_format_with_extras():
    record = _make_record("hello text")
    record.source = "RetryAfter"
    output = TextFormatter().format(record)
    assert "hello text" in output
    assert "INFO" in output
    assert output.endswith("[source=RetryAfter]")


def test_text_format_without_extras():
    output = TextFormatter().format(_make_record("plain"))
    assert output.endswith("rate_limits.test - plain")


@pytest.mark.usefixtures("_restore_library_logger")
def test_setup_logging_json(capsys):
    logger = setup_logging("debug", "json")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, JSONFormatter)

    HeaderRateLimit.from_headers(
        {
            "x-ratelimit-limit": "5000",
            "x-ratelimit-remaining": "4987",
            "x-ratelimit-reset": "1350085394",
        }
    )
    lines = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
    matched = [entry for entry in lines if entry["logger"] == "rate_limits.rfc6585"]
    assert matched[-1]["vendor"] == "github"


@pytest.mark.usefixtures("_restore_library_logger")
def test_setup_logging_is_idempotent():
    setup_logging("INFO", "text")
    logger = setup_logging("WARNING", "text")
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, TextFormatter)
    assert logger.level == logging.WARNING
