"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from rate_limits.config import Settings


def test_defaults(monkeypatch):
    for name in (
        "RATE_LIMITS_STRICT_HEADER_LINES",
        "RATE_LIMITS_RETRY_AFTER_LOWERCASE_FALLBACK",
        "RATE_LIMITS_REGISTRY_LOCK_TIMEOUT",
        "RATE_LIMITS_LOG_FORMAT",
        "RATE_LIMITS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.strict_header_lines is True
    assert s.retry_after_lowercase_fallback is False
    assert s.registry_lock_timeout == 5.0
    assert s.log_format == "text"
    assert s.log_level == "INFO"


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("RATE_LIMITS_STRICT_HEADER_LINES", "false")
    monkeypatch.setenv("RATE_LIMITS_RETRY_AFTER_LOWERCASE_FALLBACK", "1")
    monkeypatch.setenv("RATE_LIMITS_LOG_FORMAT", "JSON")
    s = Settings(_env_file=None)
    assert s.strict_header_lines is False
    assert s.retry_after_lowercase_fallback is True
    assert s.log_format == "json"


def test_unprefixed_env_ignored(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.delenv("RATE_LIMITS_LOG_LEVEL", raising=False)
    assert Settings(_env_file=None).log_level == "INFO"


def test_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("RATE_LIMITS_REGISTRY_LOCK_TIMEOUT", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("RATE_LIMITS_REGISTRY_LOCK_TIMEOUT=0.5\n", encoding="utf-8")
    assert Settings(_env_file=env_file).registry_lock_timeout == 0.5


@pytest.mark.parametrize("timeout", ["0", "-1"])
def test_non_positive_lock_timeout_rejected(monkeypatch, timeout):
    monkeypatch.setenv("RATE_LIMITS_REGISTRY_LOCK_TIMEOUT", timeout)
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_unknown_log_format_rejected(monkeypatch):
    monkeypatch.setenv("RATE_LIMITS_LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)
