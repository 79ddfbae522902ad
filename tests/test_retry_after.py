"""Tests for rate limits parsed from the ``Retry-After`` header."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from rate_limits.config import settings
from rate_limits.exceptions import InvalidRetryAfterError, MissingRetryAfterError
from rate_limits.headers import CaseSensitiveHeaderMap
from rate_limits.reset_time import ResetTime
from rate_limits.retry_after import RetryAfter, get_retry_after_header


def test_get_retry_after_header():
    headers = CaseSensitiveHeaderMap.from_raw("Retry-After: 30")
    assert get_retry_after_header(headers) == "30"


def test_retry_after_seconds():
    rate = RetryAfter.from_raw("Retry-After: 19\n")
    assert rate.reset == ResetTime(19)


def test_retry_after_imf_fixdate():
    rate = RetryAfter.from_raw("Retry-After: Fri, 31 Dec 1999 23:59:59 GMT\n")
    assert rate.reset == ResetTime(datetime(1999, 12, 31, 23, 59, 59, tzinfo=timezone.utc))


def test_retry_after_from_mapping():
    rate = RetryAfter.from_headers({"Retry-After": " 120 "})
    assert rate.reset == ResetTime(120)


def test_missing_retry_after():
    with pytest.raises(MissingRetryAfterError) as exc_info:
        RetryAfter.from_headers({"X-Other": "1"})
    assert exc_info.value.header == "Retry-After"


@pytest.mark.parametrize("value", ["soon", "-5", "1.5", "2015-10-21"])
def test_invalid_retry_after(value):
    with pytest.raises(InvalidRetryAfterError) as exc_info:
        RetryAfter.from_headers({"Retry-After": value})
    assert exc_info.value.value == value


class TestCaseSensitivity:
    def test_lowercase_ignored_by_default(self):
        with pytest.raises(MissingRetryAfterError):
            RetryAfter.from_raw("retry-after: 19")

    def test_lowercase_accepted_with_fallback(self, monkeypatch):
        monkeypatch.setattr(settings, "retry_after_lowercase_fallback", True)
        rate = RetryAfter.from_raw("retry-after: 19")
        assert rate.reset == ResetTime(19)

    def test_canonical_name_preferred_over_fallback(self, monkeypatch):
        monkeypatch.setattr(settings, "retry_after_lowercase_fallback", True)
        rate = RetryAfter.from_headers({"retry-after": "5", "Retry-After": "9"})
        assert rate.reset == ResetTime(9)

    def test_other_spellings_never_match(self, monkeypatch):
        monkeypatch.setattr(settings, "retry_after_lowercase_fallback", True)
        with pytest.raises(MissingRetryAfterError):
            RetryAfter.from_headers({"RETRY-AFTER": "5"})
