"""Rate limits from the generic HTTP ``Retry-After`` header.

``Retry-After`` carries either an HTTP date or a number of delay seconds.
"""

from __future__ import annotations

from dataclasses import dataclass

from rate_limits.config import settings
from rate_limits.exceptions import (
    DateParseError,
    InvalidRetryAfterError,
    InvalidValueError,
    MissingRetryAfterError,
)
from rate_limits.headers import CaseSensitiveHeaderMap, HeaderSource, to_header_map
from rate_limits.reset_time import ResetTime, ResetTimeKind

RETRY_AFTER = "Retry-After"


def get_retry_after_header(headers: CaseSensitiveHeaderMap) -> str | None:
    value = headers.get(RETRY_AFTER)
    if value is None and settings.retry_after_lowercase_fallback:
        value = headers.get(RETRY_AFTER.lower())
    return value


@dataclass(frozen=True)
class RetryAfter:
    """Reset time announced by a ``Retry-After`` header."""

    reset: ResetTime

    @classmethod
    def from_headers(cls, headers: HeaderSource) -> RetryAfter:
        header_map = to_header_map(headers)
        value = get_retry_after_header(header_map)
        if value is None:
            raise MissingRetryAfterError(RETRY_AFTER)

        try:
            reset = ResetTime.decode(value, ResetTimeKind.IMF_FIXDATE)
        except DateParseError:
            try:
                reset = ResetTime.decode(value, ResetTimeKind.SECONDS)
            except InvalidValueError as exc:
                raise InvalidRetryAfterError(value) from exc
        return cls(reset)

    @classmethod
    def from_raw(cls, raw: str) -> RetryAfter:
        return cls.from_headers(CaseSensitiveHeaderMap.from_raw(raw))
