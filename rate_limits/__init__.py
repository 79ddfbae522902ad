"""Parse rate-limit information from HTTP response headers.

Supports vendor quota headers (``RateLimit-*``, ``X-RateLimit-*`` and
friends, see :mod:`rate_limits.variants`) and the generic ``Retry-After``
header.
"""

from __future__ import annotations

from rate_limits.exceptions import (
    DateParseError,
    HeaderWithoutColonError,
    InvalidRetryAfterError,
    InvalidTimeRangeError,
    InvalidValueError,
    MissingHeaderError,
    MissingLimitError,
    MissingRemainingError,
    MissingResetError,
    MissingRetryAfterError,
    MissingUsedError,
    RateLimitsError,
    RegistryUnavailableError,
)
from rate_limits.headers import CaseSensitiveHeaderMap
from rate_limits.rate_limit import RateLimit, parse
from rate_limits.reset_time import ResetTime, ResetTimeKind
from rate_limits.retry_after import RetryAfter
from rate_limits.rfc6585 import HeaderRateLimit
from rate_limits.variants import RateLimitVariant, Vendor, all_variants

__all__ = [
    "RateLimit",
    "parse",
    "HeaderRateLimit",
    "RetryAfter",
    "ResetTime",
    "ResetTimeKind",
    "Vendor",
    "RateLimitVariant",
    "all_variants",
    "CaseSensitiveHeaderMap",
    "RateLimitsError",
    "MissingHeaderError",
    "MissingLimitError",
    "MissingUsedError",
    "MissingRemainingError",
    "MissingResetError",
    "MissingRetryAfterError",
    "InvalidValueError",
    "InvalidTimeRangeError",
    "DateParseError",
    "InvalidRetryAfterError",
    "HeaderWithoutColonError",
    "RegistryUnavailableError",
]
