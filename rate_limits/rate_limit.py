"""Combined rate limit: quota headers vs. ``Retry-After``.

Both representations are parsed independently.  When both are present the
one announcing the later reset wins, since waiting for it cannot violate the
other.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import httpx

from rate_limits.exceptions import RateLimitsError
from rate_limits.headers import CaseSensitiveHeaderMap, HeaderSource, to_header_map
from rate_limits.reset_time import ResetTime, utcnow
from rate_limits.retry_after import RetryAfter
from rate_limits.rfc6585 import HeaderRateLimit
from rate_limits.variants import Vendor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimit:
    """Rate limit information parsed from HTTP response headers."""

    source: HeaderRateLimit | RetryAfter

    # -- constructors --------------------------------------------------------

    @classmethod
    def from_headers(
        cls, headers: HeaderSource, *, now: datetime | None = None
    ) -> RateLimit:
        """Parse both representations and keep the one with the later reset.

        If only one of them can be parsed it is returned.  If neither can,
        the error from the quota headers is raised, since a missing
        ``Retry-After`` is the common case.
        """
        header_map = to_header_map(headers)

        try:
            retry_after: RetryAfter | None = RetryAfter.from_headers(header_map)
        except RateLimitsError:
            retry_after = None

        try:
            structured = HeaderRateLimit.from_headers(header_map)
        except RateLimitsError:
            if retry_after is None:
                raise
            return cls(retry_after)

        if retry_after is None:
            return cls(structured)

        if now is None:
            now = utcnow()
        structured_wait = structured.reset.seconds_remaining(now)
        retry_wait = retry_after.reset.seconds_remaining(now)
        chosen: HeaderRateLimit | RetryAfter = (
            structured if structured_wait > retry_wait else retry_after
        )
        logger.debug(
            "Quota headers reset in %ds, Retry-After in %ds",
            structured_wait,
            retry_wait,
            extra={"source": type(chosen).__name__},
        )
        return cls(chosen)

    @classmethod
    def from_raw(cls, raw: str, *, now: datetime | None = None) -> RateLimit:
        return cls.from_headers(CaseSensitiveHeaderMap.from_raw(raw), now=now)

    @classmethod
    def from_response(
        cls, response: httpx.Response, *, now: datetime | None = None
    ) -> RateLimit:
        return cls.from_headers(response.headers, now=now)

    # -- accessors -----------------------------------------------------------

    @property
    def is_retry_after(self) -> bool:
        return isinstance(self.source, RetryAfter)

    @property
    def reset(self) -> ResetTime:
        """Time at which the rate limit is lifted."""
        return self.source.reset

    @property
    def limit(self) -> int | None:
        """Maximum number of requests in the window (``None`` for Retry-After)."""
        if isinstance(self.source, HeaderRateLimit):
            return self.source.limit
        return None

    @property
    def remaining(self) -> int | None:
        """Requests left in the current window (``None`` for Retry-After)."""
        if isinstance(self.source, HeaderRateLimit):
            return self.source.remaining
        return None

    @property
    def window(self) -> timedelta | None:
        if isinstance(self.source, HeaderRateLimit):
            return self.source.window
        return None

    @property
    def vendor(self) -> Vendor | None:
        if isinstance(self.source, HeaderRateLimit):
            return self.source.vendor
        return None


def parse(headers: HeaderSource, *, now: datetime | None = None) -> RateLimit:
    """Parse rate limit information from *headers*."""
    return RateLimit.from_headers(headers, now=now)
