"""Rate limits from dedicated quota headers (RFC 6585 family).

Covers ``RateLimit-*`` headers from draft-polli-ratelimit-headers-00 as well
as the vendor-specific ``X-RateLimit-*`` spellings listed in
:mod:`rate_limits.variants`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta

from rate_limits.exceptions import (
    MissingLimitError,
    MissingRemainingError,
    MissingResetError,
    MissingUsedError,
)
from rate_limits.headers import CaseSensitiveHeaderMap, HeaderSource, to_header_map
from rate_limits.reset_time import ResetTime, parse_unsigned
from rate_limits.variants import RateLimitVariant, Vendor, all_variants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Limit:
    """Maximum number of requests for the window."""

    count: int

    @classmethod
    def parse(cls, value: str) -> Limit:
        return cls(parse_unsigned(value))


@dataclass(frozen=True)
class Used:
    """Number of requests already made in the window."""

    count: int

    @classmethod
    def parse(cls, value: str) -> Used:
        return cls(parse_unsigned(value))


@dataclass(frozen=True)
class Remaining:
    """Number of requests left in the window."""

    count: int

    @classmethod
    def parse(cls, value: str) -> Remaining:
        return cls(parse_unsigned(value))


def match_variant(
    headers: CaseSensitiveHeaderMap,
) -> tuple[RateLimitVariant, str]:
    """Pick the variant describing *headers* and return it with its remaining value.

    The first variant whose remaining and reset headers are both present
    wins.  Vimeo and Akamai share a remaining header and differ only in the
    reset header, so the pair is needed to tell them apart.  When no variant
    has both, the first one with a remaining header is returned so the
    caller can report the missing reset header.
    """
    fallback: tuple[RateLimitVariant, str] | None = None
    variants = all_variants()
    for variant in variants:
        value = headers.get(variant.remaining_header)
        if value is None:
            continue
        if variant.reset_header in headers:
            return variant, value
        if fallback is None:
            fallback = (variant, value)
    if fallback is None:
        raise MissingRemainingError(
            tuple(dict.fromkeys(v.remaining_header for v in variants))
        )
    return fallback


def _resolve_limit(
    headers: CaseSensitiveHeaderMap, variant: RateLimitVariant, remaining: Remaining
) -> Limit:
    if variant.limit_header is not None:
        value = headers.get(variant.limit_header)
        if value is not None:
            return Limit.parse(value)
    if variant.used_header is not None:
        value = headers.get(variant.used_header)
        if value is not None:
            # No limit header: the quota is what was used plus what is left.
            used = Used.parse(value)
            return Limit(used.count + remaining.count)
    if variant.limit_header is None:
        raise MissingUsedError(variant.used_header)
    raise MissingLimitError(variant.limit_header)


@dataclass(frozen=True)
class HeaderRateLimit:
    """Rate limit parsed from a vendor's limit/remaining/reset headers."""

    limit: int
    remaining: int
    reset: ResetTime
    # Not every vendor states its window; None means it must be inferred.
    window: timedelta | None
    vendor: Vendor

    @classmethod
    def from_headers(cls, headers: HeaderSource) -> HeaderRateLimit:
        """Extract a rate limit from *headers* on a best-effort basis.

        The variant picked by :func:`match_variant` decides which limit, used
        and reset headers are read; headers belonging to other vendors are
        never mixed in.
        """
        header_map = to_header_map(headers)
        variant, raw_remaining = match_variant(header_map)
        remaining = Remaining.parse(raw_remaining)
        limit = _resolve_limit(header_map, variant, remaining)

        raw_reset = header_map.get(variant.reset_header)
        if raw_reset is None:
            raise MissingResetError(variant.reset_header)
        reset = ResetTime.decode(raw_reset, variant.reset_kind)

        logger.debug(
            "Matched %s rate limit headers",
            variant.vendor.value,
            extra={"vendor": variant.vendor.value},
        )
        return cls(
            limit=limit.count,
            remaining=remaining.count,
            reset=reset,
            window=variant.window,
            vendor=variant.vendor,
        )

    @classmethod
    def from_raw(cls, raw: str) -> HeaderRateLimit:
        return cls.from_headers(CaseSensitiveHeaderMap.from_raw(raw))
