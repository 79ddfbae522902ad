"""Registry of known vendor rate-limit header schemes.

The registry is an ordered tuple built once on first use and never mutated.
Order matters: when a header blob could satisfy more than one variant, the
earlier entry wins.  Header names are matched case-sensitively because the
letter case is the only thing separating some vendors.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from rate_limits.config import settings
from rate_limits.exceptions import RegistryUnavailableError
from rate_limits.reset_time import ResetTimeKind

logger = logging.getLogger(__name__)


class Vendor(Enum):
    """Known providers of rate-limit headers."""

    STANDARD = "standard"
    REDDIT = "reddit"
    GITHUB = "github"
    TWITTER = "twitter"
    VIMEO = "vimeo"
    GITLAB = "gitlab"
    AKAMAI = "akamai"


@dataclass(frozen=True)
class RateLimitVariant:
    """Header names and reset encoding used by one vendor."""

    vendor: Vendor
    window: timedelta | None
    limit_header: str | None
    used_header: str | None
    remaining_header: str
    reset_header: str
    reset_kind: ResetTimeKind

    def __post_init__(self) -> None:
        if self.limit_header is None and self.used_header is None:
            raise ValueError(
                f"{self.vendor.name} variant needs a limit or a used header"
            )


def _build_variants() -> tuple[RateLimitVariant, ...]:
    return (
        # draft-polli-ratelimit-headers-00
        #   RateLimit-Limit      request quota in the time window
        #   RateLimit-Remaining  remaining quota in the current window
        #   RateLimit-Reset      seconds until the window resets
        RateLimitVariant(
            vendor=Vendor.STANDARD,
            window=None,
            limit_header="RateLimit-Limit",
            used_header=None,
            remaining_header="Ratelimit-Remaining",
            reset_header="Ratelimit-Reset",
            reset_kind=ResetTimeKind.SECONDS,
        ),
        # Reddit sends no limit; it is derived from used + remaining.
        RateLimitVariant(
            vendor=Vendor.REDDIT,
            window=timedelta(minutes=10),
            limit_header=None,
            used_header="X-Ratelimit-Used",
            remaining_header="X-Ratelimit-Remaining",
            reset_header="X-Ratelimit-Reset",
            reset_kind=ResetTimeKind.SECONDS,
        ),
        # Github resets at a UTC epoch timestamp, hourly window.
        RateLimitVariant(
            vendor=Vendor.GITHUB,
            window=timedelta(hours=1),
            limit_header="x-ratelimit-limit",
            used_header=None,
            remaining_header="x-ratelimit-remaining",
            reset_header="x-ratelimit-reset",
            reset_kind=ResetTimeKind.TIMESTAMP,
        ),
        RateLimitVariant(
            vendor=Vendor.TWITTER,
            window=timedelta(minutes=15),
            limit_header="x-rate-limit-limit",
            used_header=None,
            remaining_header="x-rate-limit-remaining",
            reset_header="x-rate-limit-reset",
            reset_kind=ResetTimeKind.TIMESTAMP,
        ),
        # Vimeo: reset is the date when the next 60-second period begins.
        RateLimitVariant(
            vendor=Vendor.VIMEO,
            window=timedelta(seconds=60),
            limit_header="X-RateLimit-Limit",
            used_header=None,
            remaining_header="X-RateLimit-Remaining",
            reset_header="X-RateLimit-Reset",
            reset_kind=ResetTimeKind.IMF_FIXDATE,
        ),
        # Gitlab: RateLimit-Observed counts requests in the window, but the
        # limit header is authoritative when both are sent.
        RateLimitVariant(
            vendor=Vendor.GITLAB,
            window=timedelta(seconds=60),
            limit_header="RateLimit-Limit",
            used_header="RateLimit-Observed",
            remaining_header="RateLimit-Remaining",
            reset_header="RateLimit-Reset",
            reset_kind=ResetTimeKind.TIMESTAMP,
        ),
        RateLimitVariant(
            vendor=Vendor.AKAMAI,
            window=timedelta(seconds=60),
            limit_header="X-RateLimit-Limit",
            used_header=None,
            remaining_header="X-RateLimit-Remaining",
            reset_header="X-RateLimit-Next",
            reset_kind=ResetTimeKind.ISO8601,
        ),
    )


_variants: tuple[RateLimitVariant, ...] | None = None
_lock = threading.Lock()


def all_variants() -> tuple[RateLimitVariant, ...]:
    """Return the registry, building it on first call."""
    global _variants  # noqa: PLW0603
    variants = _variants
    if variants is not None:
        return variants

    if not _lock.acquire(timeout=settings.registry_lock_timeout):
        raise RegistryUnavailableError("Timed out waiting for the variant registry")
    try:
        if _variants is None:
            try:
                _variants = _build_variants()
            except ValueError as exc:
                raise RegistryUnavailableError(
                    f"Cannot build the variant registry: {exc}"
                ) from exc
            logger.debug(
                "Built rate limit variant registry with %d entries",
                len(_variants),
            )
        return _variants
    finally:
        _lock.release()
