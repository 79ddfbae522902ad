"""Reset-time decoding for rate-limit headers.

Vendors announce the end of a rate-limit window in different encodings:
a countdown in seconds, a Unix timestamp, an RFC 2822 date or a compact
ISO 8601 date.  :meth:`ResetTime.decode` turns one header value into a
:class:`ResetTime` that is either a number of seconds or an absolute UTC
instant.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from enum import Enum

from rate_limits.exceptions import (
    DateParseError,
    InvalidTimeRangeError,
    InvalidValueError,
)

_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_ISO8601_COMPACT_RE = re.compile(r"[0-9]{8}T[0-9]{6}Z")
_ISO8601_COMPACT_FORMAT = "%Y%m%dT%H%M%SZ"

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class ResetTimeKind(Enum):
    """How a vendor encodes the reset time of its rate limit window."""

    SECONDS = "seconds"
    TIMESTAMP = "timestamp"
    IMF_FIXDATE = "imf-fixdate"
    ISO8601 = "iso8601"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Value parsing
# ---------------------------------------------------------------------------


def parse_unsigned(value: str) -> int:
    """Parse a trimmed non-negative decimal integer."""
    text = value.strip()
    if not _UNSIGNED_RE.fullmatch(text):
        raise InvalidValueError(value)
    return int(text)


def parse_i64(value: str) -> int:
    """Parse a trimmed decimal integer that fits in a signed 64-bit word."""
    text = value.strip()
    if not _SIGNED_RE.fullmatch(text):
        raise InvalidValueError(value)
    number = int(text)
    if not _I64_MIN <= number <= _I64_MAX:
        raise InvalidValueError(value)
    return number


def _from_timestamp(value: str) -> datetime:
    timestamp = parse_i64(value)
    try:
        return _EPOCH + timedelta(seconds=timestamp)
    except OverflowError as exc:
        raise InvalidTimeRangeError(timestamp) from exc


def _from_imf_fixdate(value: str) -> datetime:
    try:
        parsed = parsedate_to_datetime(value.strip())
    except (TypeError, ValueError) as exc:
        raise DateParseError(value, "RFC 2822") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError as exc:
        # A local time at either end of the calendar can fall outside it in UTC.
        raise DateParseError(value, "RFC 2822") from exc


def _from_iso8601(value: str) -> datetime:
    text = value.strip()
    if not _ISO8601_COMPACT_RE.fullmatch(text):
        raise DateParseError(value, "ISO 8601")
    try:
        parsed = datetime.strptime(text, _ISO8601_COMPACT_FORMAT)
    except ValueError as exc:
        raise DateParseError(value, "ISO 8601") from exc
    return parsed.replace(tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# ResetTime
# ---------------------------------------------------------------------------


@functools.total_ordering
@dataclass(frozen=True)
class ResetTime:
    """Point at which a rate limit window lifts.

    ``value`` is either a non-negative ``int`` (seconds from the moment the
    response was decoded) or a timezone-aware ``datetime`` in UTC.
    """

    value: int | datetime

    def __post_init__(self) -> None:
        if isinstance(self.value, datetime):
            if self.value.tzinfo is None:
                raise ValueError("ResetTime datetime must be timezone-aware")
            object.__setattr__(self, "value", self.value.astimezone(timezone.utc))
        elif isinstance(self.value, int) and not isinstance(self.value, bool):
            if self.value < 0:
                raise ValueError("ResetTime seconds must be non-negative")
        else:
            raise TypeError(f"Unsupported reset time value: {self.value!r}")

    @classmethod
    def decode(cls, value: str, kind: ResetTimeKind) -> ResetTime:
        """Decode a header *value* encoded as *kind*."""
        if kind is ResetTimeKind.SECONDS:
            return cls(parse_unsigned(value))
        if kind is ResetTimeKind.TIMESTAMP:
            return cls(_from_timestamp(value))
        if kind is ResetTimeKind.IMF_FIXDATE:
            return cls(_from_imf_fixdate(value))
        if kind is ResetTimeKind.ISO8601:
            return cls(_from_iso8601(value))
        raise ValueError(f"Unknown reset time kind: {kind!r}")

    @property
    def is_seconds(self) -> bool:
        return not isinstance(self.value, datetime)

    @property
    def is_datetime(self) -> bool:
        return isinstance(self.value, datetime)

    def seconds_remaining(self, now: datetime | None = None) -> int:
        """Whole seconds until the reset, never negative."""
        if not isinstance(self.value, datetime):
            return self.value
        if now is None:
            now = utcnow()
        return max(int((self.value - now).total_seconds()), 0)

    def as_duration(self, now: datetime | None = None) -> timedelta:
        return timedelta(seconds=self.seconds_remaining(now))

    def compare(self, other: ResetTime, now: datetime | None = None) -> int:
        """Return -1, 0 or 1 as this reset comes before, with or after *other*.

        Values of the same shape compare directly.  A seconds value and a
        datetime are compared by their countdown at *now*.
        """
        if isinstance(self.value, datetime) and isinstance(other.value, datetime):
            mine, theirs = self.value, other.value
        elif self.is_seconds and other.is_seconds:
            mine, theirs = self.value, other.value
        else:
            if now is None:
                now = utcnow()
            mine, theirs = self.seconds_remaining(now), other.seconds_remaining(now)
        return (mine > theirs) - (mine < theirs)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ResetTime):
            return NotImplemented
        return self.compare(other) < 0
