"""Exception hierarchy for rate-limit header parsing."""

from __future__ import annotations


class RateLimitsError(Exception):
    """Base exception for all rate-limit parsing errors."""


# ---------------------------------------------------------------------------
# Missing headers
# ---------------------------------------------------------------------------


class MissingHeaderError(RateLimitsError):
    """A required header is absent."""

    def __init__(self, header: str | None = None, detail: str | None = None) -> None:
        self.header = header
        if detail is None:
            detail = f"HTTP {header} header not found" if header else "Header not found"
        super().__init__(detail)


class MissingLimitError(MissingHeaderError):
    """Raised when the matched variant has neither its limit nor its used header."""


class MissingUsedError(MissingLimitError):
    """Raised when a used-only variant is missing its used header."""


class MissingRemainingError(MissingHeaderError):
    """Raised when no known variant's remaining header is present.

    No single header is to blame, so ``header`` is ``None`` and ``headers``
    lists every remaining header that was looked for.
    """

    def __init__(self, headers: tuple[str, ...] = (), detail: str | None = None) -> None:
        self.headers = tuple(headers)
        if detail is None:
            detail = "HTTP ratelimit-remaining header not found"
            if self.headers:
                detail = f"{detail} (looked for {', '.join(self.headers)})"
        super().__init__(None, detail)


class MissingResetError(MissingHeaderError):
    """Raised when the matched variant's reset header is absent."""


class MissingRetryAfterError(MissingHeaderError):
    """Raised when there is no ``Retry-After`` header."""


# ---------------------------------------------------------------------------
# Malformed values
# ---------------------------------------------------------------------------


class InvalidValueError(RateLimitsError, ValueError):
    """Raised when a numeric header value is not a valid integer."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Cannot parse rate limit header value: {value!r}")


class InvalidTimeRangeError(RateLimitsError, ValueError):
    """Raised when a timestamp lies outside the representable calendar range."""

    def __init__(self, timestamp: int) -> None:
        self.timestamp = timestamp
        super().__init__(f"Error parsing reset time: {timestamp} is out of range")


class DateParseError(RateLimitsError, ValueError):
    """Raised when a date header does not match the expected grammar."""

    def __init__(self, value: str, kind: str) -> None:
        self.value = value
        self.kind = kind
        super().__init__(f"Cannot parse {value!r} as {kind} date")


class InvalidRetryAfterError(RateLimitsError, ValueError):
    """Raised when ``Retry-After`` is neither an HTTP date nor delay seconds."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid Retry-After value: {value!r}")


class HeaderWithoutColonError(RateLimitsError, ValueError):
    """Raised by strict raw-header ingestion for a line without a separator."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Header line without colon: {line!r}")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class RegistryUnavailableError(RateLimitsError):
    """Raised when the variant registry cannot be built or accessed."""
