"""Case-sensitive header store.

Some vendors send the same header names and can only be told apart by their
letter case (``RateLimit-Limit`` vs ``x-ratelimit-limit``), so lookups here
compare names exactly instead of using HTTP's case-insensitive semantics.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Union

import httpx

from rate_limits.config import settings
from rate_limits.exceptions import HeaderWithoutColonError

HEADER_SEPARATOR = ":"

HeaderSource = Union[
    str,
    "CaseSensitiveHeaderMap",
    httpx.Headers,
    Mapping[str, str],
    Iterable[tuple[str, str]],
]


class CaseSensitiveHeaderMap(Mapping[str, str]):
    """Read-only mapping of header name to value with exact-case keys."""

    __slots__ = ("_data",)

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self._data: dict[str, str] = {}
        for name, value in items:
            self._data[name] = value

    # -- constructors --------------------------------------------------------

    @classmethod
    def from_raw(cls, raw: str, *, strict: bool | None = None) -> CaseSensitiveHeaderMap:
        """Parse a newline-separated ``Name: value`` block.

        Blank lines are ignored. Each other line is split at its first colon.
        A line without a colon raises :class:`HeaderWithoutColonError` when
        *strict* (default: ``settings.strict_header_lines``), otherwise it is
        skipped.
        """
        if strict is None:
            strict = settings.strict_header_lines

        items: list[tuple[str, str]] = []
        for line in raw.splitlines():
            if not line.strip():
                continue
            name, sep, value = line.partition(HEADER_SEPARATOR)
            if not sep:
                if strict:
                    raise HeaderWithoutColonError(line)
                continue
            items.append((name.strip(), value.strip()))
        return cls(items)

    @classmethod
    def from_headers(cls, headers: HeaderSource) -> CaseSensitiveHeaderMap:
        """Build from an already-structured header collection.

        ``httpx.Headers`` keep the casing the peer sent (``Headers.raw``).
        """
        if isinstance(headers, CaseSensitiveHeaderMap):
            return headers
        if isinstance(headers, httpx.Headers):
            encoding = headers.encoding
            return cls(
                (name.decode(encoding), value.decode(encoding))
                for name, value in headers.raw
            )
        if isinstance(headers, Mapping):
            return cls((str(k), str(v).strip()) for k, v in headers.items())
        return cls((str(k), str(v).strip()) for k, v in headers)

    # -- Mapping protocol ----------------------------------------------------

    def __getitem__(self, name: str) -> str:
        return self._data[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"


def to_header_map(headers: HeaderSource) -> CaseSensitiveHeaderMap:
    """Coerce a raw block or any supported header collection."""
    if isinstance(headers, str):
        return CaseSensitiveHeaderMap.from_raw(headers)
    return CaseSensitiveHeaderMap.from_headers(headers)
