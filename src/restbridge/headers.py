r"""Helpers for the header collections carried by requests and
responses.

Headers are represented with ``httpx.Headers``: keys are
case-insensitive, insertion order is preserved and a key may hold
several values.
"""

from __future__ import annotations

__all__ = ["HeadersLike", "has_header_value", "merge_headers", "to_headers"]

from collections.abc import Mapping, Sequence
from typing import Union

import httpx

HeadersLike = Union[
    httpx.Headers, Mapping[str, str], Sequence[tuple[str, str]], None
]


def to_headers(headers: HeadersLike) -> httpx.Headers:
    """Convert a header-like value to ``httpx.Headers``.

    A fresh copy is always returned, so mutating the result never
    affects the input.

    Example:
        ```pycon
        >>> from restbridge.headers import to_headers
        >>> headers = to_headers([("Accept", "a"), ("accept", "b")])
        >>> headers.get_list("ACCEPT")
        ['a', 'b']

        ```
    """
    if headers is None:
        return httpx.Headers()
    return httpx.Headers(headers)


def merge_headers(*collections: HeadersLike) -> httpx.Headers:
    """Merge header collections from lowest to highest precedence.

    A key present in a later collection replaces every value the earlier
    collections gave for that key. Multiple values for one key inside a
    single collection are all kept.

    Example:
        ```pycon
        >>> from restbridge.headers import merge_headers
        >>> merged = merge_headers(
        ...     {"Accept": "text/plain", "X-Api-Key": "k"},
        ...     [("accept", "application/json"), ("accept", "text/html")],
        ... )
        >>> merged.get_list("accept")
        ['application/json', 'text/html']
        >>> merged["x-api-key"]
        'k'

        ```
    """
    items: list[tuple[str, str]] = []
    for collection in collections:
        headers = to_headers(collection)
        replaced = set(headers.keys())
        items = [(key, value) for key, value in items if key.lower() not in replaced]
        items.extend(headers.multi_items())
    return httpx.Headers(items)


def has_header_value(headers: httpx.Headers, name: str, value: str) -> bool:
    """Return ``True`` if any value of header ``name`` equals ``value``.

    The comparison ignores case and surrounding whitespace, and header
    values holding a comma separated list are split.

    Example:
        ```pycon
        >>> import httpx
        >>> from restbridge.headers import has_header_value
        >>> has_header_value(httpx.Headers({"Content-Encoding": "GZIP"}), "content-encoding", "gzip")
        True

        ```
    """
    expected = value.strip().lower()
    return any(
        item.strip().lower() == expected
        for raw in headers.get_list(name)
        for item in raw.split(",")
        if item.strip()
    )
