r"""Request and response value objects exchanged with the REST client."""

from __future__ import annotations

__all__ = ["BODYLESS_HTTP_METHODS", "UPDATE_HTTP_METHODS", "HttpMethod", "Request", "Response"]

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

import httpx

from restbridge.headers import to_headers

if TYPE_CHECKING:
    from restbridge.headers import HeadersLike


class HttpMethod(str, Enum):
    """HTTP methods supported by the client.

    Members compare equal to their string value, so ``HttpMethod.GET ==
    "GET"`` holds.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method: str | HttpMethod) -> HttpMethod:
        """Parse a method name, ignoring case.

        Raises:
            ValueError: If the method is not supported.

        Example:
            ```pycon
            >>> from restbridge.models import HttpMethod
            >>> HttpMethod.parse("patch")
            <HttpMethod.PATCH: 'PATCH'>

            ```
        """
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            msg = f"Unsupported HTTP method: {method!r}"
            raise ValueError(msg) from None


# Only these methods carry a serialized body. This is a fixed policy.
UPDATE_HTTP_METHODS = (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)
BODYLESS_HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.DELETE,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
)


@dataclass(frozen=True)
class Request:
    """A single REST request.

    Args:
        method: The HTTP method. Strings are normalized to ``HttpMethod``.
        resource: Absolute URL, or path relative to the client base URL.
        headers: Request headers. They take precedence over the client
            default headers.
        body: Optional body. It is serialized only for POST, PUT and PATCH.
        cancel_event: Optional event that cancels the call when set.

    Example:
        ```pycon
        >>> from restbridge.models import Request
        >>> request = Request("post", "people", body={"name": "Ada"})
        >>> request.method
        <HttpMethod.POST: 'POST'>
        >>> request.has_body
        True

        ```
    """

    method: HttpMethod
    resource: str = ""
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    body: Any = None
    cancel_event: asyncio.Event | None = field(default=None, compare=False)

    # httpx.Headers is mutable
    __hash__ = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", HttpMethod.parse(self.method))
        object.__setattr__(self, "resource", str(self.resource))
        object.__setattr__(self, "headers", to_headers(self.headers))

    @property
    def has_body(self) -> bool:
        """Whether the body will be serialized and sent."""
        return self.method in UPDATE_HTTP_METHODS and self.body is not None

    @property
    def is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    @classmethod
    def create(
        cls,
        method: str | HttpMethod,
        resource: str = "",
        *,
        headers: HeadersLike = None,
        body: Any = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Request:
        """Create a request from loosely typed arguments."""
        return cls(
            method=HttpMethod.parse(method),
            resource=resource,
            headers=to_headers(headers),
            body=body,
            cancel_event=cancel_event,
        )


@dataclass(frozen=True)
class Response:
    """A completed REST response.

    Attributes:
        status_code: The HTTP status code.
        headers: Response headers, content headers included.
        method: The HTTP method of the originating request.
        request_url: The absolute URL that was requested.
        data: The raw payload, after decompression when it applied.
        body: The deserialized payload.
        is_success: Whether the status code is in the client success range.
        http_response: The underlying ``httpx.Response``.
    """

    status_code: int
    headers: httpx.Headers
    method: HttpMethod
    request_url: str
    data: bytes
    body: Any
    is_success: bool
    http_response: httpx.Response | None = field(default=None, repr=False, compare=False)

    # httpx.Headers is mutable
    __hash__ = None
