r"""Conversion of ``Request`` objects into ``httpx.Request`` messages and
their dispatch.

The converter owns three decisions: how the request URL is resolved
against the client base URL, how default and request headers are
merged, and which methods carry a body. Sending is delegated to a
``send_func`` strategy so callers can wrap the transport call (e.g. to
add instrumentation) without subclassing.
"""

from __future__ import annotations

__all__ = [
    "BaseRequestConverter",
    "DefaultRequestConverter",
    "SendFunc",
    "default_send",
    "resolve_url",
]

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import httpx

from restbridge.headers import merge_headers
from restbridge.models import UPDATE_HTTP_METHODS

if TYPE_CHECKING:
    from restbridge.headers import HeadersLike
    from restbridge.models import Request

logger: logging.Logger = logging.getLogger(__name__)

SendFunc = Callable[[httpx.AsyncClient, httpx.Request], Awaitable[httpx.Response]]


async def default_send(client: httpx.AsyncClient, http_request: httpx.Request) -> httpx.Response:
    """Send the request and return the response with an unread body.

    The body is left unread so the caller can choose between the raw
    and the decoded byte stream.
    """
    return await client.send(http_request, stream=True)


def resolve_url(resource: str, base_url: str | httpx.URL | None = None) -> httpx.URL:
    """Resolve the request resource against the base URL.

    An absolute resource is used as is. A relative one is resolved
    against ``base_url`` following RFC 3986, so ``"people"`` against
    ``"https://host/api/"`` gives ``"https://host/api/people"`` while
    ``"/people"`` gives ``"https://host/people"``. An empty resource
    means the base URL itself.

    Args:
        resource: Absolute URL or relative reference.
        base_url: Optional absolute base URL.

    Returns:
        The absolute request URL.

    Raises:
        ValueError: If the resource is relative and there is no base URL.

    Example:
        ```pycon
        >>> from restbridge.converter import resolve_url
        >>> str(resolve_url("people/1", "https://example.com/api/"))
        'https://example.com/api/people/1'
        >>> str(resolve_url("https://other.com/x", "https://example.com/api/"))
        'https://other.com/x'

        ```
    """
    url = httpx.URL(resource)
    if url.is_absolute_url:
        return url
    if base_url is None:
        msg = f"Cannot resolve relative resource {resource!r} without a base URL"
        raise ValueError(msg)
    base = httpx.URL(base_url)
    if not base.is_absolute_url:
        msg = f"base_url must be an absolute URL, got {str(base_url)!r}"
        raise ValueError(msg)
    if not resource:
        return base
    return base.join(url)


class BaseRequestConverter(ABC):
    """Abstract base class for request converters."""

    @abstractmethod
    def build_request(
        self,
        client: httpx.AsyncClient,
        request: Request,
        *,
        base_url: str | httpx.URL | None,
        default_headers: HeadersLike,
        body_data: bytes | None,
        timeout: float | httpx.Timeout | None,
    ) -> httpx.Request:
        """Build the transport-level request.

        Args:
            client: The transport client the request will be sent with.
            request: The REST request.
            base_url: Optional base URL relative resources resolve against.
            default_headers: Client default headers.
            body_data: The serialized body, ``None`` when there is none.
            timeout: The per-client timeout applied to the request.

        Returns:
            The ``httpx.Request`` to send.
        """

    @abstractmethod
    async def send(self, client: httpx.AsyncClient, http_request: httpx.Request) -> httpx.Response:
        """Send the transport-level request."""


class DefaultRequestConverter(BaseRequestConverter):
    r"""Default request converter.

    Args:
        send_func: Coroutine function performing the transport call.
            Defaults to ``default_send``.

    Example:
        ```pycon
        >>> import asyncio
        >>> import httpx
        >>> from restbridge.converter import DefaultRequestConverter
        >>> from restbridge.models import Request
        >>> converter = DefaultRequestConverter()
        >>> client = httpx.AsyncClient()
        >>> http_request = converter.build_request(
        ...     client,
        ...     Request("GET", "people", headers={"Accept": "application/json"}),
        ...     base_url="https://example.com/",
        ...     default_headers={"X-Api-Key": "secret"},
        ...     body_data=None,
        ...     timeout=10.0,
        ... )
        >>> http_request.method, str(http_request.url)
        ('GET', 'https://example.com/people')
        >>> http_request.headers["x-api-key"]
        'secret'
        >>> asyncio.run(client.aclose())

        ```
    """

    def __init__(self, send_func: SendFunc | None = None) -> None:
        self._send_func: SendFunc = send_func if send_func is not None else default_send

    def __repr__(self) -> str:
        name = getattr(self._send_func, "__qualname__", repr(self._send_func))
        return f"{self.__class__.__qualname__}(send_func={name})"

    def build_request(
        self,
        client: httpx.AsyncClient,
        request: Request,
        *,
        base_url: str | httpx.URL | None,
        default_headers: HeadersLike,
        body_data: bytes | None,
        timeout: float | httpx.Timeout | None,
    ) -> httpx.Request:
        url = resolve_url(request.resource, base_url)
        headers = merge_headers(default_headers, request.headers)
        content = body_data if request.method in UPDATE_HTTP_METHODS else None
        return client.build_request(
            request.method.value,
            url,
            headers=headers,
            content=content,
            timeout=timeout,
        )

    async def send(self, client: httpx.AsyncClient, http_request: httpx.Request) -> httpx.Response:
        logger.debug(f"Sending {http_request.method} request to {http_request.url}")
        return await self._send_func(client, http_request)
