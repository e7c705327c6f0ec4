r"""Shared test helpers for the REST client tests."""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "RecordingHandler",
    "create_client",
    "echo_handler",
    "json_handler",
]

import json
from typing import TYPE_CHECKING, Any

import httpx

from restbridge import RestClient
from restbridge.factory import DefaultHttpClientFactory

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://api.example.com/v1/"


def create_client(handler: Callable[[httpx.Request], Any], **overrides: Any) -> RestClient:
    """Create a RestClient whose transport is an ``httpx.MockTransport``.

    Args:
        handler: The mock transport handler (sync or async).
        **overrides: ClientConfig fields forwarded to RestClient.
    """
    overrides.setdefault("base_url", BASE_URL)
    factory = DefaultHttpClientFactory(transport=httpx.MockTransport(handler))
    return RestClient(http_client_factory=factory, **overrides)


def echo_handler(request: httpx.Request) -> httpx.Response:
    """Send the request payload and content type back."""
    headers = {}
    if "content-type" in request.headers:
        headers["Content-Type"] = request.headers["content-type"]
    return httpx.Response(200, headers=headers, content=request.content)


def json_handler(
    status_code: int = 200, payload: Any = None, headers: dict[str, str] | None = None
) -> Callable[[httpx.Request], httpx.Response]:
    """Create a handler always answering with the given JSON payload."""

    def handler(request: httpx.Request) -> httpx.Response:  # noqa: ARG001
        content = b"" if payload is None else json.dumps(payload).encode()
        return httpx.Response(
            status_code,
            headers={"Content-Type": "application/json", **(headers or {})},
            content=content,
        )

    return handler


class RecordingHandler:
    """Mock transport handler recording the requests it receives."""

    def __init__(
        self, response_factory: Callable[[httpx.Request], httpx.Response] | None = None
    ) -> None:
        self.requests: list[httpx.Request] = []
        self._response_factory = response_factory or echo_handler

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response_factory(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]
