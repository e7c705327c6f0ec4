r"""restbridge - Configurable asynchronous REST client built on httpx.

This package wraps ``httpx.AsyncClient`` into a small REST client: it
builds requests, dispatches them, optionally unzips gzip payloads,
deserializes responses through a pluggable serialization adapter and
optionally traces requests and responses.

Key Features:
    - One ``ClientConfig`` dataclass with named fields and defaults
    - Pluggable serialization adapters (JSON and raw bytes included)
    - Base URL resolution and default header merging
    - Transport clients cached by logical name
    - Typed errors for serialization, transport, cancellation,
      deserialization and non-success status codes
    - Optional ``throw_on_failure=False`` mode returning unsuccessful
      responses instead of raising
    - Per-call cancellation with an ``asyncio.Event``
    - Request/response tracing for observability

Example:
    ```pycon
    >>> import asyncio
    >>> from restbridge import RestClient
    >>> async def main():  # doctest: +SKIP
    ...     async with RestClient(base_url="https://api.example.com/") as client:
    ...         response = await client.get("people/1")
    ...     return response.body
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "BytesSerializationAdapter",
    "ClientConfig",
    "DeserializationError",
    "GzipZip",
    "HttpMethod",
    "HttpStatusError",
    "JsonSerializationAdapter",
    "LoggingTracer",
    "Request",
    "RequestCancelledError",
    "Response",
    "RestClient",
    "RestClientError",
    "SendError",
    "SerializationError",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from restbridge.client import RestClient
from restbridge.compression import GzipZip
from restbridge.config import ClientConfig
from restbridge.exceptions import (
    DeserializationError,
    HttpStatusError,
    RequestCancelledError,
    RestClientError,
    SendError,
    SerializationError,
)
from restbridge.models import HttpMethod, Request, Response
from restbridge.serialization import BytesSerializationAdapter, JsonSerializationAdapter
from restbridge.tracing import LoggingTracer

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
