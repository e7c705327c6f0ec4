r"""Asynchronous REST client.

This module provides ``RestClient``, which composes the serialization
adapter, the transport client factory, the request converter, the
optional zip and the optional tracer into single request/response round
trips over ``httpx``.
"""

from __future__ import annotations

__all__ = ["RestClient"]

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING, Any

import httpx

from restbridge.config import ClientConfig
from restbridge.exceptions import (
    DeserializationError,
    HttpStatusError,
    RequestCancelledError,
    SendError,
    SerializationError,
)
from restbridge.headers import has_header_value, merge_headers, to_headers
from restbridge.models import HttpMethod, Request, Response
from restbridge.tracing import Trace, TraceEvent, invoke_tracer
from restbridge.utils.validation import validate_base_url, validate_timeout

if TYPE_CHECKING:
    from collections.abc import Awaitable
    from types import TracebackType
    from typing import Self

    from restbridge.headers import HeadersLike

logger: logging.Logger = logging.getLogger(__name__)


async def _read_payload(http_response: httpx.Response, raw: bool) -> bytes:
    """Read the response body.

    With ``raw=True`` the bytes are read as received, skipping the
    decoding ``httpx`` applies for ``Content-Encoding``. A body that was
    already read can only be returned decoded.
    """
    if raw and not http_response.is_stream_consumed:
        return b"".join([chunk async for chunk in http_response.aiter_raw()])
    return await http_response.aread()


class RestClient:
    r"""Asynchronous REST client.

    The client is an async context manager: leaving the context closes
    the transport clients owned by its factory.

    Args:
        config: Optional ClientConfig instance. If ``None``, a default
            ClientConfig is used.
        **overrides: ClientConfig fields overriding ``config`` (e.g.
            ``base_url``, ``tracer``). ``None`` values are ignored.

    Example:
        ```pycon
        >>> import asyncio
        >>> from restbridge import RestClient
        >>> async def main():  # doctest: +SKIP
        ...     async with RestClient(base_url="https://api.example.com/") as client:
        ...         response = await client.get("people/1")
        ...         created = await client.post("people", body={"name": "Ada"})
        ...     return response.body, created.status_code
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: ClientConfig | None = None, **overrides: Any) -> None:
        config = config if config is not None else ClientConfig()
        self.config = config.merge(**overrides) if overrides else config

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(name={self.config.name!r}, "
            f"base_url={self.base_url!r})"
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the transport clients owned by the factory."""
        await self.config.http_client_factory.aclose()

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def base_url(self) -> str | None:
        return None if self.config.base_url is None else str(self.config.base_url)

    @base_url.setter
    def base_url(self, base_url: str | httpx.URL | None) -> None:
        validate_base_url(base_url)
        self.config.base_url = base_url

    @property
    def default_headers(self) -> httpx.Headers:
        """Headers sent with every request; mutable in place."""
        return self.config.default_headers

    @property
    def timeout(self) -> float | httpx.Timeout | None:
        return self.config.timeout

    @timeout.setter
    def timeout(self, timeout: float | httpx.Timeout | None) -> None:
        validate_timeout(timeout)
        self.config.timeout = timeout

    @property
    def throw_on_failure(self) -> bool:
        return self.config.throw_on_failure

    @throw_on_failure.setter
    def throw_on_failure(self, throw_on_failure: bool) -> None:
        self.config.throw_on_failure = throw_on_failure

    async def send(self, request: Request, response_type: Any = None) -> Response:
        r"""Send a request and process its response.

        Args:
            request: The request to send.
            response_type: Optional type the serializer builds from the
                response payload.

        Returns:
            The processed response. Its ``is_success`` is ``False`` only
            when ``throw_on_failure`` is disabled.

        Raises:
            SerializationError: If the request body cannot be serialized.
            SendError: If the transport fails.
            RequestCancelledError: If the request cancel event is set
                before the response is processed.
            asyncio.CancelledError: If the calling task is cancelled.
            DeserializationError: If the payload cannot be unzipped or
                deserialized.
            HttpStatusError: If the status code is not a success and
                ``throw_on_failure`` is enabled.
        """
        config = self.config
        self._raise_if_cancelled(request)

        headers = to_headers(request.headers)
        body_data = self._serialize_body(config, request, headers)
        request = dataclasses.replace(request, headers=headers)

        client = config.http_client_factory.get_client(config.name)
        http_request = config.request_converter.build_request(
            client,
            request,
            base_url=config.base_url,
            default_headers=config.default_headers,
            body_data=body_data,
            timeout=config.timeout,
        )
        url = str(http_request.url)
        invoke_tracer(
            config.tracer,
            Trace(
                method=request.method,
                url=url,
                data=body_data,
                event=TraceEvent.REQUEST,
                status_code=None,
                headers=http_request.headers,
            ),
        )

        try:
            http_response, data = await self._run_cancellable(
                request, self._exchange(config, client, request, http_request)
            )
        except asyncio.CancelledError:
            logger.debug(f"{request.method.value} request to {url} was cancelled")
            raise
        self._raise_if_cancelled(request)

        return self._process_response(config, request, url, http_response, data, response_type)

    def _serialize_body(
        self, config: ClientConfig, request: Request, headers: httpx.Headers
    ) -> bytes | None:
        """Serialize the request body.

        The serializer sees the default headers merged with ``headers``,
        and only the headers it adds are copied back into ``headers``.
        """
        if not request.has_body:
            return None
        merged = merge_headers(config.default_headers, headers)
        try:
            body_data = config.serializer.serialize(request.body, merged)
        except Exception as exc:
            msg = (
                f"Failed to serialize {type(request.body).__qualname__} body of "
                f"{request.method.value} request to {request.resource!r}: {exc}"
            )
            raise SerializationError(msg, body=request.body, cause=exc) from exc
        for key in merged.keys():
            if key not in headers and key not in config.default_headers:
                headers[key] = merged[key]
        return body_data

    async def _exchange(
        self,
        config: ClientConfig,
        client: httpx.AsyncClient,
        request: Request,
        http_request: httpx.Request,
    ) -> tuple[httpx.Response, bytes]:
        """Send the request and read the response body."""
        try:
            http_response = await config.request_converter.send(client, http_request)
            try:
                raw = config.zip is not None and has_header_value(
                    http_response.headers, "content-encoding", "gzip"
                )
                data = await _read_payload(http_response, raw=raw)
            finally:
                await http_response.aclose()
        except Exception as exc:
            logger.warning(
                f"{http_request.method} request to {http_request.url} failed with "
                f"{type(exc).__name__}: {exc}"
            )
            msg = f"HTTP client send error: {http_request.method} {http_request.url}: {exc}"
            raise SendError(msg, request=request, cause=exc) from exc
        return http_response, data

    async def _run_cancellable(
        self, request: Request, exchange: Awaitable[tuple[httpx.Response, bytes]]
    ) -> tuple[httpx.Response, bytes]:
        """Await the exchange, aborting it when the request cancel event
        fires first."""
        if request.cancel_event is None:
            return await exchange

        exchange_task = asyncio.ensure_future(exchange)
        cancel_task = asyncio.ensure_future(request.cancel_event.wait())
        try:
            await asyncio.wait({exchange_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            exchange_task.cancel()
            cancel_task.cancel()
            await asyncio.gather(exchange_task, return_exceptions=True)
            raise

        cancel_task.cancel()
        if request.is_cancelled:
            exchange_task.cancel()
            await asyncio.gather(exchange_task, return_exceptions=True)
            self._raise_if_cancelled(request)
        return exchange_task.result()

    def _raise_if_cancelled(self, request: Request) -> None:
        if request.is_cancelled:
            logger.debug(f"{request.method.value} request to {request.resource!r} was cancelled")
            msg = f"{request.method.value} request to {request.resource!r} was cancelled"
            raise RequestCancelledError(msg, request=request)

    def _process_response(
        self,
        config: ClientConfig,
        request: Request,
        url: str,
        http_response: httpx.Response,
        data: bytes,
        response_type: Any,
    ) -> Response:
        headers = http_response.headers
        if config.zip is not None and has_header_value(headers, "content-encoding", "gzip"):
            try:
                data = config.zip.unzip(data)
            except Exception as exc:
                msg = f"Failed to unzip the response payload of {request.method.value} {url}: {exc}"
                raise DeserializationError(
                    msg, data=data, response_type=response_type, cause=exc
                ) from exc

        invoke_tracer(
            config.tracer,
            Trace(
                method=request.method,
                url=url,
                data=data,
                event=TraceEvent.RESPONSE,
                status_code=http_response.status_code,
                headers=headers,
            ),
        )

        try:
            body = config.serializer.deserialize(data, headers, response_type)
        except Exception as exc:
            msg = f"Failed to deserialize the response payload of {request.method.value} {url}: {exc}"
            raise DeserializationError(
                msg, data=data, response_type=response_type, cause=exc
            ) from exc

        is_success = config.is_success_status(http_response.status_code)
        response = Response(
            status_code=http_response.status_code,
            headers=headers,
            method=request.method,
            request_url=url,
            data=data,
            body=body,
            is_success=is_success,
            http_response=http_response,
        )
        if is_success or not config.throw_on_failure:
            return response

        logger.debug(
            f"{request.method.value} request to {url} failed with status {response.status_code}"
        )
        msg = f"Non successful HTTP status code: {response.status_code}. Request URL: {url}"
        raise HttpStatusError(msg, response=response)

    async def request(
        self,
        method: str | HttpMethod,
        resource: str = "",
        *,
        body: Any = None,
        response_type: Any = None,
        headers: HeadersLike = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Response:
        """Build a ``Request`` from the arguments and send it.

        Args:
            method: The HTTP method.
            resource: Absolute URL, or path relative to the base URL.
            body: Optional body, only sent for POST, PUT and PATCH.
            response_type: Optional type to deserialize the payload to.
            headers: Optional request headers.
            cancel_event: Optional event cancelling the call when set.

        Returns:
            The processed response.
        """
        request = Request.create(
            method, resource, headers=headers, body=body, cancel_event=cancel_event
        )
        return await self.send(request, response_type=response_type)

    async def get(self, resource: str = "", **kwargs: Any) -> Response:
        r"""Send a GET request. See ``request`` for the arguments."""
        return await self.request(HttpMethod.GET, resource, **kwargs)

    async def post(self, resource: str = "", body: Any = None, **kwargs: Any) -> Response:
        r"""Send a POST request with a serialized body."""
        return await self.request(HttpMethod.POST, resource, body=body, **kwargs)

    async def put(self, resource: str = "", body: Any = None, **kwargs: Any) -> Response:
        r"""Send a PUT request with a serialized body."""
        return await self.request(HttpMethod.PUT, resource, body=body, **kwargs)

    async def patch(self, resource: str = "", body: Any = None, **kwargs: Any) -> Response:
        r"""Send a PATCH request with a serialized body."""
        return await self.request(HttpMethod.PATCH, resource, body=body, **kwargs)

    async def delete(self, resource: str = "", **kwargs: Any) -> Response:
        r"""Send a DELETE request."""
        return await self.request(HttpMethod.DELETE, resource, **kwargs)

    async def head(self, resource: str = "", **kwargs: Any) -> Response:
        r"""Send a HEAD request."""
        return await self.request(HttpMethod.HEAD, resource, **kwargs)

    async def options(self, resource: str = "", **kwargs: Any) -> Response:
        r"""Send an OPTIONS request."""
        return await self.request(HttpMethod.OPTIONS, resource, **kwargs)
