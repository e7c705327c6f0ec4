r"""Exception hierarchy raised by the REST client.

All errors raised by ``restbridge`` derive from ``RestClientError`` so
callers can catch the whole family at once. Each wrapping error keeps the
original exception as its ``__cause__`` and exposes it as ``cause``.
"""

from __future__ import annotations

__all__ = [
    "DeserializationError",
    "HttpStatusError",
    "RequestCancelledError",
    "RestClientError",
    "SendError",
    "SerializationError",
]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from restbridge.models import Request, Response


class RestClientError(Exception):
    """Base class for all errors raised by the REST client.

    Args:
        message: A descriptive error message.
        cause: The original exception that triggered this error, if any.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


class SerializationError(RestClientError):
    """Raised when the request body cannot be serialized.

    Args:
        message: A descriptive error message.
        body: The value that failed to serialize.
        cause: The exception raised by the serialization adapter.

    Example:
        ```pycon
        >>> from restbridge.exceptions import SerializationError
        >>> err = SerializationError("bad body", body=object())
        >>> str(err)
        'bad body'

        ```
    """

    def __init__(
        self, message: str, *, body: Any = None, cause: BaseException | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.body = body


class SendError(RestClientError):
    """Raised when the transport fails to send a request.

    Args:
        message: A descriptive error message.
        request: The request that could not be sent.
        cause: The exception raised by the transport.
    """

    def __init__(
        self, message: str, *, request: Request, cause: BaseException | None = None
    ) -> None:
        super().__init__(message, cause=cause)
        self.request = request


class RequestCancelledError(RestClientError):
    """Raised when the cancellation event of a request fires.

    Args:
        message: A descriptive error message.
        request: The request that was cancelled.
    """

    def __init__(self, message: str, *, request: Request) -> None:
        super().__init__(message)
        self.request = request


class DeserializationError(RestClientError):
    """Raised when the response payload cannot be deserialized.

    The raw payload is kept so the failure can be diagnosed.

    Args:
        message: A descriptive error message.
        data: The raw (decompressed) response bytes.
        response_type: The type the payload was deserialized to.
        cause: The exception raised by the serialization adapter.

    Example:
        ```pycon
        >>> from restbridge.exceptions import DeserializationError
        >>> err = DeserializationError("invalid payload", data=b"{")
        >>> err.data
        b'{'

        ```
    """

    def __init__(
        self,
        message: str,
        *,
        data: bytes,
        response_type: Any = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.data = data
        self.response_type = response_type


class HttpStatusError(RestClientError):
    """Raised when a response has a non-success status code.

    Args:
        message: A descriptive error message.
        response: The fully processed response.
    """

    def __init__(self, message: str, *, response: Response) -> None:
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def url(self) -> str:
        return self.response.request_url
