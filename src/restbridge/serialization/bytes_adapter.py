r"""Pass-through serialization adapter for binary and text payloads."""

from __future__ import annotations

__all__ = ["BytesSerializationAdapter"]

from typing import TYPE_CHECKING, Any

from restbridge.serialization.base import BaseSerializationAdapter

if TYPE_CHECKING:
    import httpx

OCTET_STREAM_CONTENT_TYPE = "application/octet-stream"


class BytesSerializationAdapter(BaseSerializationAdapter):
    r"""Send and receive payloads as raw bytes.

    ``str`` bodies are encoded with ``encoding``. On the way back the
    payload is returned untouched unless ``response_type`` is ``str``.

    Example:
        ```pycon
        >>> import httpx
        >>> from restbridge.serialization import BytesSerializationAdapter
        >>> adapter = BytesSerializationAdapter()
        >>> adapter.serialize("héllo", httpx.Headers())
        b'h\xc3\xa9llo'
        >>> adapter.deserialize(b"abc", httpx.Headers(), response_type=str)
        'abc'

        ```
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(encoding={self._encoding!r})"

    def serialize(self, value: Any, headers: httpx.Headers) -> bytes:
        if isinstance(value, str):
            return value.encode(self._encoding)
        if isinstance(value, (bytes, bytearray, memoryview)):
            if "content-type" not in headers:
                headers["Content-Type"] = OCTET_STREAM_CONTENT_TYPE
            return bytes(value)
        msg = f"Cannot serialize value of type {type(value).__qualname__} as bytes"
        raise TypeError(msg)

    def deserialize(
        self, data: bytes, headers: httpx.Headers, response_type: Any = None
    ) -> Any:
        if response_type is str:
            return data.decode(self._encoding)
        if response_type is bytearray:
            return bytearray(data)
        return bytes(data)
