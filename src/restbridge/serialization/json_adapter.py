r"""JSON serialization adapter based on the standard ``json`` module."""

from __future__ import annotations

__all__ = ["JSON_CONTENT_TYPE", "JsonSerializationAdapter"]

import dataclasses
import json
from typing import TYPE_CHECKING, Any

from restbridge.serialization.base import BaseSerializationAdapter

if TYPE_CHECKING:
    import httpx

JSON_CONTENT_TYPE = "application/json"


class JsonSerializationAdapter(BaseSerializationAdapter):
    r"""Serialize bodies to JSON and decode JSON payloads.

    Dataclass instances are converted with ``dataclasses.asdict`` before
    encoding. An empty payload (e.g. a ``204`` or ``HEAD`` response)
    deserializes to ``None``.

    Args:
        encoding: Text encoding of the payloads.
        set_content_type: If ``True``, ``serialize`` adds a
            ``Content-Type: application/json`` header when the request
            headers do not define one.

    Example:
        ```pycon
        >>> import httpx
        >>> from restbridge.serialization import JsonSerializationAdapter
        >>> adapter = JsonSerializationAdapter()
        >>> headers = httpx.Headers()
        >>> adapter.serialize({"id": 1}, headers)
        b'{"id": 1}'
        >>> headers["content-type"]
        'application/json; charset=utf-8'
        >>> adapter.deserialize(b'[1, 2]', httpx.Headers())
        [1, 2]

        ```
    """

    def __init__(self, encoding: str = "utf-8", set_content_type: bool = True) -> None:
        self._encoding = encoding
        self._set_content_type = set_content_type

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(encoding={self._encoding!r})"

    def serialize(self, value: Any, headers: httpx.Headers) -> bytes:
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            value = dataclasses.asdict(value)
        data = json.dumps(value).encode(self._encoding)
        if self._set_content_type and "content-type" not in headers:
            headers["Content-Type"] = f"{JSON_CONTENT_TYPE}; charset={self._encoding}"
        return data

    def deserialize(
        self, data: bytes, headers: httpx.Headers, response_type: Any = None
    ) -> Any:
        if not data:
            return None
        decoded = json.loads(data.decode(self._encoding))
        if response_type is None or response_type is Any:
            return decoded
        if dataclasses.is_dataclass(response_type) and isinstance(response_type, type):
            return response_type(**decoded)
        return response_type(decoded)
