r"""Abstract base class for serialization adapters."""

from __future__ import annotations

__all__ = ["BaseSerializationAdapter"]

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx


class BaseSerializationAdapter(ABC):
    """Abstract base class for serialization adapters.

    A serialization adapter converts request bodies to bytes and
    response payloads back to Python values. The request or response
    headers are passed so an adapter can honour content negotiation
    headers (e.g. a charset) or set its own content type.
    """

    @abstractmethod
    def serialize(self, value: Any, headers: httpx.Headers) -> bytes:
        """Serialize a request body.

        Args:
            value: The body to serialize.
            headers: The request headers. Adapters may add a
                ``Content-Type`` header when the caller did not set one.

        Returns:
            The serialized payload.
        """

    @abstractmethod
    def deserialize(
        self, data: bytes, headers: httpx.Headers, response_type: Any = None
    ) -> Any:
        """Deserialize a response payload.

        Args:
            data: The raw payload (already decompressed when applicable).
            headers: The response headers.
            response_type: Optional type to build from the payload.
                ``None`` returns the natural decoded value.

        Returns:
            The deserialized value.
        """
