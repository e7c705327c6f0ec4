r"""Factories supplying ``httpx.AsyncClient`` instances by logical
name."""

from __future__ import annotations

__all__ = ["BaseHttpClientFactory", "DefaultHttpClientFactory", "SingletonHttpClientFactory"]

import logging
import threading
from abc import ABC, abstractmethod
from typing import Any

import httpx

logger: logging.Logger = logging.getLogger(__name__)


class BaseHttpClientFactory(ABC):
    """Abstract base class for transport client factories."""

    @abstractmethod
    def get_client(self, name: str) -> httpx.AsyncClient:
        """Return the transport client registered under ``name``.

        Args:
            name: The logical client name.

        Returns:
            The ``httpx.AsyncClient`` to send requests with.
        """

    @abstractmethod
    async def aclose(self) -> None:
        """Close the transport clients owned by the factory."""


class DefaultHttpClientFactory(BaseHttpClientFactory):
    r"""Create one ``httpx.AsyncClient`` per logical name and reuse it.

    Lookups and creation are guarded by a lock, so concurrent first-time
    lookups for the same name, from tasks or threads, create exactly one
    client.

    Args:
        **client_kwargs: Keyword arguments forwarded to
            ``httpx.AsyncClient`` (e.g. ``transport``, ``verify``,
            ``limits``).

    Example:
        ```pycon
        >>> import asyncio
        >>> from restbridge.factory import DefaultHttpClientFactory
        >>> factory = DefaultHttpClientFactory()
        >>> factory.get_client("api") is factory.get_client("api")
        True
        >>> asyncio.run(factory.aclose())

        ```
    """

    def __init__(self, **client_kwargs: Any) -> None:
        self._client_kwargs = client_kwargs
        self._clients: dict[str, httpx.AsyncClient] = {}
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        with self._lock:
            names = sorted(self._clients)
        return f"{self.__class__.__qualname__}(clients={names})"

    def __contains__(self, name: str) -> bool:
        with self._lock:
            return name in self._clients

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def get_client(self, name: str) -> httpx.AsyncClient:
        with self._lock:
            client = self._clients.get(name)
            if client is None or client.is_closed:
                logger.debug(f"Creating httpx.AsyncClient for client name {name!r}")
                client = self._create_client(name)
                self._clients[name] = client
            return client

    def _create_client(self, name: str) -> httpx.AsyncClient:  # noqa: ARG002
        return httpx.AsyncClient(**self._client_kwargs)

    async def aclose(self) -> None:
        with self._lock:
            clients = list(self._clients.items())
            self._clients.clear()
        for name, client in clients:
            logger.debug(f"Closing httpx.AsyncClient for client name {name!r}")
            await client.aclose()


class SingletonHttpClientFactory(BaseHttpClientFactory):
    r"""Always return the same, externally created, transport client.

    Args:
        client: The ``httpx.AsyncClient`` to return for every name.
        owns_client: If ``True``, ``aclose`` closes the client. By default
            the caller keeps ownership.
    """

    def __init__(self, client: httpx.AsyncClient, *, owns_client: bool = False) -> None:
        self._client = client
        self._owns_client = owns_client

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(owns_client={self._owns_client})"

    def get_client(self, name: str) -> httpx.AsyncClient:  # noqa: ARG002
        return self._client

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
