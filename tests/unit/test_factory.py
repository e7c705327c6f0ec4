r"""Unit tests for the transport client factories."""

from __future__ import annotations

import asyncio
import time
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from restbridge.factory import DefaultHttpClientFactory, SingletonHttpClientFactory

##############################################
#     Tests for DefaultHttpClientFactory     #
##############################################


@pytest.mark.asyncio
async def test_default_factory_reuses_client_by_name() -> None:
    factory = DefaultHttpClientFactory()
    try:
        client = factory.get_client("api")
        assert isinstance(client, httpx.AsyncClient)
        assert factory.get_client("api") is client
        assert factory.get_client("other") is not client
        assert len(factory) == 2
    finally:
        await factory.aclose()


@pytest.mark.asyncio
async def test_default_factory_forwards_client_kwargs() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(204))
    factory = DefaultHttpClientFactory(transport=transport, timeout=7.0)
    try:
        client = factory.get_client("api")
        assert client.timeout == httpx.Timeout(7.0)
        response = await client.get("https://example.com/")
        assert response.status_code == 204
    finally:
        await factory.aclose()


@pytest.mark.asyncio
async def test_default_factory_aclose_closes_clients() -> None:
    factory = DefaultHttpClientFactory()
    first = factory.get_client("a")
    second = factory.get_client("b")
    await factory.aclose()
    assert first.is_closed
    assert second.is_closed
    assert len(factory) == 0
    assert "a" not in factory


@pytest.mark.asyncio
async def test_default_factory_replaces_closed_client() -> None:
    factory = DefaultHttpClientFactory()
    try:
        client = factory.get_client("api")
        await client.aclose()
        replacement = factory.get_client("api")
        assert replacement is not client
        assert not replacement.is_closed
    finally:
        await factory.aclose()


def test_default_factory_concurrent_threads_create_one_client() -> None:
    factory = DefaultHttpClientFactory()
    created = []

    def slow_create(name: str) -> httpx.AsyncClient:  # noqa: ARG001
        time.sleep(0.01)
        client = Mock(spec=httpx.AsyncClient, is_closed=False)
        created.append(client)
        return client

    with (
        patch.object(factory, "_create_client", side_effect=slow_create),
        ThreadPoolExecutor(max_workers=8) as executor,
    ):
        clients = list(executor.map(factory.get_client, ["api"] * 32))

    assert len(created) == 1
    assert all(client is created[0] for client in clients)


@pytest.mark.asyncio
async def test_default_factory_concurrent_tasks_create_one_client() -> None:
    factory = DefaultHttpClientFactory()

    async def lookup() -> httpx.AsyncClient:
        await asyncio.sleep(0)
        return factory.get_client("api")

    with patch("httpx.AsyncClient", side_effect=lambda **kwargs: Mock(is_closed=False)) as cls:
        clients = await asyncio.gather(*[lookup() for _ in range(16)])

    cls.assert_called_once_with()
    assert len({id(client) for client in clients}) == 1


def test_default_factory_repr() -> None:
    factory = DefaultHttpClientFactory()
    with patch("httpx.AsyncClient", return_value=Mock(is_closed=False)):
        factory.get_client("b")
        factory.get_client("a")
    assert repr(factory) == "DefaultHttpClientFactory(clients=['a', 'b'])"


################################################
#     Tests for SingletonHttpClientFactory     #
################################################


@pytest.mark.asyncio
async def test_singleton_factory_returns_same_client(mock_async_client: httpx.AsyncClient) -> None:
    factory = SingletonHttpClientFactory(mock_async_client)
    assert factory.get_client("a") is mock_async_client
    assert factory.get_client("b") is mock_async_client


@pytest.mark.asyncio
async def test_singleton_factory_does_not_close_borrowed_client() -> None:
    client = Mock(spec=httpx.AsyncClient, aclose=AsyncMock())
    await SingletonHttpClientFactory(client).aclose()
    client.aclose.assert_not_called()


@pytest.mark.asyncio
async def test_singleton_factory_closes_owned_client() -> None:
    client = Mock(spec=httpx.AsyncClient, aclose=AsyncMock())
    await SingletonHttpClientFactory(client, owns_client=True).aclose()
    client.aclose.assert_awaited_once()
