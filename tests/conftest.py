from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import Mock

import httpx
import pytest

from restbridge.compression import GzipZip
from restbridge.serialization import JsonSerializationAdapter
from restbridge.tracing import BaseTracer
from restbridge.utils.structured_logging import clear_correlation_id

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_serializer() -> Mock:
    """Create a JSON serializer wrapped in a Mock to record calls."""
    return Mock(wraps=JsonSerializationAdapter())


@pytest.fixture
def mock_zip() -> Mock:
    """Create a gzip compressor wrapped in a Mock to record calls."""
    return Mock(wraps=GzipZip())


@pytest.fixture
def mock_tracer() -> Mock:
    """Create a mock tracer recording every trace."""
    return Mock(spec=BaseTracer)


@pytest.fixture
def mock_async_client() -> httpx.AsyncClient:
    """Create a mock httpx.AsyncClient for testing."""
    return Mock(spec=httpx.AsyncClient, is_closed=False)


@pytest.fixture(autouse=True)
def _clean_correlation_id() -> Generator[None, None, None]:
    clear_correlation_id()
    yield
    clear_correlation_id()
