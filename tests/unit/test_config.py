r"""Unit tests for the client configuration."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest
from coola.equality import objects_are_equal

from restbridge.compression import GzipZip
from restbridge.config import (
    DEFAULT_CLIENT_NAME,
    DEFAULT_TIMEOUT,
    SUCCESS_STATUS_CODES,
    ClientConfig,
)
from restbridge.converter import DefaultRequestConverter
from restbridge.factory import DefaultHttpClientFactory
from restbridge.serialization import BytesSerializationAdapter, JsonSerializationAdapter
from restbridge.tracing import BaseTracer

##################################
#     Tests for ClientConfig     #
##################################


def test_client_config_defaults() -> None:
    config = ClientConfig()
    assert config.base_url is None
    assert len(config.default_headers) == 0
    assert config.timeout == DEFAULT_TIMEOUT == 100.0
    assert config.throw_on_failure
    assert isinstance(config.serializer, JsonSerializationAdapter)
    assert config.zip is None
    assert config.tracer is None
    assert config.name == DEFAULT_CLIENT_NAME == "default"
    assert config.success_status_codes == SUCCESS_STATUS_CODES
    assert isinstance(config.http_client_factory, DefaultHttpClientFactory)
    assert isinstance(config.request_converter, DefaultRequestConverter)


def test_client_config_defaults_are_not_shared() -> None:
    config1 = ClientConfig()
    config2 = ClientConfig()
    assert config1.default_headers is not config2.default_headers
    assert config1.http_client_factory is not config2.http_client_factory


def test_client_config_normalizes_default_headers() -> None:
    config = ClientConfig(default_headers={"Authorization": "Bearer t"})
    assert isinstance(config.default_headers, httpx.Headers)
    assert config.default_headers["authorization"] == "Bearer t"


def test_client_config_custom_values() -> None:
    tracer = Mock(spec=BaseTracer)
    zipper = GzipZip()
    serializer = BytesSerializationAdapter()
    config = ClientConfig(
        base_url="https://api.example.com/",
        timeout=5.0,
        throw_on_failure=False,
        serializer=serializer,
        zip=zipper,
        tracer=tracer,
        name="people",
        success_status_codes={200, 404},
    )
    assert objects_are_equal(
        {
            "base_url": config.base_url,
            "timeout": config.timeout,
            "throw_on_failure": config.throw_on_failure,
            "name": config.name,
            "success_status_codes": config.success_status_codes,
        },
        {
            "base_url": "https://api.example.com/",
            "timeout": 5.0,
            "throw_on_failure": False,
            "name": "people",
            "success_status_codes": {200, 404},
        },
    )
    assert config.serializer is serializer
    assert config.zip is zipper
    assert config.tracer is tracer


@pytest.mark.parametrize("timeout", [0, -1, 0.0, -0.5])
def test_client_config_invalid_timeout(timeout: float) -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        ClientConfig(timeout=timeout)


@pytest.mark.parametrize("timeout", [None, 0.1, 30, httpx.Timeout(5.0)])
def test_client_config_valid_timeout(timeout: object) -> None:
    assert ClientConfig(timeout=timeout).timeout == timeout


def test_client_config_invalid_base_url() -> None:
    with pytest.raises(ValueError, match=r"base_url must be an absolute URL"):
        ClientConfig(base_url="api/v1")


def test_client_config_invalid_name() -> None:
    with pytest.raises(ValueError, match=r"name must be a non-empty string"):
        ClientConfig(name="")


def test_client_config_invalid_success_status_codes() -> None:
    with pytest.raises(ValueError, match=r"success_status_codes must contain"):
        ClientConfig(success_status_codes=[])


def test_client_config_serializer_none() -> None:
    with pytest.raises(ValueError, match=r"serializer must not be None"):
        ClientConfig(serializer=None)


def test_client_config_merge() -> None:
    config = ClientConfig(base_url="https://api.example.com/", timeout=5.0)
    merged = config.merge(timeout=20.0, throw_on_failure=False)
    assert merged is not config
    assert merged.timeout == 20.0
    assert not merged.throw_on_failure
    assert merged.base_url == "https://api.example.com/"
    assert config.timeout == 5.0
    assert config.throw_on_failure


def test_client_config_merge_ignores_none() -> None:
    config = ClientConfig(base_url="https://api.example.com/", timeout=5.0)
    merged = config.merge(base_url=None, timeout=None)
    assert merged.base_url == "https://api.example.com/"
    assert merged.timeout == 5.0


def test_client_config_merge_validates() -> None:
    with pytest.raises(ValueError, match=r"timeout must be > 0"):
        ClientConfig().merge(timeout=-1)


@pytest.mark.parametrize(
    ("status_code", "expected"),
    [(199, False), (200, True), (204, True), (299, True), (300, False), (500, False)],
)
def test_client_config_is_success_status(status_code: int, expected: bool) -> None:
    assert ClientConfig().is_success_status(status_code) is expected


def test_client_config_is_success_status_custom() -> None:
    config = ClientConfig(success_status_codes={200, 404})
    assert config.is_success_status(404)
    assert not config.is_success_status(201)
