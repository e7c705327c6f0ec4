r"""Configuration dataclass and defaults for ``RestClient``.

This module provides configuration constants and the dataclass that
replaces constructor overloads: every collaborator of the client (the
serializer, the optional zip and tracer, the transport client factory
and the request converter) is a named field with a sensible default.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_CLIENT_NAME",
    "DEFAULT_TIMEOUT",
    "SUCCESS_STATUS_CODES",
    "ClientConfig",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import httpx

from restbridge.compression import BaseZip
from restbridge.converter import BaseRequestConverter, DefaultRequestConverter
from restbridge.factory import BaseHttpClientFactory, DefaultHttpClientFactory
from restbridge.headers import to_headers
from restbridge.serialization import BaseSerializationAdapter, JsonSerializationAdapter
from restbridge.tracing import BaseTracer
from restbridge.utils.validation import (
    validate_base_url,
    validate_name,
    validate_success_status_codes,
    validate_timeout,
)

if TYPE_CHECKING:
    from collections.abc import Container

# Default timeout in seconds applied to every request of a client
DEFAULT_TIMEOUT = 100.0

# Logical name used to look up the transport client in the factory
DEFAULT_CLIENT_NAME = "default"

# Status codes for which a response is a success
SUCCESS_STATUS_CODES = range(200, 300)


@dataclass
class ClientConfig:
    """Configuration for ``RestClient``.

    The config is long-lived and may be changed by its owner between
    calls. It must not be mutated while calls are in flight.

    Args:
        base_url: Optional absolute base URL. Relative request resources
            resolve against it.
        default_headers: Headers sent with every request. Request headers
            with the same name take precedence.
        timeout: Seconds to wait for the transport, or an
            ``httpx.Timeout``. ``None`` disables the timeout. Must be > 0.
        throw_on_failure: If ``True``, a non-success status raises
            ``HttpStatusError``. Otherwise the response is returned with
            ``is_success`` set to ``False``.
        serializer: Adapter serializing bodies and deserializing payloads.
        zip: Optional compressor used to unzip gzip encoded payloads.
        tracer: Optional sink receiving request and response traces.
        name: Logical name of the transport client in the factory.
        success_status_codes: Container of status codes that count as
            success.
        http_client_factory: Factory supplying transport clients.
        request_converter: Converter building and sending transport
            requests.

    Example:
        ```pycon
        >>> from restbridge.config import ClientConfig
        >>> config = ClientConfig(base_url="https://api.example.com/")
        >>> config.throw_on_failure
        True
        >>> merged = config.merge(throw_on_failure=False)
        >>> merged.throw_on_failure, config.throw_on_failure
        (False, True)

        ```
    """

    base_url: str | httpx.URL | None = None
    default_headers: httpx.Headers = field(default_factory=httpx.Headers)
    timeout: float | httpx.Timeout | None = DEFAULT_TIMEOUT
    throw_on_failure: bool = True
    serializer: BaseSerializationAdapter = field(default_factory=JsonSerializationAdapter)
    zip: BaseZip | None = None
    tracer: BaseTracer | None = None
    name: str = DEFAULT_CLIENT_NAME
    success_status_codes: Container[int] = SUCCESS_STATUS_CODES
    http_client_factory: BaseHttpClientFactory = field(default_factory=DefaultHttpClientFactory)
    request_converter: BaseRequestConverter = field(default_factory=DefaultRequestConverter)

    def __post_init__(self) -> None:
        """Validate and normalize configuration parameters.

        Raises:
            ValueError: If any parameter fails validation.
        """
        self.default_headers = to_headers(self.default_headers)
        validate_base_url(self.base_url)
        if self.serializer is None:
            msg = "serializer must not be None"
            raise ValueError(msg)
        validate_timeout(self.timeout)
        validate_name(self.name)
        validate_success_status_codes(self.success_status_codes)

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def is_success_status(self, status_code: int) -> bool:
        """Return whether ``status_code`` is in the success range.

        Example:
            ```pycon
            >>> from restbridge.config import ClientConfig
            >>> config = ClientConfig()
            >>> config.is_success_status(204), config.is_success_status(404)
            (True, False)

            ```
        """
        return status_code in self.success_status_codes

