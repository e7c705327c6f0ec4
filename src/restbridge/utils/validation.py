r"""Parameter validation utilities for the client configuration."""

from __future__ import annotations

__all__ = [
    "validate_base_url",
    "validate_name",
    "validate_success_status_codes",
    "validate_timeout",
]

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Container


def validate_timeout(timeout: float | httpx.Timeout | None) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for server responses.
            Must be > 0 if provided as a numeric value. ``None`` disables
            the timeout.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from restbridge.utils.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if isinstance(timeout, (int, float)) and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_name(name: str) -> None:
    """Validate the logical client name.

    Raises:
        ValueError: If the name is empty.
    """
    if not name:
        msg = "name must be a non-empty string"
        raise ValueError(msg)


def validate_success_status_codes(success_status_codes: Container[int]) -> None:
    """Validate the container of status codes considered successful.

    Args:
        success_status_codes: Container of HTTP status codes. It must hold
            at least one code in the 1xx-5xx range.

    Raises:
        ValueError: If no valid status code belongs to the container.

    Example:
        ```pycon
        >>> from restbridge.utils.validation import validate_success_status_codes
        >>> validate_success_status_codes(range(200, 300))
        >>> validate_success_status_codes(())
        Traceback (most recent call last):
        ...
        ValueError: success_status_codes must contain at least one status code in [100, 599]

        ```
    """
    if not any(code in success_status_codes for code in range(100, 600)):
        msg = "success_status_codes must contain at least one status code in [100, 599]"
        raise ValueError(msg)


def validate_base_url(base_url: str | httpx.URL | None) -> None:
    """Validate the client base URL.

    Args:
        base_url: Optional base URL. It must be absolute when provided.

    Raises:
        ValueError: If the base URL is relative.

    Example:
        ```pycon
        >>> from restbridge.utils.validation import validate_base_url
        >>> validate_base_url("https://api.example.com/v1/")
        >>> validate_base_url(None)
        >>> validate_base_url("/v1/")
        Traceback (most recent call last):
        ...
        ValueError: base_url must be an absolute URL, got '/v1/'

        ```
    """
    if base_url is not None and not httpx.URL(base_url).is_absolute_url:
        msg = f"base_url must be an absolute URL, got {str(base_url)!r}"
        raise ValueError(msg)
