r"""Utility helpers for configuration validation and structured
logging."""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
    "validate_base_url",
    "validate_name",
    "validate_success_status_codes",
    "validate_timeout",
]

from restbridge.utils.structured_logging import (
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    log_structured,
    set_correlation_id,
)
from restbridge.utils.validation import (
    validate_base_url,
    validate_name,
    validate_success_status_codes,
    validate_timeout,
)
