r"""Serialization adapters converting bodies to and from bytes."""

from __future__ import annotations

__all__ = [
    "BaseSerializationAdapter",
    "BytesSerializationAdapter",
    "JsonSerializationAdapter",
]

from restbridge.serialization.base import BaseSerializationAdapter
from restbridge.serialization.bytes_adapter import BytesSerializationAdapter
from restbridge.serialization.json_adapter import JsonSerializationAdapter
