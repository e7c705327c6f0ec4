r"""Compression helpers for response payloads.

``httpx`` decodes ``Content-Encoding: gzip`` bodies by itself, but some
transports (mocked or custom ones, or servers that compress without
announcing it on the decoded stream) hand back compressed bytes. A
configured zip lets the client unzip those payloads before
deserialization.
"""

from __future__ import annotations

__all__ = ["BaseZip", "GzipZip"]

import gzip
import logging
import zlib
from abc import ABC, abstractmethod

logger: logging.Logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


class BaseZip(ABC):
    """Abstract base class for payload compressors."""

    @abstractmethod
    def zip(self, data: bytes) -> bytes:
        """Compress a payload."""

    @abstractmethod
    def unzip(self, data: bytes) -> bytes:
        """Decompress a payload."""


class GzipZip(BaseZip):
    r"""Gzip compressor based on the standard ``gzip`` module.

    Args:
        compresslevel: Compression level used by ``zip``, from 0 to 9.
        strict: If ``False`` (default), ``unzip`` returns the payload
            unchanged when it does not start with the gzip magic number,
            which happens when the transport already decoded it.

    Raises:
        ValueError: If ``compresslevel`` is outside [0, 9].

    Example:
        ```pycon
        >>> from restbridge.compression import GzipZip
        >>> zipper = GzipZip()
        >>> zipper.unzip(zipper.zip(b"payload"))
        b'payload'
        >>> zipper.unzip(b"already plain")
        b'already plain'

        ```
    """

    def __init__(self, compresslevel: int = 9, strict: bool = False) -> None:
        if not 0 <= compresslevel <= 9:
            msg = f"compresslevel must be in [0, 9], got {compresslevel}"
            raise ValueError(msg)
        self._compresslevel = compresslevel
        self._strict = strict

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(compresslevel={self._compresslevel}, "
            f"strict={self._strict})"
        )

    def zip(self, data: bytes) -> bytes:
        return gzip.compress(data, compresslevel=self._compresslevel)

    def unzip(self, data: bytes) -> bytes:
        if not self._strict and not data.startswith(GZIP_MAGIC):
            logger.debug("Payload is not gzip compressed, returning it unchanged")
            return data
        try:
            return gzip.decompress(data)
        except (OSError, EOFError, zlib.error) as exc:
            msg = f"Invalid gzip payload: {exc}"
            raise ValueError(msg) from exc
