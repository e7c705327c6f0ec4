r"""Unit tests for the payload compressors."""

from __future__ import annotations

import gzip

import pytest

from restbridge.compression import GzipZip

#############################
#     Tests for GzipZip     #
#############################


def test_gzip_zip_repr() -> None:
    assert repr(GzipZip()) == "GzipZip(compresslevel=9, strict=False)"


@pytest.mark.parametrize("compresslevel", [-1, 10])
def test_gzip_zip_invalid_compresslevel(compresslevel: int) -> None:
    with pytest.raises(ValueError, match=r"compresslevel must be in \[0, 9\]"):
        GzipZip(compresslevel=compresslevel)


@pytest.mark.parametrize("compresslevel", [0, 1, 9])
def test_gzip_zip_zip(compresslevel: int) -> None:
    data = GzipZip(compresslevel=compresslevel).zip(b"payload" * 10)
    assert data.startswith(b"\x1f\x8b")
    assert gzip.decompress(data) == b"payload" * 10


def test_gzip_zip_unzip() -> None:
    assert GzipZip().unzip(gzip.compress(b'{"id": 1}')) == b'{"id": 1}'


def test_gzip_zip_unzip_empty_payload() -> None:
    assert GzipZip().unzip(gzip.compress(b"")) == b""


def test_gzip_zip_unzip_plain_payload() -> None:
    assert GzipZip().unzip(b'{"id": 1}') == b'{"id": 1}'


def test_gzip_zip_unzip_plain_payload_strict() -> None:
    with pytest.raises(ValueError, match=r"Invalid gzip payload"):
        GzipZip(strict=True).unzip(b'{"id": 1}')


def test_gzip_zip_unzip_truncated_payload() -> None:
    with pytest.raises(ValueError, match=r"Invalid gzip payload"):
        GzipZip().unzip(gzip.compress(b"payload" * 100)[:20])
