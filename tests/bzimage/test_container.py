"""Tests for packing, unpacking and extracting bzimage containers."""

import dataclasses
import logging

import pytest
from hypothesis import given, strategies as st

import bzimage.container as container
from bzimage import (
    BadMagic,
    ChecksumMismatch,
    DecompressionError,
    IncompleteHeader,
    SizeMismatch,
    UncompressedSizeMismatch,
    build,
    compress,
    decode,
    encode,
    extract,
    pack,
    unpack,
)


class TestContainerValid:
    """Tests for well-formed containers."""

    def test_pack_extract_roundtrip(self):
        """Test extract recovers the packed bytes."""
        payload = b"hello daemonizer world"
        blob = pack(payload)

        assert blob[:4] == b"DMNZ"
        assert extract(blob) == payload

    def test_unpack_returns_header_and_payload(self):
        """Test unpack splits header and compressed payload."""
        blob = pack(b"unit test payload")
        header, compressed = unpack(blob)

        assert header.uncompressed_size == len(b"unit test payload")
        assert header.compressed_size == len(blob) - 64
        assert compressed == blob[64:]
        assert header.checksum_matches(compressed)

    def test_trailing_bytes_ignored(self):
        """Test bytes after the payload are not part of it."""
        blob = pack(b"data") + b"trailing garbage"
        header, compressed = unpack(blob)

        assert len(compressed) == header.compressed_size
        assert extract(blob) == b"data"

    def test_empty_input(self):
        """Test an empty byte string survives the round trip."""
        assert extract(pack(b"")) == b""

    def test_pack_logs_sizes(self, caplog):
        """Test pack emits a debug record."""
        with caplog.at_level(logging.DEBUG, logger="bzimage.container"):
            pack(b"x" * 100)

        assert "Packed 100 bytes" in caplog.text

    @given(st.binary(max_size=2048))
    @pytest.mark.property
    def test_any_bytes_roundtrip(self, data):
        """Test extract(pack(x)) == x."""
        assert extract(pack(data)) == data


class TestContainerInvalid:
    """Tests for damaged or foreign containers."""

    def test_short_container(self):
        """Test fewer than 64 bytes cannot hold a header."""
        with pytest.raises(IncompleteHeader):
            unpack(b"DMNZ" + b"\x00" * 10)

    def test_foreign_data(self):
        """Test non-container bytes fail on magic."""
        with pytest.raises(BadMagic):
            unpack(b"BAD!" + b"\x00" * 60)

    def test_truncated_payload(self):
        """Test a container cut short fails with SizeMismatch."""
        blob = pack(b"some payload that will be truncated")

        with pytest.raises(SizeMismatch):
            unpack(blob[:-3])

    def test_corrupted_payload(self):
        """Test corruption of the stored payload is detected."""
        blob = bytearray(pack(b"somedata"))
        blob[70] ^= 0xFF

        with pytest.raises(ChecksumMismatch):
            extract(bytes(blob))

    def test_malformed_gzip(self):
        """Test a checksum-consistent but invalid gzip stream fails to decompress."""
        garbage = b"this is not a gzip stream"
        blob = encode(build(10, garbage)) + garbage

        with pytest.raises(DecompressionError) as exc_info:
            extract(blob)

        assert exc_info.value.__cause__ is not None

    def test_truncated_gzip(self):
        """Test a gzip stream missing its trailer fails to decompress."""
        compressed = compress(b"hello world")[:-4]
        blob = encode(build(11, compressed)) + compressed

        with pytest.raises(DecompressionError):
            extract(blob)


class TestUncompressedSize:
    """Tests for the decompressed length cross-check."""

    @pytest.fixture
    def mislabeled(self):
        compressed = compress(b"hello world")
        return encode(build(99, compressed)) + compressed

    def test_strict_raises(self, mislabeled):
        """Test a wrong uncompressed_size is an error by default."""
        with pytest.raises(UncompressedSizeMismatch) as exc_info:
            extract(mislabeled)

        assert exc_info.value.expected == 99
        assert exc_info.value.actual == 11

    def test_strict_stops_oversized_stream(self, monkeypatch):
        """Test strict mode caps decompression just past uncompressed_size."""
        compressed = compress(b"\x00" * (1 << 20))
        blob = encode(build(16, compressed)) + compressed

        calls = []
        real_decompress = container.decompress

        def recording_decompress(data, max_length=None):
            calls.append(max_length)
            return real_decompress(data, max_length=max_length)

        monkeypatch.setattr(container, "decompress", recording_decompress)

        with pytest.raises(UncompressedSizeMismatch, match="at least 17") as exc_info:
            extract(blob)

        assert calls == [17]
        assert exc_info.value.truncated
        assert exc_info.value.actual == 17

    def test_strict_huge_declared_size(self):
        """Test a u64-max uncompressed_size is a mismatch, not an overflow."""
        compressed = compress(b"hello world")
        blob = encode(build(2**64 - 1, compressed)) + compressed

        with pytest.raises(UncompressedSizeMismatch) as exc_info:
            extract(blob)

        assert exc_info.value.actual == 11
        assert not exc_info.value.truncated

    def test_non_strict_warns(self, mislabeled, caplog):
        """Test non-strict mode logs a warning and returns the data."""
        with caplog.at_level(logging.WARNING, logger="bzimage.container"):
            data = extract(mislabeled, strict=False)

        assert data == b"hello world"
        assert "Uncompressed size mismatch" in caplog.text

    def test_header_preserved_through_container(self):
        """Test reserved fields written by a newer writer still validate."""
        compressed = compress(b"forward")
        header = dataclasses.replace(build(7, compressed), reserved1=5, reserved2=6)
        blob = encode(header) + compressed

        restored, _ = unpack(blob)

        assert restored == decode(blob)
        assert (restored.reserved1, restored.reserved2) == (5, 6)
        assert extract(blob) == b"forward"
