"""
Pack raw bytes into a bzimage container and read them back.

Container layout:

    ┌──────────────────────────────────────────┐
    │ Header (64 bytes)                        │
    ├──────────────────────────────────────────┤
    │ gzip payload (compressed_size bytes)     │
    └──────────────────────────────────────────┘

Usage:
    blob = pack(b"hello world")
    header, payload = unpack(blob)
    data = extract(blob)
"""

import logging

from .compression import DEFAULT_COMPRESSION_LEVEL, compress, decompress
from .errors import UncompressedSizeMismatch
from .header import BzImageHeader, build, decode, encode, validate

LOGGER = logging.getLogger(__name__)


def pack(data: bytes, level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    """Compress data and return header bytes followed by the gzip payload."""
    compressed = compress(data, level=level)
    header = build(len(data), compressed)

    LOGGER.debug(
        "Packed %d bytes into %d compressed bytes", len(data), len(compressed)
    )
    return encode(header) + compressed


def unpack(container: bytes) -> tuple[BzImageHeader, bytes]:
    """
    Split a container into its validated header and compressed payload.

    Exactly compressed_size bytes after the header are taken as payload;
    anything after them is ignored.

    Raises:
        IncompleteHeader: If the container is shorter than the header
        BadMagic, UnsupportedVersion, ChecksumMismatch: From ``validate``
        SizeMismatch: If fewer than compressed_size payload bytes follow
    """
    header = decode(container)

    start = BzImageHeader.HEADER_SIZE
    end = start + header.compressed_size
    payload = bytes(container[start:end])

    # A truncated payload surfaces as SizeMismatch from validate
    validate(header, payload)

    LOGGER.debug(
        "Unpacked header: compressed_size=%d uncompressed_size=%d",
        header.compressed_size,
        header.uncompressed_size,
    )
    return header, payload


def extract(container: bytes, strict: bool = True) -> bytes:
    """
    Validate a container and return its decompressed contents.

    The decompressed length is compared with the header's uncompressed_size.
    On disagreement, strict mode raises; otherwise a warning is logged and
    the data is returned. Strict mode stops decompressing one byte past
    uncompressed_size, so an oversized stream is never fully expanded.

    Raises:
        DecompressionError: If the payload is not a valid gzip stream
        UncompressedSizeMismatch: If strict and the lengths disagree
    """
    header, payload = unpack(container)

    if not strict:
        data = decompress(payload)
        if len(data) != header.uncompressed_size:
            LOGGER.warning(
                "Uncompressed size mismatch: header declares %d bytes, decompressed %d",
                header.uncompressed_size,
                len(data),
            )
        return data

    limit = header.uncompressed_size + 1
    data = decompress(payload, max_length=limit)
    if len(data) >= limit:
        raise UncompressedSizeMismatch(
            header.uncompressed_size, len(data), truncated=True
        )
    if len(data) != header.uncompressed_size:
        raise UncompressedSizeMismatch(header.uncompressed_size, len(data))

    return data
