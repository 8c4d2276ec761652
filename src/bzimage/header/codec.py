"""Encode, decode, validate and build bzimage headers."""

import hmac

from bzimage.errors import BadMagic, ChecksumMismatch, SizeMismatch, UnsupportedVersion
from bzimage.hashing import sha256

from .BzImageHeader import BzImageHeader

SUPPORTED_VERSIONS: frozenset[int] = frozenset({BzImageHeader.VERSION})


def encode(header: BzImageHeader) -> bytes:
    """Serialize header to exactly HEADER_SIZE bytes."""
    if not isinstance(header, BzImageHeader):
        raise TypeError(
            f"Expected BzImageHeader, got {type(header).__name__}"
        )
    return header.to_bytes()


def decode(data: bytes) -> BzImageHeader:
    """
    Parse a header from the first HEADER_SIZE bytes of data.

    Raises:
        IncompleteHeader: If fewer than HEADER_SIZE bytes are supplied
    """
    return BzImageHeader.from_bytes(data)


def validate(header: BzImageHeader, compressed_payload: bytes) -> None:
    """
    Check header against the payload that follows it.

    Checks run in order and the first failure is raised: magic, version,
    compressed size, checksum. The checksum is only computed once the size
    agrees.

    Raises:
        BadMagic: If the magic is not b"DMNZ"
        UnsupportedVersion: If the version is not in SUPPORTED_VERSIONS
        SizeMismatch: If len(compressed_payload) != header.compressed_size
        ChecksumMismatch: If SHA-256 of the payload differs from header.checksum
    """
    if header.magic != BzImageHeader.MAGIC:
        raise BadMagic(header.magic, BzImageHeader.MAGIC)
    if header.version not in SUPPORTED_VERSIONS:
        raise UnsupportedVersion(header.version, SUPPORTED_VERSIONS)
    if len(compressed_payload) != header.compressed_size:
        raise SizeMismatch(header.compressed_size, len(compressed_payload))

    computed = sha256(compressed_payload)
    if not hmac.compare_digest(computed, header.checksum):
        raise ChecksumMismatch(header.checksum, computed)


def build(uncompressed_size: int, compressed_payload: bytes) -> BzImageHeader:
    """Create a version 1 header describing compressed_payload."""
    return BzImageHeader(
        magic=BzImageHeader.MAGIC,
        version=BzImageHeader.VERSION,
        reserved1=0,
        uncompressed_size=uncompressed_size,
        compressed_size=len(compressed_payload),
        checksum=sha256(compressed_payload),
        reserved2=0,
    )
