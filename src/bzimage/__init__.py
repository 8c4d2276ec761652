"""bzimage: a gzip payload behind a fixed, SHA-256 checked 64-byte header."""

from .compression import compress, decompress
from .container import extract, pack, unpack
from .errors import (
    BadMagic,
    BzImageError,
    ChecksumMismatch,
    DecompressionError,
    IncompleteHeader,
    SizeMismatch,
    UncompressedSizeMismatch,
    UnsupportedVersion,
)
from .hashing import sha256
from .header import SUPPORTED_VERSIONS, BzImageHeader, build, decode, encode, validate

MAGIC = BzImageHeader.MAGIC
VERSION = BzImageHeader.VERSION
HEADER_SIZE = BzImageHeader.HEADER_SIZE

__all__ = [
    "MAGIC",
    "VERSION",
    "HEADER_SIZE",
    "SUPPORTED_VERSIONS",
    "BzImageHeader",
    "encode",
    "decode",
    "validate",
    "build",
    "compress",
    "decompress",
    "sha256",
    "pack",
    "unpack",
    "extract",
    "BzImageError",
    "IncompleteHeader",
    "BadMagic",
    "UnsupportedVersion",
    "SizeMismatch",
    "ChecksumMismatch",
    "DecompressionError",
    "UncompressedSizeMismatch",
]
