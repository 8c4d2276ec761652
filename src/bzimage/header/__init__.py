"""Fixed 64-byte bzimage header and its codec."""

from .BzImageHeader import BzImageHeader
from .codec import SUPPORTED_VERSIONS, build, decode, encode, validate

__all__ = [
    "BzImageHeader",
    "SUPPORTED_VERSIONS",
    "encode",
    "decode",
    "validate",
    "build",
]
