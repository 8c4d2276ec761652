import hashlib

CHECKSUM_SIZE = 32


def sha256(data: bytes) -> bytes:
    """Return the 32-byte SHA-256 digest of data."""
    return hashlib.sha256(data).digest()
