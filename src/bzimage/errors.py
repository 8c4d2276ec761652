"""Error types raised while reading or validating bzimage containers."""


class BzImageError(ValueError):
    """Base class for every bzimage format error."""


class IncompleteHeader(BzImageError):
    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Incomplete header: expected {expected} bytes, got {actual}"
        )


class BadMagic(BzImageError):
    def __init__(self, magic: bytes, expected: bytes) -> None:
        self.magic = magic
        self.expected = expected
        super().__init__(
            f"Invalid bzimage: expected {expected!r}, got {bytes(magic)!r}"
        )


class UnsupportedVersion(BzImageError):
    def __init__(self, version: int, supported: frozenset[int]) -> None:
        self.version = version
        self.supported = supported
        super().__init__(
            f"Unsupported bzimage version: {version} "
            f"(supported: {', '.join(str(v) for v in sorted(supported))})"
        )


class SizeMismatch(BzImageError):
    """Declared compressed_size does not match the payload bytes available."""

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Compressed size mismatch: header declares {expected} bytes, "
            f"payload has {actual}"
        )


class ChecksumMismatch(BzImageError):
    """SHA-256 of the payload differs from the stored checksum."""

    def __init__(self, expected: bytes, actual: bytes) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Checksum mismatch: stored={expected.hex()}, computed={actual.hex()}"
        )


class DecompressionError(BzImageError):
    """The compressed payload is not a well-formed gzip stream."""


class UncompressedSizeMismatch(BzImageError):
    """Decompressed length disagrees with the header's uncompressed_size."""

    def __init__(self, expected: int, actual: int, truncated: bool = False) -> None:
        self.expected = expected
        self.actual = actual
        # actual is a lower bound when decompression was cut off early
        self.truncated = truncated
        got = f"at least {actual}" if truncated else f"{actual}"
        super().__init__(
            f"Uncompressed size mismatch: header declares {expected} bytes, "
            f"decompressed {got}"
        )
