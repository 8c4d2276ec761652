from dataclasses import dataclass
from typing import ClassVar
import hmac
import struct

from bzimage.errors import IncompleteHeader
from bzimage.hashing import CHECKSUM_SIZE, sha256


@dataclass(frozen=True, slots=True)
class BzImageHeader:
    """
    Fixed-size header in front of a gzip-compressed payload (64 bytes total).

    Binary format:
    ┌────────┬──────┬───────────┬──────────────┬────────────┬──────────┬───────────┐
    │ Magic  │ Ver  │ Reserved1 │ Uncompressed │ Compressed │ Checksum │ Reserved2 │
    │ 4 bytes│ 4B   │ 4 bytes   │ 8 bytes      │ 8 bytes    │ 32 bytes │ 4 bytes   │
    │ 'DMNZ' │ u32  │ u32       │ u64          │ u64        │ SHA-256  │ u32       │
    └────────┴──────┴───────────┴──────────────┴────────────┴──────────┴───────────┘

    Byte order: All integers use little-endian encoding, no padding between fields.
    Checksum: SHA-256 of the compressed payload (not of the uncompressed data).
    Reserved fields are carried through encode/decode unchanged.
    """

    MAGIC: ClassVar[bytes] = b"DMNZ"
    VERSION: ClassVar[int] = 1
    HEADER_SIZE: ClassVar[int] = 64
    FORMAT: ClassVar[str] = "<4sIIQQ32sI"

    magic: bytes = MAGIC
    version: int = VERSION
    reserved1: int = 0
    uncompressed_size: int = 0
    compressed_size: int = 0
    checksum: bytes = b"\x00" * CHECKSUM_SIZE
    reserved2: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.magic, (bytes, bytearray)):
            raise TypeError(f"Magic must be bytes, got {type(self.magic).__name__}")
        if not isinstance(self.checksum, (bytes, bytearray)):
            raise TypeError(
                f"Checksum must be bytes, got {type(self.checksum).__name__}"
            )
        # struct's "s" codes silently pad or truncate, so reject wrong widths here
        if len(self.magic) != 4:
            raise ValueError(f"Magic must be 4 bytes, got {len(self.magic)}")
        if len(self.checksum) != CHECKSUM_SIZE:
            raise ValueError(
                f"Checksum must be {CHECKSUM_SIZE} bytes, got {len(self.checksum)}"
            )

    def to_bytes(self) -> bytes:
        return struct.pack(
            self.FORMAT,
            self.magic,
            self.version,
            self.reserved1,
            self.uncompressed_size,
            self.compressed_size,
            self.checksum,
            self.reserved2,
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "BzImageHeader":
        """
        Parse the first HEADER_SIZE bytes of data.

        Magic and version are not checked here; see ``validate``.
        Anything past HEADER_SIZE is ignored.

        Raises:
            IncompleteHeader: If data is shorter than HEADER_SIZE
        """
        if len(data) < cls.HEADER_SIZE:
            raise IncompleteHeader(cls.HEADER_SIZE, len(data))

        (
            magic,
            version,
            reserved1,
            uncompressed_size,
            compressed_size,
            checksum,
            reserved2,
        ) = struct.unpack_from(cls.FORMAT, data, 0)

        return cls(
            magic=magic,
            version=version,
            reserved1=reserved1,
            uncompressed_size=uncompressed_size,
            compressed_size=compressed_size,
            checksum=checksum,
            reserved2=reserved2,
        )

    def checksum_matches(self, compressed_data: bytes) -> bool:
        """Check the stored checksum against compressed_data without raising."""
        return hmac.compare_digest(sha256(compressed_data), self.checksum)
