from typing import Optional
import gzip
import sys
import zlib

from .errors import DecompressionError

# gzip level 9 (best compression)
DEFAULT_COMPRESSION_LEVEL = 9

# zlib window bits selecting a gzip wrapper (16 + MAX_WBITS)
GZIP_WBITS = 16 + zlib.MAX_WBITS


def compress(data: bytes, level: int = DEFAULT_COMPRESSION_LEVEL) -> bytes:
    """Compress data into a single gzip member."""
    return gzip.compress(data, compresslevel=level)


def decompress(data: bytes, max_length: Optional[int] = None) -> bytes:
    """
    Decompress a gzip stream.

    Args:
        data: A gzip stream
        max_length: If given, stop after producing this many bytes. A result
            of exactly max_length bytes means the stream may hold more.

    Raises:
        DecompressionError: If data is not a complete, well-formed gzip stream.
            The codec's own exception is kept as the cause.
    """
    if max_length is None:
        try:
            return gzip.decompress(data)
        except (gzip.BadGzipFile, EOFError, zlib.error) as e:
            raise DecompressionError(f"Malformed gzip payload: {e}") from e

    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")

    # zlib takes a C ssize_t; u64 header sizes can exceed it
    max_length = min(max_length, sys.maxsize)

    decoder = zlib.decompressobj(wbits=GZIP_WBITS)
    try:
        out = decoder.decompress(data, max_length)
    except zlib.error as e:
        raise DecompressionError(f"Malformed gzip payload: {e}") from e

    if decoder.eof:
        if decoder.unused_data:
            raise DecompressionError(
                f"Malformed gzip payload: {len(decoder.unused_data)} trailing bytes"
            )
        return out
    if len(out) >= max_length:
        return out

    raise DecompressionError(
        "Malformed gzip payload: stream ended before the end-of-stream marker"
    )
