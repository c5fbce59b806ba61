"""
zlib compression helpers for embedded payloads.

Helper functions:
    compress_data / decompress_data: zlib deflate and inflate.
    decompress_to_string: Inflate and decode as UTF-8.
    should_compress: Apply the explicit or "auto" compression policy.
    get_data_size: Byte size of str or bytes data.
    get_compression_ratio: Stored size over original size.
    looks_compressed: Sniff a zlib header.
"""

import zlib
from typing import Optional, Union

from vitae.utils.settings import get_settings

# Second byte of a zlib header for the common compression levels
ZLIB_HEADER_SECOND_BYTES = (0x01, 0x5E, 0x9C, 0xDA)


def get_data_size(data: Union[str, bytes]) -> int:
    """Size in bytes (strings are measured UTF-8 encoded)."""
    return len(data.encode("utf-8")) if isinstance(data, str) else len(data)


def compress_data(data: Union[str, bytes]) -> bytes:
    """Deflate data with zlib (strings are UTF-8 encoded first)."""
    raw = data.encode("utf-8") if isinstance(data, str) else bytes(data)
    return zlib.compress(raw)


def decompress_data(data: bytes) -> bytes:
    """
    Inflate zlib data.

    Raises:
        zlib.error: If the data is not a valid zlib stream
    """
    return zlib.decompress(data)


def decompress_to_string(data: bytes) -> str:
    return decompress_data(data).decode("utf-8")


def should_compress(
    data: Union[str, bytes], compress: Union[bool, str] = "auto", threshold: Optional[int] = None
) -> bool:
    """
    Decide whether a payload is stored compressed.

    Args:
        data: Uncompressed payload
        compress: True/False override the threshold absolutely; "auto" compresses
                  only payloads strictly larger than the threshold
        threshold: Size in bytes (defaults to embedding.compress_threshold)

    Returns:
        True if the payload should be compressed

    Raises:
        ValueError: If compress is not True, False or "auto"
    """
    if compress is True:
        return True
    if compress is False:
        return False
    if compress != "auto":
        raise ValueError(f"compress must be True, False or 'auto', got {compress!r}")

    if threshold is None:
        threshold = get_settings().embedding.compress_threshold
    return get_data_size(data) > threshold


def get_compression_ratio(original_size: int, compressed_size: int) -> float:
    """Stored size over original size (1.0 for empty input)."""
    if original_size <= 0:
        return 1.0
    return compressed_size / original_size


def looks_compressed(data: bytes) -> bool:
    """Heuristic: True if the data starts with a zlib header."""
    return len(data) >= 2 and data[0] == 0x78 and data[1] in ZLIB_HEADER_SECOND_BYTES
