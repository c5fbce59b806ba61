"""
Shared utilities for vitae.

Common functionality used across contexts:
- Settings (OmegaConf + .env)
- Logging setup
- Protocol constants and typed errors
- Checksums, compression, timestamps and partial dates
"""

from vitae.utils.checksum import calculate_checksum, get_checksum_algorithm, verify_checksum
from vitae.utils.compression import (
    compress_data,
    decompress_data,
    decompress_to_string,
    get_compression_ratio,
    get_data_size,
    looks_compressed,
    should_compress,
)
from vitae.utils.exceptions import ErrorCode, VitaeError, create_error
from vitae.utils.settings import Settings, get_settings, load_settings

__all__ = [
    "ErrorCode",
    "Settings",
    "VitaeError",
    "calculate_checksum",
    "compress_data",
    "create_error",
    "decompress_data",
    "decompress_to_string",
    "get_checksum_algorithm",
    "get_compression_ratio",
    "get_data_size",
    "get_settings",
    "load_settings",
    "looks_compressed",
    "should_compress",
    "verify_checksum",
]
