"""Content fingerprints for embedded payloads."""

import hashlib
from typing import Union

from vitae.utils.constants import CHECKSUM_ALGORITHM


def _as_bytes(data: Union[str, bytes]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def calculate_checksum(data: Union[str, bytes]) -> str:
    """SHA-256 of the data as a lowercase hex string (strings are UTF-8 encoded)."""
    return hashlib.sha256(_as_bytes(data)).hexdigest()


def verify_checksum(data: Union[str, bytes], expected: str) -> bool:
    """True if the data hashes to the expected checksum (comparison is case-insensitive)."""
    if not expected:
        return False
    return calculate_checksum(data) == expected.strip().lower()


def get_checksum_algorithm() -> str:
    return CHECKSUM_ALGORITHM
