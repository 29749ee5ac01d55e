"""CRC-32 checksum (reflected polynomial 0xEDB88320) as used in BitLocker metadata."""

from __future__ import annotations

import zlib


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Return the 32-bit CRC of ``data`` as an unsigned integer."""
    if isinstance(data, str):
        raise TypeError("crc32 expects a bytes-like object, not str")
    return zlib.crc32(data) & 0xFFFFFFFF