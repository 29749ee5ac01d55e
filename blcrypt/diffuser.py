"""Elephant diffuser A and B used by BitLocker's AES-CBC + diffuser mode."""

from __future__ import annotations

import struct

from blcrypt.errors import InvalidArgumentError

_MASK = 0xFFFFFFFF
_RA = (9, 0, 13, 0)
_RB = (0, 10, 0, 25)
_A_CYCLES = 5
_B_CYCLES = 3


def _rotl(value: int, shift: int) -> int:
    if shift == 0:
        return value
    return ((value << shift) | (value >> (32 - shift))) & _MASK


def _to_words(sector: bytes | bytearray | memoryview) -> list[int]:
    data = bytes(sector)
    if len(data) % 4:
        raise InvalidArgumentError(
            f"sector size must be a multiple of 4 bytes, got {len(data)}"
        )
    return list(struct.unpack(f"<{len(data) // 4}I", data))


def _to_bytes(words: list[int]) -> bytes:
    return struct.pack(f"<{len(words)}I", *words)


def diffuser_a_decrypt(sector: bytes | bytearray | memoryview) -> bytes:
    """Undo diffuser A on a sector and return the result."""
    d = _to_words(sector)
    n = len(d)
    for _ in range(_A_CYCLES):
        for i in range(n):
            mix = d[(i - 2) % n] ^ _rotl(d[(i - 5) % n], _RA[i % 4])
            d[i] = (d[i] + mix) & _MASK
    return _to_bytes(d)


def diffuser_b_decrypt(sector: bytes | bytearray | memoryview) -> bytes:
    """Undo diffuser B on a sector and return the result."""
    d = _to_words(sector)
    n = len(d)
    for _ in range(_B_CYCLES):
        for i in range(n):
            mix = d[(i + 2) % n] ^ _rotl(d[(i + 5) % n], _RB[i % 4])
            d[i] = (d[i] + mix) & _MASK
    return _to_bytes(d)


def diffuser_a_encrypt(sector: bytes | bytearray | memoryview) -> bytes:
    """Apply diffuser A to a sector and return the result."""
    d = _to_words(sector)
    n = len(d)
    for _ in range(_A_CYCLES):
        for i in reversed(range(n)):
            mix = d[(i - 2) % n] ^ _rotl(d[(i - 5) % n], _RA[i % 4])
            d[i] = (d[i] - mix) & _MASK
    return _to_bytes(d)


def diffuser_b_encrypt(sector: bytes | bytearray | memoryview) -> bytes:
    """Apply diffuser B to a sector and return the result."""
    d = _to_words(sector)
    n = len(d)
    for _ in range(_B_CYCLES):
        for i in reversed(range(n)):
            mix = d[(i + 2) % n] ^ _rotl(d[(i + 5) % n], _RB[i % 4])
            d[i] = (d[i] - mix) & _MASK
    return _to_bytes(d)