"""AES-XEX and AES-XTS with BitLocker's tweak handling and ciphertext stealing."""

from __future__ import annotations

import enum
from collections.abc import Callable, Iterator
from itertools import islice

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from blcrypt.errors import InvalidArgumentError

_BLOCK = 16
_MASK128 = (1 << 128) - 1
_REDUCTION = 0x87

BytesLike = bytes | bytearray | memoryview


class Mode(enum.IntEnum):
    """Direction of a block-cipher operation."""

    DECRYPT = 0
    ENCRYPT = 1


def _aes(key: BytesLike) -> Cipher:
    try:
        return Cipher(algorithms.AES(bytes(key)), modes.ECB())
    except ValueError as exc:
        raise InvalidArgumentError(f"invalid AES key: {exc}") from exc


def _transform(key: BytesLike, mode: Mode) -> Callable[[bytes], bytes]:
    cipher = _aes(key)
    context = cipher.encryptor() if mode is Mode.ENCRYPT else cipher.decryptor()
    return context.update


def _xor(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


def _check_mode(mode: Mode | int) -> Mode:
    try:
        return Mode(mode)
    except ValueError as exc:
        raise InvalidArgumentError(f"unknown mode: {mode!r}") from exc


def gf128_mul_x(block: BytesLike) -> bytes:
    """Multiply a 16-byte little-endian GF(2^128) element by x."""
    data = bytes(block)
    if len(data) != _BLOCK:
        raise InvalidArgumentError(f"block must be 16 bytes, got {len(data)}")
    value = int.from_bytes(data, "little")
    carry = value >> 127
    value = ((value << 1) & _MASK128) ^ (_REDUCTION if carry else 0)
    return value.to_bytes(_BLOCK, "little")


def _tweaks(tweak_key: BytesLike, iv: BytesLike) -> Iterator[bytes]:
    iv = bytes(iv)
    if len(iv) != _BLOCK:
        raise InvalidArgumentError(f"iv must be 16 bytes, got {len(iv)}")
    tweak = _aes(tweak_key).encryptor().update(iv)
    while True:
        yield tweak
        tweak = gf128_mul_x(tweak)


def _xex_block(transform: Callable[[bytes], bytes], block: bytes, tweak: bytes) -> bytes:
    return _xor(transform(_xor(block, tweak)), tweak)


def _xex_blocks(
    transform: Callable[[bytes], bytes], data: bytes, tweaks: Iterator[bytes]
) -> bytes:
    chunks = (data[start:start + _BLOCK] for start in range(0, len(data), _BLOCK))
    return b"".join(_xex_block(transform, chunk, tweak) for chunk, tweak in zip(chunks, tweaks))


def aes_crypt_xex(
    crypt_key: BytesLike,
    tweak_key: BytesLike,
    mode: Mode | int,
    iv: BytesLike,
    data: BytesLike,
) -> bytes:
    """Encrypt or decrypt ``data`` with AES-XEX; its length must be a multiple of 16."""
    data = bytes(data)
    if not data or len(data) % _BLOCK:
        raise InvalidArgumentError(
            f"data length must be a non-zero multiple of 16, got {len(data)}"
        )
    mode = _check_mode(mode)
    tweaks = _tweaks(tweak_key, iv)
    return _xex_blocks(_transform(crypt_key, mode), data, tweaks)


def aes_crypt_xts(
    crypt_key: BytesLike,
    tweak_key: BytesLike,
    mode: Mode | int,
    iv: BytesLike,
    data: BytesLike,
) -> bytes:
    """Encrypt or decrypt ``data`` with AES-XTS, stealing ciphertext for a partial tail."""
    data = bytes(data)
    if len(data) < _BLOCK:
        raise InvalidArgumentError(
            f"data must hold at least one full block, got {len(data)} bytes"
        )
    mode = _check_mode(mode)
    transform = _transform(crypt_key, mode)
    nb_blocks, remaining = divmod(len(data), _BLOCK)
    tweak_stream = _tweaks(tweak_key, iv)

    if remaining == 0:
        return _xex_blocks(transform, data, tweak_stream)

    tweaks = list(islice(tweak_stream, nb_blocks + 1))
    head_end = (nb_blocks - 1) * _BLOCK
    output = bytearray(_xex_blocks(transform, data[:head_end], iter(tweaks[:-2])))
    last_full = data[head_end:head_end + _BLOCK]
    tail = data[head_end + _BLOCK:]

    if mode is Mode.ENCRYPT:
        stolen = _xex_block(transform, last_full, tweaks[-2])
        combined = tail + stolen[remaining:]
        output += _xex_block(transform, combined, tweaks[-1])
        output += stolen[:remaining]
    else:
        stolen = _xex_block(transform, last_full, tweaks[-1])
        combined = tail + stolen[remaining:]
        output += _xex_block(transform, combined, tweaks[-2])
        output += stolen[:remaining]
    return bytes(output)