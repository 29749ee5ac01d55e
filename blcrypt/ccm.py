"""AES-CCM routines used to unwrap BitLocker keys (VMK, FVEK)."""

from __future__ import annotations

import hmac
from collections.abc import Callable

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from blcrypt.errors import InvalidArgumentError, MacMismatchError

AUTHENTICATOR_LENGTH = 16
NONCE_LENGTH = 0xC
_MAX_NONCE = 0xE
_MASK128 = (1 << 128) - 1

BytesLike = bytes | bytearray | memoryview


def _encryptor(key: BytesLike) -> Callable[[bytes], bytes]:
    try:
        cipher = Cipher(algorithms.AES(bytes(key)), modes.ECB())
    except ValueError as exc:
        raise InvalidArgumentError(f"invalid AES key: {exc}") from exc
    return cipher.encryptor().update


def _xor(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


def _check_nonce(nonce: BytesLike) -> bytes:
    nonce = bytes(nonce)
    if len(nonce) > _MAX_NONCE:
        raise InvalidArgumentError(
            f"nonce must be at most {_MAX_NONCE} bytes, got {len(nonce)}"
        )
    return nonce


def ccm_crypt(
    key: BytesLike, nonce: BytesLike, data: BytesLike, mac: BytesLike
) -> tuple[bytes, bytes]:
    """Apply AES-CCM counter mode to ``data`` and unmask ``mac``.

    Returns the transformed data and the unmasked authentication tag.
    """
    nonce = _check_nonce(nonce)
    data = bytes(data)
    mac = bytes(mac)
    if len(mac) > AUTHENTICATOR_LENGTH:
        raise InvalidArgumentError(
            f"mac must be at most {AUTHENTICATOR_LENGTH} bytes, got {len(mac)}"
        )
    encrypt = _encryptor(key)

    first = bytearray(16)
    first[0] = 15 - len(nonce) - 1
    first[1:1 + len(nonce)] = nonce
    counter = int.from_bytes(first, "big")

    plain_mac = _xor(mac, encrypt(bytes(first)))

    output = bytearray()
    for start in range(0, len(data), 16):
        counter = (counter + 1) & _MASK128
        keystream = encrypt(counter.to_bytes(16, "big"))
        output += _xor(data[start:start + 16], keystream)
    return bytes(output), plain_mac


def compute_tag(key: BytesLike, nonce: BytesLike, data: BytesLike) -> bytes:
    """Compute the AES-CCM CBC-MAC of unencrypted ``data`` (no associated data)."""
    nonce = _check_nonce(nonce)
    data = bytes(data)
    encrypt = _encryptor(key)

    block = bytearray(AUTHENTICATOR_LENGTH)
    block[0] = (_MAX_NONCE - len(nonce)) | ((AUTHENTICATOR_LENGTH - 2) & 0xFE) << 2
    block[1:1 + len(nonce)] = nonce
    remaining = len(data)
    for position in range(15, len(nonce), -1):
        block[position] = remaining & 0xFF
        remaining >>= 8

    state = encrypt(bytes(block))
    for start in range(0, len(data), AUTHENTICATOR_LENGTH):
        chunk = data[start:start + AUTHENTICATOR_LENGTH]
        state = encrypt(_xor(state, chunk) + state[len(chunk):])
    return state


def decrypt_key(
    data: BytesLike, mac: BytesLike, nonce: BytesLike, key: BytesLike
) -> bytes:
    """Decrypt an AES-CCM protected key and verify its authentication tag.

    Raises MacMismatchError when the tag does not match.
    """
    nonce = bytes(nonce)
    mac = bytes(mac)
    if len(nonce) != NONCE_LENGTH:
        raise InvalidArgumentError(
            f"nonce must be {NONCE_LENGTH} bytes, got {len(nonce)}"
        )
    if len(mac) != AUTHENTICATOR_LENGTH:
        raise InvalidArgumentError(
            f"mac must be {AUTHENTICATOR_LENGTH} bytes, got {len(mac)}"
        )
    plaintext, expected = ccm_crypt(key, nonce, data, mac)
    computed = compute_tag(key, nonce, plaintext)
    if not hmac.compare_digest(expected, computed):
        raise MacMismatchError("The MACs don't match.")
    return plaintext