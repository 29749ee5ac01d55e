"""Cipher identifiers used in BitLocker metadata."""

from __future__ import annotations

import enum

from blcrypt.errors import AlgorithmUnsupportedError


class Cipher(enum.IntEnum):
    """Cipher and key-protection identifiers found in BitLocker structures."""

    STRETCH_KEY = 0x1000
    AES_CCM_256_0 = 0x2000
    AES_CCM_256_1 = 0x2001
    EXTERN_KEY = 0x2002
    VMK = 0x2003
    AES_CCM_256_2 = 0x2004
    HASH_256 = 0x2005

    AES_128_DIFFUSER = 0x8000
    AES_256_DIFFUSER = 0x8001
    AES_128_NO_DIFFUSER = 0x8002
    AES_256_NO_DIFFUSER = 0x8003
    AES_XTS_128 = 0x8004
    AES_XTS_256 = 0x8005

    LOWEST_SUPPORTED = 0x8000
    HIGHEST_SUPPORTED = 0x8005

    def uses_diffuser(self) -> bool:
        """Return True for the AES-CBC variants combined with the Elephant diffuser."""
        return self in (Cipher.AES_128_DIFFUSER, Cipher.AES_256_DIFFUSER)

    def is_xts(self) -> bool:
        """Return True for the AES-XTS variants."""
        return self in (Cipher.AES_XTS_128, Cipher.AES_XTS_256)

    def key_bits(self) -> int:
        """Return the AES key size in bits of a disk cipher."""
        if self in (
            Cipher.AES_128_DIFFUSER,
            Cipher.AES_128_NO_DIFFUSER,
            Cipher.AES_XTS_128,
        ):
            return 128
        if self in (
            Cipher.AES_256_DIFFUSER,
            Cipher.AES_256_NO_DIFFUSER,
            Cipher.AES_XTS_256,
        ):
            return 256
        raise AlgorithmUnsupportedError(f"Algo not supported: {int(self):#x}")