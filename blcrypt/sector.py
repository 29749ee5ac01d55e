"""Sector-level encryption and decryption for BitLocker volumes."""

from __future__ import annotations

from cryptography.hazmat.primitives.ciphers import Cipher as _AesCipher
from cryptography.hazmat.primitives.ciphers import algorithms, modes

from blcrypt.ciphers import Cipher
from blcrypt.diffuser import (
    diffuser_a_decrypt,
    diffuser_a_encrypt,
    diffuser_b_decrypt,
    diffuser_b_encrypt,
)
from blcrypt.errors import AlgorithmUnsupportedError, InvalidArgumentError
from blcrypt.xts import Mode, aes_crypt_xts

BytesLike = bytes | bytearray | memoryview

_BLOCK = 16
_SECTOR_KEY_LENGTH = 32

# algorithm -> ((fvek offset, length), (tweak offset, length) or None)
_KEY_LAYOUT: dict[Cipher, tuple[tuple[int, int], tuple[int, int] | None]] = {
    Cipher.AES_128_DIFFUSER: ((0, 16), (0x20, 16)),
    Cipher.AES_128_NO_DIFFUSER: ((0, 16), None),
    Cipher.AES_256_DIFFUSER: ((0, 32), (0x20, 32)),
    Cipher.AES_256_NO_DIFFUSER: ((0, 32), None),
    Cipher.AES_XTS_128: ((0, 16), (0x10, 16)),
    Cipher.AES_XTS_256: ((0, 32), (0x20, 32)),
}


def _as_cipher(value: Cipher | int) -> Cipher | None:
    try:
        return Cipher(value)
    except ValueError:
        return None


def _address_block(value: int) -> bytes:
    """Lay out a signed 64-bit value little-endian at the start of a zeroed block."""
    try:
        head = value.to_bytes(8, "little", signed=True)
    except OverflowError as exc:
        raise InvalidArgumentError(f"address out of range: {value}") from exc
    return head + bytes(_BLOCK - 8)


def _ecb_encrypt(key: bytes, block: bytes) -> bytes:
    return _AesCipher(algorithms.AES(key), modes.ECB()).encryptor().update(block)


def _truncating_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // denominator
    return -quotient if numerator < 0 else quotient


class SectorCipher:
    """Encrypts and decrypts volume sectors with the volume's FVEK.

    The sector transform (AES-CBC, AES-CBC with the Elephant diffuser, or
    AES-XTS) is chosen from ``disk_cipher``; the keys are loaded from the FVEK
    with :meth:`set_fvek`.
    """

    def __init__(self, sector_size: int, disk_cipher: Cipher | int) -> None:
        if not 0 < sector_size <= 0xFFFF:
            raise InvalidArgumentError(f"invalid sector size: {sector_size}")
        self.sector_size = sector_size
        self.disk_cipher = disk_cipher
        cipher = _as_cipher(disk_cipher)
        self.uses_diffuser = bool(cipher is not None and cipher.uses_diffuser())
        self.uses_xts = bool(cipher is not None and cipher.is_xts())
        self._fvek_key: bytes | None = None
        self._tweak_key: bytes | None = None

    def set_fvek(self, algorithm: Cipher | int, fvek: BytesLike) -> None:
        """Load the data and tweak keys from ``fvek`` for ``algorithm``."""
        if fvek is None:
            raise InvalidArgumentError("no FVEK given")
        cipher = _as_cipher(algorithm)
        if cipher is None or cipher not in _KEY_LAYOUT:
            raise AlgorithmUnsupportedError(f"Algo not supported: {int(algorithm):#x}")
        key = bytes(fvek)
        (data_off, data_len), tweak = _KEY_LAYOUT[cipher]
        needed = max(data_off + data_len, (tweak[0] + tweak[1]) if tweak else 0)
        if len(key) < needed:
            raise InvalidArgumentError(
                f"FVEK must be at least {needed} bytes for {cipher.name}, got {len(key)}"
            )
        if tweak is not None:
            self._tweak_key = key[tweak[0]:tweak[0] + tweak[1]]
        self._fvek_key = key[data_off:data_off + data_len]

    def encrypt_sector(self, sector: BytesLike, sector_address: int) -> bytes:
        """Return the encrypted form of one sector located at ``sector_address``."""
        data = self._check_sector(sector)
        if self.uses_xts:
            return aes_crypt_xts(
                self._need_fvek(),
                self._need_tweak(),
                Mode.ENCRYPT,
                self._xts_iv(sector_address),
                data,
            )
        if self.uses_diffuser:
            sector_key = self._sector_key(sector_address)
            data = self._apply_sector_key(data, sector_key)
            data = diffuser_a_encrypt(data)
            data = diffuser_b_encrypt(data)
        return self._cbc(data, sector_address, encrypt=True)

    def decrypt_sector(self, sector: BytesLike, sector_address: int) -> bytes:
        """Return the decrypted form of one sector located at ``sector_address``."""
        data = self._check_sector(sector)
        if self.uses_xts:
            return aes_crypt_xts(
                self._need_fvek(),
                self._need_tweak(),
                Mode.DECRYPT,
                self._xts_iv(sector_address),
                data,
            )
        if self.uses_diffuser:
            sector_key = self._sector_key(sector_address)
            data = self._cbc(data, sector_address, encrypt=False)
            data = diffuser_b_decrypt(data)
            data = diffuser_a_decrypt(data)
            return self._apply_sector_key(data, sector_key)
        return self._cbc(data, sector_address, encrypt=False)

    def _check_sector(self, sector: BytesLike) -> bytes:
        if sector is None:
            raise InvalidArgumentError("no sector given")
        data = bytes(sector)
        if len(data) != self.sector_size:
            raise InvalidArgumentError(
                f"sector must be {self.sector_size} bytes, got {len(data)}"
            )
        return data

    def _need_fvek(self) -> bytes:
        if self._fvek_key is None:
            raise InvalidArgumentError("FVEK has not been set")
        return self._fvek_key

    def _need_tweak(self) -> bytes:
        if self._tweak_key is None:
            raise InvalidArgumentError("tweak key has not been set")
        return self._tweak_key

    def _xts_iv(self, sector_address: int) -> bytes:
        return _address_block(_truncating_div(sector_address, self.sector_size))

    def _sector_key(self, sector_address: int) -> bytes:
        tweak = self._need_tweak()
        iv = bytearray(_address_block(sector_address))
        first = _ecb_encrypt(tweak, bytes(iv))
        iv[15] = 0x80
        second = _ecb_encrypt(tweak, bytes(iv))
        return first + second

    @staticmethod
    def _apply_sector_key(data: bytes, sector_key: bytes) -> bytes:
        return bytes(
            byte ^ sector_key[index % _SECTOR_KEY_LENGTH]
            for index, byte in enumerate(data)
        )

    def _cbc(self, data: bytes, sector_address: int, *, encrypt: bool) -> bytes:
        key = self._need_fvek()
        if len(data) % _BLOCK:
            raise InvalidArgumentError(
                f"CBC sector size must be a multiple of 16, got {len(data)}"
            )
        iv = _ecb_encrypt(key, _address_block(sector_address))
        cipher = _AesCipher(algorithms.AES(key), modes.CBC(iv))
        context = cipher.encryptor() if encrypt else cipher.decryptor()
        return context.update(data) + context.finalize()