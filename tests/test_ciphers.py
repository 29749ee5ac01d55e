import pytest

from blcrypt.ciphers import Cipher
from blcrypt.errors import AlgorithmUnsupportedError


def test_values_from_format():
    assert Cipher(0x8000) is Cipher.AES_128_DIFFUSER
    assert Cipher(0x8005) is Cipher.AES_XTS_256
    assert Cipher(0x2003) is Cipher.VMK


def test_lookup_by_value():
    assert Cipher(0x8004) is Cipher.AES_XTS_128


def test_supported_range_aliases():
    assert Cipher(0x8000) is Cipher.LOWEST_SUPPORTED
    assert Cipher(0x8005) is Cipher.HIGHEST_SUPPORTED


@pytest.mark.parametrize(
    "cipher,expected",
    [
        (Cipher.AES_128_DIFFUSER, True),
        (Cipher.AES_256_DIFFUSER, True),
        (Cipher.AES_128_NO_DIFFUSER, False),
        (Cipher.AES_XTS_256, False),
    ],
)
def test_uses_diffuser(cipher, expected):
    assert cipher.uses_diffuser() is expected


@pytest.mark.parametrize(
    "cipher,expected",
    [
        (Cipher.AES_XTS_128, True),
        (Cipher.AES_XTS_256, True),
        (Cipher.AES_128_DIFFUSER, False),
        (Cipher.AES_256_NO_DIFFUSER, False),
    ],
)
def test_is_xts(cipher, expected):
    assert cipher.is_xts() is expected


@pytest.mark.parametrize(
    "cipher,bits",
    [
        (Cipher.AES_128_DIFFUSER, 128),
        (Cipher.AES_128_NO_DIFFUSER, 128),
        (Cipher.AES_XTS_128, 128),
        (Cipher.AES_256_DIFFUSER, 256),
        (Cipher.AES_256_NO_DIFFUSER, 256),
        (Cipher.AES_XTS_256, 256),
    ],
)
def test_key_bits(cipher, bits):
    assert cipher.key_bits() == bits


@pytest.mark.parametrize("cipher", [Cipher.STRETCH_KEY, Cipher.VMK, Cipher.HASH_256])
def test_key_bits_unsupported(cipher):
    with pytest.raises(AlgorithmUnsupportedError):
        cipher.key_bits()