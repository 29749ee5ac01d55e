import pytest
from hypothesis import given, strategies as st

from blcrypt.crc32 import crc32


def test_empty_is_zero():
    assert crc32(b"") == 0


def test_standard_check_value():
    assert crc32(b"123456789") == 0xCBF43926


def test_accepts_bytearray_and_memoryview():
    data = b"-FVE-FS-"
    assert crc32(bytearray(data)) == crc32(data)
    assert crc32(memoryview(data)) == crc32(data)


def test_rejects_str():
    with pytest.raises(TypeError):
        crc32("text")


@given(st.binary(max_size=256))
def test_result_is_unsigned_32_bit(data):
    value = crc32(data)
    assert 0 <= value <= 0xFFFFFFFF


@given(st.binary(max_size=256))
def test_appending_crc_gives_constant_residue(data):
    value = crc32(data)
    assert crc32(data + value.to_bytes(4, "little")) == 0x2144DF1C


@given(st.binary(min_size=1, max_size=64), st.integers(min_value=0, max_value=7))
def test_single_bit_flip_changes_crc(data, bit):
    flipped = bytearray(data)
    flipped[0] ^= 1 << bit
    assert crc32(bytes(flipped)) != crc32(data)