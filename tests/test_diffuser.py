import pytest
from hypothesis import given, settings, strategies as st

from blcrypt.diffuser import (
    diffuser_a_decrypt,
    diffuser_a_encrypt,
    diffuser_b_decrypt,
    diffuser_b_encrypt,
)
from blcrypt.errors import InvalidArgumentError

sectors = st.integers(min_value=2, max_value=64).flatmap(
    lambda n: st.binary(min_size=4 * n, max_size=4 * n)
)


def test_zero_sector_is_fixed_point():
    zero = bytes(512)
    assert diffuser_a_decrypt(zero) == zero
    assert diffuser_a_encrypt(zero) == zero
    assert diffuser_b_decrypt(zero) == zero
    assert diffuser_b_encrypt(zero) == zero


def test_length_preserved():
    sector = bytes(range(256)) * 2
    assert len(diffuser_a_decrypt(sector)) == 512
    assert len(diffuser_a_encrypt(sector)) == 512
    assert len(diffuser_b_decrypt(sector)) == 512
    assert len(diffuser_b_encrypt(sector)) == 512


def test_rejects_size_not_multiple_of_four():
    bad = bytes(510)
    with pytest.raises(InvalidArgumentError):
        diffuser_a_decrypt(bad)
    with pytest.raises(InvalidArgumentError):
        diffuser_a_encrypt(bad)
    with pytest.raises(InvalidArgumentError):
        diffuser_b_decrypt(bad)
    with pytest.raises(InvalidArgumentError):
        diffuser_b_encrypt(bad)


def test_empty_sector():
    assert diffuser_a_decrypt(b"") == b""
    assert diffuser_a_encrypt(b"") == b""
    assert diffuser_b_decrypt(b"") == b""
    assert diffuser_b_encrypt(b"") == b""


@settings(max_examples=50)
@given(sectors)
def test_a_round_trip(sector):
    assert diffuser_a_decrypt(diffuser_a_encrypt(sector)) == sector
    assert diffuser_a_encrypt(diffuser_a_decrypt(sector)) == sector


@settings(max_examples=50)
@given(sectors)
def test_b_round_trip(sector):
    assert diffuser_b_decrypt(diffuser_b_encrypt(sector)) == sector
    assert diffuser_b_encrypt(diffuser_b_decrypt(sector)) == sector


@settings(max_examples=30)
@given(sectors)
def test_full_pipeline_round_trip(sector):
    diffused = diffuser_b_encrypt(diffuser_a_encrypt(sector))
    assert diffuser_a_decrypt(diffuser_b_decrypt(diffused)) == sector


def test_single_bit_spreads_over_sector():
    sector = bytearray(512)
    sector[0] = 1
    out = diffuser_b_encrypt(diffuser_a_encrypt(bytes(sector)))
    changed_words = sum(1 for i in range(0, 512, 4) if out[i : i + 4] != bytes(4))
    assert changed_words > 64


def test_accepts_bytearray():
    sector = bytearray(b"\x01\x02\x03\x04" * 16)
    assert diffuser_a_encrypt(sector) == diffuser_a_encrypt(bytes(sector))