from blcrypt.errors import (
    AlgorithmUnsupportedError,
    DislockerError,
    InvalidArgumentError,
    MacMismatchError,
)


def test_invalid_argument_code():
    err = InvalidArgumentError("bad argument")
    assert err.code == -103


def test_algorithm_unsupported_code():
    err = AlgorithmUnsupportedError("bad algorithm")
    assert err.code == -41


def test_mac_mismatch_has_no_code():
    assert MacMismatchError().code is None


def test_custom_message_is_kept():
    err = AlgorithmUnsupportedError("algo 0x1234")
    assert str(err) == "algo 0x1234"


def test_default_message_comes_from_docstring():
    assert str(MacMismatchError()) == (
        "The computed authentication tag does not match the expected one."
    )


def test_invalid_argument_is_a_dislocker_error():
    err = InvalidArgumentError("boom")
    assert isinstance(err, DislockerError)
    assert str(err) == "boom"


def test_algorithm_unsupported_is_a_dislocker_error():
    err = AlgorithmUnsupportedError("boom")
    assert isinstance(err, DislockerError)
    assert str(err) == "boom"


def test_mac_mismatch_is_a_dislocker_error():
    err = MacMismatchError("boom")
    assert isinstance(err, DislockerError)
    assert str(err) == "boom"


def test_invalid_argument_is_a_value_error():
    err = InvalidArgumentError("bad")
    assert isinstance(err, ValueError)
    assert err.code == -103