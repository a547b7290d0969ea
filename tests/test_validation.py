import pytest
from threema_gateway.errors import MessageTooLong
from threema_gateway.validation import check_text_length, encoded_length, is_valid_identity, check_hex


def test_max_length_ok():
    """1750 two-byte characters sit exactly at the 3500 byte limit."""
    text = "à" * (3500 // 2)
    assert encoded_length(text) == 3500
    check_text_length(text)
    check_text_length(b"x" * 3500)


def test_max_length_too_long():
    """One byte over the limit is rejected locally."""
    with pytest.raises(MessageTooLong):
        check_text_length("à" * (3500 // 2) + "x")
    with pytest.raises(MessageTooLong):
        check_text_length(b"x" * 3501)


def test_identity_format():
    """Identities are 8 uppercase alphanumerics, gateway ids start with '*'."""
    assert is_valid_identity("ECHOECHO")
    assert is_valid_identity("*THREEMA")
    assert not is_valid_identity("echoecho")
    assert not is_valid_identity("ECHOECH")
    assert not is_valid_identity("ECHO*CHO")


def test_check_hex():
    assert check_hex("00ff", 4)
    assert not check_hex("00ff\n", 4)
    assert not check_hex("00 f", 4)
    assert not check_hex("00ff", 6)
