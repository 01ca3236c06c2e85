"""Tests for the CRC16-CCITT (FALSE) checksum."""
import pytest

from pixcode import crc
from pixcode.crc import crc16_ccitt


@pytest.mark.parametrize(
    "data, expected",
    [
        ("123456789", "29B1"),
        ("A", "B915"),
        ("", "FFFF"),
    ],
)
def test_reference_vectors(data, expected):
    assert crc16_ccitt(data) == expected


def test_bytes_and_str_agree():
    assert crc16_ccitt(b"123456789") == crc16_ccitt("123456789")


def test_deterministic():
    data = "000201010211" * 5
    assert crc16_ccitt(data) == crc16_ccitt(data)


def test_multibyte_characters_hashed_as_utf8():
    assert crc16_ccitt("São Paulo") == crc16_ccitt("São Paulo".encode("utf-8"))
    assert crc16_ccitt("São Paulo") != crc16_ccitt("Sao Paulo")


def test_result_is_not_left_padded(monkeypatch):
    # With no input the register is returned untouched.
    monkeypatch.setattr(crc, "CRC16_INIT", 0x0ABC)
    assert crc16_ccitt("") == "ABC"


def test_uppercase_hex():
    result = crc16_ccitt("user@example.com")
    assert result == result.upper()
    int(result, 16)
