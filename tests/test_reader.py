"""Tests for reading finished payloads back."""
from decimal import Decimal

import pytest

from pixcode.errors import MalformedPayloadError
from pixcode.reader import read_payload, split_crc, verify_crc


def test_read_full_payload(payload):
    code = (
        payload.set_description("Aluguel março")
        .set_amount("150.5")
        .set_tid("INV-42")
        .set_reusable()
        .finalize()
    )

    fields = read_payload(code)

    assert fields.pix_key == "user@example.com"
    assert fields.merchant_name == "Piggly"
    assert fields.merchant_city == "Maceio"
    assert fields.description == "Aluguel março"
    assert fields.amount == Decimal("150.50")
    assert fields.tid == "INV-42"
    assert fields.reusable is True
    assert code.endswith(fields.crc)


def test_read_minimal_payload(payload):
    fields = read_payload(payload.finalize())
    assert fields.description is None
    assert fields.amount is None
    assert fields.tid is None
    assert fields.reusable is False


def test_split_crc(payload):
    code = payload.finalize()
    body, crc = split_crc(code)
    assert body.endswith("6304")
    assert body + crc == code


def test_verify_crc(payload):
    code = payload.finalize()
    assert verify_crc(code)
    assert not verify_crc(code.replace("Maceio", "Macaio"))


def test_read_rejects_checksum_mismatch(payload):
    code = payload.finalize().replace("Piggly", "Piggla")
    with pytest.raises(MalformedPayloadError, match="CRC16 mismatch"):
        read_payload(code)


def test_missing_crc_field():
    with pytest.raises(MalformedPayloadError, match="Missing CRC16"):
        split_crc("0002015802BR")


def test_crc_not_last_field():
    with pytest.raises(MalformedPayloadError):
        split_crc("00020163041D3D5802BR")


def test_zero_padded_crc_accepted(payload, monkeypatch):
    body, _ = split_crc(payload.finalize())
    monkeypatch.setattr("pixcode.reader.crc16_ccitt", lambda data: "95A")

    assert verify_crc(body + "095A")
    assert verify_crc(body + "95a")
    assert read_payload(body + "095A").crc == "095A"
    assert not verify_crc(body + "095B")


def test_non_hex_crc_rejected(payload):
    body, _ = split_crc(payload.finalize())
    with pytest.raises(MalformedPayloadError, match="not hexadecimal"):
        verify_crc(body + "XYZ1")
