"""Tests for TLV field formatting and parsing."""
import pytest

from pixcode.errors import FieldTooLongError, MalformedPayloadError, MissingRequiredFieldError
from pixcode.tlv import (
    TLVItem,
    format_field,
    parse_tlv,
    reject_if_over_length,
    truncate_silently,
)


def test_serialize_pads_length():
    assert TLVItem(tag="58", value="BR").serialize() == "5802BR"


@pytest.mark.parametrize("n", [1, 9, 10, 36, 99])
def test_length_prefix_matches_character_count(n):
    value = "x" * n
    assert TLVItem(tag="59", value=value).serialize() == f"59{n:02d}{value}"


def test_length_counts_characters_not_bytes():
    # 9 characters, 10 bytes in UTF-8
    assert TLVItem(tag="60", value="São Paulo").serialize() == "6009São Paulo"
    assert format_field("59", "Açaí Café") == "5909Açaí Café"


def test_value_over_99_characters_rejected():
    with pytest.raises(FieldTooLongError) as exc:
        TLVItem(tag="59", value="x" * 100).serialize()
    assert exc.value.tag == "59"


def test_required_empty_field_raises():
    with pytest.raises(MissingRequiredFieldError, match="59"):
        format_field("59", None)
    with pytest.raises(MissingRequiredFieldError):
        format_field("59", "")


def test_optional_empty_field_omitted():
    assert format_field("02", None, required=False) == ""
    assert format_field("02", "", required=False) == ""


def test_zero_counts_as_empty():
    assert format_field("05", "0", required=False) == ""
    with pytest.raises(MissingRequiredFieldError):
        format_field("59", "0")
    assert format_field("54", "0.00") == "54040.00"


def test_parse_tlv():
    items = list(parse_tlv("0002015802BR6009São Paulo"))
    assert items == [TLVItem("00", "01"), TLVItem("58", "BR"), TLVItem("60", "São Paulo")]


def test_parse_empty():
    assert list(parse_tlv("")) == []


def test_parse_length_exceeds_payload():
    with pytest.raises(MalformedPayloadError):
        list(parse_tlv("5910Piggly"))


def test_parse_dangling_data():
    with pytest.raises(MalformedPayloadError):
        list(parse_tlv("5802BR59"))


def test_parse_non_numeric_length():
    with pytest.raises(MalformedPayloadError):
        list(parse_tlv("58XXBR"))


def test_truncate_silently():
    assert truncate_silently("abcdef", 4) == "abcd"
    assert truncate_silently("abc", 4) == "abc"


def test_reject_if_over_length():
    assert reject_if_over_length("54", "10.00", 13) == "10.00"
    with pytest.raises(FieldTooLongError):
        reject_if_over_length("54", "1" * 14, 13)
