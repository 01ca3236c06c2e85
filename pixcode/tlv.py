"""Utility helpers to build and parse EMV-style TLV payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from .errors import err_bad_payload, err_field_required, err_field_too_long

MAX_VALUE_LENGTH = 99


@dataclass(frozen=True)
class TLVItem:
    tag: str
    value: str

    def serialize(self) -> str:
        # Length is counted in characters, not encoded bytes.
        if len(self.value) > MAX_VALUE_LENGTH:
            raise err_field_too_long(self.tag, MAX_VALUE_LENGTH)
        length = f"{len(self.value):02d}"
        return f"{self.tag}{length}{self.value}"


def format_field(tag: str, value: str | None, required: bool = True) -> str:
    """Serialize a single field, or return ``""`` for an empty optional one."""

    # "0" is treated as an empty value.
    if value in (None, "", "0"):
        if required:
            raise err_field_required(tag)
        return ""
    return TLVItem(tag=tag, value=value).serialize()


def parse_tlv(payload: str) -> Iterator[TLVItem]:
    """Parse TLV payload string into TLV items."""

    idx = 0
    total = len(payload)
    while idx + 4 <= total:
        tag = payload[idx : idx + 2]
        length_digits = payload[idx + 2 : idx + 4]
        if not length_digits.isdigit():
            raise err_bad_payload(f"Invalid length {length_digits!r} for tag {tag}")
        value_start = idx + 4
        value_end = value_start + int(length_digits)
        if value_end > total:
            raise err_bad_payload(f"TLV length of tag {tag} exceeds payload")
        yield TLVItem(tag=tag, value=payload[value_start:value_end])
        idx = value_end
    if idx != total:
        raise err_bad_payload("Dangling TLV data detected")


def truncate_silently(value: str, max_length: int) -> str:
    """Cut ``value`` down to ``max_length`` characters."""

    return value[:max_length]


def reject_if_over_length(tag: str, value: str, max_length: int) -> str:
    if len(value) > max_length:
        raise err_field_too_long(tag, max_length)
    return value
