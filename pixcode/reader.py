"""Read finished pix payloads back into their fields."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from .crc import crc16_ccitt
from .errors import err_bad_payload
from .payload import (
    CRC16_PREFIX,
    ID_ADDITIONAL_DATA_FIELD_TEMPLATE,
    ID_ADDITIONAL_DATA_FIELD_TEMPLATE_TID,
    ID_MERCHANT_ACCOUNT_INFORMATION,
    ID_MERCHANT_ACCOUNT_INFORMATION_DESCRIPTION,
    ID_MERCHANT_ACCOUNT_INFORMATION_KEY,
    ID_MERCHANT_CITY,
    ID_MERCHANT_NAME,
    ID_POINT_OF_INITIATION_METHOD,
    ID_TRANSACTION_AMOUNT,
    POINT_OF_INITIATION_REUSABLE,
)
from .tlv import parse_tlv

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class PixFields:
    pix_key: str
    merchant_name: str
    merchant_city: str
    crc: str
    description: str | None = None
    amount: Decimal | None = None
    tid: str | None = None
    reusable: bool = False


def split_crc(payload: str) -> tuple[str, str]:
    """Return the checksummed body (ending in ``6304``) and the checksum."""

    idx = 0
    while idx + 4 <= len(payload):
        if payload[idx : idx + 4] == CRC16_PREFIX:
            body, crc = payload[: idx + 4], payload[idx + 4 :]
            if not 0 < len(crc) <= 4:
                raise err_bad_payload("CRC16 field is not the last field")
            return body, crc
        length_digits = payload[idx + 2 : idx + 4]
        if not length_digits.isdigit():
            raise err_bad_payload(f"Invalid length {length_digits!r} at offset {idx}")
        idx += 4 + int(length_digits)
    raise err_bad_payload("Missing CRC16 field")


def _crc_matches(body: str, crc: str) -> bool:
    # Compared as numbers so zero-padded and unpadded checksums both match.
    if not all(ch in _HEX_DIGITS for ch in crc):
        raise err_bad_payload(f"CRC16 {crc!r} is not hexadecimal")
    return int(crc, 16) == int(crc16_ccitt(body), 16)


def verify_crc(payload: str) -> bool:
    body, crc = split_crc(payload)
    return _crc_matches(body, crc)


def read_payload(payload: str) -> PixFields:
    """Parse a finished payload, checking framing and checksum."""

    body, crc = split_crc(payload)
    if not _crc_matches(body, crc):
        raise err_bad_payload(f"CRC16 mismatch, got {crc}")

    fields = {item.tag: item.value for item in parse_tlv(body[: -len(CRC16_PREFIX)])}
    account = {
        item.tag: item.value for item in parse_tlv(fields.get(ID_MERCHANT_ACCOUNT_INFORMATION, ""))
    }
    additional = {
        item.tag: item.value
        for item in parse_tlv(fields.get(ID_ADDITIONAL_DATA_FIELD_TEMPLATE, ""))
    }
    try:
        pix_key = account[ID_MERCHANT_ACCOUNT_INFORMATION_KEY]
        merchant_name = fields[ID_MERCHANT_NAME]
        merchant_city = fields[ID_MERCHANT_CITY]
    except KeyError as exc:
        raise err_bad_payload(f"Missing required field {exc.args[0]}") from None

    amount = fields.get(ID_TRANSACTION_AMOUNT)
    try:
        parsed_amount = Decimal(amount) if amount is not None else None
    except InvalidOperation:
        raise err_bad_payload(f"Invalid amount {amount!r}") from None

    return PixFields(
        pix_key=pix_key,
        merchant_name=merchant_name,
        merchant_city=merchant_city,
        crc=crc,
        description=account.get(ID_MERCHANT_ACCOUNT_INFORMATION_DESCRIPTION),
        amount=parsed_amount,
        tid=additional.get(ID_ADDITIONAL_DATA_FIELD_TEMPLATE_TID),
        reusable=fields.get(ID_POINT_OF_INITIATION_METHOD) == POINT_OF_INITIATION_REUSABLE,
    )
