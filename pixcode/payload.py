"""Pix BR Code payload builder following the EMV QRCPS-MPM layout.

Fields may be set in any order; :meth:`Payload.finalize` always emits them in
the canonical order and appends the CRC16 field::

    code = (
        Payload()
        .set_pix_key("email", "user@example.com")
        .set_merchant_name("Piggly")
        .set_merchant_city("Maceio")
        .set_tid("12345")
        .finalize()
    )
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .crc import crc16_ccitt
from .errors import err_field_too_long
from .keys import KeyParser, KeyType, PixKeyParser
from .renderer import OutputFormat, render
from .tlv import format_field, reject_if_over_length, truncate_silently

logger = logging.getLogger("pixcode.payload")

ID_PAYLOAD_FORMAT_INDICATOR = "00"
ID_POINT_OF_INITIATION_METHOD = "01"
ID_MERCHANT_ACCOUNT_INFORMATION = "26"
ID_MERCHANT_ACCOUNT_INFORMATION_GUI = "00"
ID_MERCHANT_ACCOUNT_INFORMATION_KEY = "01"
ID_MERCHANT_ACCOUNT_INFORMATION_DESCRIPTION = "02"
ID_MERCHANT_CATEGORY_CODE = "52"
ID_TRANSACTION_CURRENCY = "53"
ID_TRANSACTION_AMOUNT = "54"
ID_COUNTRY_CODE = "58"
ID_MERCHANT_NAME = "59"
ID_MERCHANT_CITY = "60"
ID_ADDITIONAL_DATA_FIELD_TEMPLATE = "62"
ID_ADDITIONAL_DATA_FIELD_TEMPLATE_TID = "05"
ID_CRC16 = "63"

PAYLOAD_FORMAT = "01"
PIX_GUI = "br.gov.bcb.pix"
MERCHANT_CATEGORY_CODE = "0000"
CURRENCY_BRL = "986"
COUNTRY_CODE = "BR"
# Observed mapping: a "reusable" payload carries the unique-use code.
POINT_OF_INITIATION_REUSABLE = "12"
POINT_OF_INITIATION_DEFAULT = "11"
CRC16_PREFIX = f"{ID_CRC16}04"

MAX_DESCRIPTION_LENGTH = 36
MAX_TID_LENGTH = 25
MAX_AMOUNT_LENGTH = 13

_CENTS = Decimal("0.01")


def format_amount(value: Decimal | int | float | str) -> str:
    """Format ``value`` with two decimals, ``.`` separator and no grouping."""

    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if amount.is_finite():
            return f"{amount.quantize(_CENTS, rounding=ROUND_HALF_UP):f}"
    except InvalidOperation:
        pass
    raise err_field_too_long(
        ID_TRANSACTION_AMOUNT, MAX_AMOUNT_LENGTH, f"Amount {value!r} cannot be formatted"
    )


class Payload:
    """Mutable builder for a single pix payload."""

    def __init__(self, parser: KeyParser | None = None):
        self.parser: KeyParser = parser or PixKeyParser()
        self.pix_key: str | None = None
        self.description: str | None = None
        self.merchant_name: str | None = None
        self.merchant_city: str | None = None
        self.tid: str | None = None
        self.amount: str | None = None
        self.reusable = False
        self.pix_code: str | None = None

    def set_pix_key(self, key_type: KeyType | str, raw_key: str) -> Payload:
        self.parser.validate(key_type, raw_key)
        self.pix_key = self.parser.parse(key_type, raw_key)
        self.pix_code = None
        return self

    def set_description(self, description: str) -> Payload:
        self.description = truncate_silently(description, MAX_DESCRIPTION_LENGTH)
        self.pix_code = None
        return self

    def set_merchant_name(self, merchant_name: str) -> Payload:
        self.merchant_name = merchant_name
        self.pix_code = None
        return self

    def set_merchant_city(self, merchant_city: str) -> Payload:
        self.merchant_city = merchant_city
        self.pix_code = None
        return self

    def set_tid(self, tid: str) -> Payload:
        self.tid = truncate_silently(tid, MAX_TID_LENGTH)
        self.pix_code = None
        return self

    def set_amount(self, amount: Decimal | int | float | str) -> Payload:
        """Store the amount; raises ``FieldTooLongError`` past 13 characters."""
        self.amount = reject_if_over_length(
            ID_TRANSACTION_AMOUNT, format_amount(amount), MAX_AMOUNT_LENGTH
        )
        self.pix_code = None
        return self

    def set_reusable(self, reusable: bool = True) -> Payload:
        self.reusable = reusable
        self.pix_code = None
        return self

    def finalize(self) -> str:
        """Build the full payload, including the trailing CRC16 field.

        Raises ``MissingRequiredFieldError`` when the key, merchant name or
        merchant city is empty. The result is cached in :attr:`pix_code`.
        """

        body = (
            self._payload_format()
            + self._point_of_initiation_method()
            + self._merchant_account_information()
            + format_field(ID_MERCHANT_CATEGORY_CODE, MERCHANT_CATEGORY_CODE)
            + format_field(ID_TRANSACTION_CURRENCY, CURRENCY_BRL)
            + format_field(ID_TRANSACTION_AMOUNT, self.amount, required=False)
            + format_field(ID_COUNTRY_CODE, COUNTRY_CODE)
            + format_field(ID_MERCHANT_NAME, self.merchant_name)
            + format_field(ID_MERCHANT_CITY, self.merchant_city)
            + self._additional_data_field_template()
            + CRC16_PREFIX
        )
        crc = crc16_ccitt(body)
        self.pix_code = body + crc
        logger.debug(
            "pix payload built",
            extra={"payload_length": len(self.pix_code), "crc": crc, "reusable": self.reusable},
        )
        return self.pix_code

    def qrcode(self, output_format: OutputFormat | str | None = None) -> bytes:
        """Render the cached payload, building it first when needed."""

        if not self.pix_code:
            self.finalize()
        return render(self.pix_code, output_format)

    def _payload_format(self) -> str:
        return format_field(ID_PAYLOAD_FORMAT_INDICATOR, PAYLOAD_FORMAT)

    def _point_of_initiation_method(self) -> str:
        value = POINT_OF_INITIATION_REUSABLE if self.reusable else POINT_OF_INITIATION_DEFAULT
        return format_field(ID_POINT_OF_INITIATION_METHOD, value)

    def _merchant_account_information(self) -> str:
        gui = format_field(ID_MERCHANT_ACCOUNT_INFORMATION_GUI, PIX_GUI)
        key = format_field(ID_MERCHANT_ACCOUNT_INFORMATION_KEY, self.pix_key)
        description = format_field(
            ID_MERCHANT_ACCOUNT_INFORMATION_DESCRIPTION, self.description, required=False
        )
        return format_field(ID_MERCHANT_ACCOUNT_INFORMATION, gui + key + description)

    def _additional_data_field_template(self) -> str:
        tid = format_field(ID_ADDITIONAL_DATA_FIELD_TEMPLATE_TID, self.tid, required=False)
        return format_field(ID_ADDITIONAL_DATA_FIELD_TEMPLATE, tid, required=False)
