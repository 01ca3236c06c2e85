"""Pix payload generation and QR building services."""
from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from decimal import Decimal

from ..config import Settings, get_settings
from ..keys import KeyParser, KeyType
from ..payload import Payload
from ..reader import split_crc
from ..renderer import OutputFormat, render

logger = logging.getLogger("pixcode.generator")


@dataclass(slots=True)
class GenerateResult:
    payload: str
    crc: str
    image: bytes
    image_base64: str
    output_format: OutputFormat


class PixCodeGenerator:
    def __init__(self, settings: Settings | None = None, parser: KeyParser | None = None):
        self.settings = settings or get_settings()
        self.parser = parser

    def build_payload(
        self,
        *,
        key_type: KeyType | str,
        key: str,
        merchant_name: str | None = None,
        merchant_city: str | None = None,
        amount: Decimal | int | float | str | None = None,
        description: str | None = None,
        tid: str | None = None,
        reusable: bool = False,
    ) -> Payload:
        payload = Payload(parser=self.parser).set_pix_key(key_type, key).set_reusable(reusable)

        name = merchant_name or self.settings.default_merchant_name
        city = merchant_city or self.settings.default_merchant_city
        if name:
            payload.set_merchant_name(name)
        if city:
            payload.set_merchant_city(city)
        if amount is not None:
            payload.set_amount(amount)
        if description:
            payload.set_description(description)
        if tid:
            payload.set_tid(tid)
        return payload

    def generate(
        self,
        *,
        key_type: KeyType | str,
        key: str,
        merchant_name: str | None = None,
        merchant_city: str | None = None,
        amount: Decimal | int | float | str | None = None,
        description: str | None = None,
        tid: str | None = None,
        reusable: bool = False,
        output_format: OutputFormat | str | None = None,
    ) -> GenerateResult:
        payload = self.build_payload(
            key_type=key_type,
            key=key,
            merchant_name=merchant_name,
            merchant_city=merchant_city,
            amount=amount,
            description=description,
            tid=tid,
            reusable=reusable,
        )
        pix_code = payload.finalize()
        _, crc = split_crc(pix_code)

        fmt = OutputFormat(output_format or self.settings.qr.default_output)
        image = render(pix_code, fmt, config=self.settings.qr)

        logger.info(
            "pix code generated",
            extra={
                "key_type": getattr(key_type, "value", key_type),
                "output_format": fmt.value,
                "payload_length": len(pix_code),
                "has_amount": payload.amount is not None,
            },
        )

        return GenerateResult(
            payload=pix_code,
            crc=crc,
            image=image,
            image_base64=base64.b64encode(image).decode("ascii"),
            output_format=fmt,
        )
