"""QR image renderer for finished pix payloads."""
from __future__ import annotations

import enum
import io

import qrcode
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage

from .config import QRConfig, get_settings

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


class OutputFormat(str, enum.Enum):
    SVG = "svg"
    PNG = "png"


def build_qr(data: str, config: QRConfig | None = None) -> qrcode.QRCode:
    config = config or get_settings().qr
    qr = qrcode.QRCode(
        version=None,
        error_correction=_ERROR_CORRECTION[config.error_correction],
        box_size=config.box_size,
        border=config.border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    return qr


def render(
    payload: str,
    output_format: OutputFormat | str | None = None,
    config: QRConfig | None = None,
) -> bytes:
    """Render payload into SVG markup or PNG bytes."""

    config = config or get_settings().qr
    output_format = OutputFormat(output_format or config.default_output)
    qr = build_qr(payload, config)

    buffer = io.BytesIO()
    if output_format is OutputFormat.SVG:
        qr.make_image(image_factory=SvgPathImage).save(buffer)
    else:
        img = qr.make_image(image_factory=PilImage, fill_color="black", back_color="white")
        img.save(buffer, format="PNG")
    return buffer.getvalue()
