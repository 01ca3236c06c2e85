"""CRC16-CCITT implementation."""
from __future__ import annotations

CRC16_POLY = 0x1021
CRC16_INIT = 0xFFFF


def crc16_ccitt(data: str | bytes) -> str:
    """Compute CRC16-CCITT (0x1021, init 0xFFFF) for BR Code payload strings.

    The register is rendered as uppercase hex without left padding.
    """

    if isinstance(data, str):
        data = data.encode("utf-8")

    checksum = CRC16_INIT
    for byte in data:
        checksum ^= byte << 8
        for _ in range(8):
            checksum <<= 1
            if checksum & 0x10000:
                checksum ^= CRC16_POLY
            checksum &= 0xFFFF
    return f"{checksum:X}"
