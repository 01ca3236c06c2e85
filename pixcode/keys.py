"""Pix key validation and normalization."""
from __future__ import annotations

import enum
import re
from typing import Protocol
from uuid import UUID

from .errors import err_key_invalid

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_PHONE_RE = re.compile(r"^(?:\+?55)?(\d{10,11})$")
_DOCUMENT_PUNCTUATION = str.maketrans("", "", ".-/ ")
_PHONE_PUNCTUATION = str.maketrans("", "", "()- ")


class KeyType(str, enum.Enum):
    DOCUMENT = "document"
    EMAIL = "email"
    PHONE = "phone"
    RANDOM = "random"


class KeyParser(Protocol):
    def validate(self, key_type: KeyType | str, raw_key: str) -> None: ...

    def parse(self, key_type: KeyType | str, raw_key: str) -> str: ...


def _check_digit(digits: str, weights: list[int]) -> int:
    total = sum(int(d) * w for d, w in zip(digits, weights))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def is_valid_cpf(digits: str) -> bool:
    if len(digits) != 11 or not digits.isdigit() or digits == digits[0] * 11:
        return False
    first = _check_digit(digits[:9], list(range(10, 1, -1)))
    second = _check_digit(digits[:10], list(range(11, 1, -1)))
    return digits[9:] == f"{first}{second}"


def is_valid_cnpj(digits: str) -> bool:
    if len(digits) != 14 or not digits.isdigit() or digits == digits[0] * 14:
        return False
    weights = [5, 4, 3, 2, 9, 8, 7, 6, 5, 4, 3, 2]
    first = _check_digit(digits[:12], weights)
    second = _check_digit(digits[:13], [6] + weights)
    return digits[12:] == f"{first}{second}"


class PixKeyParser:
    """Default key parser covering the four Pix key types.

    ``validate`` raises :class:`~pixcode.errors.ValidationError` for a bad
    pair; ``parse`` validates and returns the normalized key.
    """

    def validate(self, key_type: KeyType | str, raw_key: str) -> None:
        self.parse(key_type, raw_key)

    def parse(self, key_type: KeyType | str, raw_key: str) -> str:
        try:
            key_type = KeyType(key_type)
        except ValueError:
            raise err_key_invalid(f"Unknown pix key type {key_type!r}") from None

        raw_key = (raw_key or "").strip()
        if not raw_key:
            raise err_key_invalid(f"Empty {key_type.value} key")

        if key_type is KeyType.DOCUMENT:
            return self._parse_document(raw_key)
        if key_type is KeyType.EMAIL:
            return self._parse_email(raw_key)
        if key_type is KeyType.PHONE:
            return self._parse_phone(raw_key)
        return self._parse_random(raw_key)

    @staticmethod
    def _parse_document(raw_key: str) -> str:
        digits = raw_key.translate(_DOCUMENT_PUNCTUATION)
        if is_valid_cpf(digits) or is_valid_cnpj(digits):
            return digits
        raise err_key_invalid("Document key is not a valid CPF or CNPJ")

    @staticmethod
    def _parse_email(raw_key: str) -> str:
        if not _EMAIL_RE.match(raw_key):
            raise err_key_invalid("Email key is malformed")
        return raw_key.lower()

    @staticmethod
    def _parse_phone(raw_key: str) -> str:
        match = _PHONE_RE.match(raw_key.translate(_PHONE_PUNCTUATION))
        if not match:
            raise err_key_invalid("Phone key must have a DDD and 8 or 9 digits")
        return f"+55{match.group(1)}"

    @staticmethod
    def _parse_random(raw_key: str) -> str:
        try:
            return str(UUID(raw_key))
        except ValueError:
            raise err_key_invalid("Random key must be a UUID") from None
