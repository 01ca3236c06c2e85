"""Error types raised while building or reading Pix payloads."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class PixError(Exception):
    code: str
    message: str
    tag: str | None = None

    def __str__(self) -> str:  # noqa: D401 override
        return f"{self.code}: {self.message}"


class ValidationError(PixError):
    """Key/type pair rejected by the key parser."""


class MissingRequiredFieldError(PixError):
    """A required field was empty when the payload was built."""


class FieldTooLongError(PixError):
    """A value does not fit its length limit."""


class MalformedPayloadError(PixError):
    """A finished payload could not be read back."""


def err_key_invalid(message: str | None = None) -> ValidationError:
    return ValidationError(code="ERR_KEY_INVALID", message=message or "Invalid pix key")


def err_field_required(tag: str, message: str | None = None) -> MissingRequiredFieldError:
    return MissingRequiredFieldError(
        code="ERR_FIELD_REQUIRED",
        message=message or f"Field {tag} cannot be empty",
        tag=tag,
    )


def err_field_too_long(tag: str, limit: int, message: str | None = None) -> FieldTooLongError:
    return FieldTooLongError(
        code="ERR_FIELD_TOO_LONG",
        message=message or f"Field {tag} exceeds {limit} characters",
        tag=tag,
    )


def err_bad_payload(message: str | None = None) -> MalformedPayloadError:
    return MalformedPayloadError(code="ERR_BAD_PAYLOAD", message=message or "Invalid pix payload")
