"""
Helper Utilities.

Provides the input checks run before any request is sent, and small
formatting helpers for log lines.
"""

import uuid

import phonenumbers
from phonenumbers import NumberParseException
from pydantic import AnyUrl, TypeAdapter, ValidationError

_URL_ADAPTER = TypeAdapter(AnyUrl)


def is_valid_phone_number(phone_number: str) -> bool:
    """
    Checks that a phone number is valid without assuming any region.

    The number must therefore carry its country calling code (e.g. "+33...").
    """
    try:
        parsed = phonenumbers.parse(phone_number, None)
    except NumberParseException:
        return False
    return phonenumbers.is_valid_number(parsed)


def is_valid_uuid(value: str) -> bool:
    """Checks that a string is a syntactically valid UUID."""
    try:
        uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    return True


def is_valid_url(value: str) -> bool:
    """Checks that a string is an absolute URL (scheme and host)."""
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError:
        return False
    return True


def mask_phone_number(phone_number: str, visible_digits: int = 2) -> str:
    """
    Masks all but the last digits of a phone number, for safe logging.

    Examples:
        - "+33612345678" -> "**********78"
    """
    if len(phone_number) <= visible_digits:
        return phone_number
    return "*" * (len(phone_number) - visible_digits) + phone_number[-visible_digits:]
