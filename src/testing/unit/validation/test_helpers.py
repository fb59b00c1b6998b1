import uuid

import pytest

from dinglive.helpers import (
    is_valid_phone_number,
    is_valid_url,
    is_valid_uuid,
    mask_phone_number,
)
from testing.unit.helpers import TEST_PHONE_NUMBER


@pytest.mark.parametrize(
    "phone_number",
    [TEST_PHONE_NUMBER, "+33612345678", "+44 7400 123456", "+1 201-555-0123"],
)
def test_valid_phone_numbers(phone_number):
    assert is_valid_phone_number(phone_number)


@pytest.mark.parametrize(
    "phone_number",
    [
        "",
        "+",
        "+invalid",
        # No country calling code: no region is assumed.
        "0612345678",
        "+33000000000",
        "+1234",
    ],
)
def test_invalid_phone_numbers(phone_number):
    assert not is_valid_phone_number(phone_number)


def test_uuid_validation():
    assert is_valid_uuid(str(uuid.uuid4()))
    assert is_valid_uuid("123e4567-e89b-12d3-a456-426614174000")
    assert not is_valid_uuid("")
    assert not is_valid_uuid("123e4567-e89b-12d3-a456")
    assert not is_valid_uuid("zzze4567-e89b-12d3-a456-426614174000")
    assert not is_valid_uuid(None)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://example.com/callback", True),
        ("http://localhost:8080/hooks/ding?x=1", True),
        ("example.com/callback", False),
        ("/callback", False),
        ("", False),
        ("https://", False),
    ],
)
def test_url_validation(url, expected):
    assert is_valid_url(url) is expected


def test_mask_phone_number():
    assert mask_phone_number("+33612345678") == "**********78"
    assert mask_phone_number("+33612345678", visible_digits=4) == "********5678"
    assert mask_phone_number("12") == "12"
