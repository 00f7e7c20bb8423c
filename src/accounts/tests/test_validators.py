import pytest
from django.core.exceptions import ValidationError

from accounts.validators import local_phone_number, normalize_phone_number, validate_phone_number


@pytest.mark.parametrize("value", ["+4512345678", "+45 1234 5678", "+1 (555) 010-9999", "", None])
def test_valid_phone_numbers(value: str | None) -> None:
    validate_phone_number(value)


@pytest.mark.parametrize("value", ["12345678", "+0123456", "+45abc", "+1234567890123456"])
def test_invalid_phone_numbers(value: str) -> None:
    with pytest.raises(ValidationError):
        validate_phone_number(value)


def test_normalize_phone_number() -> None:
    assert normalize_phone_number("+45 (12) 34-56-78") == "+4512345678"


def test_local_phone_number_drops_the_plus() -> None:
    assert local_phone_number("+45 1234 5678") == "4512345678"
