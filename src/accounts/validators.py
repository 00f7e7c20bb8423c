import re

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

E164_REGEX = re.compile(r"^\+[1-9]\d{1,14}$")


def validate_phone_number(value: str | None) -> None:
    """Validate an E.164 phone number after normalization.

    Args:
        value (str): phone number.
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(_("Phone number must be a string."))

    if not E164_REGEX.fullmatch(normalize_phone_number(value)):
        raise ValidationError(_("Number format is incorrect."))
    return None


def normalize_phone_number(value: str) -> str:
    """Strip spaces, dashes and parentheses from a phone number.

    Args:
        value (str): phone number.

    Returns:
        str: normalized phone number.
    """
    return re.sub(r"[ \-()]", "", value)


def local_phone_number(value: str) -> str:
    """Return the E.164 number without its leading plus sign."""
    return normalize_phone_number(value).removeprefix("+")
