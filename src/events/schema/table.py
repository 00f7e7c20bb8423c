"""Table booking schemas."""

from ninja import Schema
from pydantic import EmailStr, Field, field_validator

from accounts.validators import E164_REGEX, normalize_phone_number
from common.schema import NonNegativeInt, OneToOneHundredString


class TableBookingSchema(Schema):
    table_name: OneToOneHundredString
    guest_name: OneToOneHundredString
    phone_number: str = Field(..., description="E.164, e.g. +4512345678")
    email: EmailStr | None = None
    nr_of_guests: int = Field(..., ge=1)
    table_limit: NonNegativeInt = 0
    table_spent: NonNegativeInt = 0
    table_time_from: str = Field("", max_length=20)
    table_time_to: str = Field("", max_length=20)
    comment: str = Field("", max_length=500)

    @field_validator("phone_number")
    @classmethod
    def validate_phone_number(cls, value: str) -> str:
        normalized = normalize_phone_number(value)
        if not E164_REGEX.fullmatch(normalized):
            raise ValueError("Phone number must be in E.164 format.")
        return normalized
