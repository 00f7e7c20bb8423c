"""Company and company-guest schemas."""

import typing as t
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import StringConstraints

from events.models import Company, CompanyGuest

CompanyName = t.Annotated[str, StringConstraints(min_length=1, max_length=150, strip_whitespace=True)]


class CompanyCreateSchema(Schema):
    name: CompanyName


class CompanySchema(ModelSchema):
    id: UUID
    owner_id: UUID

    class Meta:
        model = Company
        fields = ["id", "name", "created_at"]


class CompanyGuestSchema(ModelSchema):
    id: UUID
    visited_genres: dict[str, dict[str, int]]

    class Meta:
        model = CompanyGuest
        fields = ["id", "name", "email", "phone_number", "total_spent", "last_spent", "visited_genres"]
