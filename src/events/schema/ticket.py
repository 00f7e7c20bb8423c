"""Ticket type schemas."""

import typing as t
from decimal import Decimal
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field, model_validator

from common.schema import OneToOneHundredString
from events.models import TicketType

Price = t.Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class TicketTypeCreateSchema(Schema):
    ticket_name: OneToOneHundredString
    ticket_description: str = ""
    ticket_image_url: str = Field("", max_length=500)
    ticket_price: Price = Decimal("0")
    total_tickets: int = Field(..., ge=1)
    sale_start: AwareDatetime | None = None
    sale_end: AwareDatetime | None = None
    free_ticket: bool = False
    buyer_pays_admin_fee: bool = True
    ticket_category: str = Field("", max_length=100)
    max_tickets_per_user: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def check_sale_window(self) -> t.Self:
        if self.sale_start and self.sale_end and self.sale_start >= self.sale_end:
            raise ValueError("sale_end must be after sale_start.")
        return self


class TicketTypeUpdateSchema(Schema):
    ticket_name: OneToOneHundredString | None = None
    ticket_description: str | None = None
    ticket_image_url: str | None = Field(None, max_length=500)
    ticket_price: Price | None = None
    total_tickets: int | None = Field(None, ge=1)
    sale_start: AwareDatetime | None = None
    sale_end: AwareDatetime | None = None
    free_ticket: bool | None = None
    buyer_pays_admin_fee: bool | None = None
    ticket_category: str | None = Field(None, max_length=100)
    max_tickets_per_user: int | None = Field(None, ge=1)


class TicketTypeSchema(ModelSchema):
    id: UUID
    event_id: UUID
    ticket_price: Decimal
    sold: int

    class Meta:
        model = TicketType
        fields = [
            "id",
            "ticket_name",
            "ticket_description",
            "ticket_image_url",
            "ticket_price",
            "total_tickets",
            "tickets_left",
            "sale_start",
            "sale_end",
            "free_ticket",
            "buyer_pays_admin_fee",
            "ticket_category",
            "max_tickets_per_user",
            "created_at",
        ]
