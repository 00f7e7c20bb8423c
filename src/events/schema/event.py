"""Event schemas."""

import typing as t
from datetime import date
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field, field_validator, model_validator

from common.schema import OneToOneHundredString, OneToTwoHundredString
from events.models import Event, EventReference, GuestList, GuestListSummary, TableList, TableSummary, TicketSummary

Weekday = t.Annotated[int, Field(ge=0, le=6, description="0=Sunday .. 6=Saturday")]


def _clean_guest_list_names(names: list[str] | None) -> list[str] | None:
    if names is None:
        return None
    if GuestList.MAIN in names:
        raise ValueError(f'"{GuestList.MAIN}" is reserved for the default guest list.')
    return list(dict.fromkeys(names))


class RecurrenceSchema(Schema):
    is_recurring: bool = True
    start_date: date
    end_date: date
    days_of_week: list[Weekday] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_window(self) -> t.Self:
        """The window must be ordered and name at least one weekday."""
        if not self.is_recurring:
            return self
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date.")
        if not self.days_of_week:
            raise ValueError("days_of_week must not be empty.")
        return self


class EventCreateSchema(Schema):
    name: OneToTwoHundredString
    start: AwareDatetime
    end: AwareDatetime
    table_layouts: list[UUID] = Field(default_factory=list)
    categories: list[UUID] = Field(default_factory=list)
    membership_cards: list[UUID] = Field(default_factory=list)
    genres: list[UUID] = Field(default_factory=list)
    additional_guest_lists: list[OneToOneHundredString] = Field(default_factory=list)
    recurring: RecurrenceSchema | None = None

    @field_validator("additional_guest_lists")
    @classmethod
    def validate_guest_lists(cls, value: list[str]) -> list[str]:
        return _clean_guest_list_names(value) or []

    @model_validator(mode="after")
    def check_dates(self) -> t.Self:
        if self.start >= self.end:
            raise ValueError("end must be after start.")
        return self


class EventUpdateSchema(Schema):
    """Only the supplied fields change. An empty reference list clears that kind of reference."""

    name: OneToTwoHundredString | None = None
    start: AwareDatetime | None = None
    end: AwareDatetime | None = None
    table_layouts: list[UUID] | None = None
    categories: list[UUID] | None = None
    membership_cards: list[UUID] | None = None
    genres: list[UUID] | None = None
    additional_guest_lists: list[OneToOneHundredString] | None = None

    @field_validator("additional_guest_lists")
    @classmethod
    def validate_guest_lists(cls, value: list[str] | None) -> list[str] | None:
        return _clean_guest_list_names(value)

    @model_validator(mode="after")
    def check_dates(self) -> t.Self:
        if self.start and self.end and self.start >= self.end:
            raise ValueError("end must be after start.")
        return self


class ReferenceSchema(Schema):
    id: UUID
    name: str


class TableSummarySchema(ModelSchema):
    class Meta:
        model = TableSummary
        fields = [
            "total_tables",
            "total_guests",
            "total_checked_in",
            "total_booked",
            "total_table_limit",
            "total_table_spent",
        ]


class GuestListSummarySchema(ModelSchema):
    class Meta:
        model = GuestListSummary
        fields = [
            "total_guests",
            "total_checked_in",
            "total_normal_guests",
            "total_free_guests",
            "normal_guests_checked_in",
            "free_guests_checked_in",
        ]


class TicketSummarySchema(ModelSchema):
    class Meta:
        model = TicketSummary
        fields = ["total_nr_tickets", "total_nr_sold_tickets", "total_nr_tickets_left", "total_tickets_revenue"]


class TableListSchema(ModelSchema):
    id: UUID
    layout_id: UUID
    items: list[dict[str, t.Any]]

    class Meta:
        model = TableList
        fields = ["id", "layout_name", "items"]


class EventSchema(ModelSchema):
    id: UUID
    company_id: UUID
    table_layouts: list[ReferenceSchema] = Field(default_factory=list)
    categories: list[ReferenceSchema] = Field(default_factory=list)
    membership_cards: list[ReferenceSchema] = Field(default_factory=list)
    genres: list[ReferenceSchema] = Field(default_factory=list)
    guest_lists: list[str] = Field(default_factory=list)

    class Meta:
        model = Event
        fields = ["id", "name", "start", "end", "recurring", "created_at", "updated_at"]

    @staticmethod
    def resolve_table_layouts(obj: Event) -> list[dict[str, str]]:
        return obj.references_of(EventReference.Kind.LAYOUT)

    @staticmethod
    def resolve_categories(obj: Event) -> list[dict[str, str]]:
        return obj.references_of(EventReference.Kind.CATEGORY)

    @staticmethod
    def resolve_membership_cards(obj: Event) -> list[dict[str, str]]:
        return obj.references_of(EventReference.Kind.MEMBERSHIP_CARD)

    @staticmethod
    def resolve_genres(obj: Event) -> list[dict[str, str]]:
        return obj.references_of(EventReference.Kind.GENRE)

    @staticmethod
    def resolve_guest_lists(obj: Event) -> list[str]:
        return [guest_list.key for guest_list in obj.guest_lists.all()]


class EventDetailSchema(EventSchema):
    """Event with its summaries, table lists and the caller's unsent guest draft."""

    table_summary: TableSummarySchema | None = None
    guest_list_summary: GuestListSummarySchema | None = None
    ticket_summary: TicketSummarySchema | None = None
    table_lists: list[TableListSchema] = Field(default_factory=list)
    guest_draft: str | None = None

    @staticmethod
    def resolve_table_lists(obj: Event) -> list[TableList]:
        return list(obj.table_lists.all())

    @staticmethod
    def resolve_ticket_summary(obj: Event) -> TicketSummary | None:
        # created with the first ticket type
        return obj.ticket_summary if hasattr(obj, "ticket_summary") else None
