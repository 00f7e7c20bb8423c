"""Guest ledger schemas."""

import typing as t
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field, StringConstraints

from common.schema import NonNegativeInt, OneToOneHundredString
from events.models import Guest, GuestListLogEntry

Comment = t.Annotated[str, StringConstraints(max_length=500, strip_whitespace=True)]
CategoryName = t.Annotated[str, StringConstraints(min_length=1, max_length=100, strip_whitespace=True)]


class GuestCreateSchema(Schema):
    guest_name: OneToOneHundredString
    normal_guests: NonNegativeInt = 0
    free_guests: NonNegativeInt = 0
    comment: Comment = ""
    categories: list[CategoryName] = Field(default_factory=list)
    selected_user_id: UUID | None = Field(None, description="Existing company guest this entry belongs to")


class GuestBulkCreateSchema(Schema):
    text: str = Field(
        ...,
        min_length=1,
        max_length=20000,
        description='One guest per line: "<name> +<free> +<paid>" or "<name> <free> +<paid>"',
    )


class GuestUpdateSchema(Schema):
    guest_name: OneToOneHundredString | None = None
    normal_guests: NonNegativeInt | None = None
    free_guests: NonNegativeInt | None = None
    comment: Comment | None = None
    categories: list[CategoryName] | None = None


class CheckInSchema(Schema):
    """``increment`` adds to the checked-in counts, ``set`` assigns them."""

    action: t.Literal["increment", "set"]
    normal_increment: NonNegativeInt = 0
    free_increment: NonNegativeInt = 0
    normal_checked_in: NonNegativeInt | None = None
    free_checked_in: NonNegativeInt | None = None


class GuestBulkDeleteSchema(Schema):
    guest_ids: list[UUID] = Field(..., min_length=1)


class GuestSchema(ModelSchema):
    id: UUID
    guest_list: str
    company_guest_id: UUID | None = None
    categories: list[str]
    logs: list[dict[str, t.Any]]

    class Meta:
        model = Guest
        fields = [
            "id",
            "guest_name",
            "normal_guests",
            "free_guests",
            "normal_checked_in",
            "free_checked_in",
            "comment",
            "categories",
            "logs",
            "created_at",
        ]

    @staticmethod
    def resolve_guest_list(obj: Guest) -> str:
        return obj.guest_list.key


class GuestListLogEntrySchema(ModelSchema):
    added_at: AwareDatetime
    user_id: UUID | None = None

    class Meta:
        model = GuestListLogEntry
        fields = ["guest_name", "status", "added_by"]

    @staticmethod
    def resolve_added_at(obj: GuestListLogEntry) -> AwareDatetime:
        return obj.created_at


class GuestDraftSchema(Schema):
    text: str = Field(..., max_length=20000)
