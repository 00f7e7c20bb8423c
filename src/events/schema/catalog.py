"""Layout, category, genre and membership card schemas."""

import typing as t
from uuid import UUID

from ninja import ModelSchema, Schema
from pydantic import AwareDatetime, Field, StringConstraints, model_validator

from common.schema import OneToOneHundredString
from events.models import Category, Genre, Layout, MembershipCard

CanvasSize = t.Annotated[int, Field(ge=100, le=10000)]
ItemSize = t.Annotated[float, Field(ge=1, le=10000)]
ItemPosition = t.Annotated[float, Field(ge=0, le=10000)]


class LayoutItemSchema(Schema):
    """One table or decorative object on a floor plan.

    Only geometry and names are accepted here. Occupancy fields are written by table
    bookings on the event's own copy of the items, never on the layout.
    """

    id: str | None = None
    type: Layout.ItemType
    shape: Layout.ItemShape
    width: ItemSize
    height: ItemSize
    positionX: ItemPosition
    positionY: ItemPosition
    rotation: float | None = Field(None, ge=0, le=360)
    tableName: str | None = Field(None, max_length=100)
    objectName: str | None = Field(None, max_length=100)

    @model_validator(mode="after")
    def check_name(self) -> "LayoutItemSchema":
        """Tables need a table name, objects need an object name."""
        if self.type == Layout.ItemType.TABLE and not self.tableName:
            raise ValueError("tableName is required for tables.")
        if self.type == Layout.ItemType.OBJECT and not self.objectName:
            raise ValueError("objectName is required for objects.")
        return self


LayoutItems = t.Annotated[list[LayoutItemSchema], Field(min_length=1, max_length=1000)]


class LayoutCreateSchema(Schema):
    name: OneToOneHundredString
    canvas_width: CanvasSize
    canvas_height: CanvasSize
    items: LayoutItems


class LayoutUpdateSchema(Schema):
    name: OneToOneHundredString | None = None
    canvas_width: CanvasSize | None = None
    canvas_height: CanvasSize | None = None
    items: LayoutItems | None = None


class LayoutSchema(ModelSchema):
    id: UUID
    items: list[dict[str, t.Any]]
    tables_count: int
    objects_count: int

    class Meta:
        model = Layout
        fields = ["id", "name", "canvas_width", "canvas_height", "items", "archived", "archived_at", "created_at"]


class CatalogNameSchema(Schema):
    """Create payload of categories and genres."""

    name: OneToOneHundredString


class CategorySchema(ModelSchema):
    id: UUID

    class Meta:
        model = Category
        fields = ["id", "name"]


class GenreSchema(ModelSchema):
    id: UUID

    class Meta:
        model = Genre
        fields = ["id", "name"]


class MembershipCardCreateSchema(Schema):
    title: OneToOneHundredString
    description: t.Annotated[str, StringConstraints(max_length=1000, strip_whitespace=True)] = ""
    image_url: str = Field("", max_length=500)
    valid_from: AwareDatetime | None = None
    valid_to: AwareDatetime | None = None

    @model_validator(mode="after")
    def check_validity(self) -> t.Self:
        if self.valid_from and self.valid_to and self.valid_from >= self.valid_to:
            raise ValueError("valid_to must be after valid_from.")
        return self


class MembershipCardUpdateSchema(Schema):
    title: OneToOneHundredString | None = None
    description: t.Annotated[str, StringConstraints(max_length=1000, strip_whitespace=True)] | None = None
    image_url: str | None = Field(None, max_length=500)
    valid_from: AwareDatetime | None = None
    valid_to: AwareDatetime | None = None


class MembershipCardSchema(ModelSchema):
    id: UUID

    class Meta:
        model = MembershipCard
        fields = ["id", "title", "description", "image_url", "valid_from", "valid_to"]
