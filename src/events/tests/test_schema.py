"""Validation rules enforced on request payloads."""

from datetime import date, datetime, timedelta

import pytest
from pydantic import ValidationError

from events import schema


@pytest.fixture
def window(next_week: datetime) -> dict[str, datetime]:
    return {"start": next_week, "end": next_week + timedelta(hours=5)}


class TestEventCreateSchema:
    def test_end_must_be_after_start(self, next_week: datetime) -> None:
        with pytest.raises(ValidationError, match="end must be after start"):
            schema.EventCreateSchema(name="Party", start=next_week, end=next_week)

    def test_main_guest_list_is_reserved(self, window: dict[str, datetime]) -> None:
        with pytest.raises(ValidationError, match="reserved for the default guest list"):
            schema.EventCreateSchema(name="Party", additional_guest_lists=["vip", "main"], **window)

    def test_duplicate_guest_lists_are_collapsed(self, window: dict[str, datetime]) -> None:
        payload = schema.EventCreateSchema(name="Party", additional_guest_lists=["vip", "press", "vip"], **window)

        assert payload.additional_guest_lists == ["vip", "press"]

    def test_naive_datetimes_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            schema.EventCreateSchema(name="Party", start=datetime(2025, 1, 3, 22), end=datetime(2025, 1, 4, 4))


class TestRecurrenceSchema:
    def test_window_must_be_ordered(self) -> None:
        with pytest.raises(ValidationError, match="end_date must not be before start_date"):
            schema.RecurrenceSchema(start_date=date(2025, 2, 1), end_date=date(2025, 1, 1), days_of_week=[5])

    def test_needs_a_weekday(self) -> None:
        with pytest.raises(ValidationError, match="days_of_week must not be empty"):
            schema.RecurrenceSchema(start_date=date(2025, 1, 1), end_date=date(2025, 2, 1))

    def test_weekdays_are_zero_to_six(self) -> None:
        with pytest.raises(ValidationError):
            schema.RecurrenceSchema(start_date=date(2025, 1, 1), end_date=date(2025, 2, 1), days_of_week=[7])

    def test_non_recurring_rule_is_not_checked(self) -> None:
        rule = schema.RecurrenceSchema(is_recurring=False, start_date=date(2025, 2, 1), end_date=date(2025, 1, 1))

        assert rule.days_of_week == []


class TestLayoutItemSchema:
    def test_tables_need_a_name(self) -> None:
        with pytest.raises(ValidationError, match="tableName is required"):
            schema.LayoutItemSchema(
                type="ItemType.table", shape="ItemShape.square", width=10, height=10, positionX=0, positionY=0
            )

    def test_objects_need_a_name(self) -> None:
        with pytest.raises(ValidationError, match="objectName is required"):
            schema.LayoutItemSchema(
                type="ItemType.object", shape="ItemShape.oval", width=10, height=10, positionX=0, positionY=0
            )

    def test_occupancy_fields_are_not_stored_on_layouts(self) -> None:
        item = schema.LayoutItemSchema(
            type="ItemType.table",
            shape="ItemShape.circle",
            width=10,
            height=10,
            positionX=0,
            positionY=0,
            tableName="T1",
            nrOfGuests=4,
        )

        assert "nrOfGuests" not in item.model_dump(exclude_none=True)

    def test_layout_needs_items(self) -> None:
        with pytest.raises(ValidationError):
            schema.LayoutCreateSchema(name="Empty", canvas_width=500, canvas_height=500, items=[])


class TestGuestSchemas:
    def test_counts_cannot_be_negative(self) -> None:
        with pytest.raises(ValidationError):
            schema.GuestCreateSchema(guest_name="Ana", normal_guests=-1)

    def test_guest_name_is_stripped(self) -> None:
        assert schema.GuestCreateSchema(guest_name="  Ana  ", normal_guests=1).guest_name == "Ana"

    def test_check_in_action_is_restricted(self) -> None:
        with pytest.raises(ValidationError):
            schema.CheckInSchema(action="decrement")


class TestTableBookingSchema:
    def test_phone_number_is_normalized(self) -> None:
        booking = schema.TableBookingSchema(
            table_name="T1", guest_name="Ana", phone_number="+45 (12) 34-56-78", nr_of_guests=2
        )

        assert booking.phone_number == "+4512345678"
