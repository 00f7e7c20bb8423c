import pytest
from django.shortcuts import reverse  # type: ignore[attr-defined]
from django.test.client import Client

from events.models import Event, Layout, TableSummary

pytestmark = pytest.mark.django_db


def _booking_url(event: Event, layout: Layout) -> str:
    return str(
        reverse(
            "api:book_table",
            kwargs={"company_id": event.company_id, "event_id": event.id, "layout_id": layout.id},
        )
    )


BOOKING = {
    "table_name": "T2",
    "guest_name": "Ana Lopez",
    "phone_number": "+45 1234 5678",
    "nr_of_guests": 6,
    "table_limit": 1000,
}


class TestBookTable:
    def test_staff_books_table(self, staff_client: Client, event: Event, layout: Layout) -> None:
        response = staff_client.post(_booking_url(event, layout), data=BOOKING, content_type="application/json")

        assert response.status_code == 201, response.content
        body = response.json()
        assert body["message"] == 'Table "T2" booked successfully'
        assert body["data"]["tableName"] == "T2"
        assert body["data"]["e164Number"] == "+4512345678"
        assert body["data"]["tableBookedBy"] == "Sam Staff"
        summary = TableSummary.objects.get(event=event)
        assert summary.total_booked == 1
        assert summary.total_guests == 6
        assert summary.total_table_limit == 1000

    def test_double_booking(self, owner_client: Client, event: Event, layout: Layout) -> None:
        owner_client.post(_booking_url(event, layout), data=BOOKING, content_type="application/json")

        response = owner_client.post(_booking_url(event, layout), data=BOOKING, content_type="application/json")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "ValidationError",
            "message": 'Table "T2" is already booked',
        }

    def test_layout_not_on_event(self, owner_client: Client, event: Event, terrace_layout: Layout) -> None:
        response = owner_client.post(
            _booking_url(event, terrace_layout), data=BOOKING, content_type="application/json"
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Layout not found"

    def test_invalid_phone_number(self, owner_client: Client, event: Event, layout: Layout) -> None:
        payload = {**BOOKING, "phone_number": "12345"}

        response = owner_client.post(_booking_url(event, layout), data=payload, content_type="application/json")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "ValidationError"
        assert "phone_number" in body["message"]
